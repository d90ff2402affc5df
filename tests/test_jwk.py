"""Tests for didkey.jwk - JSON Web Key rendering of did:key public keys."""

from __future__ import annotations

import base64
from types import MappingProxyType

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from didkey.core.config import JWK_2020_TYPE, JWK_TYPE
from didkey.core.exceptions import InvalidPointError, NullInputError, UnsupportedKeyError
from didkey.did import DidKey, DidUrl
from didkey.encoding import KeyCodec
from didkey.jwk import (
    DEFAULT_PRODUCERS,
    JwkMethodProvider,
    ec_jwk,
    normalize,
    okp,
    okp_jwk,
)
from didkey.methods import JwkKey

JWK_VECTORS = [
    # P-256
    (
        "did:key:zDnaerx9CtbPJ1q36T5Ln5wYt3MQYeGRG5ehnPAmxcf5mDZpv",
        {
            "kty": "EC",
            "crv": "P-256",
            "x": "igrFmi0whuihKnj9R3Om1SoMph72wUGeFaBbzG2vzns",
            "y": "efsX5b10x8yjyrj4ny3pGfLcY7Xby1KzgqOdqnsrJIM",
        },
    ),
    (
        "did:key:zDnaerDaTF5BXEavCrfRZEk316dpbLsfPDZ3WJ5hRTPFU2169",
        {
            "kty": "EC",
            "crv": "P-256",
            "x": "fyNYMN0976ci7xqiSdag3buk-ZCwgXU4kz9XNkBlNUI",
            "y": "hW2ojTNfH7Jbi8--CJUo3OCbH3y5n91g-IMA9MLMbTU",
        },
    ),
    # P-384
    (
        "did:key:z82Lm1MpAkeJcix9K8TMiLd5NMAhnwkjjCBeWHXyu3U4oT2MVJJKXkcVBgjGhnLBn2Kaau9",
        {
            "kty": "EC",
            "crv": "P-384",
            "x": "lInTxl8fjLKp_UCrxI0WDklahi-7-_6JbtiHjiRvMvhedhKVdHBfi2HCY8t_QJyc",
            "y": "y6N1IC-2mXxHreETBW7K3mBcw0qGr3CWHCs-yl09yCQRLcyfGv7XhqAngHOu51Zv",
        },
    ),
    (
        "did:key:z82LkvCwHNreneWpsgPEbV3gu1C6NFJEBg4srfJ5gdxEsMGRJUz2sG9FE42shbn2xkZJh54",
        {
            "kty": "EC",
            "crv": "P-384",
            "x": "CA-iNoHDg1lL8pvX3d1uvExzVfCz7Rn6tW781Ub8K5MrDf2IMPyL0RTDiaLHC1JT",
            "y": "Kpnrn8DkXUD3ge4mFxi-DKr0DYO2KuJdwNBrhzLRtfMa3WFMZBiPKUPfJj8dYNl_",
        },
    ),
    (
        "did:key:z82Lkytz3HqpWiBmt2853ZgNgNG8qVoUJnyoMvGw6ZEBktGcwUVdKpUNJHct1wvp9pXjr7Y",
        {
            "kty": "EC",
            "crv": "P-384",
            "x": "bKq-gg3sJmfkJGrLl93bsumOTX1NubBySttAV19y5ClWK3DxEmqPy0at5lLqBiiv",
            "y": "PJQtdHnInU9SY3e8Nn9aOPoP51OFbs-FWJUsU0TGjRtZ4bnhoZXtS92wdzuAotL9",
        },
    ),
    # BLS12-381 G2
    (
        "did:key:zUC7K4ndUaGZgV7Cp2yJy6JtMoUHY6u7tkcSYUvPrEidqBmLCTLmi6d5WvwnUqejscAkERJ3bfjEiSYtdPkRSE8kSa11hFBr4sTgnbZ95SJj19PN2jdvJjyzpSZgxkyyxNnBNnY",
        {
            "kty": "OKP",
            "crv": "Bls12381G2",
            "x": "tKWJu0SOY7onl4tEyOOH11XBriQN2JgzV-UmjgBMSsNkcAx3_l97SVYViSDBouTVBkBfrLh33C5icDD-4UEDxNO3Wn1ijMHvn2N63DU4pkezA3kGN81jGbwbrsMPpiOF",
        },
    ),
    (
        "did:key:zUC7DWA2FazpvPXmiXeTWuLjdMGXXmmWXbwoKNo554L3E4PD5ZsoZPqzCvkFkkQGvWp6uLZ3PKQJMfXYzLGNoiMyqXYSQa19cvWTiH3QpzddfRVWW6FtFMWTcvUb7wg4o9khbDt",
        {
            "kty": "OKP",
            "crv": "Bls12381G2",
            "x": "pH-hch6qNUP2kongy1-r6VqPiHnPBcPN9CGqWXU2_LdfkfkhmEXmKFJwfXw7fRVaFAuLsX7K94WFtlxU-vrfP5KmgH9zxFphjzPQqds7WYSnSo4A3H0skSSc2TQMV3Cj",
        },
    ),
    # BLS12-381 G1
    (
        "did:key:z3tEFS9q2WkwvvVvr1BrYwNreqcudmcCQGGRSQ8r73recEqAUHGeLPWzwK6toBdKJgX3Fs",
        {
            "kty": "OKP",
            "crv": "Bls12381G1",
            "x": "lsfOFOAzlEpPIIKf-7vlvWiDYazg5M7VnAXblKuvB9GV66GeXw_UgoNhCZdixk_m",
        },
    ),
    # secp256k1
    (
        "did:key:zQ3shokFTS3brHcDQrn82RUDfCZESWL1ZdCEJwekUDPQiYBme",
        {
            "kty": "EC",
            "crv": "secp256k1",
            "x": "h0wVx_2iDlOcblulc8E5iEw1EYh5n1RYtLQfeSTyNc0",
            "y": "O2EATIGbu6DezKFptj5scAIRntgfecanVNXxat1rnwE",
        },
    ),
    # Ed25519
    (
        "did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp",
        {"kty": "OKP", "crv": "Ed25519", "x": "O2onvM62pC1io6jQKm8Nc2UyFXcd4kOmOsBIoYtZ2ik"},
    ),
    (
        "did:key:z6MkjchhfUsD6mmvni8mCdXHw216Xrm9bQe2mBH1P5RDjVJG",
        {"kty": "OKP", "crv": "Ed25519", "x": "TLWr9q15-_WrvMr8wmnYXNJlHtS4hbWGnyQa7fCluik"},
    ),
    (
        "did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH",
        {"kty": "OKP", "crv": "Ed25519", "x": "lJZrfAjkBXdfjebMHEUI9usidAPhAlssitLXR3OYxbI"},
    ),
    (
        "did:key:z6MkmM42vxfqZQsv4ehtTjFFxQ4sQKS2w6WR7emozFAn5cxu",
        {"kty": "OKP", "crv": "Ed25519", "x": "Zmq-CJA17UpFeVmJ-nIKDuDEhUnoRSNIXFbxyBtCh6Y"},
    ),
]

EC_VECTORS = [(did, jwk) for did, jwk in JWK_VECTORS if jwk["kty"] == "EC"]

CRYPTOGRAPHY_CURVES = {"P-256": ec.SECP256R1(), "P-384": ec.SECP384R1(), "secp256k1": ec.SECP256K1()}


def _b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


# ============================================================================
# normalize
# ============================================================================


class TestNormalize:
    """Fixed-width coordinate encoding."""

    def test_exact_length(self):
        value = b"\x01" * 32
        assert normalize(value, 32) is value

    def test_strips_sign_byte(self):
        assert normalize(b"\x00" + b"\xff" * 32, 32) == b"\xff" * 32

    def test_pads_short_value(self):
        assert normalize(b"\x01\x02", 4) == b"\x00\x00\x01\x02"

    def test_pads_empty_value(self):
        assert normalize(b"", 3) == b"\x00\x00\x00"


# ============================================================================
# JWK producers
# ============================================================================


class TestProducers:
    """Tests for okp_jwk and ec_jwk."""

    @pytest.mark.parametrize("did,expected", JWK_VECTORS)
    def test_vectors(self, did, expected):
        did_key = DidKey.parse(did)
        jwk = DEFAULT_PRODUCERS[did_key.codec](did_key)

        assert dict(jwk) == expected

    @pytest.mark.parametrize("did,expected", JWK_VECTORS)
    def test_key_order(self, did, expected):
        did_key = DidKey.parse(did)
        jwk = DEFAULT_PRODUCERS[did_key.codec](did_key)

        assert list(jwk) == (["kty", "crv", "x", "y"] if expected["kty"] == "EC" else ["kty", "crv", "x"])

    @pytest.mark.parametrize("did,expected", EC_VECTORS)
    def test_coordinate_width(self, did, expected):
        did_key = DidKey.parse(did)
        jwk = DEFAULT_PRODUCERS[did_key.codec](did_key)
        length = 48 if expected["crv"] == "P-384" else 32

        assert len(_b64url_decode(jwk["x"])) == length
        assert len(_b64url_decode(jwk["y"])) == length

    @pytest.mark.parametrize("did,expected", EC_VECTORS)
    def test_matches_cryptography(self, did, expected):
        did_key = DidKey.parse(did)
        key = ec.EllipticCurvePublicKey.from_encoded_point(
            CRYPTOGRAPHY_CURVES[expected["crv"]], did_key.raw_key_bytes
        )
        numbers = key.public_numbers()

        assert int.from_bytes(_b64url_decode(expected["x"]), "big") == numbers.x
        assert int.from_bytes(_b64url_decode(expected["y"]), "big") == numbers.y

    def test_read_only(self):
        did_key = DidKey.parse("did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp")
        jwk = okp_jwk("Ed25519", did_key)

        assert isinstance(jwk, MappingProxyType)
        with pytest.raises(TypeError):
            jwk["kty"] = "EC"

    def test_okp_partial(self):
        did_key = DidKey.parse("did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp")
        assert dict(okp("Ed25519")(did_key)) == dict(okp_jwk("Ed25519", did_key))

    def test_ec_point_off_curve(self):
        """x = 1 has no square root on P-256."""
        did_key = DidKey.from_raw(b"\x02" + (1).to_bytes(32, "big"), KeyCodec.P256_PUBLIC_KEY)

        with pytest.raises(InvalidPointError) as exc_info:
            ec_jwk("P-256", "secp256r1", did_key, 32)

        assert not isinstance(exc_info.value, UnsupportedKeyError)
        assert exc_info.value.curve == "secp256r1"
        assert str(did_key) in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, InvalidPointError)

    def test_ec_wrong_length(self):
        did_key = DidKey.from_raw(b"\x02" + bytes(10), KeyCodec.SECP256K1_PUBLIC_KEY)
        with pytest.raises(InvalidPointError):
            ec_jwk("secp256k1", "secp256k1", did_key, 32)


# ============================================================================
# JwkMethodProvider
# ============================================================================


class TestJwkMethodProvider:
    """Tests for the JWK verification method provider."""

    def test_default_is_shared(self):
        assert JwkMethodProvider.default() is JwkMethodProvider.default()

    def test_default_codecs(self):
        assert set(JwkMethodProvider.default().codecs) == {
            KeyCodec.ED25519_PUBLIC_KEY,
            KeyCodec.BLS12_381_G1_PUBLIC_KEY,
            KeyCodec.BLS12_381_G2_PUBLIC_KEY,
            KeyCodec.P256_PUBLIC_KEY,
            KeyCodec.P384_PUBLIC_KEY,
            KeyCodec.SECP256K1_PUBLIC_KEY,
        }

    @pytest.mark.parametrize("did,expected", JWK_VECTORS)
    def test_method(self, did, expected):
        did_key = DidKey.parse(did)
        method = JwkMethodProvider.default()(did_key, JWK_TYPE)

        assert method.id == DidUrl.fragment_of(did_key)
        assert method.type == JWK_TYPE
        assert method.controller == did_key
        assert method.public_key == JwkKey(expected)
        assert dict(method.public_key_jwk) == expected
        assert method.public_key_multibase is None

    def test_type_is_passed_through(self):
        did_key = DidKey.parse("did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp")
        assert JwkMethodProvider.default()(did_key, JWK_2020_TYPE).type == JWK_2020_TYPE

    def test_unsupported_codec(self):
        did_key = DidKey.from_raw(bytes(32), KeyCodec.X25519_PUBLIC_KEY)

        with pytest.raises(UnsupportedKeyError) as exc_info:
            JwkMethodProvider.default()(did_key, JWK_TYPE)

        assert exc_info.value.codec == "x25519-pub"

    def test_none(self):
        with pytest.raises(NullInputError):
            JwkMethodProvider.default()(None, JWK_TYPE)


class TestJwkMethodProviderBuilder:
    """Tests for provider customization."""

    def test_empty_builder_returns_default(self):
        """An empty builder falls back to the shared default provider."""
        assert JwkMethodProvider.builder().build() is JwkMethodProvider.default()

    def test_custom_codec(self):
        did_key = DidKey.from_raw(bytes(32), KeyCodec.X25519_PUBLIC_KEY)
        provider = JwkMethodProvider.builder().with_codec(KeyCodec.X25519_PUBLIC_KEY, okp("X25519")).build()

        method = provider(did_key, JWK_TYPE)

        assert method.public_key_jwk["crv"] == "X25519"
        assert provider.codecs == (KeyCodec.X25519_PUBLIC_KEY,)

    def test_with_defaults_extends(self):
        provider = JwkMethodProvider.with_defaults().with_codec(KeyCodec.X25519_PUBLIC_KEY, okp("X25519")).build()

        assert KeyCodec.X25519_PUBLIC_KEY in provider.codecs
        assert KeyCodec.ED25519_PUBLIC_KEY in provider.codecs
        assert KeyCodec.X25519_PUBLIC_KEY not in JwkMethodProvider.default().codecs

    def test_build_snapshots(self):
        builder = JwkMethodProvider.builder().with_codec(KeyCodec.ED25519_PUBLIC_KEY, okp("Ed25519"))
        provider = builder.build()

        builder.with_codec(KeyCodec.X25519_PUBLIC_KEY, okp("X25519"))

        assert provider.codecs == (KeyCodec.ED25519_PUBLIC_KEY,)

    def test_none_arguments(self):
        with pytest.raises(NullInputError):
            JwkMethodProvider.builder().with_codec(None, okp("Ed25519"))
        with pytest.raises(NullInputError):
            JwkMethodProvider.builder().with_codec(KeyCodec.ED25519_PUBLIC_KEY, None)
