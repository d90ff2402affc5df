# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""JSON Web Key rendering of did:key public keys.

OKP keys (Ed25519, BLS12-381) carry the raw key as ``x``. EC keys are stored
compressed in the did:key and are decompressed to ``x``/``y`` here.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .core.exceptions import InvalidPointError, NullInputError, UnsupportedKeyError
from .crypto.ec import decompress
from .did import DidKey, DidUrl
from .encoding import KeyCodec, Multicodec, base64url_encode
from .methods import JwkKey, JwkProducer, VerificationMethod


def normalize(value: bytes, length: int) -> bytes:
    """Fit a big-endian integer to exactly ``length`` bytes."""
    if len(value) == length:
        return value
    if len(value) == length + 1 and value[0] == 0:
        return value[1:]
    return bytes(length - len(value)) + value


def okp_jwk(crv: str, did_key: DidKey) -> Mapping[str, str]:
    return MappingProxyType(
        {
            "kty": "OKP",
            "crv": crv,
            "x": base64url_encode(did_key.raw_key_bytes),
        }
    )


def ec_jwk(crv: str, curve_name: str, did_key: DidKey, length: int) -> Mapping[str, str]:
    """EC JWK with both coordinates recovered from the compressed point.

    Raises:
        InvalidPointError: If the embedded point cannot be decompressed.
    """
    try:
        x, y = decompress(curve_name, did_key.raw_key_bytes)
    except InvalidPointError as e:
        raise InvalidPointError(f"Invalid {crv} public key in {did_key}: {e.message}", curve=curve_name) from e

    return MappingProxyType(
        {
            "kty": "EC",
            "crv": crv,
            "x": base64url_encode(normalize(x, length)),
            "y": base64url_encode(normalize(y, length)),
        }
    )


def okp(crv: str) -> JwkProducer:
    return functools.partial(okp_jwk, crv)


def ec(crv: str, curve_name: str, length: int) -> JwkProducer:
    def produce(did_key: DidKey) -> Mapping[str, str]:
        return ec_jwk(crv, curve_name, did_key, length)

    return produce


DEFAULT_PRODUCERS: Mapping[Multicodec, JwkProducer] = MappingProxyType(
    {
        KeyCodec.ED25519_PUBLIC_KEY: okp("Ed25519"),
        KeyCodec.BLS12_381_G1_PUBLIC_KEY: okp("Bls12381G1"),
        KeyCodec.BLS12_381_G2_PUBLIC_KEY: okp("Bls12381G2"),
        KeyCodec.P256_PUBLIC_KEY: ec("P-256", "secp256r1", 32),
        KeyCodec.P384_PUBLIC_KEY: ec("P-384", "secp384r1", 48),
        KeyCodec.SECP256K1_PUBLIC_KEY: ec("secp256k1", "secp256k1", 32),
    }
)


class JwkMethodProvider:
    """Verification method provider rendering keys as ``publicKeyJwk``."""

    def __init__(self, producers: Mapping[Multicodec, JwkProducer] | Iterable[tuple[Multicodec, JwkProducer]]):
        self._producers = MappingProxyType(dict(producers))

    @classmethod
    def default(cls) -> JwkMethodProvider:
        """Shared provider for the six standard key types."""
        return _DEFAULT_PROVIDER

    @classmethod
    def builder(cls) -> JwkMethodProviderBuilder:
        return JwkMethodProviderBuilder()

    @classmethod
    def with_defaults(cls) -> JwkMethodProviderBuilder:
        return JwkMethodProviderBuilder(DEFAULT_PRODUCERS)

    @property
    def codecs(self) -> tuple[Multicodec, ...]:
        return tuple(self._producers)

    def __call__(self, did_key: DidKey, method_type: str) -> VerificationMethod:
        if did_key is None:
            raise NullInputError("did_key")
        if method_type is None:
            raise NullInputError("method_type")

        producer = self._producers.get(did_key.codec)
        if producer is None:
            raise UnsupportedKeyError(
                f"Unsupported did:key codec {did_key.codec} for JWK",
                codec=did_key.codec.name,
            )

        return VerificationMethod(
            id=DidUrl.fragment_of(did_key),
            type=method_type,
            controller=did_key,
            public_key=JwkKey(producer(did_key)),
        )


class JwkMethodProviderBuilder:
    """Collects JWK producers per codec.

    Building with no producer registered yields :meth:`JwkMethodProvider.default`
    rather than an empty provider, unlike the other builders which raise
    :class:`~didkey.core.exceptions.EmptyConfigurationError`.
    """

    def __init__(self, producers: Mapping[Multicodec, JwkProducer] | None = None):
        self._producers: dict[Multicodec, JwkProducer] = dict(producers or {})

    def with_codec(self, codec: Multicodec, producer: JwkProducer) -> JwkMethodProviderBuilder:
        if codec is None:
            raise NullInputError("codec")
        if producer is None:
            raise NullInputError("producer")
        self._producers[codec] = producer
        return self

    def build(self) -> JwkMethodProvider:
        """Snapshot the registered producers; an empty builder yields the default provider."""
        if not self._producers:
            return JwkMethodProvider.default()
        return JwkMethodProvider(self._producers)


_DEFAULT_PROVIDER = JwkMethodProvider(DEFAULT_PRODUCERS)
