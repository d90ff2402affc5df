# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""The did:key identifier.

DID Format:
    did:key:[<version>:]<multibase(base58btc, multicodec(key-type, raw-key-bytes))>

Examples:
    did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp       (Ed25519)
    did:key:zDnaerx9CtbPJ1q36T5Ln5wYt3MQYeGRG5ehnPAmxcf5mDZpv      (P-256)
    did:key:zQ3shokFTS3brHcDQrn82RUDfCZESWL1ZdCEJwekUDPQiYBme      (secp256k1)

See https://w3c-ccg.github.io/did-key-spec/
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union
from urllib.parse import ParseResult, SplitResult

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, x25519
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .core.exceptions import (
    BadEncodingError,
    MalformedDidError,
    NotDidKeyError,
    NullInputError,
    UnsupportedCodecError,
    UnsupportedKeyError,
)
from .encoding import (
    BASE58BTC,
    KeyCodec,
    Multicodec,
    MulticodecDecoder,
    is_base58btc,
    multibase_decode,
    multibase_encode,
)

# =============================================================================
# CONSTANTS
# =============================================================================

DID_SCHEME = "did"
METHOD_NAME = "key"
DEFAULT_VERSION = "1"

# W3C DID Core syntax; method names are matched case-insensitively
_IDCHAR = r"(?:[A-Za-z0-9._-]|%[0-9A-Fa-f]{2})"
DID_PATTERN = re.compile(
    rf"^did:(?P<method>[A-Za-z0-9]+):(?P<id>(?:{_IDCHAR}*:)*{_IDCHAR}+)$"
)

UriLike = Union[str, ParseResult, SplitResult]


def _text_of(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (ParseResult, SplitResult)):
        return value.geturl()
    return None


# =============================================================================
# GENERIC DID
# =============================================================================


@dataclass(frozen=True)
class Did:
    """A syntactically valid DID of any method."""

    method: str
    method_specific_id: str

    @classmethod
    def parse(cls, value: UriLike) -> Did:
        """Parse a DID string or URI.

        Raises:
            NullInputError: If ``value`` is None.
            MalformedDidError: If the value does not follow the DID syntax.
        """
        if value is None:
            raise NullInputError("did")

        text = _text_of(value)
        if text is None:
            raise MalformedDidError(f"Unsupported DID value of type {type(value).__name__}")

        match = DID_PATTERN.match(text)
        if not match:
            raise MalformedDidError(f"Invalid DID: {text}", did=text)

        return cls(method=match.group("method"), method_specific_id=match.group("id"))

    def __str__(self) -> str:
        return f"{DID_SCHEME}:{self.method}:{self.method_specific_id}"


def is_did(value: Any) -> bool:
    """Check whether the value is a syntactically valid DID."""
    if isinstance(value, (Did, DidKey)):
        return True
    text = _text_of(value)
    return text is not None and DID_PATTERN.match(text) is not None


def is_did_key(value: Any) -> bool:
    """Cheap check for a did:key value; the key itself is not decoded.

    The method name matches case-insensitively, as in :meth:`DidKey.parse`.
    """
    if value is None:
        return False
    if isinstance(value, DidKey):
        return True
    if isinstance(value, Did):
        return value.method.lower() == METHOD_NAME
    text = _text_of(value)
    match = DID_PATTERN.match(text) if text is not None else None
    return match is not None and match.group("method").lower() == METHOD_NAME


# =============================================================================
# DID KEY
# =============================================================================


@dataclass(frozen=True, eq=False)
class DidKey:
    """Immutable, parsed did:key identifier.

    Attributes:
        version: did:key version, ``"1"`` unless given explicitly.
        method_specific_id: The base58btc multibase string (without version).
        codec: Key type of the embedded public key.
        raw_key_bytes: The public key with the multicodec prefix stripped.

    Two values are equal when their canonical strings are equal.
    """

    version: str
    method_specific_id: str
    codec: Multicodec
    raw_key_bytes: bytes

    method = METHOD_NAME

    # -- construction -------------------------------------------------------

    @classmethod
    def parse(
        cls,
        value: UriLike | Did | DidKey,
        codecs: MulticodecDecoder | None = None,
    ) -> DidKey:
        """Parse a did:key from a string, URI or generic :class:`Did`.

        Raises:
            NullInputError: If ``value`` is None.
            MalformedDidError: If the value is not a DID.
            NotDidKeyError: If the DID method is not ``key``.
            BadEncodingError: If the key is not base58btc multibase.
            UnsupportedCodecError: If the multicodec prefix is unknown.
        """
        if value is None:
            raise NullInputError("did")
        if isinstance(value, DidKey):
            return value

        did = value if isinstance(value, Did) else Did.parse(value)
        codecs = codecs or MulticodecDecoder.for_keys()

        if did.method.lower() != METHOD_NAME:
            raise NotDidKeyError(
                f"The given DID [{did}] is not valid DID key method, does not start with 'did:key'",
                did=str(did),
            )

        parts = did.method_specific_id.split(":", 1)
        if len(parts) == 2:
            version, encoded = parts
        else:
            version, encoded = DEFAULT_VERSION, parts[0]

        if not is_base58btc(encoded):
            raise BadEncodingError(
                f"Unsupported did:key base encoding, expected base58btc. DID [{did}]",
                did=str(did),
            )

        try:
            debased = multibase_decode(encoded)
        except BadEncodingError as e:
            raise BadEncodingError(f"{e.message}. DID [{did}]", did=str(did)) from e

        if not debased:
            raise BadEncodingError(f"Empty did:key payload. DID [{did}]", did=str(did))

        codec = codecs.get_codec(debased)
        if codec is None:
            raise UnsupportedCodecError(f"Unsupported did:key codec. DID [{did}]", did=str(did))

        return cls(
            version=version,
            method_specific_id=encoded,
            codec=codec,
            raw_key_bytes=codec.decode(debased),
        )

    @classmethod
    def from_raw(cls, raw: bytes, codec: Multicodec) -> DidKey:
        """Create a did:key for raw public key bytes of the given key type."""
        if raw is None:
            raise NullInputError("raw")
        if codec is None:
            raise NullInputError("codec")
        raw = bytes(raw)
        return cls(
            version=DEFAULT_VERSION,
            method_specific_id=multibase_encode(codec.encode(raw)),
            codec=codec,
            raw_key_bytes=raw,
        )

    @classmethod
    def from_public_key(cls, key: Any) -> DidKey:
        """Create a did:key from a ``cryptography`` public key object.

        EC keys are embedded as compressed SEC1 points.
        """
        if key is None:
            raise NullInputError("key")

        if isinstance(key, ed25519.Ed25519PublicKey):
            return cls.from_raw(key.public_bytes(Encoding.Raw, PublicFormat.Raw), KeyCodec.ED25519_PUBLIC_KEY)

        if isinstance(key, x25519.X25519PublicKey):
            return cls.from_raw(key.public_bytes(Encoding.Raw, PublicFormat.Raw), KeyCodec.X25519_PUBLIC_KEY)

        if isinstance(key, ec.EllipticCurvePublicKey):
            codec = _EC_CODECS.get(type(key.curve))
            if codec is None:
                raise UnsupportedKeyError(f"Unsupported EC curve {key.curve.name}")
            return cls.from_raw(key.public_bytes(Encoding.X962, PublicFormat.CompressedPoint), codec)

        raise UnsupportedKeyError(f"Unsupported public key type {type(key).__name__}")

    # -- accessors ----------------------------------------------------------

    @property
    def did(self) -> Did:
        """The generic DID form."""
        if self.version == DEFAULT_VERSION:
            return Did(METHOD_NAME, self.method_specific_id)
        return Did(METHOD_NAME, f"{self.version}:{self.method_specific_id}")

    @property
    def base_name(self) -> str:
        return BASE58BTC

    @property
    def debased(self) -> bytes:
        """Codec-prefixed key bytes (the multibase payload)."""
        return self.codec.encode(self.raw_key_bytes)

    @property
    def decoded(self) -> bytes:
        return self.raw_key_bytes

    @property
    def codec_code(self) -> int:
        return self.codec.code

    # -- value semantics ----------------------------------------------------

    def __str__(self) -> str:
        return str(self.did)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DidKey):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))


_EC_CODECS: dict[type, Multicodec] = {
    ec.SECP256R1: KeyCodec.P256_PUBLIC_KEY,
    ec.SECP384R1: KeyCodec.P384_PUBLIC_KEY,
    ec.SECP521R1: KeyCodec.P521_PUBLIC_KEY,
    ec.SECP256K1: KeyCodec.SECP256K1_PUBLIC_KEY,
}


# =============================================================================
# DID URL
# =============================================================================


@dataclass(frozen=True)
class DidUrl:
    """A DID with a fragment, e.g. ``did:key:z6Mk...#z6Mk...``."""

    did: Did | DidKey
    fragment: str

    @classmethod
    def fragment_of(cls, did_key: DidKey) -> DidUrl:
        """The verification method id of a did:key: fragment = method-specific id."""
        return cls(did=did_key, fragment=did_key.method_specific_id)

    def __str__(self) -> str:
        return f"{self.did}#{self.fragment}"
