# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Multibase and multicodec framing for did:key identifiers.

A did:key method-specific id is ``"z" + base58btc(varint(code) || raw-key)``.
The base58 alphabet comes from ``base58``; the public-key codecs and their
varint prefixes are listed in :data:`KEY_MULTICODECS`.

See https://github.com/multiformats/multicodec/blob/master/table.csv
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

import base58

from .core.exceptions import BadEncodingError, UnsupportedCodecError

# =============================================================================
# CONSTANTS
# =============================================================================

# Multibase prefix for base58btc encoding
MULTIBASE_BASE58BTC = "z"
BASE58BTC = "base58btc"

KEY_TAG = "key"


# =============================================================================
# MULTIBASE
# =============================================================================


def multibase_encode(data: bytes) -> str:
    """Encode bytes to multibase (base58btc)."""
    return MULTIBASE_BASE58BTC + base58.b58encode(bytes(data)).decode("ascii")


def multibase_decode(string: str) -> bytes:
    """Decode a base58btc multibase string to bytes.

    Raises:
        BadEncodingError: If the prefix is not ``z`` or the payload is not base58.
    """
    if not is_base58btc(string):
        prefix = string[:1] if isinstance(string, str) and string else "<empty>"
        raise BadEncodingError(f"Unsupported multibase encoding '{prefix}', expected base58btc")
    try:
        return base58.b58decode(string[1:])
    except ValueError as e:
        raise BadEncodingError(f"Invalid base58btc payload: {e}") from e


def is_base58btc(string: str) -> bool:
    """Check the multibase prefix only; the payload is not validated."""
    return isinstance(string, str) and string.startswith(MULTIBASE_BASE58BTC)


def base64url_encode(data: bytes) -> str:
    """Base64url without padding, as used by JWK."""
    return base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii")


# =============================================================================
# MULTICODEC
# =============================================================================


@dataclass(frozen=True)
class Multicodec:
    """A multicodec table entry.

    Attributes:
        name: Codec name in the multicodec table (e.g. ``"ed25519-pub"``).
        code: Numeric code.
        prefix: Unsigned varint encoding of ``code``, prepended to the key.
        tag: Codec family, always ``"key"`` for did:key codecs.
    """

    name: str
    code: int
    prefix: bytes
    tag: str = KEY_TAG

    @classmethod
    def of(cls, name: str) -> Multicodec:
        """Look up a public-key codec by its table name."""
        try:
            return KEY_MULTICODECS[name]
        except KeyError:
            raise UnsupportedCodecError(f"Unknown multicodec '{name}'") from None

    def encode(self, raw: bytes) -> bytes:
        """Return ``prefix || raw``."""
        return self.prefix + bytes(raw)

    def decode(self, debased: bytes) -> bytes:
        """Strip the codec prefix from ``prefix || raw``."""
        debased = bytes(debased)
        if not debased.startswith(self.prefix):
            raise UnsupportedCodecError(f"Data is not prefixed with the {self.name} multicodec")
        return debased[len(self.prefix) :]

    def __str__(self) -> str:
        return f"{self.name} (0x{self.code:x})"


KEY_MULTICODECS: MappingProxyType[str, Multicodec] = MappingProxyType(
    {
        codec.name: codec
        for codec in (
            Multicodec("secp256k1-pub", 0xE7, b"\xe7\x01"),
            Multicodec("bls12_381-g1-pub", 0xEA, b"\xea\x01"),
            Multicodec("bls12_381-g2-pub", 0xEB, b"\xeb\x01"),
            Multicodec("x25519-pub", 0xEC, b"\xec\x01"),
            Multicodec("ed25519-pub", 0xED, b"\xed\x01"),
            Multicodec("bls12_381-g1g2-pub", 0xEE, b"\xee\x01"),
            Multicodec("sr25519-pub", 0xEF, b"\xef\x01"),
            Multicodec("p256-pub", 0x1200, b"\x80\x24"),
            Multicodec("p384-pub", 0x1201, b"\x81\x24"),
            Multicodec("p521-pub", 0x1202, b"\x82\x24"),
            Multicodec("ed448-pub", 0x1203, b"\x83\x24"),
            Multicodec("x448-pub", 0x1204, b"\x84\x24"),
            Multicodec("rsa-pub", 0x1205, b"\x85\x24"),
        )
    }
)


class KeyCodec:
    """Public-key codecs recognised in did:key identifiers."""

    ED25519_PUBLIC_KEY = Multicodec.of("ed25519-pub")
    X25519_PUBLIC_KEY = Multicodec.of("x25519-pub")
    SECP256K1_PUBLIC_KEY = Multicodec.of("secp256k1-pub")
    BLS12_381_G1_PUBLIC_KEY = Multicodec.of("bls12_381-g1-pub")
    BLS12_381_G2_PUBLIC_KEY = Multicodec.of("bls12_381-g2-pub")
    BLS12_381_G1G2_PUBLIC_KEY = Multicodec.of("bls12_381-g1g2-pub")
    SR25519_PUBLIC_KEY = Multicodec.of("sr25519-pub")
    P256_PUBLIC_KEY = Multicodec.of("p256-pub")
    P384_PUBLIC_KEY = Multicodec.of("p384-pub")
    P521_PUBLIC_KEY = Multicodec.of("p521-pub")
    ED448_PUBLIC_KEY = Multicodec.of("ed448-pub")
    X448_PUBLIC_KEY = Multicodec.of("x448-pub")
    RSA_PUBLIC_KEY = Multicodec.of("rsa-pub")

    @classmethod
    def known(cls) -> tuple[Multicodec, ...]:
        return tuple(KEY_MULTICODECS.values())


class MulticodecDecoder:
    """Read-only lookup of codecs by the prefix of encoded data."""

    def __init__(self, codecs: Iterable[Multicodec]):
        self._codecs = MappingProxyType({codec.prefix: codec for codec in codecs})

    @classmethod
    def for_keys(cls) -> MulticodecDecoder:
        """Decoder covering every :class:`KeyCodec`."""
        return _KEY_DECODER

    def get_codec(self, debased: bytes) -> Multicodec | None:
        """Return the codec whose prefix starts ``debased``, or ``None``."""
        if not debased:
            return None
        debased = bytes(debased)
        for prefix, codec in self._codecs.items():
            if debased.startswith(prefix):
                return codec
        return None

    def __contains__(self, codec: object) -> bool:
        return isinstance(codec, Multicodec) and self._codecs.get(codec.prefix) == codec

    def __iter__(self) -> Iterator[Multicodec]:
        return iter(self._codecs.values())

    def __len__(self) -> int:
        return len(self._codecs)


_KEY_DECODER = MulticodecDecoder(KeyCodec.known())
