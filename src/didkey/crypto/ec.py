# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Decompression of SEC1 compressed elliptic-curve points.

did:key carries P-256, P-384 and secp256k1 keys as compressed points
(``0x02 | 0x03 || X``). JWK needs both affine coordinates, so ``y`` is
recovered from the curve equation ``y² = x³ + ax + b (mod p)``.

Curve domain parameters come from ``ecdsa.curves``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ecdsa import curves as ecdsa_curves

from ..core.exceptions import InvalidPointError
from .modmath import is_quadratic_residue, sqrt_mod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveParams:
    """Short Weierstrass curve ``y² = x³ + ax + b`` over GF(p)."""

    name: str
    p: int
    a: int
    b: int

    @property
    def field_byte_length(self) -> int:
        return (self.p.bit_length() + 7) // 8

    def contains(self, x: int, y: int) -> bool:
        """Check that ``(x, y)`` satisfies the curve equation."""
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0


def _from_ecdsa(name: str, curve: ecdsa_curves.Curve) -> CurveParams:
    p = curve.curve.p()
    return CurveParams(name=name, p=p, a=curve.curve.a() % p, b=curve.curve.b() % p)


CURVES: dict[str, CurveParams] = {
    "secp256r1": _from_ecdsa("secp256r1", ecdsa_curves.NIST256p),
    "secp384r1": _from_ecdsa("secp384r1", ecdsa_curves.NIST384p),
    "secp256k1": _from_ecdsa("secp256k1", ecdsa_curves.SECP256k1),
}

CURVE_ALIASES = {
    "P-256": "secp256r1",
    "prime256v1": "secp256r1",
    "P-384": "secp384r1",
}


def get_curve(name: str) -> CurveParams:
    """Look up curve parameters by SEC name or alias."""
    try:
        return CURVES[CURVE_ALIASES.get(name, name)]
    except KeyError:
        raise InvalidPointError(f"Unsupported curve '{name}'", curve=name) from None


def decompress_point(curve_name: str, compressed: bytes) -> tuple[int, int]:
    """Recover the affine coordinates of a compressed SEC1 point.

    Args:
        curve_name: ``secp256r1``, ``secp384r1`` or ``secp256k1`` (or an alias).
        compressed: ``0x02``/``0x03`` followed by the big-endian ``x`` coordinate.

    Returns:
        Tuple of (x, y) as integers.

    Raises:
        InvalidPointError: If the encoding is malformed or ``x`` is not on the curve.
    """
    curve = get_curve(curve_name)
    compressed = bytes(compressed)

    if len(compressed) < 2 or (compressed[0] & 0xFE) != 0x02:
        raise InvalidPointError("Compressed EC point required", curve=curve.name)

    if len(compressed) != 1 + curve.field_byte_length:
        raise InvalidPointError(
            f"Unexpected EC point length {len(compressed)} for curve {curve.name}",
            curve=curve.name,
        )

    p = curve.p
    x = int.from_bytes(compressed[1:], "big")
    if x >= p:
        raise InvalidPointError("EC point x coordinate exceeds the field size", curve=curve.name)

    rhs = (pow(x, 3, p) + curve.a * x + curve.b) % p
    if not is_quadratic_residue(rhs, p):
        raise InvalidPointError("EC point is not on the curve", curve=curve.name)

    y = sqrt_mod(rhs, p)
    if y * y % p != rhs:
        raise InvalidPointError("EC point is not on the curve", curve=curve.name)

    if (y & 1) != (compressed[0] & 1):
        y = (p - y) % p

    return x, y


def decompress(curve_name: str, compressed: bytes) -> tuple[bytes, bytes]:
    """Like :func:`decompress_point`, with coordinates as fixed-width big-endian bytes."""
    x, y = decompress_point(curve_name, compressed)
    length = get_curve(curve_name).field_byte_length
    logger.debug("Decompressed %s point", curve_name)
    return x.to_bytes(length, "big"), y.to_bytes(length, "big")
