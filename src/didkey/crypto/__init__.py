# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Elliptic-curve helpers for expanding did:key public keys."""

from .ec import CURVES, CurveParams, decompress, decompress_point, get_curve
from .modmath import is_quadratic_residue, sqrt_mod

__all__ = [
    "CURVES",
    "CurveParams",
    "decompress",
    "decompress_point",
    "get_curve",
    "is_quadratic_residue",
    "sqrt_mod",
]
