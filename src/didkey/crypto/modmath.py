# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Modular arithmetic over odd prime fields.

Used by the EC point decompressor to recover ``y`` from ``y² = x³ + ax + b``.
"""

from __future__ import annotations


def is_quadratic_residue(n: int, p: int) -> bool:
    """Euler's criterion: ``n`` is a square modulo the odd prime ``p``."""
    n %= p
    return n == 0 or pow(n, (p - 1) // 2, p) == 1


def sqrt_mod(n: int, p: int) -> int:
    """Return ``r`` with ``r² ≡ n (mod p)`` and ``0 <= r < p``.

    ``p`` must be an odd prime and ``n`` a quadratic residue modulo ``p``.
    Residuacity is not checked: for a non-residue the result simply fails to
    square back to ``n``.

    Uses the closed form ``n^((p+1)/4)`` when ``p ≡ 3 (mod 4)`` and
    Tonelli-Shanks otherwise.
    """
    n %= p
    if n == 0:
        return 0

    if p % 4 == 3:
        return pow(n, (p + 1) // 4, p)

    # p - 1 = q * 2^s with q odd
    q = p - 1
    s = 0
    while q % 2 == 0:
        q //= 2
        s += 1

    # Any quadratic non-residue
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(n, q, p)
    r = pow(n, (q + 1) // 2, p)

    while t != 1:
        # Least i, 0 < i < m, with t^(2^i) == 1
        i = 1
        tt = t * t % p
        while tt != 1 and i < m:
            tt = tt * tt % p
            i += 1
        if i >= m:
            # n is not a quadratic residue
            return r

        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        r = r * b % p

    return r
