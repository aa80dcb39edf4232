#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic CurveGroup class and functions.

Note that CurveGroup does not have to be a cyclic subgroup.
For the cyclic subgroup class CurveSubGroup and
the cyclic subgroup class of prime order Curve,
see the hdkeys.ecc.curve module.
"""

from math import ceil

from hdkeys.alias import Integer
from hdkeys.ecc.number_theory import mod, mod_inv
from hdkeys.ecc.point import AffinePoint, Infinity, Point
from hdkeys.exceptions import HDKeysValueError
from hdkeys.utils import hex_string, int_from_integer

HEX_THRESHOLD = 0xFFFFFFFF


def _int_str(i: int) -> str:
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity.
    The constants a, b must satisfy the relationship
    4 a^3 + 27 b^2 ≠ 0.

    The group is defined by the point addition group law.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # Parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is a prime
        # Fermat test will do as _probabilistic_ primality test...
        if p < 2 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise HDKeysValueError(f"p is not prime: {_int_str(p)}")

        # byte-length
        self.p_size = ceil(p.bit_length() / 8)
        self.p = p

        # 2. check that a and b are integers in the interval [0, p−1]
        if a < 0:
            raise HDKeysValueError(f"negative a: {a}")
        if p <= a:
            raise HDKeysValueError(f"p <= a: {_int_str(p)} <= {_int_str(a)}")
        if b < 0:
            raise HDKeysValueError(f"negative b: {b}")
        if p <= b:
            raise HDKeysValueError(f"p <= b: {_int_str(p)} <= {_int_str(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        d = 4 * a * a * a + 27 * b * b
        if d % p == 0:
            raise HDKeysValueError("zero discriminant")
        self._a = a
        self._b = b

    @property
    def a(self) -> int:
        return self._a

    @property
    def b(self) -> int:
        return self._b

    def __str__(self) -> str:
        result = "Curve"
        if self.p > HEX_THRESHOLD:
            result += f"\n p   = {hex_string(self.p)}"
        else:
            result += f"\n p   = {self.p}"

        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f"\n a   = {hex_string(self._a)}"
            result += f"\n b   = {hex_string(self._b)}"
        else:
            result += f"\n a   = {self._a}"
            result += f"\n b   = {self._b}"

        return result

    def __repr__(self) -> str:
        result = "Curve("
        result += f"'{hex_string(self.p)}'" if self.p > HEX_THRESHOLD else f"{self.p}"
        if self._a > HEX_THRESHOLD or self._b > HEX_THRESHOLD:
            result += f", '{hex_string(self._a)}', '{hex_string(self._b)}'"
        else:
            result += f", {self._a}, {self._b}"

        result += ")"
        return result

    def identity(self) -> Infinity:
        "Return the point at infinity, i.e. the group identity."
        return Infinity(self)

    def negate(self, Q: Point) -> Point:
        "Return the opposite point."
        self.require_on_curve(Q)
        if isinstance(Q, Infinity):
            return Q
        return AffinePoint(Q.x, mod(-Q.y, self.p), self)

    def add(self, Q: Point, R: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(Q)
        self.require_on_curve(R)

        if isinstance(Q, Infinity):
            return R
        if isinstance(R, Infinity):
            return Q

        if Q == R:
            return self.double(Q)
        # opposite points
        if Q.x == R.x and mod(Q.y + R.y, self.p) == 0:
            return Infinity(self)

        lam = mod((R.y - Q.y) * mod_inv(R.x - Q.x, self.p), self.p)
        x = mod(lam * lam - Q.x - R.x, self.p)
        y = mod(lam * (Q.x - x) - Q.y, self.p)
        return AffinePoint(x, y, self)

    def double(self, Q: Point) -> Point:
        """Return the double of a point.

        The input point must be on the curve.
        """

        self.require_on_curve(Q)

        if isinstance(Q, Infinity):
            return Q
        # vertical tangent: Q has order two
        if Q.y == 0:
            return Infinity(self)

        lam = mod((3 * Q.x * Q.x + self._a) * mod_inv(2 * Q.y, self.p), self.p)
        x = mod(lam * lam - Q.x - Q.x, self.p)
        y = mod(lam * (Q.x - x) - Q.y, self.p)
        return AffinePoint(x, y, self)

    def _y2(self, x: int) -> int:
        return ((x * x + self._a) * x + self._b) % self.p

    def is_on_curve(self, x: int, y: int) -> bool:
        "Return True if (x, y) satisfies the curve equation."
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        return self._y2(x) == y * y % self.p

    def require_on_curve(self, Q: Point) -> None:
        """Require the input Point to belong to this curve.

        An Error is raised if not.
        """
        if not isinstance(Q, (AffinePoint, Infinity)):
            raise HDKeysValueError(f"not a point: {Q!r}")
        if Q.ec is not self:
            raise HDKeysValueError("point not on curve")


def mult_aff(m: int, Q: Point, ec: CurveGroup) -> Point:
    """Scalar multiplication of a curve point in affine coordinates.

    This implementation uses
    'double & add' algorithm,
    'right-to-left' binary decomposition of the m coefficient,
    affine coordinates.
    It is not constant-time.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n
    if appropriate (e.g. cyclic groups of order n).
    """

    if m < 0:
        raise HDKeysValueError(f"negative m: {hex(m)}")

    ec.require_on_curve(Q)
    R = ec.identity()  # initialize as infinity point
    while m > 0:  # use binary representation of m
        if m & 1:  # if least significant bit is 1
            R = ec.add(R, Q)  # then add current Q
        m >>= 1  # remove the bit just accounted for
        Q = ec.double(Q)  # double Q for next step
    return R
