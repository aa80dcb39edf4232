#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve classes and the table of supported curves.

Curve parameters are loaded from ecc/_data/curves.json,
a dictionary of curve names to
[p, a, b, [x_G, y_G], n, h] lists:
adding a curve is a matter of adding an entry to that table.

* SEC 2 v.2 curves
  http://www.secg.org/sec2-v2.pdf
"""

import json
from math import isqrt
from os import path
from typing import Dict, Optional, Sequence

from hdkeys.alias import Integer
from hdkeys.ecc.curve_group import HEX_THRESHOLD, CurveGroup, mult_aff
from hdkeys.ecc.point import AffinePoint, Point
from hdkeys.exceptions import HDKeysValueError
from hdkeys.utils import hex_string, int_from_integer


class CurveSubGroup(CurveGroup):
    "Subgroup of the points of an elliptic curve over Fp generated by G."

    def __init__(
        self, p: Integer, a: Integer, b: Integer, G: Sequence[Integer]
    ) -> None:

        super().__init__(p, a, b)

        # 2. check that xG and yG are integers in the interval [0, p−1]
        # 4. Check that yG^2 = xG^3 + a*xG + b (mod p)
        if len(G) != 2:
            raise HDKeysValueError("Generator must a be a sequence[int, int]")
        x_G, y_G = int_from_integer(G[0]), int_from_integer(G[1])
        if not self.is_on_curve(x_G, y_G):
            raise HDKeysValueError("Generator is not on the curve")
        self.G = AffinePoint(x_G, y_G, self)

    @property
    def gx(self) -> int:
        return self.G.x

    @property
    def gy(self) -> int:
        return self.G.y

    def __str__(self) -> str:
        result = super().__str__()
        if self.p > HEX_THRESHOLD:
            result += f"\n x_G = {hex_string(self.G.x)}"
            result += f"\n y_G = {hex_string(self.G.y)}"
        else:
            result += f"\n x_G = {self.G.x}"
            result += f"\n y_G = {self.G.y}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        if self.p > HEX_THRESHOLD:
            result += f", ('{hex_string(self.G.x)}', '{hex_string(self.G.y)}')"
        else:
            result += f", ({self.G.x}, {self.G.y})"
        result += ")"
        return result


class Curve(CurveSubGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Sequence[Integer],
        n: Integer,
        h: int,
        weakness_check: bool = True,
        name: str = "",
    ) -> None:

        super().__init__(p, a, b, G)
        n = int_from_integer(n)
        self.name = name

        self.n = n
        self.n_size = (n.bit_length() + 7) // 8

        # 5. Check that n is prime.
        if n < 2 or n % 2 == 0 or pow(2, n - 1, n) != 1:
            err_msg = "n is not prime: "
            err_msg += f"{hex_string(n)}" if n > HEX_THRESHOLD else f"{n}"
            raise HDKeysValueError(err_msg)
        # floor(2 * sqrt(p))
        delta = isqrt(4 * self.p)
        # also check n with Hasse Theorem
        if h < 2 and not self.p + 1 - delta <= n <= self.p + 1 + delta:
            err_msg = "n not in p+1-delta..p+1+delta: "
            err_msg += f"{hex_string(n)}" if n > HEX_THRESHOLD else f"{n}"
            raise HDKeysValueError(err_msg)

        # 7. Check that nG = INF
        if not mult_aff(n, self.G, self) == self.identity():
            err_msg = "n is not the group order: "
            err_msg += f"{hex_string(n)}" if n > HEX_THRESHOLD else f"{n}"
            raise HDKeysValueError(err_msg)

        # 6. Check cofactor
        exp_h = (self.p + 1 + delta) // n
        if h != exp_h:
            raise HDKeysValueError(f"invalid h: {h}, expected {exp_h}")
        self.h = h

        # 8. Check that n ≠ p
        if n == self.p:
            raise HDKeysValueError(f"n=p weak curve: {hex_string(n)}")

        if weakness_check:
            # 8. Check that p^i % n ≠ 1 for all 1≤i<100
            for i in range(1, 100):
                if pow(self.p, i, n) == 1:
                    raise HDKeysValueError("weak curve")

    def __str__(self) -> str:
        result = super().__str__()
        if self.n > HEX_THRESHOLD:
            result += f"\n n   = {hex_string(self.n)}"
        else:
            result += f"\n n   = {self.n}"
        result += f"\n h = {self.h}"
        return result

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        if self.n > HEX_THRESHOLD:
            result += f", '{hex_string(self.n)}'"
        else:
            result += f", {self.n}"
        result += f", {self.h}"
        result += ")"
        return result


datadir = path.join(path.dirname(__file__), "_data")

filename = path.join(datadir, "curves.json")
with open(filename, "r", encoding="ascii") as file_:
    _CURVE_PARAMS = json.load(file_)

CURVES: Dict[str, Curve] = {
    ec_name: Curve(*params, name=ec_name) for ec_name, params in _CURVE_PARAMS.items()
}

secp256k1 = CURVES["secp256k1"]


def curve_from_name(ec_name: str) -> Curve:
    "Return the curve registered under the given name."
    try:
        return CURVES[ec_name.strip().lower()]
    except KeyError as e:
        raise HDKeysValueError(f"unknown curve: {ec_name}") from e


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    """Elliptic curve scalar multiplication.

    The m coefficient is reduced mod n; Q defaults to the generator G.
    """
    if Q is None:
        Q = ec.G
    m = int_from_integer(m) % ec.n
    return mult_aff(m, Q, ec)
