#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic functions.

Extended Euclidean algorithm implementation originally from
https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
with the following modifications:

* type annotated python3
* explicit failure on invalid modulus
"""

from typing import Tuple

from hdkeys.exceptions import ArithmeticFailure
from hdkeys.utils import hex_string


def _int_str(i: int) -> str:
    return f"{hex_string(i)}" if i > 0xFFFFFFFF else f"{i}"


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    based on Extended Euclidean Algorithm, see
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod(a: int, m: int) -> int:
    """Return the Euclidean remainder of a (mod m), i.e. in [0, m)."""

    if m <= 0:
        raise ArithmeticFailure(f"non positive modulus: {m}")
    # floored remainder: non-negative for positive m
    return a % m


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a (mod m). m does not have to be a prime.

    Based on Extended Euclidean Algorithm, see:
    https://en.wikibooks.org/wiki/Algorithm_Implementation/Mathematics/Extended_Euclidean_algorithm
    """

    a = mod(a, m)
    # a == 0 is not invertible, not even for m == 1
    if a != 0:
        g, x, _ = xgcd(a, m)
        if g == 1:
            return mod(x, m)
    err_msg = f"No inverse for {_int_str(a)} mod {_int_str(m)}"
    raise ArithmeticFailure(err_msg)
