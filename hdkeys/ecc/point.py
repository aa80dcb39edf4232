#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve points.

A curve point is either an affine point (x, y)
or the point at infinity, the identity element of the group.

The point at infinity is an explicit variant,
not a coordinate pair that could collide with a point of some curve.
Both variants are immutable and carry the curve they belong to.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from hdkeys.exceptions import HDKeysValueError

if TYPE_CHECKING:  # pragma: no cover
    from hdkeys.ecc.curve_group import CurveGroup


@dataclass(frozen=True)
class Infinity:
    "The point at infinity of the curve."

    ec: "CurveGroup" = field(repr=False)


@dataclass(frozen=True)
class AffinePoint:
    """Curve point in affine coordinates.

    The coordinates are checked to be in 0..p-1
    and to satisfy the curve equation.
    """

    x: int
    y: int
    ec: "CurveGroup" = field(repr=False)

    def __post_init__(self) -> None:
        p = self.ec.p
        if not 0 <= self.x < p:
            raise HDKeysValueError(f"x-coordinate not in 0..p-1: {hex(self.x)}")
        if not 0 <= self.y < p:
            raise HDKeysValueError(f"y-coordinate not in 0..p-1: {hex(self.y)}")
        if not self.ec.is_on_curve(self.x, self.y):
            raise HDKeysValueError("point not on curve")


Point = Union[AffinePoint, Infinity]
