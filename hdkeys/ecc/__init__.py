#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkeys.ecc."""

from hdkeys.ecc.curve import CURVES, Curve, curve_from_name, mult, secp256k1
from hdkeys.ecc.curve_group import CurveGroup, mult_aff
from hdkeys.ecc.number_theory import mod, mod_inv
from hdkeys.ecc.point import AffinePoint, Infinity, Point
from hdkeys.ecc.sec_point import bytes_from_point

__all__ = [
    "CURVES",
    "AffinePoint",
    "Curve",
    "CurveGroup",
    "Infinity",
    "Point",
    "bytes_from_point",
    "curve_from_name",
    "mod",
    "mod_inv",
    "mult",
    "mult_aff",
    "secp256k1",
]
