#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed/uncompressed point representation."""

from hdkeys.ecc.curve_group import CurveGroup
from hdkeys.ecc.point import Infinity, Point
from hdkeys.exceptions import HDKeysValueError


def bytes_from_point(Q: Point, ec: CurveGroup, compressed: bool = True) -> bytes:
    """Return a point as compressed/uncompressed octet sequence.

    Return a point as compressed (0x02, 0x03) or uncompressed (0x04)
    octet sequence, according to SEC 1 v.2, section 2.3.3.
    """

    # check that Q is a point and that is on curve
    ec.require_on_curve(Q)

    if isinstance(Q, Infinity):
        raise HDKeysValueError("no bytes representation for infinity point")

    bytes_ = Q.x.to_bytes(ec.p_size, byteorder="big", signed=False)
    if compressed:
        return (b"\x03" if (Q.y & 1) else b"\x02") + bytes_

    return b"\x04" + bytes_ + Q.y.to_bytes(ec.p_size, byteorder="big", signed=False)
