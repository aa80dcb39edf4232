#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeys.ecc.sec_point` module."

import secrets

import pytest

from hdkeys.ecc.curve import mult, secp256k1
from hdkeys.ecc.point import Infinity
from hdkeys.ecc.sec_point import bytes_from_point
from hdkeys.exceptions import HDKeysValueError
from tests.ecc.test_curve import all_curves, low_card_curves


def test_bytes_from_point() -> None:

    x_G = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    y_G = "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
    assert bytes_from_point(secp256k1.G, secp256k1).hex() == "02" + x_G
    assert bytes_from_point(secp256k1.G, secp256k1, False).hex() == "04" + x_G + y_G

    for ec in all_curves.values():

        # just a random point, not INF
        q = 1 + secrets.randbelow(ec.n - 1)
        Q = mult(q, ec.G, ec)

        Q_bytes = b"\x03" if Q.y & 1 else b"\x02"
        Q_bytes += Q.x.to_bytes(ec.p_size, byteorder="big", signed=False)
        assert bytes_from_point(Q, ec) == Q_bytes
        assert len(Q_bytes) == 1 + ec.p_size

        Q_bytes = b"\x04" + Q.x.to_bytes(ec.p_size, byteorder="big", signed=False)
        Q_bytes += Q.y.to_bytes(ec.p_size, byteorder="big", signed=False)
        assert bytes_from_point(Q, ec, False) == Q_bytes

        # the opposite point only differs in the prefix
        minus_Q_bytes = bytes_from_point(ec.negate(Q), ec)
        assert minus_Q_bytes[1:] == bytes_from_point(Q, ec)[1:]
        assert minus_Q_bytes[0] != bytes_from_point(Q, ec)[0]

        err_msg = "no bytes representation for infinity point"
        with pytest.raises(HDKeysValueError, match=err_msg):
            bytes_from_point(Infinity(ec), ec)

    with pytest.raises(HDKeysValueError, match="point not on curve"):
        bytes_from_point(secp256k1.G, low_card_curves["ec13_11"])

    with pytest.raises(HDKeysValueError, match="not a point: "):
        bytes_from_point((1, 1), low_card_curves["ec13_11"])  # type: ignore
