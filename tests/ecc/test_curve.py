#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkeys.ecc.curve` module."

import json
import secrets
from os import path
from typing import Dict

import pytest

from hdkeys.ecc.curve import (
    CURVES,
    Curve,
    curve_from_name,
    datadir,
    mult,
    secp256k1,
)
from hdkeys.ecc.point import AffinePoint, Infinity
from hdkeys.exceptions import HDKeysValueError

# test curves: very low cardinality
low_card_curves: Dict[str, Curve] = {}
# 13 % 4 = 1; 13 % 8 = 5
low_card_curves["ec13_11"] = Curve(13, 7, 6, (1, 1), 11, 1, False)
low_card_curves["ec13_19"] = Curve(13, 0, 2, (1, 9), 19, 1, False)
# 17 % 4 = 1; 17 % 8 = 1
low_card_curves["ec17_13"] = Curve(17, 6, 8, (0, 12), 13, 2, False)
low_card_curves["ec17_23"] = Curve(17, 3, 5, (1, 14), 23, 1, False)
# 19 % 4 = 3; 19 % 8 = 3
low_card_curves["ec19_13"] = Curve(19, 0, 2, (4, 16), 13, 2, False)
low_card_curves["ec19_23"] = Curve(19, 2, 9, (0, 16), 23, 1, False)
# 23 % 4 = 3; 23 % 8 = 7
low_card_curves["ec23_19"] = Curve(23, 9, 7, (5, 4), 19, 1, False)
low_card_curves["ec23_31"] = Curve(23, 5, 1, (0, 1), 31, 1, False)

all_curves: Dict[str, Curve] = {}
all_curves.update(low_card_curves)
all_curves.update(CURVES)


def test_exceptions() -> None:

    # good curve
    Curve(13, 0, 2, (1, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="p is not prime: "):
        Curve(15, 0, 2, (1, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="negative a: "):
        Curve(13, -1, 2, (1, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="p <= a: "):
        Curve(13, 13, 2, (1, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="negative b: "):
        Curve(13, 0, -2, (1, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="p <= b: "):
        Curve(13, 0, 13, (1, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="zero discriminant"):
        Curve(11, 7, 7, (1, 9), 19, 1, False)

    err_msg = "Generator must a be a sequence\\[int, int\\]"
    with pytest.raises(HDKeysValueError, match=err_msg):
        Curve(13, 0, 2, (1, 9, 1), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="Generator is not on the curve"):
        Curve(13, 0, 2, (2, 9), 19, 1, False)

    with pytest.raises(HDKeysValueError, match="n is not prime: "):
        Curve(13, 0, 2, (1, 9), 20, 1, False)

    with pytest.raises(HDKeysValueError, match="n not in "):
        Curve(13, 0, 2, (1, 9), 71, 1, False)

    with pytest.raises(HDKeysValueError, match="n is not the group order: "):
        Curve(13, 0, 2, (1, 9), 17, 1, False)

    with pytest.raises(HDKeysValueError, match="invalid h: "):
        Curve(13, 0, 2, (1, 9), 19, 2, False)

    with pytest.raises(HDKeysValueError, match="weak curve"):
        Curve(11, 2, 7, (6, 9), 7, 2, True)


def test_curve_table() -> None:

    filename = path.join(datadir, "curves.json")
    with open(filename, "r", encoding="ascii") as file_:
        curve_params = json.load(file_)
    assert sorted(curve_params) == sorted(CURVES)

    for ec_name, ec in CURVES.items():
        assert ec.name == ec_name
        assert curve_from_name(ec_name) is ec
        assert curve_from_name(f" {ec_name.upper()} ") is ec

    assert secp256k1 is CURVES["secp256k1"]
    assert secp256k1.p == 2**256 - 2**32 - 977
    assert secp256k1.a == 0
    assert secp256k1.b == 7
    assert secp256k1.h == 1
    assert secp256k1.p_size == 32
    assert secp256k1.n_size == 32
    assert secp256k1.gx == secp256k1.G.x
    assert secp256k1.gy == secp256k1.G.y

    with pytest.raises(HDKeysValueError, match="unknown curve: "):
        curve_from_name("secp256r1")


def test_known_answer_pub_keys() -> None:

    test_vectors = [
        (
            "fab9fca923e226fa3e6d383a4b22e84c43babafae9a2c8fc332feb1a3327b69e",
            "acf3f82a52e4f09f7d6334e46239125957ccfa7404370948031ac999c4d8e057",
            "24447e7fd300f4b33154abc24d7ee473b20fe67334f28cefdcbd8c633c436586",
        ),
        (
            "302593b9ef13aa4db375014910dac09a5027cec32061f95f7c5f6314d891841b",
            "46f6dce90f1aaafe82284c17ca493b231c62e57074132da3010a277eb2a628d3",
            "5e94a236576fd576badf01da8c5102851e323ff99cdde953681358f8d56e322e",
        ),
    ]
    for prv_key, x_Q, y_Q in test_vectors:
        Q = AffinePoint(int(x_Q, 16), int(y_Q, 16), secp256k1)
        assert mult(int(prv_key, 16)) == Q
        assert mult(int(prv_key, 16), secp256k1.G, secp256k1) == Q
        # Integer representations
        assert mult("0x" + prv_key) == Q
        assert mult(bytes.fromhex(prv_key)) == Q


def test_mult() -> None:
    for ec in all_curves.values():
        assert mult(0, ec.G, ec) == Infinity(ec)
        assert mult(1, ec.G, ec) == ec.G
        assert mult(ec.n, ec.G, ec) == Infinity(ec)
        # the scalar is reduced mod n
        assert mult(ec.n + 1, ec.G, ec) == ec.G
        assert mult(-1, ec.G, ec) == ec.negate(ec.G)
        assert mult(5, Infinity(ec), ec) == Infinity(ec)

        q = 1 + secrets.randbelow(ec.n - 1)
        Q = mult(q, ec.G, ec)
        assert isinstance(Q, AffinePoint)
        assert mult(ec.n - q, ec.G, ec) == ec.negate(Q)

    ec = low_card_curves["ec23_31"]
    with pytest.raises(HDKeysValueError, match="point not on curve"):
        mult(2, secp256k1.G, ec)


def test_ec_repr() -> None:
    for ec in all_curves.values():
        ec_repr = repr(ec)
        if ec in low_card_curves.values():
            ec_repr = ec_repr[:-1] + ", False)"
        ec2 = eval(ec_repr)  # pylint: disable=eval-used # nosec
        assert str(ec) == str(ec2)

    assert repr(low_card_curves["ec13_11"]) == "Curve(13, 7, 6, (1, 1), 11, 1)"
    ec_str = str(secp256k1)
    assert ec_str.startswith("Curve\n p   = FFFFFFFF FFFFFFFF")
    assert "\n a   = 0\n b   = 7\n" in ec_str
    assert "\n x_G = 79BE667E F9DCBBAC" in ec_str
    assert ec_str.endswith("\n h = 1")
