#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkeys.bip32."""

from hdkeys.bip32.bip32 import ExtendedPrivateKey, ExtendedPublicKey
from hdkeys.bip32.der_path import HARDENED, DerPath, indexes_from_path

__all__ = [
    "HARDENED",
    "DerPath",
    "ExtendedPrivateKey",
    "ExtendedPublicKey",
    "indexes_from_path",
]
