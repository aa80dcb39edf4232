#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The three base classes are only meant to discriminate between Exceptions
raised by hdkeys from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the hdkeys versions are derived.

The other classes name the failures a caller may want to handle
on their own, e.g. InvalidChildDerivation to retry with the next index.
"""

from typing import Optional


class HDKeysValueError(ValueError):
    pass


class HDKeysTypeError(TypeError):
    pass


class HDKeysRuntimeError(RuntimeError):
    pass


class ArithmeticFailure(HDKeysValueError):
    "Modular inverse of a non-invertible element, or invalid modulus."


class MalformedInput(HDKeysValueError):
    "Seed, key, or chain code of the wrong size."


class InvalidSeedDerivation(HDKeysValueError):
    """The seed yields a master private key not in 1..n-1.

    There is no index to increment at the root:
    a different seed is required.
    """


class InvalidChildDerivation(HDKeysValueError):
    """The index yields an invalid child key.

    BIP32 prescribes to proceed with the next index.
    next_index stays within the range of index:
    normal (0..0x7FFFFFFF) or hardened (0x80000000..0xFFFFFFFF).
    It is None at the end of the range,
    where a different derivation path is required.
    """

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        last_index = 0x7FFFFFFF if index < 0x80000000 else 0xFFFFFFFF
        self.next_index: Optional[int] = None if index == last_index else index + 1
        super().__init__(f"invalid child key at index {index}: {reason}")


class SeedConsumed(HDKeysRuntimeError):
    "The seed has already been used and wiped."
