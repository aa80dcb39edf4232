#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Derivation paths.

A derivation path is the sequence of child indexes leading
from an extended key to one of its descendants. It can be given as:

- a "/" separated string, e.g. "m/44h/0'/1H/0/10" or "0h/1",
  where the optional leading "m" stands for the starting key
  and a "h", "H" or "'" suffix marks a hardened step
- a sequence of integer indexes
- a single integer index

Paths are validated as a whole before any derivation takes place.
"""

from typing import List, Sequence, Union

from hdkeys.exceptions import HDKeysTypeError, HDKeysValueError

HARDENED = 0x80000000
MAX_INDEX = 0xFFFFFFFF
MAX_DEPTH = 255

DerPath = Union[str, Sequence[int], int]


def check_index(index: int) -> None:
    "Raise an exception if index is not a valid child index."

    # bool is an int subclass, but not an index
    if isinstance(index, bool) or not isinstance(index, int):
        raise HDKeysTypeError(f"invalid index type: {type(index)}")
    if not 0 <= index <= MAX_INDEX:
        raise HDKeysValueError(f"invalid index: {index}")


def _index_from_step(step: str) -> int:

    normalized = step.strip().lower()
    hardened = normalized[-1:] in ("h", "'")
    digits = normalized[:-1] if hardened else normalized
    if not digits.isdecimal():
        raise HDKeysValueError(f"invalid path step: {step!r}")
    index = int(digits)
    if index >= HARDENED:
        raise HDKeysValueError(f"invalid index: {step.strip()}")
    return index + HARDENED if hardened else index


def _indexes_from_str(der_path: str) -> List[int]:

    steps = der_path.split("/")
    if steps[0].strip().lower() == "m":
        steps = steps[1:]
    elif steps == [""]:
        return []
    return [_index_from_step(step) for step in steps]


def indexes_from_path(
    der_path: DerPath, depth: int = 0, hardened: bool = True
) -> List[int]:
    """Return the list of child indexes of a derivation path.

    depth is the depth of the starting key:
    the path cannot lead beyond depth 255.
    With hardened=False, as for public derivation,
    a path including a hardened step is rejected.
    """

    if isinstance(der_path, str):
        indexes = _indexes_from_str(der_path)
    elif isinstance(der_path, int):
        check_index(der_path)
        indexes = [der_path]
    elif isinstance(der_path, (bytes, bytearray)):
        raise HDKeysTypeError(f"invalid derivation path type: {type(der_path)}")
    else:
        indexes = list(der_path)
        for index in indexes:
            check_index(index)

    final_depth = depth + len(indexes)
    if final_depth > MAX_DEPTH:
        raise HDKeysValueError(f"final depth greater than 255: {final_depth}")

    if not hardened and any(index >= HARDENED for index in indexes):
        raise HDKeysValueError("invalid hardened derivation from public key")

    return indexes
