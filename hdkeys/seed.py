#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Secret seed from which a hierarchy of keys is derived.

A Seed owns a mutable 64 bytes buffer that can be used exactly once:
after consumption the buffer is overwritten with zeros
and any further use raises SeedConsumed.

Wiping a Python buffer bounds the exposure window of the secret,
it is not a guarantee against all memory-disclosure attacks:
copies made by the interpreter or by the hash implementation
are out of reach.
"""

import contextlib
import logging
import secrets
from typing import Iterator

from hdkeys.alias import Octets
from hdkeys.exceptions import HDKeysTypeError, MalformedInput, SeedConsumed
from hdkeys.utils import bytes_from_octets

SEED_SIZE = 64

log = logging.getLogger(__name__)


class Seed:
    "Single-use secret seed buffer."

    __slots__ = ("_buffer", "_consumed")

    def __init__(self, buffer: bytearray) -> None:
        """Take ownership of the buffer: no copy is made.

        The caller's bytearray is the one being wiped after use.
        """

        if not isinstance(buffer, bytearray):
            raise HDKeysTypeError(f"seed buffer must be a bytearray, not {type(buffer)}")
        if len(buffer) != SEED_SIZE:
            err_msg = f"invalid seed size: {len(buffer)} bytes instead of {SEED_SIZE}"
            raise MalformedInput(err_msg)
        self._buffer = buffer
        self._consumed = False

    @classmethod
    def generate(cls) -> "Seed":
        "Return a new random seed from a cryptographically secure source."
        return cls(bytearray(secrets.token_bytes(SEED_SIZE)))

    @classmethod
    def from_octets(cls, octets: Octets) -> "Seed":
        "Return a seed holding a copy of bytes or hex-string octets."
        return cls(bytearray(bytes_from_octets(octets, SEED_SIZE)))

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "available"
        return f"Seed(<{SEED_SIZE} bytes, {state}>)"

    def wipe(self) -> None:
        "Overwrite the buffer with zeros and mark the seed as consumed."
        self._buffer[:] = bytes(len(self._buffer))
        self._consumed = True

    @contextlib.contextmanager
    def consume(self) -> Iterator[bytearray]:
        """Expose the secret buffer once.

        The buffer is wiped when the with block is left,
        even if an exception has been raised.
        """

        if self._consumed:
            raise SeedConsumed("seed already consumed")
        try:
            yield self._buffer
        finally:
            self.wipe()
            log.debug("seed consumed and wiped")
