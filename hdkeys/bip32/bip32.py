#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkeys developers
#
# This file is part of hdkeys. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeys including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 Hierarchical Deterministic key derivation.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, there are schemes where public keys can be calculated without
accessing private keys.

A hierarchical deterministic wallet is a tree of multiple hash-chains,
derived from a single root, allowing for selective sharing of keypair
chains.

Here, the HD key tree is implemented according to BIP32 bitcoin standard
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki.

An extended key is a private (or public) key bundled with its chain code,
its curve, and its position in the tree:
depth, index, and parent fingerprint.
Only in-memory extended keys are provided here:
their base58 serialization is left to other packages.
"""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, TypeVar, Union

from hdkeys.alias import Octets
from hdkeys.bip32.der_path import (
    HARDENED,
    MAX_DEPTH,
    DerPath,
    check_index,
    indexes_from_path,
)
from hdkeys.ecc.curve import Curve, mult, secp256k1
from hdkeys.ecc.point import AffinePoint, Infinity, Point
from hdkeys.ecc.sec_point import bytes_from_point
from hdkeys.exceptions import (
    HDKeysTypeError,
    HDKeysValueError,
    InvalidChildDerivation,
    InvalidSeedDerivation,
    MalformedInput,
)
from hdkeys.hashes import hash160, hmac_sha512
from hdkeys.seed import Seed

KEY_SIZE = 32
_FINGERPRINT_SIZE = 4
_ZERO_FINGERPRINT = b"\x00" * _FINGERPRINT_SIZE

# HMAC key of the master key derivation, per curve name
_MASTER_HMAC_KEYS: Dict[str, bytes] = {
    "secp256k1": b"Bitcoin seed",
}

log = logging.getLogger(__name__)


def _assert_valid_position(depth: int, index: int, parent_fingerprint: bytes) -> None:

    check_index(index)

    if not 0 <= depth <= MAX_DEPTH:
        raise HDKeysValueError(f"invalid depth: {depth}")

    if depth == 0:
        if parent_fingerprint != _ZERO_FINGERPRINT:
            err_msg = "zero depth with non-zero parent fingerprint: "
            err_msg += f"0x{parent_fingerprint.hex()}"
            raise HDKeysValueError(err_msg)
        if index != 0:
            raise HDKeysValueError(f"zero depth with non-zero index: {index}")


def _normalize_octets(xkey: object, name: str, size: int) -> None:

    value: Octets = getattr(xkey, name)
    if isinstance(value, str):  # hex string
        value = bytes.fromhex(value)
    if not isinstance(value, (bytes, bytearray)):
        raise HDKeysTypeError(f"invalid {name} type: {type(value)}")
    if len(value) != size:
        err_msg = f"invalid {name} length: {len(value)} bytes instead of {size}"
        raise MalformedInput(err_msg)
    # frozen dataclass: the normalized value is set bypassing __setattr__
    object.__setattr__(xkey, name, bytes(value))


def _index_bytes(index: int, depth: int) -> bytes:

    check_index(index)
    if depth == MAX_DEPTH:
        raise HDKeysValueError("depth greater than 255: 256")
    return index.to_bytes(4, byteorder="big", signed=False)


@dataclass(frozen=True)
class ExtendedPrivateKey:
    """Private node of the derivation tree.

    prv_key and chain_code are accepted as Octets and stored as bytes;
    neither of them ever shows up in repr.
    """

    prv_key: bytes = field(repr=False)
    chain_code: bytes = field(repr=False)
    ec: Curve = field(default=secp256k1, repr=False)
    depth: int = 0
    index: int = 0
    parent_fingerprint: bytes = _ZERO_FINGERPRINT

    def __post_init__(self) -> None:

        if not isinstance(self.ec, Curve):
            raise HDKeysTypeError(f"not a curve: {type(self.ec)}")
        _normalize_octets(self, "prv_key", KEY_SIZE)
        _normalize_octets(self, "chain_code", KEY_SIZE)
        _normalize_octets(self, "parent_fingerprint", _FINGERPRINT_SIZE)

        _assert_valid_position(self.depth, self.index, self.parent_fingerprint)

        if not 0 < self.prv_key_int < self.ec.n:
            raise HDKeysValueError("invalid private key not in 1..n-1")

    @property
    def prv_key_int(self) -> int:
        return int.from_bytes(self.prv_key, byteorder="big", signed=False)

    @property
    def is_hardened(self) -> bool:
        return self.index >= HARDENED

    @property
    def is_root(self) -> bool:
        return (
            self.depth == 0
            and self.index == 0
            and self.parent_fingerprint == _ZERO_FINGERPRINT
        )

    @cached_property
    def pub_key(self) -> Point:
        "The public key point, i.e. prv_key * G."
        return mult(self.prv_key_int, self.ec.G, self.ec)

    @property
    def fingerprint(self) -> bytes:
        "First four bytes of the HASH160 of the compressed public key."
        return hash160(bytes_from_point(self.pub_key, self.ec))[:_FINGERPRINT_SIZE]

    def public_key(self) -> "ExtendedPublicKey":
        return ExtendedPublicKey.from_private(self)

    @classmethod
    def from_seed(
        cls, seed: Union[Seed, bytearray], ec: Curve = secp256k1
    ) -> "ExtendedPrivateKey":
        """Return the root (master) extended private key.

        The seed is consumed: its buffer is wiped
        before the root key is returned,
        and it cannot be used again.
        A bytearray seed is wiped in place.
        """

        if isinstance(seed, bytearray):
            seed = Seed(seed)
        elif not isinstance(seed, Seed):
            raise HDKeysTypeError(f"seed must be a Seed or a bytearray, not {type(seed)}")

        try:
            hmac_key = _MASTER_HMAC_KEYS[ec.name]
        except KeyError as e:
            err_msg = f"no master key derivation for curve: {ec.name}"
            raise HDKeysValueError(err_msg) from e

        with seed.consume() as buffer:
            hmac_ = hmac_sha512(hmac_key, buffer)

        q = int.from_bytes(hmac_[:KEY_SIZE], byteorder="big", signed=False)
        if not 0 < q < ec.n:
            raise InvalidSeedDerivation("master private key not in 1..n-1")

        log.debug("derived master private key on %s", ec.name)
        return cls(hmac_[:KEY_SIZE], hmac_[KEY_SIZE:], ec)

    def derive_child(self, index: int) -> "ExtendedPrivateKey":
        """Private parent key to private child key derivation (CKDpriv).

        Indexes not lower than 0x80000000 are hardened derivations.
        InvalidChildDerivation is raised for the (astronomically rare)
        invalid child key: the caller should proceed with the next index.
        """

        index_bytes = _index_bytes(index, self.depth)
        if index >= HARDENED:
            data = b"\x00" + self.prv_key + index_bytes
        else:
            data = bytes_from_point(self.pub_key, self.ec) + index_bytes
        hmac_ = hmac_sha512(self.chain_code, data)

        offset = int.from_bytes(hmac_[:KEY_SIZE], byteorder="big", signed=False)
        if offset >= self.ec.n:
            raise InvalidChildDerivation(index, "offset not in 0..n-1")
        q = (self.prv_key_int + offset) % self.ec.n
        if q == 0:
            raise InvalidChildDerivation(index, "zero private key")

        child = type(self)(
            prv_key=q.to_bytes(KEY_SIZE, byteorder="big", signed=False),
            chain_code=hmac_[KEY_SIZE:],
            ec=self.ec,
            depth=self.depth + 1,
            index=index,
            parent_fingerprint=self.fingerprint,
        )
        log.debug(
            "derived %s private child: depth %d, index %d",
            "hardened" if child.is_hardened else "normal",
            child.depth,
            index,
        )
        return child

    def derive(self, der_path: DerPath) -> "ExtendedPrivateKey":
        """Derive a private key across a path spanning multiple depth levels.

        Valid DerPath examples:

        - string like "m/44h/0'/1H/0/10"
        - sequence of integer indexes
        - one single integer index
        """
        return _derive(self, der_path)


@dataclass(frozen=True)
class ExtendedPublicKey:
    "Public node of the derivation tree."

    pub_key: AffinePoint
    chain_code: bytes = field(repr=False)
    ec: Curve = field(default=secp256k1, repr=False)
    depth: int = 0
    index: int = 0
    parent_fingerprint: bytes = _ZERO_FINGERPRINT

    def __post_init__(self) -> None:

        if not isinstance(self.ec, Curve):
            raise HDKeysTypeError(f"not a curve: {type(self.ec)}")
        if isinstance(self.pub_key, Infinity):
            raise HDKeysValueError("invalid public key: infinity point")
        self.ec.require_on_curve(self.pub_key)
        _normalize_octets(self, "chain_code", KEY_SIZE)
        _normalize_octets(self, "parent_fingerprint", _FINGERPRINT_SIZE)

        _assert_valid_position(self.depth, self.index, self.parent_fingerprint)

    @property
    def is_hardened(self) -> bool:
        return self.index >= HARDENED

    @property
    def is_root(self) -> bool:
        return (
            self.depth == 0
            and self.index == 0
            and self.parent_fingerprint == _ZERO_FINGERPRINT
        )

    def sec_bytes(self, compressed: bool = True) -> bytes:
        "Return the SEC 1 v.2 octet representation of the public key."
        return bytes_from_point(self.pub_key, self.ec, compressed)

    @property
    def fingerprint(self) -> bytes:
        "First four bytes of the HASH160 of the compressed public key."
        return hash160(self.sec_bytes())[:_FINGERPRINT_SIZE]

    @classmethod
    def from_private(cls, xprv: ExtendedPrivateKey) -> "ExtendedPublicKey":
        """Neutered Derivation (N).

        Derivation of the extended public key corresponding to an extended
        private key (“neutered” as it removes the ability to sign transactions).
        """

        if not isinstance(xprv, ExtendedPrivateKey):
            raise HDKeysTypeError(f"not an extended private key: {type(xprv)}")

        return cls(
            # prv_key is in 1..n-1, so pub_key is never INF
            pub_key=xprv.pub_key,  # type: ignore
            chain_code=xprv.chain_code,
            ec=xprv.ec,
            depth=xprv.depth,
            index=xprv.index,
            parent_fingerprint=xprv.parent_fingerprint,
        )

    def derive_child(self, index: int) -> "ExtendedPublicKey":
        """Public parent key to public child key derivation (CKDpub).

        Only normal (i.e. non-hardened) derivation is possible.
        InvalidChildDerivation is raised for the (astronomically rare)
        invalid child key: the caller should proceed with the next index.
        """

        index_bytes = _index_bytes(index, self.depth)
        if index >= HARDENED:
            raise HDKeysValueError("invalid hardened derivation from public key")
        hmac_ = hmac_sha512(self.chain_code, self.sec_bytes() + index_bytes)

        offset = int.from_bytes(hmac_[:KEY_SIZE], byteorder="big", signed=False)
        if offset >= self.ec.n:
            raise InvalidChildDerivation(index, "offset not in 0..n-1")
        Q = self.ec.add(mult(offset, self.ec.G, self.ec), self.pub_key)
        if isinstance(Q, Infinity):
            raise InvalidChildDerivation(index, "infinity point")

        child = type(self)(
            pub_key=Q,
            chain_code=hmac_[KEY_SIZE:],
            ec=self.ec,
            depth=self.depth + 1,
            index=index,
            parent_fingerprint=self.fingerprint,
        )
        log.debug("derived public child: depth %d, index %d", child.depth, index)
        return child

    def derive(self, der_path: DerPath) -> "ExtendedPublicKey":
        "Derive a public key across a path of normal derivations."
        return _derive(self, der_path)


ExtendedKey = TypeVar("ExtendedKey", ExtendedPrivateKey, ExtendedPublicKey)


def _derive(xkey: ExtendedKey, der_path: DerPath) -> ExtendedKey:

    hardened = isinstance(xkey, ExtendedPrivateKey)
    indexes = indexes_from_path(der_path, xkey.depth, hardened)
    for index in indexes:
        xkey = xkey.derive_child(index)
    return xkey
