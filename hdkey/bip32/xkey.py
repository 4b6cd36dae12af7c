#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 extended key serialization.

A BIP32 extended key is 78 bytes:

- [  : 4] version
- [ 4: 5] depth in the derivation path
- [ 5: 9] parent fingerprint
- [ 9:13] index
- [13:45] chain code
- [45:78] compressed pub_key or [0x00][prv_key]

BIP32KeyData only checks the structure of the record:
key validity is a matter for the curve provider
and the version is matched against a network by the BIP32Factory.
"""

from dataclasses import InitVar, dataclass, field
from typing import List, Tuple, Type

from dataclasses_json import DataClassJsonMixin, config

from hdkey import b58
from hdkey.alias import Octets, String
from hdkey.bip32.der_path import int_from_index_str, str_from_index_int
from hdkey.exceptions import (
    InvalidDerivationError,
    InvalidIndexError,
    InvalidLengthError,
    InvalidParentFingerprintError,
)
from hdkey.utils import bytes_from_octets

_KEY_SIZE: List[Tuple[str, int]] = [
    ("version", 4),
    ("parent_fingerprint", 4),
    ("chain_code", 32),
    ("key", 33),
]
_REQUIRED_LENGTH = 78

_HEX = config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)


@dataclass
class BIP32KeyData(DataClassJsonMixin):
    version: bytes = field(default=b"", metadata=_HEX)
    depth: int = -1
    parent_fingerprint: bytes = field(default=b"", metadata=_HEX)
    # index is an int, not bytes, to avoid any byteorder ambiguity
    index: int = field(
        default=-1,
        metadata=config(encoder=str_from_index_int, decoder=int_from_index_str),
    )
    chain_code: bytes = field(default=b"", metadata=_HEX)
    key: bytes = field(default=b"", metadata=_HEX)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        for key, _ in _KEY_SIZE:
            value = getattr(self, key)
            if isinstance(value, (bytes, bytearray, str)):
                setattr(self, key, bytes_from_octets(value))
        if check_validity:
            self.assert_valid()

    @property
    def is_private(self) -> bool:
        return self.key[0] == 0

    @property
    def is_hardened(self) -> bool:
        return self.index >= 0x80000000

    def assert_valid(self) -> None:

        for key, size in _KEY_SIZE:
            value = bytes(getattr(self, key))
            setattr(self, key, value)
            if len(value) != size:
                err_msg = f"invalid {key} length: "
                err_msg += f"{len(value)} bytes"
                err_msg += f" instead of {size}"
                raise InvalidLengthError(err_msg)

        self.index = int(self.index)
        if not 0 <= self.index <= 0xFFFFFFFF:
            raise InvalidIndexError(f"invalid index: {self.index}")

        self.depth = int(self.depth)
        if not 0 <= self.depth <= 255:
            raise InvalidDerivationError(f"invalid depth: {self.depth}")

        if self.depth == 0:
            if self.parent_fingerprint != b"\x00" * 4:
                err_msg = "zero depth with non-zero parent fingerprint: "
                err_msg += f"0x{self.parent_fingerprint.hex()}"
                raise InvalidParentFingerprintError(err_msg)
            if self.index != 0:
                raise InvalidIndexError(f"zero depth with non-zero index: {self.index}")

    def serialize(self, check_validity: bool = True) -> bytes:

        if check_validity:
            self.assert_valid()

        return b"".join(
            [
                self.version,
                self.depth.to_bytes(1, byteorder="big", signed=False),
                self.parent_fingerprint,
                self.index.to_bytes(4, byteorder="big", signed=False),
                self.chain_code,
                self.key,
            ]
        )

    def b58encode(self, check_validity: bool = True) -> str:
        return b58.b58encode(self.serialize(check_validity))

    @classmethod
    def parse(
        cls: Type["BIP32KeyData"], xkey_bin: Octets, check_validity: bool = True
    ) -> "BIP32KeyData":
        "Return a BIP32KeyData by parsing 78 bytes."

        xkey_bin = bytes_from_octets(xkey_bin)
        if len(xkey_bin) != _REQUIRED_LENGTH:
            err_msg = f"invalid decoded length: {len(xkey_bin)}"
            err_msg += f" instead of {_REQUIRED_LENGTH}"
            raise InvalidLengthError(err_msg)

        return cls(
            version=xkey_bin[0:4],
            depth=xkey_bin[4],
            parent_fingerprint=xkey_bin[5:9],
            index=int.from_bytes(xkey_bin[9:13], byteorder="big", signed=False),
            chain_code=xkey_bin[13:45],
            key=xkey_bin[45:78],
            check_validity=check_validity,
        )

    @classmethod
    def b58decode(
        cls: Type["BIP32KeyData"], xkey: String, check_validity: bool = True
    ) -> "BIP32KeyData":

        if isinstance(xkey, str):
            xkey = xkey.strip()

        xkey_bin = b58.b58decode(xkey)
        return cls.parse(xkey_bin, check_validity)
