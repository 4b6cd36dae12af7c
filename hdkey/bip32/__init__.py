#!/usr/bin/env python3

# Copyright (C) The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkey.bip32."""

from hdkey.bip32.bip32 import (
    BIP32Factory,
    BIP32Node,
    derive_child,
    derive_hardened,
    derive_path,
    master_from_seed,
    neutered,
    tweak,
)
from hdkey.bip32.der_path import (
    indexes_from_path,
    int_from_index_str,
    parse_path,
    str_from_index_int,
    str_from_path,
)
from hdkey.bip32.xkey import BIP32KeyData

__all__ = [
    "BIP32Factory",
    "BIP32Node",
    "BIP32KeyData",
    "derive_child",
    "derive_hardened",
    "derive_path",
    "master_from_seed",
    "neutered",
    "tweak",
    "indexes_from_path",
    "int_from_index_str",
    "parse_path",
    "str_from_index_int",
    "str_from_path",
]
