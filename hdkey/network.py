#!/usr/bin/env python3

# Copyright (C) 2017-2021 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Network constants.

A network record only carries the version prefixes needed by
WIF and BIP32 serialization.
Networks are plain data: the default ones are loaded from the json files
in the _data folder, alternative chains can be described
by instantiating a Network with their own version bytes.
"""

import json
from dataclasses import dataclass, field
from os import path
from typing import Dict, List, Tuple

from dataclasses_json import DataClassJsonMixin, config

from hdkey.exceptions import InvalidLengthError
from hdkey.utils import bytes_from_octets

_KEY_SIZE: List[Tuple[str, int]] = [
    ("wif", 1),
    ("bip32_pub", 4),
    ("bip32_prv", 4),
]

_HEX = config(encoder=lambda v: v.hex(), decoder=bytes.fromhex)


@dataclass(frozen=True)
class Network(DataClassJsonMixin):
    name: str

    # base58 wif starts with 'K' or 'L' (compressed) on mainnet
    wif: bytes = field(metadata=_HEX)

    # base58 xkey starts with 'xpub' on mainnet
    bip32_pub: bytes = field(metadata=_HEX)
    # base58 xkey starts with 'xprv' on mainnet
    bip32_prv: bytes = field(metadata=_HEX)

    def __post_init__(self) -> None:

        for key, size in _KEY_SIZE:
            value = getattr(self, key)
            if isinstance(value, int):
                value = value.to_bytes(size, byteorder="big", signed=False)
            value = bytes_from_octets(value)
            object.__setattr__(self, key, value)

        self.assert_valid()

    def assert_valid(self) -> None:

        str(self.name)

        for key, size in _KEY_SIZE:
            value = bytes(getattr(self, key))
            if len(value) != size:
                err_msg = f"invalid {key} length: "
                err_msg += f"{len(value)} bytes"
                err_msg += f" instead of {size}"
                raise InvalidLengthError(err_msg)


NETWORKS: Dict[str, Network] = {}
datadir = path.join(path.dirname(__file__), "_data")
for net in ("mainnet", "testnet", "regtest"):
    filename = path.join(datadir, net + ".json")
    with open(filename, "r", encoding="ascii") as f:
        NETWORKS[net] = Network.from_dict(json.load(f))
