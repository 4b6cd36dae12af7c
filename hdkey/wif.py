#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Wallet Import Format (WIF) encoding of private keys.

Only the compressed form is supported:
version(1) + private_key(32) + 0x01, then Base58Check.
"""

from hdkey.alias import Octets, String
from hdkey.b58 import b58decode, b58encode
from hdkey.exceptions import (
    InvalidCompressionFlagError,
    InvalidLengthError,
    UnknownNetworkVersionError,
)
from hdkey.network import NETWORKS, Network
from hdkey.utils import bytes_from_octets

_PRV_KEY_SIZE = 32
_WIF_SIZE = 1 + _PRV_KEY_SIZE + 1


def wif_from_prv_key(prv_key: Octets, network: Network = NETWORKS["mainnet"]) -> str:
    "Return the (compressed) WIF encoding of a 32-byte private key."

    prv_key = bytes_from_octets(prv_key, _PRV_KEY_SIZE)
    payload = network.wif
    payload += prv_key
    payload += b"\x01"
    return b58encode(payload)


def prv_key_from_wif(wif: String, network: Network = NETWORKS["mainnet"]) -> bytes:
    """Return the 32-byte private key encoded in a WIF.

    The WIF version byte must be the one of the given network.
    """

    if isinstance(wif, str):
        wif = wif.strip()

    payload = b58decode(wif)
    if len(payload) != _WIF_SIZE:
        raise InvalidLengthError(f"wrong WIF size: {len(payload)}")
    if payload[:1] != network.wif:
        err_msg = f"invalid {network.name} wif prefix: {payload[:1].hex()}"
        raise UnknownNetworkVersionError(err_msg)
    if payload[-1] != 0x01:
        raise InvalidCompressionFlagError(
            "not a compressed WIF: missing trailing 0x01"
        )
    return payload[1:-1]
