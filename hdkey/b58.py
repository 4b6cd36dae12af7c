#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Base58Check encoding and decoding functions.

Base58Check is the checksummed version of Base58, using
hash256(v)[:4] as checksum suffix before encoding;
at the decoding stage the checksum validity ensure data integrity.

The Base58 alphabet codec itself is the one of the
https://github.com/keis/base58 package: here its interface is
adapted to hdkey conventions, i.e.

* encoding bytes-like objects (or hex-strings) to ASCII strings
* decoding ASCII bytes-like objects or ASCII strings to bytes
* optional check on input/output size
* base58 errors translated into hdkey exceptions
"""

from typing import Optional

import base58

from hdkey.alias import Octets, String
from hdkey.exceptions import ChecksumError, InvalidBase58Error, InvalidLengthError
from hdkey.utils import bytes_from_octets


def b58encode(v: Octets, in_size: Optional[int] = None) -> str:
    """Encode a bytes-like object using Base58Check."""

    v = bytes_from_octets(v, in_size)
    return base58.b58encode_check(v).decode("ascii")


def b58decode(v: String, out_size: Optional[int] = None) -> bytes:
    """Decode a Base58Check encoded bytes-like object or ASCII string.

    Optionally, it also ensures required output size.
    """

    if isinstance(v, str):
        # do not trim spaces
        try:
            v = v.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidBase58Error("Base58 string contains invalid characters") from e

    try:
        result = base58.b58decode_check(v)
    except ValueError as e:
        if "checksum" in str(e).lower():
            raise ChecksumError(f"invalid checksum: {v!r}") from e
        raise InvalidBase58Error(f"invalid Base58 string: {e}") from e

    if out_size is None or len(result) == out_size:
        return result

    err_msg = "valid checksum, invalid decoded size: "
    err_msg += f"{len(result)} bytes instead of {out_size}"
    raise InvalidLengthError(err_msg)
