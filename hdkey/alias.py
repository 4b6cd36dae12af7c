#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "02 cc71eb30d653c0c3163990c47b976f3fb3f37cccdcbedb169a1dfef58bbfbfaf"
# "02cc71eb30d653c0c3163990c47b976f3fb3f37cccdcbedb169a1dfef58bbfbfaf"
#
# use hdkey.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for seeds, chain codes (32 bytes), private keys (32 bytes),
# compressed public keys (33 bytes), BIP32 versions (4 bytes),
# fingerprints (4 bytes), message hashes and signatures
Octets = Union[bytes, str]

# bytes or text string (not hex-string)
#
# this is for 'ascii' strings like WIFs or BIP32 keys:
# "KyLk7s6Z1FtgYEVp3bPckPVnXvLUWNCcVL6wNt3gaT96EmzTKZwP"
# "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
String = Union[bytes, str]
