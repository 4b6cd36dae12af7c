#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 derivation path.

A BIP 32 derivation path can be represented as:

- "m/44h/0'/1H/0/10" (absolute) or "44h/0'/1H/0/10" (relative) string
- sequence of integer indexes (even a single int)

In a path string each index is an unsigned decimal lower than 0x80000000,
optionally followed by one of the hardening symbols "'", "h", "H";
the leading "m/" marks a path that must be walked from a master key.
"""

import re
from typing import List, Sequence, Tuple, Union

from hdkey.exceptions import InvalidIndexError, InvalidPathError

# default hardening symbol among the possible ones: "h", "H", "'"
_HARDENING = "h"

HARDENED = 0x80000000

_INDEX = r"[0-9]+['hH]?"
_PATH_RE = re.compile(rf"(m/)?({_INDEX})(/{_INDEX})*")


def int_from_index_str(s: str) -> int:

    s = s.strip()
    hardened = False
    if s and s[-1] in ("'", "h", "H"):
        s = s[:-1]
        hardened = True

    if not s.isdigit() or not s.isascii():
        raise InvalidPathError(f"invalid index: {s!r}")
    index = int(s)
    if not 0 <= index < HARDENED:
        raise InvalidPathError(f"invalid index: {index}")
    return index + (HARDENED if hardened else 0)


def str_from_index_int(i: int, hardening: str = _HARDENING) -> str:

    if hardening not in ("'", "h", "H"):
        raise InvalidPathError(f"invalid hardening symbol: {hardening}")
    if not 0 <= i <= 0xFFFFFFFF:
        raise InvalidIndexError(f"invalid index: {i}")
    if i < HARDENED:
        return str(i)
    return str(i - HARDENED) + hardening


def parse_path(der_path: str) -> Tuple[bool, List[int]]:
    """Return (is_absolute, indexes) for a path string.

    is_absolute is True when the path starts with "m/".
    """

    if not isinstance(der_path, str):
        raise InvalidPathError(f"invalid path type: {type(der_path).__name__}")
    if not _PATH_RE.fullmatch(der_path):
        raise InvalidPathError(f"invalid path: {der_path!r}")

    steps = der_path.split("/")
    is_absolute = steps[0] == "m"
    if is_absolute:
        steps = steps[1:]
    return is_absolute, [int_from_index_str(s) for s in steps]


DerPath = Union[str, Sequence[int], int]


def indexes_from_path(der_path: DerPath) -> List[int]:

    if isinstance(der_path, str):
        return parse_path(der_path)[1]

    if isinstance(der_path, int):
        der_path = [der_path]

    indexes = [int(i) for i in der_path]
    for i in indexes:
        if not 0 <= i <= 0xFFFFFFFF:
            raise InvalidIndexError(f"invalid index: {i}")
    return indexes


def str_from_path(der_path: DerPath, hardening: str = _HARDENING) -> str:
    "Return the absolute path string, e.g. m/44h/0h/0."

    indexes = indexes_from_path(der_path)
    result = "/".join(str_from_index_int(i, hardening) for i in indexes)
    return "m" + ("/" + result if result else "")
