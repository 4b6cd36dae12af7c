# Copyright (C) The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdkey.ecc."""

from hdkey.ecc.libsecp256k1 import Secp256k1Provider
from hdkey.ecc.provider import (
    CurveProvider,
    assert_valid_provider,
    capability,
)

__all__ = [
    "CurveProvider",
    "Secp256k1Provider",
    "assert_valid_provider",
    "capability",
]
