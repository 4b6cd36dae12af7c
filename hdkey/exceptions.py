#!/usr/bin/env python3

# Copyright (C) 2017-2021 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The three base classes are only meant to discriminate between Exceptions
being raised by hdkey from those raised by other codebase.
The derived classes name the specific failure category.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the hdkey versions are derived.
"""


class HDKeyValueError(ValueError):
    pass


class HDKeyTypeError(TypeError):
    pass


class HDKeyRuntimeError(RuntimeError):
    pass


class InvalidProviderError(HDKeyTypeError):
    pass


class UnsupportedOperationError(HDKeyRuntimeError):
    "An optional curve provider capability is not available."

    def __init__(self, capability: str) -> None:
        self.capability = capability
        super().__init__(f"{capability} not supported by curve provider")


class InvalidSeedError(HDKeyValueError):
    pass


class MissingPrivateKeyError(HDKeyValueError):
    pass


class InvalidDerivationError(HDKeyValueError):
    pass


class InvalidTweakError(InvalidDerivationError):
    pass


class InvalidLengthError(HDKeyValueError):
    pass


class InvalidPrivateKeyError(HDKeyValueError):
    pass


class InvalidPublicKeyError(HDKeyValueError):
    pass


class UnknownNetworkVersionError(HDKeyValueError):
    pass


class NotMasterError(HDKeyValueError):
    pass


class InvalidPathError(HDKeyValueError):
    pass


class InvalidIndexError(HDKeyValueError):
    pass


class InvalidParentFingerprintError(HDKeyValueError):
    pass


class InvalidCompressionFlagError(HDKeyValueError):
    pass


class InvalidBase58Error(HDKeyValueError):
    pass


class ChecksumError(InvalidBase58Error):
    pass
