# Copyright (C) The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve provider contract.

hdkey does not implement any secp256k1 arithmetic:
every curve operation is delegated to a provider object
exposing the capabilities listed below as callable attributes.

Mandatory capabilities are checked once,
when a provider is handed to a BIP32Factory;
optional capabilities are looked up at each call,
so that a provider without (e.g.) Schnorr support
can still be used for everything else.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Tuple

from loguru import logger

from hdkey.exceptions import InvalidProviderError, UnsupportedOperationError

MANDATORY = (
    "is_valid_point",
    "is_private_key_in_range",
    "derive_public_key",
    "private_key_tweak_add",
    "point_add_tweak",
    "sign",
    "verify",
)

OPTIONAL = (
    "private_negate",
    "x_only_point_add_tweak",
    "sign_schnorr",
    "verify_schnorr",
)

# secp256k1 generator, SEC compressed encoding
G_COMPRESSED = bytes.fromhex(
    "0279BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798"
)
# BIP340 test vector 5: x coordinate not on secp256k1
_NOT_ON_CURVE = bytes.fromhex(
    "02EEFDEA4CDB677750A420FEE807EACF21EB9898AE79B9768766E4FAA04A2D4A34"
)
_ONE = b"\x00" * 31 + b"\x01"


class CurveProvider(Protocol):
    """Mandatory part of the curve provider interface.

    Keys are raw bytes: 32-byte private scalars,
    33-byte (or 65-byte) SEC encoded points.
    Methods returning Optional values return None
    when the result is not a valid key.
    """

    def is_valid_point(self, point: bytes) -> bool:
        ...

    def is_private_key_in_range(self, private_key: bytes) -> bool:
        ...

    def derive_public_key(
        self, private_key: bytes, compressed: bool = True
    ) -> Optional[bytes]:
        ...

    def private_key_tweak_add(
        self, private_key: bytes, tweak: bytes
    ) -> Optional[bytes]:
        ...

    def point_add_tweak(
        self, point: bytes, tweak: bytes, compressed: bool = True
    ) -> Optional[bytes]:
        ...

    def sign(
        self, msg_hash: bytes, private_key: bytes, extra_entropy: Optional[bytes] = None
    ) -> bytes:
        ...

    def verify(self, msg_hash: bytes, public_key: bytes, signature: bytes) -> bool:
        ...


XOnlyTweakResult = Optional[Tuple[int, bytes]]


def assert_valid_provider(ecc: Any) -> None:
    """Raise InvalidProviderError if ecc does not honour the mandatory contract.

    Besides having all the mandatory capabilities,
    the provider must recognize the generator as a valid point
    and reject a point whose x coordinate is not on the curve.
    """

    missing = [name for name in MANDATORY if not callable(getattr(ecc, name, None))]
    if missing:
        err_msg = f"curve provider missing capabilities: {', '.join(missing)}"
        raise InvalidProviderError(err_msg)

    if not ecc.is_valid_point(G_COMPRESSED):
        raise InvalidProviderError("curve provider rejects the generator point")
    if ecc.is_valid_point(_NOT_ON_CURVE):
        raise InvalidProviderError("curve provider accepts a point not on curve")
    if not ecc.is_private_key_in_range(_ONE):
        raise InvalidProviderError("curve provider rejects private key 1")
    if ecc.derive_public_key(_ONE) != G_COMPRESSED:
        raise InvalidProviderError("curve provider derives 1*G wrongly")

    for name in OPTIONAL:
        if not callable(getattr(ecc, name, None)):
            logger.trace("curve provider has no {} capability", name)


def capability(ecc: Any, name: str) -> Callable[..., Any]:
    "Return the named (optional) provider capability, if available."

    func = getattr(ecc, name, None)
    if not callable(func):
        raise UnsupportedOperationError(name)
    return func
