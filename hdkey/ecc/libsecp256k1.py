# Copyright (C) The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Curve provider using the libsecp256k1 python bindings of coincurve.

ECDSA signatures are exchanged in 64-byte compact (r, s) form,
Schnorr signatures follow BIP340.
"""

from __future__ import annotations

from coincurve._libsecp256k1 import (  # type: ignore # pylint: disable=no-name-in-module
    ffi,
)
from coincurve.ecdsa import (
    cdata_to_der,
    der_to_cdata,
    deserialize_compact,
    serialize_compact,
)
from coincurve.keys import PrivateKey, PublicKey, PublicKeyXOnly

from hdkey.ecc.provider import XOnlyTweakResult
from hdkey.utils import bytes_from_octets

# secp256k1 group order
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# deterministic BIP340 signatures
_ZERO_AUX = b"\x00" * 32


class Secp256k1Provider:
    """Default hdkey curve provider.

    It implements both the mandatory and the optional capabilities.
    """

    # mandatory capabilities

    def is_valid_point(self, point: bytes) -> bool:
        point = bytes(point)
        if not (
            len(point) == 33
            and point[0] in (2, 3)
            or len(point) == 65
            and point[0] == 4
        ):
            return False
        try:
            PublicKey(point)
        except ValueError:
            return False
        return True

    def is_private_key_in_range(self, private_key: bytes) -> bool:
        private_key = bytes(private_key)
        if len(private_key) != 32:
            return False
        return 0 < int.from_bytes(private_key, "big") < N

    def derive_public_key(
        self, private_key: bytes, compressed: bool = True
    ) -> bytes | None:
        try:
            prv_key = PrivateKey(bytes(private_key))
        except ValueError:
            return None
        return prv_key.public_key.format(compressed=compressed)

    def private_key_tweak_add(self, private_key: bytes, tweak: bytes) -> bytes | None:
        try:
            return PrivateKey(bytes(private_key)).add(bytes(tweak)).secret
        except ValueError:
            return None

    def point_add_tweak(
        self, point: bytes, tweak: bytes, compressed: bool = True
    ) -> bytes | None:
        try:
            pub_key = PublicKey(bytes(point)).add(bytes(tweak))
        except ValueError:
            return None
        return pub_key.format(compressed=compressed)

    def sign(
        self, msg_hash: bytes, private_key: bytes, extra_entropy: bytes | None = None
    ) -> bytes:
        """Return the compact RFC6979 ECDSA signature of msg_hash.

        The optional 32-byte extra_entropy is mixed
        into the deterministic nonce generation.
        """

        msg_hash = bytes_from_octets(msg_hash, 32)
        if extra_entropy is None:
            ndata = ffi.NULL
        else:
            extra_entropy = bytes_from_octets(extra_entropy, 32)
            ndata = ffi.new("unsigned char[32]", list(extra_entropy))
        prv_key = PrivateKey(bytes(private_key))
        sig_der = prv_key.sign(msg_hash, hasher=None, custom_nonce=(ffi.NULL, ndata))
        return serialize_compact(der_to_cdata(sig_der))

    def verify(self, msg_hash: bytes, public_key: bytes, signature: bytes) -> bool:
        """Verify a compact ECDSA signature.

        High-s signatures are normalized before verification.
        """

        msg_hash = bytes(msg_hash)
        signature = bytes(signature)
        if len(msg_hash) != 32 or len(signature) != 64:
            return False
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:], "big")
        if not (0 < r < N and 0 < s < N):
            return False
        if s > N // 2:
            signature = signature[:32] + (N - s).to_bytes(32, "big")
        try:
            pub_key = PublicKey(bytes(public_key))
        except ValueError:
            return False
        sig_der = cdata_to_der(deserialize_compact(signature))
        return pub_key.verify(sig_der, msg_hash, hasher=None)

    # optional capabilities

    def private_negate(self, private_key: bytes) -> bytes:
        q = int.from_bytes(bytes(private_key), "big")
        return ((N - q) % N).to_bytes(32, "big")

    def x_only_point_add_tweak(
        self, x_only_point: bytes, tweak: bytes
    ) -> XOnlyTweakResult:
        """Return (parity, x) of the tweaked point.

        The input is interpreted as the even-y point with the given x.
        """

        x_only_point = bytes(x_only_point)
        if len(x_only_point) != 32:
            return None
        try:
            pub_key = PublicKey(b"\x02" + x_only_point).add(bytes(tweak))
        except ValueError:
            return None
        point = pub_key.format(compressed=True)
        return point[0] - 2, point[1:]

    def sign_schnorr(self, msg_hash: bytes, private_key: bytes) -> bytes:
        msg_hash = bytes_from_octets(msg_hash, 32)
        prv_key = PrivateKey(bytes(private_key))
        return prv_key.sign_schnorr(msg_hash, aux_randomness=_ZERO_AUX)

    def verify_schnorr(
        self, msg_hash: bytes, public_key: bytes, signature: bytes
    ) -> bool:
        msg_hash = bytes(msg_hash)
        signature = bytes(signature)
        public_key = bytes(public_key)
        if len(msg_hash) != 32 or len(signature) != 64:
            return False
        if len(public_key) == 33:
            public_key = public_key[1:]
        try:
            pub_key = PublicKeyXOnly(public_key)
        except ValueError:
            return False
        return pub_key.verify(signature, msg_hash)
