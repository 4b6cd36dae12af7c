#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 Hierarchical Deterministic Wallet functions.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, there are schemes where public keys can be calculated without
accessing private keys.

A hierarchical deterministic wallet is a tree of multiple hash-chains,
derived from a single root, allowing for selective sharing of keypair
chains.

Here, the HD wallet is implemented according to BIP32 bitcoin standard
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki.

The elliptic curve operations are delegated to a curve provider
(see hdkey.ecc.provider): nodes only hold raw bytes.
Nodes are immutable: derivation, neutering and tweaking
always return new nodes.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from loguru import logger

from hdkey.alias import Octets, String
from hdkey.bip32.der_path import HARDENED, parse_path
from hdkey.bip32.xkey import BIP32KeyData
from hdkey.ecc.libsecp256k1 import Secp256k1Provider
from hdkey.ecc.provider import assert_valid_provider, capability
from hdkey.exceptions import (
    InvalidDerivationError,
    InvalidIndexError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    InvalidSeedError,
    InvalidTweakError,
    MissingPrivateKeyError,
    NotMasterError,
    UnknownNetworkVersionError,
)
from hdkey.hashes import hash160, hmac_sha512
from hdkey.network import NETWORKS, Network
from hdkey.utils import bytes_from_octets
from hdkey.wif import wif_from_prv_key

_MASTER_SECRET = b"Bitcoin seed"

_DEFAULT_ECC = Secp256k1Provider()


@dataclass(frozen=True)
class BIP32Node:
    """BIP32 extended key: a keypair with its position in the tree.

    A node either holds a private key (the public key being derived from it)
    or only a public key: in the latter case it is said to be neutered.
    """

    chain_code: bytes
    depth: int
    index: int
    parent_fingerprint: bytes
    public_key: bytes
    private_key: Optional[bytes] = field(default=None, repr=False)
    network: Network = NETWORKS["mainnet"]
    ecc: Any = field(default=None, compare=False, hash=False, repr=False)

    def __init__(
        self,
        chain_code: Octets,
        depth: int = 0,
        index: int = 0,
        parent_fingerprint: Octets = b"\x00" * 4,
        public_key: Optional[Octets] = None,
        private_key: Optional[Octets] = None,
        network: Network = NETWORKS["mainnet"],
        ecc: Any = None,
    ) -> None:

        ecc = _DEFAULT_ECC if ecc is None else ecc
        object.__setattr__(self, "ecc", ecc)
        object.__setattr__(self, "network", network)
        object.__setattr__(self, "chain_code", bytes_from_octets(chain_code, 32))
        object.__setattr__(
            self, "parent_fingerprint", bytes_from_octets(parent_fingerprint, 4)
        )

        if not 0 <= depth <= 255:
            raise InvalidDerivationError(f"invalid depth: {depth}")
        object.__setattr__(self, "depth", depth)
        if not 0 <= index <= 0xFFFFFFFF:
            raise InvalidIndexError(f"invalid index: {index}")
        object.__setattr__(self, "index", index)

        if private_key is not None:
            private_key = bytes_from_octets(private_key, 32)
            if not ecc.is_private_key_in_range(private_key):
                raise InvalidPrivateKeyError("Private key not in range [1, n)")
            derived = ecc.derive_public_key(private_key, True)
            if public_key is not None and bytes_from_octets(public_key) != derived:
                raise InvalidPublicKeyError("public key does not match private key")
            public_key = derived
        elif public_key is None:
            raise InvalidPublicKeyError("missing public key")
        else:
            public_key = bytes_from_octets(public_key, 33)
            if not ecc.is_valid_point(public_key):
                raise InvalidPublicKeyError("Point is not on the curve")

        object.__setattr__(self, "private_key", private_key)
        object.__setattr__(self, "public_key", public_key)

    @property
    def identifier(self) -> bytes:
        return hash160(self.public_key)

    @property
    def fingerprint(self) -> bytes:
        return self.identifier[:4]

    @property
    def compressed(self) -> bool:
        return True

    @property
    def is_hardened(self) -> bool:
        return self.index >= HARDENED

    @property
    def is_master(self) -> bool:
        return self.depth == 0 and self.parent_fingerprint == b"\x00" * 4

    def is_neutered(self) -> bool:
        return self.private_key is None

    def neutered(self) -> "BIP32Node":
        return neutered(self)

    def derive(self, index: int) -> "BIP32Node":
        return derive_child(self, index)

    def derive_hardened(self, index: int) -> "BIP32Node":
        return derive_hardened(self, index)

    def derive_path(self, path: str) -> "BIP32Node":
        return derive_path(self, path)

    def tweak(self, t: Octets) -> "BIP32Node":
        return tweak(self, t)

    def to_base58(self) -> str:
        if self.private_key is None:
            version = self.network.bip32_pub
            key = self.public_key
        else:
            version = self.network.bip32_prv
            key = b"\x00" + self.private_key
        xkey = BIP32KeyData(
            version=version,
            depth=self.depth,
            parent_fingerprint=self.parent_fingerprint,
            index=self.index,
            chain_code=self.chain_code,
            key=key,
        )
        return xkey.b58encode()

    def to_wif(self) -> str:
        if self.private_key is None:
            raise MissingPrivateKeyError("Missing private key")
        return wif_from_prv_key(self.private_key, self.network)

    def sign(self, msg_hash: Octets, low_r: bool = False) -> bytes:
        """Return the 64-byte compact ECDSA signature of msg_hash.

        With low_r, the signature is generated again
        with increasing extra entropy until r is lower than 0x80...,
        saving one byte in its DER serialization.
        """

        if self.private_key is None:
            raise MissingPrivateKeyError("Missing private key")
        msg_hash = bytes_from_octets(msg_hash, 32)

        sig = self.ecc.sign(msg_hash, self.private_key)
        if not low_r:
            return sig

        counter = 0
        while sig[0] > 0x7F:
            counter += 1
            extra_entropy = counter.to_bytes(32, byteorder="little", signed=False)
            sig = self.ecc.sign(msg_hash, self.private_key, extra_entropy)
        return sig

    def sign_schnorr(self, msg_hash: Octets) -> bytes:
        if self.private_key is None:
            raise MissingPrivateKeyError("Missing private key")
        sign_schnorr = capability(self.ecc, "sign_schnorr")
        msg_hash = bytes_from_octets(msg_hash, 32)
        return sign_schnorr(msg_hash, self.private_key)

    def verify(self, msg_hash: Octets, signature: Octets) -> bool:
        msg_hash = bytes_from_octets(msg_hash)
        signature = bytes_from_octets(signature)
        return self.ecc.verify(msg_hash, self.public_key, signature)

    def verify_schnorr(self, msg_hash: Octets, signature: Octets) -> bool:
        verify_schnorr = capability(self.ecc, "verify_schnorr")
        msg_hash = bytes_from_octets(msg_hash)
        signature = bytes_from_octets(signature)
        return verify_schnorr(msg_hash, self.public_key[1:], signature)


def master_from_seed(
    seed: Octets, ecc: Any = None, network: Network = NETWORKS["mainnet"]
) -> BIP32Node:
    """Return the BIP32 master node from seed."""

    ecc = _DEFAULT_ECC if ecc is None else ecc
    seed = bytes_from_octets(seed)
    bitlength = len(seed) * 8
    if bitlength < 128:
        raise InvalidSeedError(f"too few bits for seed: {bitlength}")
    if bitlength > 512:
        raise InvalidSeedError(f"too many bits for seed: {bitlength}")

    hmac_ = hmac_sha512(_MASTER_SECRET, seed)
    if not ecc.is_private_key_in_range(hmac_[:32]):
        raise InvalidSeedError("Private key not in range [1, n)")

    return BIP32Node(
        chain_code=hmac_[32:],
        depth=0,
        index=0,
        parent_fingerprint=b"\x00" * 4,
        private_key=hmac_[:32],
        network=network,
        ecc=ecc,
    )


def derive_child(parent: BIP32Node, index: int) -> BIP32Node:
    """Child Key Derivation (CKD).

    Private parent keys use CKDpriv, neutered ones CKDpub.
    An index >= 0x80000000 requests hardened derivation,
    which is only possible with a private key.

    An invalid child key (probability lower than 1 in 2^127)
    is an error: the next index is not tried automatically.
    """

    if not isinstance(index, int) or not 0 <= index <= 0xFFFFFFFF:
        raise InvalidIndexError(f"invalid index: {index}")

    hardened = index >= HARDENED
    if hardened and parent.private_key is None:
        raise MissingPrivateKeyError("Missing private key for hardened child key")
    if parent.depth == 255:
        raise InvalidDerivationError("max depth (255) reached")

    ecc = parent.ecc
    if hardened:
        data = b"\x00" + parent.private_key  # type: ignore
    else:
        data = parent.public_key
    data += index.to_bytes(4, byteorder="big", signed=False)

    hmac_ = hmac_sha512(parent.chain_code, data)
    il = hmac_[:32]
    if not ecc.is_private_key_in_range(il):
        raise InvalidDerivationError(f"invalid child key at index {index}")

    private_key = public_key = None
    if parent.private_key is not None:
        private_key = ecc.private_key_tweak_add(parent.private_key, il)
        if private_key is None:
            raise InvalidDerivationError(f"invalid child key at index {index}")
    else:
        public_key = ecc.point_add_tweak(parent.public_key, il, True)
        if public_key is None:
            raise InvalidDerivationError(f"invalid child key at index {index}")

    return BIP32Node(
        chain_code=hmac_[32:],
        depth=parent.depth + 1,
        index=index,
        parent_fingerprint=parent.fingerprint,
        public_key=public_key,
        private_key=private_key,
        network=parent.network,
        ecc=ecc,
    )


def derive_hardened(parent: BIP32Node, index: int) -> BIP32Node:
    "Hardened Child Key Derivation, index being in [0, 0x7FFFFFFF]."

    if not isinstance(index, int) or not 0 <= index < HARDENED:
        raise InvalidIndexError(f"invalid hardened index: {index}")
    if parent.private_key is None:
        raise MissingPrivateKeyError("Missing private key for hardened child key")
    return derive_child(parent, index + HARDENED)


def derive_path(node: BIP32Node, path: str) -> BIP32Node:
    """Derive along a path string, e.g. m/44'/0'/0'/0/0.

    A path starting with m/ can only be walked from a master node.
    """

    is_absolute, indexes = parse_path(path)
    if is_absolute and node.depth != 0:
        raise NotMasterError("Expected master, got child")

    for index in indexes:
        node = derive_child(node, index)
    logger.trace("derived {} to depth {}", path, node.depth)
    return node


def neutered(node: BIP32Node) -> BIP32Node:
    """Neutered Derivation (ND).

    Return the node without its private key
    (“neutered” as it removes the ability to sign).
    """

    if node.private_key is None:
        return node
    return replace(node, private_key=None)


def tweak(node: BIP32Node, t: Octets) -> BIP32Node:
    """Return the node with its key tweaked by t, as in BIP341.

    The private key is negated first if the public key has odd y,
    i.e. the x-only public key is tweaked.
    The tree metadata (chain code, depth, index, parent fingerprint)
    is left unchanged: tweaking is not a derivation step.
    """

    t = bytes_from_octets(t, 32)
    ecc = node.ecc

    if node.private_key is not None:
        private_negate = capability(ecc, "private_negate")
        private_key = node.private_key
        if node.public_key[0] == 3:
            private_key = private_negate(private_key)
        tweaked = ecc.private_key_tweak_add(private_key, t)
        if tweaked is None:
            raise InvalidTweakError("Invalid tweaked private key")
        return replace(node, private_key=tweaked, public_key=None)

    x_only_point_add_tweak = capability(ecc, "x_only_point_add_tweak")
    result = x_only_point_add_tweak(node.public_key[1:], t)
    if result is None:
        raise InvalidTweakError("Invalid tweaked public key")
    parity, x_only = result
    return replace(node, public_key=bytes([0x02 | parity]) + x_only)


class BIP32Factory:
    """Build BIP32 nodes bound to a curve provider and a default network.

    The curve provider is validated once, here;
    if not given, the libsecp256k1 (coincurve) one is used.
    """

    def __init__(self, ecc: Any = None, network: Network = NETWORKS["mainnet"]):
        ecc = Secp256k1Provider() if ecc is None else ecc
        assert_valid_provider(ecc)
        logger.trace("using {} curve provider", type(ecc).__name__)
        self.ecc = ecc
        self.network = network

    def from_seed(self, seed: Octets, network: Optional[Network] = None) -> BIP32Node:
        network = network or self.network
        return master_from_seed(seed, self.ecc, network)

    def from_base58(self, xkey: String, network: Optional[Network] = None) -> BIP32Node:
        network = network or self.network

        xkey_data = BIP32KeyData.b58decode(xkey, check_validity=False)
        if xkey_data.version not in (network.bip32_prv, network.bip32_pub):
            err_msg = f"unknown {network.name} extended key version: "
            err_msg += f"0x{xkey_data.version.hex()}"
            raise UnknownNetworkVersionError(err_msg)
        xkey_data.assert_valid()

        if xkey_data.version == network.bip32_prv:
            if xkey_data.key[0] != 0x00:
                err_msg = "invalid private key prefix: "
                err_msg += f"0x{xkey_data.key[:1].hex()}"
                raise InvalidPrivateKeyError(err_msg)
            private_key, public_key = xkey_data.key[1:], None
        else:
            private_key, public_key = None, xkey_data.key

        logger.trace("parsed {} extended key, depth {}", network.name, xkey_data.depth)
        return BIP32Node(
            chain_code=xkey_data.chain_code,
            depth=xkey_data.depth,
            index=xkey_data.index,
            parent_fingerprint=xkey_data.parent_fingerprint,
            public_key=public_key,
            private_key=private_key,
            network=network,
            ecc=self.ecc,
        )

    def from_private_key(
        self,
        private_key: Octets,
        chain_code: Octets,
        network: Optional[Network] = None,
    ) -> BIP32Node:
        network = network or self.network
        return BIP32Node(
            chain_code=chain_code,
            private_key=private_key,
            network=network,
            ecc=self.ecc,
        )

    def from_public_key(
        self,
        public_key: Octets,
        chain_code: Octets,
        network: Optional[Network] = None,
    ) -> BIP32Node:
        network = network or self.network
        return BIP32Node(
            chain_code=chain_code,
            public_key=public_key,
            network=network,
            ecc=self.ecc,
        )
