#!/usr/bin/env python3

# Copyright (C) 2017-2022 The hdkey developers
#
# This file is part of hdkey. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkey including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdkey.bip32.bip32` module."

import json
from dataclasses import replace
from os import path

import pytest

from hdkey import exceptions
from hdkey.bip32.bip32 import (
    BIP32Factory,
    BIP32Node,
    derive_child,
    master_from_seed,
    neutered,
)
from hdkey.exceptions import (
    InvalidDerivationError,
    InvalidIndexError,
    InvalidLengthError,
    InvalidPathError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    InvalidSeedError,
    MissingPrivateKeyError,
    NotMasterError,
    UnknownNetworkVersionError,
)
from hdkey.network import NETWORKS, Network
from hdkey.wif import prv_key_from_wif

data_folder = path.join(path.dirname(__file__), "_data")

bip32 = BIP32Factory()

LITECOIN = Network(
    name="litecoin",
    wif="b0",
    bip32_pub="019da462",
    bip32_prv="019d9cfe",
)

# leading zeros in the private key
LEADING_ZEROS = "xprv9s21ZrQH143K3ckY9DgU79uMTJkQRLdbCCVDh81SnxTgPzLLGax6uHeBULTtaEtcAvKjXfT7ZWtHzKjTpujMkUd9dDb8msDeAfnJxrgAYhr"

SEED = b"\x01" * 32
HASH = b"\x02" * 32
TWEAK = b"\x03" * 32


def test_bip32_vectors() -> None:
    """BIP32 test vectors #1, #2, #3, and #4

    https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki
    """
    filename = path.join(data_folder, "bip32_test_vectors.json")
    with open(filename, "r", encoding="ascii") as file_:
        test_vectors = json.load(file_)

    for seed in test_vectors:
        master = bip32.from_seed(seed)
        for der_path, xpub, xprv in test_vectors[seed]:
            node = master if der_path == "m" else master.derive_path(der_path)
            assert xprv == node.to_base58()
            assert xpub == node.neutered().to_base58()
            assert node == bip32.from_base58(xprv)
            assert node.neutered() == bip32.from_base58(xpub)


def test_invalid_bip32_xkeys() -> None:
    """BIP32 test vectors #5

    https://github.com/bitcoin/bips/pull/921
    """

    filename = path.join(data_folder, "bip32_invalid_keys.json")
    with open(filename, "r", encoding="ascii") as file_:
        test_vectors = json.load(file_)

    for xkey, _, err_name in test_vectors:
        with pytest.raises(getattr(exceptions, err_name)):
            bip32.from_base58(xkey)


def test_vector1_master() -> None:

    master = bip32.from_seed("000102030405060708090a0b0c0d0e0f")
    assert master.depth == 0
    assert master.index == 0
    assert master.parent_fingerprint == b"\x00" * 4
    assert master.is_master
    assert not master.is_hardened
    assert not master.is_neutered()
    assert master.compressed
    assert master.identifier.hex() == "3442193e1bb70916e914552172cd4e2dbc9df811"
    assert master.fingerprint.hex() == "3442193e"
    assert (
        master.chain_code.hex()
        == "873dff81c02f525623fd1fe5167eac3a55a049de3d314bb42ee227ffed37d508"
    )
    assert (
        master.private_key.hex()  # type: ignore
        == "e8f32e723decf4051aefac8e2c93c9c5b214313817cdb01a1494b917c8436b35"
    )
    assert (
        master.public_key.hex()
        == "0339a36013301597daef41fbe593a02cc513d0b55527ec2df1050e2e8ff49c85c2"
    )

    child = master.derive_hardened(0)
    assert child.depth == 1
    assert child.index == 0x80000000
    assert child.is_hardened
    assert not child.is_master
    assert child.parent_fingerprint == master.fingerprint
    assert child == master.derive(0x80000000)
    assert child == master.derive_path("0'")
    assert child == master.derive_path("m/0H")


def test_seed_exceptions() -> None:

    seed = "5b56c417303faa3fcba7e57400e120a0"
    with pytest.raises(InvalidSeedError, match="too many bits for seed: "):
        bip32.from_seed(seed * 5)

    with pytest.raises(InvalidSeedError, match="too few bits for seed: "):
        bip32.from_seed(seed[:-2])

    # 16 and 64 bytes are fine
    bip32.from_seed(b"\x00" * 16)
    bip32.from_seed(b"\x00" * 64)

    assert bip32.from_seed(seed) == bip32.from_seed(seed)
    assert master_from_seed(seed) == bip32.from_seed(seed)


def test_leading_zeros() -> None:

    master = bip32.from_base58(LEADING_ZEROS)
    assert master.private_key is not None
    assert len(master.private_key) == 32
    assert (
        master.private_key.hex()
        == "00000055378cf5fafb56c711c674143f9b0ee82ab0ba2924f19b64f5ae7cdbfd"
    )
    assert master.to_base58() == LEADING_ZEROS

    child = master.derive_path("m/44'/0'/0'/0/0'")
    assert child.private_key is not None
    assert (
        child.private_key.hex()
        == "3348069561d2a0fb925e74bf198762acc47dce7db27372257d2d959a9e6f8aeb"
    )
    assert child.depth == 5
    assert child.index == 0x80000000


def test_neutered() -> None:

    master = bip32.from_seed(SEED)
    xpub = master.neutered()
    assert xpub.is_neutered()
    assert xpub.private_key is None
    assert xpub.public_key == master.public_key
    assert xpub.chain_code == master.chain_code
    assert xpub != master

    assert neutered(xpub) == xpub
    assert xpub.neutered() == xpub.neutered().neutered()

    for index in (0, 1, 0x7FFFFFFF):
        assert master.derive(index).neutered() == xpub.derive(index)
        assert derive_child(master, index).neutered() == derive_child(xpub, index)

    path_ = "m/0/1/2147483647/3"
    assert master.derive_path(path_).neutered() == xpub.derive_path(path_)


def test_hardened_on_neutered() -> None:

    xpub = bip32.from_seed(SEED).neutered()

    err_msg = "Missing private key for hardened child key"
    with pytest.raises(MissingPrivateKeyError, match=err_msg):
        xpub.derive_hardened(0)
    with pytest.raises(MissingPrivateKeyError, match=err_msg):
        xpub.derive(0x80000000)
    with pytest.raises(MissingPrivateKeyError, match=err_msg):
        xpub.derive_path("m/0/1'")


def test_derive_exceptions() -> None:

    master = bip32.from_seed(SEED)

    for index in (-1, 0xFFFFFFFF + 1, "0"):
        with pytest.raises(InvalidIndexError, match="invalid index: "):
            master.derive(index)  # type: ignore

    for index in (-1, 0x80000000):
        with pytest.raises(InvalidIndexError, match="invalid hardened index: "):
            master.derive_hardened(index)

    child = master.derive(0)
    with pytest.raises(NotMasterError, match="Expected master, got child"):
        child.derive_path("m/0")
    assert child.derive_path("1/2") == master.derive_path("m/0/1/2")

    for der_path in ("", "m", "m/", "0/", "//0", "m/a", "m/0/x'", "m/2147483648"):
        with pytest.raises(InvalidPathError):
            master.derive_path(der_path)
    with pytest.raises(InvalidPathError):
        master.derive_path(0)  # type: ignore

    deepest = replace(child, depth=255)
    with pytest.raises(InvalidDerivationError, match="max depth"):
        deepest.derive(0)
    with pytest.raises(InvalidDerivationError, match="max depth"):
        deepest.neutered().derive(0)


def test_node_exceptions() -> None:

    master = bip32.from_seed(SEED)

    with pytest.raises(InvalidLengthError):
        replace(master, chain_code=master.chain_code[:-1])
    with pytest.raises(InvalidLengthError):
        replace(master, parent_fingerprint=b"\x00" * 3)
    with pytest.raises(InvalidDerivationError, match="invalid depth: "):
        replace(master, depth=256)
    with pytest.raises(InvalidIndexError, match="invalid index: "):
        replace(master, index=-1)

    with pytest.raises(InvalidPrivateKeyError):
        replace(master, private_key=b"\x00" * 32, public_key=None)
    with pytest.raises(InvalidLengthError):
        replace(master, private_key=b"\x01" * 31, public_key=None)
    other = bip32.from_seed(b"\x02" * 32)
    with pytest.raises(InvalidPublicKeyError, match="does not match"):
        replace(master, public_key=other.public_key)

    xpub = master.neutered()
    with pytest.raises(InvalidPublicKeyError, match="Point is not on the curve"):
        replace(xpub, public_key=b"\x02" + b"\x00" * 31 + b"\x07")
    with pytest.raises(InvalidLengthError):
        replace(xpub, public_key=xpub.public_key[:-1])
    with pytest.raises(InvalidPublicKeyError, match="missing public key"):
        BIP32Node(chain_code=master.chain_code)


def test_repr() -> None:

    master = bip32.from_seed(SEED)
    assert master.private_key is not None
    assert master.private_key.hex() not in repr(master)
    assert str(master.private_key) not in repr(master)
    assert "Secp256k1Provider" not in repr(master)

    # nodes are hashable values
    assert len({master, bip32.from_seed(SEED), master.neutered()}) == 2


def test_from_public_key() -> None:

    xprv = "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
    xpub = "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"
    master = bip32.from_base58(xprv)

    node = bip32.from_public_key(master.public_key, master.chain_code)
    assert node.is_neutered()
    assert node.to_base58() == xpub
    assert node == master.neutered()

    node = bip32.from_public_key(master.public_key.hex(), master.chain_code.hex())
    assert node.to_base58() == xpub

    node = bip32.from_private_key(master.private_key, master.chain_code)  # type: ignore
    assert node.to_base58() == xprv
    assert node == master

    with pytest.raises(InvalidPublicKeyError):
        bip32.from_public_key(b"\x02" + b"\x00" * 31 + b"\x07", master.chain_code)
    with pytest.raises(InvalidPrivateKeyError):
        bip32.from_private_key(b"\xff" * 32, master.chain_code)
    with pytest.raises(InvalidLengthError):
        bip32.from_private_key(master.private_key, b"\x00" * 31)  # type: ignore


def test_wif() -> None:

    master = bip32.from_seed(SEED)
    wif = master.to_wif()
    assert wif[0] in ("K", "L")
    assert prv_key_from_wif(wif) == master.private_key

    with pytest.raises(MissingPrivateKeyError, match="Missing private key"):
        master.neutered().to_wif()


def test_networks() -> None:

    xkey = bip32.from_seed(SEED).to_base58()
    assert xkey.startswith("xprv")

    testnet = BIP32Factory(network=NETWORKS["testnet"])
    node = testnet.from_seed(SEED)
    assert node.network == NETWORKS["testnet"]
    assert node.to_base58().startswith("tprv")
    assert node.neutered().to_base58().startswith("tpub")
    assert node.to_wif()[0] == "c"
    assert node.derive_path("m/0'/1").network == NETWORKS["testnet"]

    # same keys, different network
    assert node.private_key == bip32.from_seed(SEED).private_key
    assert node != bip32.from_seed(SEED)

    err_msg = "unknown mainnet extended key version: "
    with pytest.raises(UnknownNetworkVersionError, match=err_msg):
        bip32.from_base58(node.to_base58())
    with pytest.raises(UnknownNetworkVersionError, match=err_msg):
        bip32.from_base58(node.neutered().to_base58())
    assert bip32.from_base58(node.to_base58(), NETWORKS["testnet"]) == node

    # regtest shares the testnet versions
    regtest = bip32.from_base58(node.to_base58(), NETWORKS["regtest"])
    assert regtest.network.name == "regtest"
    assert regtest.private_key == node.private_key


def test_litecoin() -> None:

    master = bip32.from_seed(SEED, LITECOIN)
    xkey = master.to_base58()
    assert bip32.from_base58(xkey, LITECOIN) == master
    xpub = master.neutered().to_base58()
    assert bip32.from_base58(xpub, LITECOIN) == master.neutered()
    with pytest.raises(UnknownNetworkVersionError):
        bip32.from_base58(xkey)

    ltc = BIP32Factory(network=LITECOIN)
    assert ltc.from_base58(xkey).derive_path("m/0'") == master.derive_path("m/0'")
    assert prv_key_from_wif(master.to_wif(), LITECOIN) == master.private_key
    with pytest.raises(UnknownNetworkVersionError):
        prv_key_from_wif(master.to_wif())


def test_ecdsa() -> None:

    signature = bytes.fromhex(
        "9636ee2fac31b795a308856b821ebe297dda7b28220fb46ea1fbbd7285977cc0"
        "4c82b734956246a0f15a9698f03f546d8d96fe006c8e7bd2256ca7c8229e6f5c"
    )
    signature_low_r = bytes.fromhex(
        "0587a40b391b76596c257bf59565b24eaff2cc42b45caa2640902e73fb97a6e7"
        "02c3402ab89348a7dae1bf171c3e172fa60353d7b01621a94cb7caca59b995db"
    )
    schnorrsig = bytes.fromhex(
        "2fae8b517cb0e7302ca48a4109d1819e3d75af96bd58d297023e3058c4e98ff8"
        "12fe6ae32a2b2bc4abab10f88f7fe56efbafc8a4e4fa437af78926f528b0585e"
    )
    node = bip32.from_seed(SEED)

    assert node.sign(HASH) == signature
    assert node.sign(HASH, low_r=True) == signature_low_r
    assert node.verify(HASH, signature)
    assert not node.verify(SEED, signature)
    assert node.verify(HASH, signature_low_r)
    assert not node.verify(SEED, signature_low_r)

    sig = node.sign_schnorr(HASH)
    assert sig == node.sign_schnorr(HASH)
    assert node.verify_schnorr(HASH, sig)
    assert node.verify_schnorr(HASH, schnorrsig)
    assert not node.verify_schnorr(SEED, schnorrsig)

    with pytest.raises(InvalidLengthError):
        node.sign(HASH[:-1])

    xpub = node.neutered()
    with pytest.raises(MissingPrivateKeyError, match="Missing private key"):
        xpub.sign(HASH)
    with pytest.raises(MissingPrivateKeyError, match="Missing private key"):
        xpub.sign_schnorr(HASH)

    # watch-only node
    watch_only = bip32.from_public_key(node.public_key, node.chain_code)
    with pytest.raises(MissingPrivateKeyError, match="Missing private key"):
        watch_only.sign(HASH)
    assert watch_only.verify(HASH, signature)
    assert watch_only.verify_schnorr(HASH, schnorrsig)


def test_low_r() -> None:

    node = bip32.from_seed(SEED)
    for i in range(16):
        msg_hash = bytes([i]) * 32
        sig = node.sign(msg_hash, low_r=True)
        assert sig[0] < 0x80
        assert node.verify(msg_hash, sig)


def test_tweak() -> None:

    signature = bytes.fromhex(
        "5a38c6652feb5166c9c91cfa5fa4a4c7cec27445d4619499df8afdd05ebc8232"
        "46d644b0c7d3b960625393df537f900528ec4b14e6ddab8fd0c7e87c98cfe9d0"
    )
    schnorrsig = bytes.fromhex(
        "20506478d341d0ab1afd32671eb1550b1c5329ad5179a19712212b857f06b321"
        "0d949964cd513ff25719e2e9b0087d5a9745afd5d38641ce0dfa86f67c86de63"
    )
    node = bip32.from_seed(SEED)
    signer = node.tweak(TWEAK)

    assert signer.sign(HASH) == signature
    assert signer.sign(HASH, low_r=True) == signature
    assert signer.verify(HASH, signature)
    assert not signer.verify(SEED, signature)
    assert signer.verify_schnorr(HASH, schnorrsig)
    assert not signer.verify_schnorr(SEED, schnorrsig)
    assert signer.verify_schnorr(HASH, signer.sign_schnorr(HASH))

    # tree metadata is carried unchanged
    assert signer.chain_code == node.chain_code
    assert signer.depth == node.depth
    assert signer.index == node.index
    assert signer.parent_fingerprint == node.parent_fingerprint
    assert signer.network == node.network
    assert signer.public_key != node.public_key

    neutered_signer = node.neutered().tweak(TWEAK)
    assert neutered_signer == signer.neutered()
    with pytest.raises(MissingPrivateKeyError, match="Missing private key"):
        neutered_signer.sign(HASH)
    with pytest.raises(MissingPrivateKeyError, match="Missing private key"):
        neutered_signer.sign_schnorr(HASH)
    assert neutered_signer.verify(HASH, signature)
    assert not neutered_signer.verify(SEED, signature)
    assert neutered_signer.verify_schnorr(HASH, schnorrsig)
    assert not neutered_signer.verify_schnorr(SEED, schnorrsig)

    with pytest.raises(InvalidLengthError):
        node.tweak(TWEAK[:-1])


def test_tweak_odd_y() -> None:

    # the x-only key is tweaked whatever the parity of the public key
    for i in range(8):
        node = bip32.from_seed(bytes([i]) * 32)
        tweaked = node.tweak(TWEAK)
        assert tweaked.neutered() == node.neutered().tweak(TWEAK)

