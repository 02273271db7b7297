from __future__ import annotations

import random

import pytest
from Crypto.Cipher import AES as RefAES
from Crypto.Util.Padding import pad as ref_pad

from blockmodes.errors import (
    InvalidCiphertextLength,
    InvalidKeyLength,
    InvalidLength,
    InvalidPadding,
)
from blockmodes.libs.crypto.cipher import AES, ECBMode

_rng = random.Random(20251123)


def randbytes(n: int) -> bytes:
    return bytes(_rng.randrange(0, 256) for _ in range(n))


# ===========================================================
# Encryption matches reference
# ===========================================================


@pytest.mark.parametrize("n", [0, 1, 15, 16, 17, 64, 100])
def test_aes_ecb_encrypt_matches_pycryptodome(n):
    key = randbytes(16)
    pt = randbytes(n)

    ref = RefAES.new(key, RefAES.MODE_ECB).encrypt(ref_pad(pt, 16))
    assert AES.new(AES.MODE_ECB).encrypt(pt, key) == ref


@pytest.mark.parametrize("n", [0, 1, 15, 16, 17, 64, 100])
def test_aes_ecb_decrypt_pycryptodome_output(n):
    key = randbytes(16)
    pt = randbytes(n)

    ct = RefAES.new(key, RefAES.MODE_ECB).encrypt(ref_pad(pt, 16))
    assert AES.new(AES.MODE_ECB).decrypt(ct, key) == pt


# ===========================================================
# Pattern leakage is preserved
# ===========================================================


def test_aes_ecb_identical_blocks_leak():
    key = b"\x00" * 16
    ct = AES.new(AES.MODE_ECB).encrypt(b"\x41" * 32, key)

    assert len(ct) == 48
    assert ct[0:16] == ct[16:32]
    assert ct[32:48] != ct[0:16]


def test_aes_ecb_is_deterministic():
    key = randbytes(16)
    pt = randbytes(40)
    mode = AES.new(AES.MODE_ECB)
    assert mode.encrypt(pt, key) == mode.encrypt(pt, key)


# ===========================================================
# Parallel workers
# ===========================================================


@pytest.mark.parametrize("workers", [2, 4, 16])
def test_aes_ecb_parallel_matches_sequential(workers):
    key = randbytes(16)
    pt = randbytes(16 * 20 + 3)

    seq = AES.new(AES.MODE_ECB)
    par = AES.new(AES.MODE_ECB, max_workers=workers)

    ct = seq.encrypt(pt, key)
    assert par.encrypt(pt, key) == ct
    assert par.decrypt(ct, key) == pt


# ===========================================================
# Validation
# ===========================================================


@pytest.mark.parametrize("key_len", [0, 15, 17, 24, 32])
def test_aes_ecb_rejects_bad_key_size(key_len):
    mode = AES.new(AES.MODE_ECB)
    with pytest.raises(InvalidKeyLength):
        mode.encrypt(b"data", b"\x00" * key_len)
    with pytest.raises(InvalidKeyLength):
        mode.decrypt(b"\x00" * 16, b"\x00" * key_len)


@pytest.mark.parametrize("n", [0, 1, 15, 17, 31])
def test_aes_ecb_rejects_bad_ciphertext_length(n):
    with pytest.raises(InvalidCiphertextLength):
        AES.new(AES.MODE_ECB).decrypt(b"\x00" * n, b"\x00" * 16)


def test_aes_ecb_bad_padding_surfaces():
    key = randbytes(16)
    forged = RefAES.new(key, RefAES.MODE_ECB).encrypt(b"A" * 15 + b"\x00")
    with pytest.raises(InvalidPadding):
        AES.new(AES.MODE_ECB).decrypt(forged, key)


# ===========================================================
# Pluggable primitive
# ===========================================================


def test_ecb_with_custom_primitive(xor_cipher):
    key = bytes(range(16))
    mode = ECBMode(xor_cipher)

    ct = mode.encrypt(b"hello world", key)
    assert xor_cipher.calls == 1
    assert mode.decrypt(ct, key) == b"hello world"


def test_mode_rejects_wrong_primitive_block_size(xor_cipher):
    xor_cipher.block_size = 8
    with pytest.raises(ValueError):
        ECBMode(xor_cipher)


def test_mode_rejects_zero_workers(xor_cipher):
    with pytest.raises(ValueError):
        ECBMode(xor_cipher, max_workers=0)


def test_ecb_rejects_primitive_returning_int(xor_cipher):
    xor_cipher.encrypt_block = lambda block, key: 16
    with pytest.raises(InvalidLength):
        ECBMode(xor_cipher).encrypt(b"abc", b"\x00" * 16)
