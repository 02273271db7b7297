from __future__ import annotations

import logging
import random

import pytest

import blockmodes
from blockmodes import (
    CiphertextTooShort,
    InvalidCiphertextLength,
    InvalidKeyLength,
    InvalidPadding,
)
from blockmodes.libs.crypto.cipher import CBCMode, CTRMode, ECBMode
from blockmodes.libs.crypto.padding import pad, unpad
from blockmodes.schemas import ModeConfig

from .libs.crypto.utils import XorCipher, fixed_source

_rng = random.Random(20251123)

KEY = bytes.fromhex("000102030405060708090a0b0c0d0e0f")

MODES = {
    "ecb": (blockmodes.ecb_encrypt, blockmodes.ecb_decrypt),
    "cbc": (blockmodes.cbc_encrypt, blockmodes.cbc_decrypt),
    "ctr": (blockmodes.ctr_encrypt, blockmodes.ctr_decrypt),
}

FILLS = {
    "zero": lambda n: b"\x00" * n,
    "ones": lambda n: b"\xff" * n,
    "random": lambda n: bytes(_rng.randrange(0, 256) for _ in range(n)),
}


# ===========================================================
# Round trip for every length
# ===========================================================


@pytest.mark.parametrize("fill", FILLS)
@pytest.mark.parametrize("mode", MODES)
def test_roundtrip_all_lengths(mode, fill):
    encrypt, decrypt = MODES[mode]
    make = FILLS[fill]

    for n in range(0, 1001):
        pt = make(n)
        ct = encrypt(pt, KEY)
        assert len(ct) % 16 == 0
        assert decrypt(ct, KEY) == pt, f"{mode} failed at length {n}"


@pytest.mark.parametrize(
    "mode, overhead",
    [("ecb", 0), ("cbc", 16), ("ctr", 16)],
)
def test_ciphertext_size(mode, overhead):
    encrypt, _ = MODES[mode]
    assert len(encrypt(b"", KEY)) == 16 + overhead
    assert len(encrypt(b"a" * 15, KEY)) == 16 + overhead
    assert len(encrypt(b"a" * 16, KEY)) == 32 + overhead


# ===========================================================
# Errors at the public surface
# ===========================================================


@pytest.mark.parametrize("mode", MODES)
def test_public_functions_reject_bad_key(mode):
    encrypt, decrypt = MODES[mode]
    with pytest.raises(InvalidKeyLength):
        encrypt(b"data", b"short")
    with pytest.raises(InvalidKeyLength):
        decrypt(b"\x00" * 32, b"\x00" * 24)


def test_ecb_decrypt_misaligned():
    with pytest.raises(InvalidCiphertextLength):
        blockmodes.ecb_decrypt(b"\x00" * 20, KEY)


@pytest.mark.parametrize("n", [0, 16, 31])
def test_cbc_decrypt_too_short(n):
    with pytest.raises(CiphertextTooShort):
        blockmodes.cbc_decrypt(b"\x00" * n, KEY)


def test_errors_share_a_root():
    for exc in (
        CiphertextTooShort,
        InvalidCiphertextLength,
        InvalidKeyLength,
        InvalidPadding,
    ):
        assert issubclass(exc, blockmodes.BlockModeError)
        assert issubclass(exc, ValueError)


def test_forged_plaintext_fails_unpad():
    ct = blockmodes.ecb_encrypt(b"sixteen byte msg", KEY)
    padded = pad(blockmodes.ecb_decrypt(ct, KEY))
    forged = padded[:-1] + b"\x20"
    with pytest.raises(InvalidPadding):
        unpad(forged)


# ===========================================================
# Injection
# ===========================================================


def test_cbc_encrypt_uses_injected_random_source():
    iv = b"\x07" * 16
    ct = blockmodes.cbc_encrypt(b"hi", KEY, random_source=fixed_source(iv))
    assert ct[:16] == iv
    assert blockmodes.cbc_decrypt(ct, KEY) == b"hi"


def test_ctr_encrypt_is_deterministic_with_fixed_nonce():
    src = fixed_source(b"\x42" * 8)
    a = blockmodes.ctr_encrypt(b"same input", KEY, random_source=src)
    b = blockmodes.ctr_encrypt(b"same input", KEY, random_source=src)
    assert a == b


@pytest.mark.parametrize("mode", MODES)
def test_public_functions_accept_custom_cipher(mode):
    encrypt, decrypt = MODES[mode]
    cipher = XorCipher()
    ct = encrypt(b"toy cipher", KEY, cipher=cipher)
    assert cipher.calls > 0
    assert decrypt(ct, KEY, cipher=cipher) == b"toy cipher"


# ===========================================================
# Factories
# ===========================================================


@pytest.mark.parametrize(
    "name, cls",
    [("ecb", ECBMode), ("CBC", CBCMode), ("Ctr", CTRMode)],
)
def test_new_accepts_names(name, cls):
    assert isinstance(blockmodes.new(name), cls)


def test_new_rejects_unknown_mode():
    with pytest.raises(ValueError):
        blockmodes.new("ofb")
    with pytest.raises(ValueError):
        blockmodes.new(3)


def test_new_from_config():
    cfg = ModeConfig(mode="ctr", max_workers=3, counter_overflow="wrap")
    mode = blockmodes.new_from_config(cfg)

    assert isinstance(mode, CTRMode)
    assert mode.max_workers == 3
    assert mode.counter_overflow == "wrap"
    assert mode.decrypt(mode.encrypt(b"configured", KEY), KEY) == b"configured"


@pytest.fixture
def package_logger():
    logger = logging.getLogger("blockmodes")
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_new_from_settings(tmp_path, package_logger):
    settings = tmp_path / "settings.toml"
    settings.write_text(
        "[cipher]\nmode = 'ecb'\nmax_workers = 2\n\n[debug]\nlog_level = 'debug'\n",
        encoding="utf-8",
    )

    mode = blockmodes.new_from_settings(settings)

    assert isinstance(mode, ECBMode)
    assert mode.max_workers == 2
    assert package_logger.level == logging.DEBUG
    assert mode.decrypt(mode.encrypt(b"from file", KEY), KEY) == b"from file"


def test_new_from_settings_uses_local_file(
    tmp_path, monkeypatch, package_logger
):
    (tmp_path / "settings.json").write_text(
        '{"cipher": {"mode": "ctr", "counter_overflow": "wrap"}}', encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    mode = blockmodes.new_from_settings(random_source=fixed_source(b"\x01" * 8))

    assert isinstance(mode, CTRMode)
    assert mode.counter_overflow == "wrap"
    assert package_logger.level == logging.INFO


def test_new_from_settings_rejects_bad_values(tmp_path, package_logger):
    settings = tmp_path / "settings.toml"
    settings.write_text("[cipher]\nmode = 'ofb'\n", encoding="utf-8")
    with pytest.raises(blockmodes.ConfigError):
        blockmodes.new_from_settings(settings)
