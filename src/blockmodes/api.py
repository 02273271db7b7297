"""
Module-level encrypt/decrypt functions for the three modes.

Each call builds a fresh mode object, so no state survives between calls.
The ``cipher`` and ``random_source`` keywords swap in another primitive or
a deterministic IV/nonce source (for tests).
"""

from __future__ import annotations

import logging
from pathlib import Path

from blockmodes.infra.config import ConfigAdapter, load_config
from blockmodes.libs.crypto import RandomSource
from blockmodes.libs.crypto.cipher import AES, BaseMode, BlockCipher
from blockmodes.schemas import ModeConfig

logger = logging.getLogger(__name__)


def new_from_config(
    config: ModeConfig,
    *,
    cipher: BlockCipher | None = None,
    random_source: RandomSource | None = None,
) -> BaseMode:
    """Build a mode object from a :class:`ModeConfig`."""
    logger.debug(
        "Building %s mode (max_workers=%d, counter_overflow=%s)",
        config.mode,
        config.max_workers,
        config.counter_overflow,
    )
    return AES.new(
        config.mode,
        cipher=cipher,
        random_source=random_source,
        max_workers=config.max_workers,
        counter_overflow=config.counter_overflow,
    )


def new_from_settings(
    config_path: str | Path | None = None,
    *,
    cipher: BlockCipher | None = None,
    random_source: RandomSource | None = None,
) -> BaseMode:
    """Build a mode object from a settings file.

    The file is located by :func:`~blockmodes.infra.config.load_config`. Its
    ``[debug].log_level`` is applied to the ``blockmodes`` logger and its
    ``[cipher]`` table selects the mode.

    Raises:
        FileNotFoundError: If no settings file is found.
        ValueError: If the file cannot be parsed.
        ConfigError: If a setting is malformed.
    """
    adapter = ConfigAdapter(load_config(config_path))
    logging.getLogger("blockmodes").setLevel(adapter.get_log_level())
    return new_from_config(
        adapter.get_mode_config(), cipher=cipher, random_source=random_source
    )


def ecb_encrypt(
    plaintext: bytes,
    key: bytes,
    *,
    cipher: BlockCipher | None = None,
) -> bytes:
    """Encrypt in ECB mode. Insecure; see :class:`ECBMode`."""
    return AES.new(AES.MODE_ECB, cipher=cipher).encrypt(plaintext, key)


def ecb_decrypt(
    ciphertext: bytes,
    key: bytes,
    *,
    cipher: BlockCipher | None = None,
) -> bytes:
    """Decrypt an ECB ciphertext."""
    return AES.new(AES.MODE_ECB, cipher=cipher).decrypt(ciphertext, key)


def cbc_encrypt(
    plaintext: bytes,
    key: bytes,
    *,
    cipher: BlockCipher | None = None,
    random_source: RandomSource | None = None,
) -> bytes:
    """Encrypt in CBC mode; the random IV is the first output block."""
    mode = AES.new(AES.MODE_CBC, cipher=cipher, random_source=random_source)
    return mode.encrypt(plaintext, key)


def cbc_decrypt(
    data: bytes,
    key: bytes,
    *,
    cipher: BlockCipher | None = None,
) -> bytes:
    """Decrypt ``IV || ciphertext`` produced by :func:`cbc_encrypt`."""
    return AES.new(AES.MODE_CBC, cipher=cipher).decrypt(data, key)


def ctr_encrypt(
    plaintext: bytes,
    key: bytes,
    *,
    cipher: BlockCipher | None = None,
    random_source: RandomSource | None = None,
) -> bytes:
    """Encrypt in CTR mode; the nonce block is the first output block."""
    mode = AES.new(AES.MODE_CTR, cipher=cipher, random_source=random_source)
    return mode.encrypt(plaintext, key)


def ctr_decrypt(
    data: bytes,
    key: bytes,
    *,
    cipher: BlockCipher | None = None,
) -> bytes:
    """Decrypt ``nonce_block || ciphertext`` produced by :func:`ctr_encrypt`."""
    return AES.new(AES.MODE_CTR, cipher=cipher).decrypt(data, key)
