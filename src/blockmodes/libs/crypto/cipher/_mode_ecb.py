from __future__ import annotations

import logging

from blockmodes.errors import InvalidCiphertextLength

from ..blocks import group, ungroup
from ..padding import pad, unpad
from ._mode_base import BaseMode

logger = logging.getLogger(__name__)


class ECBMode(BaseMode):
    """Electronic Code Book (ECB) mode.

    ECB is stateless: each block is processed independently without an IV or
    chaining. Identical plaintext blocks under one key therefore produce
    identical ciphertext blocks. This mode provides no semantic security and
    is included for study of that leak only.
    """

    name = "ECB"

    def encrypt(self, plaintext: bytes, key: bytes) -> bytes:
        """Encrypt data in ECB mode.

        Args:
            plaintext: Plaintext bytes of any length.
            key: 16-byte key.

        Returns:
            Ciphertext bytes; no IV is emitted.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
        """
        key = self._check_key(key)
        blocks = group(pad(plaintext))
        logger.debug("ECB encrypt: %d blocks", len(blocks))

        out = self._map_blocks(lambda b: self._encrypt_block(b, key), blocks)
        return ungroup(out)

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        """Decrypt data in ECB mode.

        Args:
            ciphertext: Ciphertext bytes. Length must be a positive multiple
                of ``block_size``.
            key: 16-byte key.

        Returns:
            Unpadded plaintext bytes.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
            InvalidCiphertextLength: If the ciphertext is empty or misaligned.
            InvalidPadding: If the recovered padding is malformed.
        """
        key = self._check_key(key)
        bs = self.block_size
        if len(ciphertext) == 0 or len(ciphertext) % bs != 0:
            raise InvalidCiphertextLength(
                "Ciphertext length must be a positive multiple of block size"
            )

        blocks = group(ciphertext)
        logger.debug("ECB decrypt: %d blocks", len(blocks))

        out = self._map_blocks(lambda b: self._decrypt_block(b, key), blocks)
        return unpad(ungroup(out), bs)
