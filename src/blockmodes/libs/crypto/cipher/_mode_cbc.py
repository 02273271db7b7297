from __future__ import annotations

import logging

from blockmodes.errors import CiphertextTooShort, InvalidCiphertextLength

from ..blocks import Block, group, ungroup, xor_bytes
from ..padding import pad, unpad
from ..rng import RandomSource, default_random_source
from ._mode_base import BaseMode, BlockCipher

logger = logging.getLogger(__name__)


class CBCMode(BaseMode):
    """Cipher Block Chaining (CBC) mode.

    Each plaintext block is XORed with the previous ciphertext block before
    encryption; the first block is XORed with a fresh random IV, which is
    emitted as the first ciphertext block.

    Encryption is a sequential chain. Decryption only needs ciphertext blocks,
    which are all known up front, so it may run on ``max_workers`` threads.
    """

    name = "CBC"

    def __init__(
        self,
        cipher: BlockCipher,
        *,
        random_source: RandomSource | None = None,
        max_workers: int = 1,
    ) -> None:
        """Initialize a CBC mode instance.

        Args:
            cipher: Block cipher primitive. See :class:`BaseMode`.
            random_source: Callable producing ``n`` secure random bytes for
                the IV. Defaults to the system CSPRNG.
            max_workers: Thread count for decryption. See :class:`BaseMode`.
        """
        super().__init__(cipher, max_workers=max_workers)
        self.random_source = random_source or default_random_source()

    def encrypt(self, plaintext: bytes, key: bytes) -> bytes:
        """Encrypt data in CBC mode under a freshly generated IV.

        Args:
            plaintext: Plaintext bytes of any length.
            key: 16-byte key.

        Returns:
            ``IV || C[0] || ... || C[n-1]``.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
        """
        key = self._check_key(key)
        blocks = group(pad(plaintext))
        iv = Block(self.random_source(self.block_size))
        logger.debug("CBC encrypt: %d blocks", len(blocks))

        out = bytearray(iv)
        prev: bytes = iv
        for block in blocks:
            ct = self._encrypt_block(xor_bytes(block, prev), key)
            out += ct
            prev = ct

        return bytes(out)

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        """Decrypt data in CBC mode.

        Args:
            ciphertext: ``IV || C[0] || ... || C[n-1]``; at least two blocks.
            key: 16-byte key.

        Returns:
            Unpadded plaintext bytes.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
            InvalidCiphertextLength: If the ciphertext is misaligned.
            CiphertextTooShort: If there is no room for an IV and a block.
            InvalidPadding: If the recovered padding is malformed.
        """
        key = self._check_key(key)
        bs = self.block_size
        if len(ciphertext) < 2 * bs:
            raise CiphertextTooShort(
                f"CBC ciphertext needs at least {2 * bs} bytes, got {len(ciphertext)}"
            )
        if len(ciphertext) % bs != 0:
            raise InvalidCiphertextLength(
                "Ciphertext length not a multiple of block size"
            )

        iv, *blocks = group(ciphertext)
        logger.debug("CBC decrypt: %d blocks", len(blocks))

        decrypted = self._map_blocks(lambda b: self._decrypt_block(b, key), blocks)

        # the previous *ciphertext* block chains forward
        chain = [iv, *blocks[:-1]]
        return unpad(
            ungroup(xor_bytes(d, p) for d, p in zip(decrypted, chain, strict=True)),
            bs,
        )
