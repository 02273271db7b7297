from __future__ import annotations

import abc
import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from blockmodes.errors import InvalidKeyLength

from ..blocks import BLOCK_SIZE, Block

logger = logging.getLogger(__name__)


class BlockCipher(Protocol):
    """Single-block cipher primitive consumed by every mode.

    Both transforms must be deterministic, total over ``block_size``-byte
    inputs, and inverse to each other under the same key.
    """

    block_size: int

    def encrypt_block(self, block: bytes, key: bytes) -> bytes: ...

    def decrypt_block(self, block: bytes, key: bytes) -> bytes: ...


class BaseMode(abc.ABC):
    """Base class for block-cipher modes of operation.

    A mode instance wraps a *block cipher primitive* that encrypts or decrypts
    a single block, and provides whole-message :meth:`encrypt` and
    :meth:`decrypt` operations for arbitrary-length data. Padding is applied
    and removed by the mode itself.

    Mode objects hold no per-message state; the key is passed to every call
    and is not retained afterwards.
    """

    name: str = ""

    def __init__(
        self,
        cipher: BlockCipher,
        *,
        max_workers: int = 1,
    ) -> None:
        """Initialize a block-cipher mode instance.

        Args:
            cipher: Block cipher primitive. Its ``block_size`` must be 16.
            max_workers: Number of threads used for blocks that have no
                chaining dependency. ``1`` processes blocks inline.

        Raises:
            ValueError: If the primitive block size or ``max_workers`` is
                invalid.
        """
        if cipher.block_size != BLOCK_SIZE:
            raise ValueError(
                f"Cipher block size must be {BLOCK_SIZE}, got {cipher.block_size}"
            )
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.cipher = cipher
        self.block_size = BLOCK_SIZE
        self.max_workers = max_workers

    @abc.abstractmethod
    def encrypt(self, plaintext: bytes, key: bytes) -> bytes:
        """Pad and encrypt plaintext.

        Args:
            plaintext: Plaintext bytes of any length.
            key: Key of exactly ``block_size`` bytes.

        Returns:
            Ciphertext bytes, prefixed with the IV/nonce block where the
            mode uses one.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
        """
        ...

    @abc.abstractmethod
    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        """Decrypt ciphertext and remove padding.

        Args:
            ciphertext: Bytes produced by :meth:`encrypt`.
            key: Key of exactly ``block_size`` bytes.

        Returns:
            The original plaintext.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
            InvalidCiphertextLength: If the ciphertext is misaligned or
                too short.
            InvalidPadding: If the recovered padding is malformed.
        """
        ...

    def _check_key(self, key: bytes) -> bytes:
        if len(key) != self.block_size:
            raise InvalidKeyLength(
                f"Key must be {self.block_size} bytes, got {len(key)}"
            )
        return bytes(key)

    def _encrypt_block(self, block: bytes, key: bytes) -> Block:
        return Block(self.cipher.encrypt_block(block, key))

    def _decrypt_block(self, block: bytes, key: bytes) -> Block:
        return Block(self.cipher.decrypt_block(block, key))

    def _map_blocks(
        self,
        func: Callable[[bytes], bytes],
        blocks: Sequence[bytes],
    ) -> list[bytes]:
        """Apply ``func`` to every block, keeping results in block order."""
        if self.max_workers == 1 or len(blocks) < 2:
            return [func(block) for block in blocks]

        workers = min(self.max_workers, len(blocks))
        logger.debug(
            "%s: processing %d blocks on %d workers", self.name, len(blocks), workers
        )
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(func, blocks))
