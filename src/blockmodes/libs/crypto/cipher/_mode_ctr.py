from __future__ import annotations

import logging

from blockmodes.errors import (
    CiphertextTooShort,
    CounterOverflow,
    InvalidCiphertextLength,
)

from ..blocks import (
    COUNTER_SIZE,
    OVERFLOW_POLICIES,
    Block,
    OverflowPolicy,
    counter_block,
    group,
    increment_counter,
    split_nonce_block,
    ungroup,
    xor_bytes,
)
from ..padding import pad, unpad
from ..rng import RandomSource, default_random_source
from ._mode_base import BaseMode, BlockCipher

logger = logging.getLogger(__name__)

MAX_COUNTER = 1 << (8 * COUNTER_SIZE)


class CTRMode(BaseMode):
    """Counter (CTR) mode.

    For block ``i`` the value ``V = nonce || counter_i`` is encrypted to form
    a keystream block, which is XORed with the data. The 8-byte nonce is
    random per message and travels in the high half of the first ciphertext
    block; the low half is zero. The counter starts at zero for every message.

    Decryption also *encrypts* ``V``. Blocks are independent given their
    counter, so any block can be recovered without touching the others.

    CTR is malleable: flipping a ciphertext bit flips the same plaintext bit.
    """

    name = "CTR"

    def __init__(
        self,
        cipher: BlockCipher,
        *,
        random_source: RandomSource | None = None,
        max_workers: int = 1,
        counter_overflow: OverflowPolicy = "error",
    ) -> None:
        """Initialize a CTR mode instance.

        Args:
            cipher: Block cipher primitive. See :class:`BaseMode`.
            random_source: Callable producing ``n`` secure random bytes for
                the nonce. Defaults to the system CSPRNG.
            max_workers: Thread count for keystream generation.
            counter_overflow: ``"error"`` raises :class:`CounterOverflow`
                when the 64-bit counter is exhausted; ``"wrap"`` wraps to 0.

        Raises:
            ValueError: If ``counter_overflow`` is not a known policy.
        """
        super().__init__(cipher, max_workers=max_workers)
        if counter_overflow not in OVERFLOW_POLICIES:
            raise ValueError(f"Unknown overflow policy: {counter_overflow!r}")
        self.random_source = random_source or default_random_source()
        self.counter_overflow: OverflowPolicy = counter_overflow

    def encrypt(self, plaintext: bytes, key: bytes) -> bytes:
        """Encrypt data in CTR mode under a freshly generated nonce.

        Args:
            plaintext: Plaintext bytes of any length.
            key: 16-byte key.

        Returns:
            ``nonce_block || C[0] || ... || C[n-1]``.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
        """
        key = self._check_key(key)
        blocks = group(pad(plaintext))
        nonce = bytes(self.random_source(COUNTER_SIZE))
        nonce_block = Block(nonce + bytes(COUNTER_SIZE))
        logger.debug("CTR encrypt: %d blocks", len(blocks))

        return nonce_block + self._apply_keystream(nonce, blocks, key)

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        """Decrypt data in CTR mode.

        Args:
            ciphertext: ``nonce_block || C[0] || ... || C[n-1]``.
            key: 16-byte key.

        Returns:
            Unpadded plaintext bytes.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
            InvalidCiphertextLength: If the ciphertext is misaligned.
            CiphertextTooShort: If the nonce block is missing.
            InvalidPadding: If the recovered padding is malformed.
        """
        key = self._check_key(key)
        nonce, blocks = self._split(ciphertext)
        logger.debug("CTR decrypt: %d blocks", len(blocks))

        return unpad(self._apply_keystream(nonce, blocks, key), self.block_size)

    def keystream_block(self, nonce: bytes, index: int, key: bytes) -> Block:
        """Return the keystream block for block ``index`` of a message.

        Args:
            nonce: The 8-byte message nonce.
            index: Zero-based data block index.
            key: 16-byte key.

        Returns:
            ``E(nonce || index)``.

        Raises:
            InvalidKeyLength: If the key has the wrong length.
            CounterOverflow: If ``index`` does not fit in the 64-bit counter.
        """
        key = self._check_key(key)
        if not 0 <= index < MAX_COUNTER:
            raise CounterOverflow(f"Block index {index} outside the 64-bit counter")
        counter = index.to_bytes(COUNTER_SIZE, "big")
        return self._encrypt_block(counter_block(nonce, counter), key)

    def decrypt_block_at(self, ciphertext: bytes, index: int, key: bytes) -> bytes:
        """Decrypt a single data block without processing earlier blocks.

        Padding is not removed: the last block of a message is returned with
        its pad bytes intact.

        Args:
            ciphertext: Full CTR ciphertext including the nonce block.
            index: Zero-based data block index (the nonce block is not
                counted).
            key: 16-byte key.

        Returns:
            The plaintext block at ``index``.

        Raises:
            IndexError: If ``index`` is outside the ciphertext.
        """
        nonce, blocks = self._split(ciphertext)
        if not 0 <= index < len(blocks):
            raise IndexError(f"Block index {index} out of range for {len(blocks)}")
        return xor_bytes(blocks[index], self.keystream_block(nonce, index, key))

    def _split(self, ciphertext: bytes) -> tuple[bytes, list[Block]]:
        bs = self.block_size
        if len(ciphertext) < bs:
            raise CiphertextTooShort("CTR ciphertext is missing its nonce block")
        if len(ciphertext) % bs != 0:
            raise InvalidCiphertextLength(
                "Ciphertext length not a multiple of block size"
            )

        nonce_block, *blocks = group(ciphertext)
        return split_nonce_block(nonce_block), blocks

    def _counters(self, count: int) -> list[bytes]:
        counters: list[bytes] = []
        counter = bytes(COUNTER_SIZE)
        for i in range(count):
            counters.append(counter)
            if i + 1 < count:
                counter = increment_counter(counter, self.counter_overflow)
        return counters

    def _apply_keystream(
        self,
        nonce: bytes,
        blocks: list[Block],
        key: bytes,
    ) -> bytes:
        inputs = [counter_block(nonce, c) for c in self._counters(len(blocks))]
        keystream = self._map_blocks(lambda v: self._encrypt_block(v, key), inputs)
        return ungroup(
            xor_bytes(block, ks) for block, ks in zip(blocks, keystream, strict=True)
        )
