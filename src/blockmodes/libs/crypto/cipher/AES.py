from __future__ import annotations

from Crypto.Cipher import AES as _AES

from blockmodes.errors import InvalidKeyLength, InvalidLength

from ..blocks import OverflowPolicy
from ..rng import RandomSource
from ._mode_base import BaseMode, BlockCipher

block_size = 16
key_size = (16,)

MODE_ECB = 1  #: Electronic Code Book
MODE_CBC = 2  #: Cipher-Block Chaining
MODE_CTR = 6  #: Counter

MODE_NAMES = {
    "ecb": MODE_ECB,
    "cbc": MODE_CBC,
    "ctr": MODE_CTR,
}


class AES128:
    """AES-128 single-block primitive backed by pycryptodome.

    Only the raw block transform is used; chaining, padding and IV handling
    belong to the modes in this package.
    """

    __slots__ = ()

    block_size: int = 16

    def encrypt_block(self, block: bytes, key: bytes) -> bytes:
        """Encrypt a single 16-byte block.

        Args:
            block: Plaintext block of length 16.
            key: AES-128 key of length 16.

        Returns:
            The encrypted block.

        Raises:
            InvalidLength: If the block size is invalid.
            InvalidKeyLength: If the key size is invalid.
        """
        self._check(block, key)
        return _AES.new(bytes(key), _AES.MODE_ECB).encrypt(bytes(block))

    def decrypt_block(self, block: bytes, key: bytes) -> bytes:
        """Decrypt a single 16-byte block.

        Args:
            block: Ciphertext block of length 16.
            key: AES-128 key of length 16.

        Returns:
            The decrypted block.

        Raises:
            InvalidLength: If the block size is invalid.
            InvalidKeyLength: If the key size is invalid.
        """
        self._check(block, key)
        return _AES.new(bytes(key), _AES.MODE_ECB).decrypt(bytes(block))

    @staticmethod
    def _check(block: bytes, key: bytes) -> None:
        if len(key) not in key_size:
            raise InvalidKeyLength("Invalid key size")
        if len(block) != block_size:
            raise InvalidLength("Block must be 16 bytes")


def new(
    mode: int | str,
    *,
    cipher: BlockCipher | None = None,
    random_source: RandomSource | None = None,
    max_workers: int = 1,
    counter_overflow: OverflowPolicy = "error",
) -> BaseMode:
    """Create a mode object in the requested mode.

    Args:
        mode: ``MODE_ECB``, ``MODE_CBC`` or ``MODE_CTR``, or the
            case-insensitive names ``"ecb"``, ``"cbc"`` or ``"ctr"``.
        cipher: Block cipher primitive; defaults to :class:`AES128`.
        random_source: IV/nonce source for CBC and CTR; defaults to the
            system CSPRNG. Ignored by ECB.
        max_workers: Thread count for independent blocks.
        counter_overflow: CTR counter exhaustion policy. Ignored by ECB/CBC.

    Returns:
        A mode object exposing ``encrypt(plaintext, key)`` and
        ``decrypt(ciphertext, key)``.

    Raises:
        ValueError: If the mode is unknown.
    """
    if isinstance(mode, str):
        try:
            mode = MODE_NAMES[mode.lower()]
        except KeyError:
            raise ValueError(f"Unknown mode: {mode!r}") from None

    cipher = cipher or AES128()

    if mode == MODE_ECB:
        from ._mode_ecb import ECBMode

        return ECBMode(cipher, max_workers=max_workers)

    if mode == MODE_CBC:
        from ._mode_cbc import CBCMode

        return CBCMode(cipher, random_source=random_source, max_workers=max_workers)

    if mode == MODE_CTR:
        from ._mode_ctr import CTRMode

        return CTRMode(
            cipher,
            random_source=random_source,
            max_workers=max_workers,
            counter_overflow=counter_overflow,
        )

    raise ValueError("Unknown mode")
