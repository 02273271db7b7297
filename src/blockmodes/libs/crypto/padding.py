from __future__ import annotations

from blockmodes.errors import InvalidPadding

from .blocks import BLOCK_SIZE


def pad(data_to_pad: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Apply PKCS#7 padding to align data to ``block_size``.

    ``N = block_size - len(data) % block_size`` bytes, each equal to ``N``,
    are appended. ``N`` is always in ``[1, block_size]``: block-aligned input
    gets a whole extra block so padding can never be confused with data.

    Args:
        data_to_pad: Raw input bytes. May be empty.
        block_size: Block size in bytes. Must be in the range [1, 255].

    Returns:
        Data padded so its length becomes a multiple of ``block_size``.

    Raises:
        ValueError: If ``block_size`` is out of range.
    """
    if not (1 <= block_size <= 255):
        raise ValueError("block_size must be between 1 and 255")

    padding_len = block_size - (len(data_to_pad) % block_size)
    return bytes(data_to_pad) + bytes([padding_len]) * padding_len


def unpad(padded_data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Remove padding previously applied by :func:`pad`.

    All ``N`` trailing bytes are checked, not only the count byte, and
    exactly ``N`` bytes are removed.

    Args:
        padded_data: Input data with padding applied. Length must be a
            positive multiple of ``block_size``.
        block_size: Block size in bytes. Must be in the range [1, 255].

    Returns:
        The original unpadded data.

    Raises:
        ValueError: If ``block_size`` is out of range.
        InvalidPadding: If the input is empty, misaligned, or incorrectly
            padded.
    """
    if not (1 <= block_size <= 255):
        raise ValueError("block_size must be between 1 and 255")

    pdata_len = len(padded_data)

    if pdata_len == 0:
        raise InvalidPadding("Zero-length input cannot be unpadded")

    if pdata_len % block_size:
        raise InvalidPadding("Input data is not padded")

    padding_len = padded_data[-1]

    if padding_len < 1 or padding_len > block_size:
        raise InvalidPadding("Padding is incorrect")

    if padded_data[-padding_len:] != bytes([padding_len]) * padding_len:
        raise InvalidPadding("Padding is incorrect")

    return bytes(padded_data[:-padding_len])
