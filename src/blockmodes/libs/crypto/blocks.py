"""
Fixed-size block helpers shared by every mode.

Covers the :class:`Block` value type, splitting and joining block-aligned
buffers, byte-wise XOR and the big-endian CTR counter.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from blockmodes.errors import CounterOverflow, InvalidLength

BLOCK_SIZE = 16
COUNTER_SIZE = BLOCK_SIZE // 2

OverflowPolicy = Literal["error", "wrap"]
OVERFLOW_POLICIES: tuple[str, ...] = ("error", "wrap")


class Block(bytes):
    """Immutable byte string of exactly :data:`BLOCK_SIZE` bytes."""

    __slots__ = ()

    def __new__(cls, data: bytes | bytearray | Iterable[int]) -> Block:
        if isinstance(data, (int, str)):
            raise InvalidLength(
                f"Block needs a byte buffer, got {type(data).__name__}"
            )
        obj = super().__new__(cls, data)
        if len(obj) != BLOCK_SIZE:
            raise InvalidLength(
                f"Block must be {BLOCK_SIZE} bytes, got {len(obj)}"
            )
        return obj

    def __repr__(self) -> str:
        return f"Block({self.hex()})"


def group(data: bytes) -> list[Block]:
    """Split block-aligned data into consecutive blocks.

    Args:
        data: Bytes whose length is a multiple of :data:`BLOCK_SIZE`.

    Returns:
        The blocks in order. Empty input yields an empty list.

    Raises:
        InvalidLength: If ``data`` is not block aligned.
    """
    if len(data) % BLOCK_SIZE != 0:
        raise InvalidLength("Data length not a multiple of block size")
    return [Block(data[i : i + BLOCK_SIZE]) for i in range(0, len(data), BLOCK_SIZE)]


def ungroup(blocks: Iterable[bytes]) -> bytes:
    """Concatenate blocks back into a flat byte string."""
    out = bytearray()
    for block in blocks:
        out += block
    return bytes(out)


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte sequences of equal length.

    Args:
        a: First byte sequence.
        b: Second byte sequence.

    Returns:
        The XOR result as a new byte sequence.

    Raises:
        InvalidLength: If the lengths differ.
    """
    if len(a) != len(b):
        raise InvalidLength(f"Cannot XOR {len(a)} bytes with {len(b)} bytes")
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


def increment_counter(counter: bytes, overflow: OverflowPolicy = "error") -> bytes:
    """Add one to an 8-byte big-endian counter.

    Carries propagate from the last byte towards the first.

    Args:
        counter: Current counter value, exactly :data:`COUNTER_SIZE` bytes.
        overflow: ``"error"`` raises when the counter is all ``0xFF``;
            ``"wrap"`` rolls over to all zeros.

    Returns:
        The incremented counter.

    Raises:
        InvalidLength: If ``counter`` is not 8 bytes.
        CounterOverflow: If the counter is exhausted under ``"error"``.
        ValueError: If ``overflow`` is not a known policy.
    """
    if len(counter) != COUNTER_SIZE:
        raise InvalidLength(f"Counter must be {COUNTER_SIZE} bytes")
    if overflow not in OVERFLOW_POLICIES:
        raise ValueError(f"Unknown overflow policy: {overflow!r}")

    out = bytearray(counter)
    for i in reversed(range(COUNTER_SIZE)):
        if out[i] != 0xFF:
            out[i] += 1
            return bytes(out)
        out[i] = 0

    # every byte carried
    if overflow == "error":
        raise CounterOverflow("CTR counter exhausted; keystream would repeat")
    return bytes(out)


def counter_block(nonce: bytes, counter: bytes) -> Block:
    """Build the CTR input block ``nonce || counter``."""
    if len(nonce) != COUNTER_SIZE:
        raise InvalidLength(f"Nonce must be {COUNTER_SIZE} bytes")
    if len(counter) != COUNTER_SIZE:
        raise InvalidLength(f"Counter must be {COUNTER_SIZE} bytes")
    return Block(bytes(nonce) + bytes(counter))


def split_nonce_block(block: bytes) -> bytes:
    """Return the nonce carried in the high half of a nonce block."""
    return bytes(Block(block)[:COUNTER_SIZE])
