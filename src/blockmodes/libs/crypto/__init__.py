"""
Block-level building blocks: padding, blocking, XOR and counters.
"""

__all__ = [
    "BLOCK_SIZE",
    "COUNTER_SIZE",
    "Block",
    "RandomSource",
    "counter_block",
    "default_random_source",
    "group",
    "increment_counter",
    "pad",
    "split_nonce_block",
    "ungroup",
    "unpad",
    "xor_bytes",
]

from .blocks import (
    BLOCK_SIZE,
    COUNTER_SIZE,
    Block,
    counter_block,
    group,
    increment_counter,
    split_nonce_block,
    ungroup,
    xor_bytes,
)
from .padding import pad, unpad
from .rng import RandomSource, default_random_source
