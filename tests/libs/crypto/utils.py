from __future__ import annotations

from collections.abc import Callable


class XorCipher:
    """Toy primitive: XOR with the key. Invertible, deterministic, insecure."""

    block_size = 16

    def __init__(self) -> None:
        self.calls = 0

    def encrypt_block(self, block: bytes, key: bytes) -> bytes:
        self.calls += 1
        return bytes(b ^ k for b, k in zip(block, key, strict=True))

    def decrypt_block(self, block: bytes, key: bytes) -> bytes:
        self.calls += 1
        return bytes(b ^ k for b, k in zip(block, key, strict=True))


def fixed_source(value: bytes) -> Callable[[int], bytes]:
    """Random source that always hands back a prefix of ``value``."""

    def _source(n: int) -> bytes:
        return value[:n]

    return _source
