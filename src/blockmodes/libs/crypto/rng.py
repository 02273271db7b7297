from __future__ import annotations

from collections.abc import Callable

from Crypto.Random import get_random_bytes

RandomSource = Callable[[int], bytes]
"""Callable returning ``n`` cryptographically secure random bytes."""


def default_random_source() -> RandomSource:
    """Return the production CSPRNG (``Crypto.Random.get_random_bytes``)."""
    return get_random_bytes
