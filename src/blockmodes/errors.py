"""
Exception types raised by the block-mode layer.

Every error subclasses :class:`ValueError` so callers written against the
usual ``Crypto.Cipher`` conventions keep working.
"""


class BlockModeError(ValueError):
    """Base class for all block-mode failures."""


class InvalidKeyLength(BlockModeError):
    """The key is not exactly one block long."""


class InvalidLength(BlockModeError):
    """A buffer is not block sized or not block aligned."""


class InvalidCiphertextLength(BlockModeError):
    """Ciphertext length is not a positive multiple of the block size."""


class CiphertextTooShort(InvalidCiphertextLength):
    """Ciphertext cannot hold the IV/nonce block plus the data blocks."""


class InvalidPadding(BlockModeError):
    """Trailing pad bytes are out of range or inconsistent."""


class CounterOverflow(BlockModeError):
    """The CTR counter was exhausted under the ``"error"`` policy."""


class ConfigError(ValueError):
    """A configuration value is missing or malformed."""
