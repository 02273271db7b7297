"""
Data contracts and type definitions.
"""

__all__ = [
    "ModeConfig",
]

from .config import ModeConfig
