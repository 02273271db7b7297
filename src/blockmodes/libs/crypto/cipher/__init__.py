"""
AES-128 primitive and the ECB, CBC and CTR modes built on it.
"""

__all__ = [
    "AES",
    "AES128",
    "BaseMode",
    "BlockCipher",
    "CBCMode",
    "CTRMode",
    "ECBMode",
]

from . import AES
from ._mode_base import BaseMode, BlockCipher
from ._mode_cbc import CBCMode
from ._mode_ctr import CTRMode
from ._mode_ecb import ECBMode
from .AES import AES128
