"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass
class ModeConfig:
    """Configuration for building a block-cipher mode.

    Attributes:
        mode: Mode name, one of ``"ecb"``, ``"cbc"`` or ``"ctr"``.
        max_workers: Threads used for blocks without a chaining dependency.
        counter_overflow: CTR behaviour when the 64-bit counter runs out,
            ``"error"`` or ``"wrap"``.
    """

    mode: str = "cbc"
    max_workers: int = 1
    counter_overflow: Literal["error", "wrap"] = "error"
