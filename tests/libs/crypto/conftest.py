from __future__ import annotations

import pytest

from .utils import XorCipher


@pytest.fixture
def xor_cipher() -> XorCipher:
    return XorCipher()
