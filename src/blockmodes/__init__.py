from .version import __version__ as __version__

__title__ = "blockmodes"
__description__ = "ECB, CBC and CTR modes of operation over AES-128."
__license__ = "Apache-2.0"

__all__ = [
    "BlockModeError",
    "CiphertextTooShort",
    "ConfigError",
    "CounterOverflow",
    "InvalidCiphertextLength",
    "InvalidKeyLength",
    "InvalidLength",
    "InvalidPadding",
    "cbc_decrypt",
    "cbc_encrypt",
    "ctr_decrypt",
    "ctr_encrypt",
    "ecb_decrypt",
    "ecb_encrypt",
    "new",
    "new_from_config",
    "new_from_settings",
]

from .api import (
    cbc_decrypt,
    cbc_encrypt,
    ctr_decrypt,
    ctr_encrypt,
    ecb_decrypt,
    ecb_encrypt,
    new_from_config,
    new_from_settings,
)
from .errors import (
    BlockModeError,
    CiphertextTooShort,
    ConfigError,
    CounterOverflow,
    InvalidCiphertextLength,
    InvalidKeyLength,
    InvalidLength,
    InvalidPadding,
)
from .libs.crypto.cipher.AES import new
