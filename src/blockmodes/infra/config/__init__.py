"""
Loading and adapting settings files.
"""

__all__ = [
    "copy_default_config",
    "find_settings_file",
    "load_config",
    "save_config",
    "ConfigAdapter",
]

from .adapter import ConfigAdapter
from .file_io import (
    copy_default_config,
    find_settings_file,
    load_config,
    save_config,
)
