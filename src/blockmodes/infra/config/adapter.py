from __future__ import annotations

from typing import Any

from blockmodes.errors import ConfigError
from blockmodes.libs.crypto.blocks import OVERFLOW_POLICIES
from blockmodes.libs.crypto.cipher.AES import MODE_NAMES
from blockmodes.schemas import ModeConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigAdapter:
    """Typed accessor over a loaded settings mapping.

    Values are read from the ``cipher`` and ``debug`` tables and fall back to
    built-in defaults when absent.

    Args:
        config (dict[str, Any]): Loaded configuration mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_mode_config(self) -> ModeConfig:
        """Build a validated ModeConfig from the ``cipher`` table.

        Returns:
            ModeConfig: Resolved mode configuration.

        Raises:
            ConfigError: If any value is of the wrong type or out of range.
        """
        cfg = self._section("cipher")

        mode = cfg.get("mode", "cbc")
        if not isinstance(mode, str) or mode.lower() not in MODE_NAMES:
            raise ConfigError(
                f"cipher.mode must be one of {sorted(MODE_NAMES)}, got {mode!r}"
            )

        max_workers = cfg.get("max_workers", 1)
        if isinstance(max_workers, bool) or not isinstance(max_workers, int):
            raise ConfigError(f"cipher.max_workers must be an int, got {max_workers!r}")
        if max_workers < 1:
            raise ConfigError("cipher.max_workers must be at least 1")

        overflow = cfg.get("counter_overflow", "error")
        if overflow not in OVERFLOW_POLICIES:
            raise ConfigError(
                f"cipher.counter_overflow must be one of {list(OVERFLOW_POLICIES)}, "
                f"got {overflow!r}"
            )

        return ModeConfig(
            mode=mode.lower(),
            max_workers=max_workers,
            counter_overflow=overflow,
        )

    def get_log_level(self) -> str:
        """Return the configured logging level name.

        Returns:
            str: Upper-cased level name, ``"INFO"`` if missing.

        Raises:
            ConfigError: If the value is not a standard logging level name.
        """
        level = self._section("debug").get("log_level") or "INFO"
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"debug.log_level must be one of {list(LOG_LEVELS)}, got {level!r}"
            )
        return level.upper()

    def _section(self, name: str) -> dict[str, Any]:
        cfg = self._config.get(name) or {}
        if not isinstance(cfg, dict):
            raise ConfigError(f"{name} section must be a table")
        return cfg
