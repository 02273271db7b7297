"""
Reading and writing ``blockmodes`` settings files.

A settings file is a TOML or JSON document with optional ``[cipher]`` and
``[debug]`` tables; see the bundled ``settings.sample.toml``.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from blockmodes.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_FILENAMES = ("settings.toml", "settings.json")


def _candidates(config_path: str | Path | None) -> Iterator[Path]:
    """Yield settings locations in lookup order: explicit, cwd, per-user."""
    if config_path:
        yield Path(config_path).expanduser().resolve()
    cwd = Path.cwd()
    for name in LOCAL_FILENAMES:
        yield (cwd / name).resolve()
    yield SETTING_PATH


def find_settings_file(config_path: str | Path | None = None) -> Path | None:
    """Return the first existing settings file, or None.

    An explicit ``config_path`` that does not exist is logged and skipped.
    """
    for i, path in enumerate(_candidates(config_path)):
        if path.is_file():
            return path
        if i == 0 and config_path:
            logger.warning("Specified file not found: %s", path)
    return None


def _parse_settings(path: Path) -> dict[str, Any]:
    """Parse one settings file by extension.

    Raises:
        ValueError: If the extension is unsupported, parsing fails, or the
            document root is not a table.
    """
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            raise ValueError(f"Unsupported config file extension: {suffix}")
    except (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read settings from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Settings root must be a table in {path}")
    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Locate and parse the active settings file.

    Args:
        config_path: Optional explicit settings file. When missing, falls
            back to ``settings.toml`` / ``settings.json`` in the working
            directory, then to the per-user ``SETTING_PATH``.

    Returns:
        The parsed settings mapping.

    Raises:
        FileNotFoundError: If no settings file exists anywhere.
        ValueError: If the file cannot be parsed.
    """
    path = find_settings_file(config_path)
    if path is None:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _parse_settings(path)


def copy_default_config(target: Path) -> None:
    """Write the bundled sample settings to ``target``."""
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())


def save_config(
    config: dict[str, Any],
    output_path: str | Path = SETTING_PATH,
) -> Path:
    """Write settings as JSON and return the resolved path.

    Raises:
        OSError: If writing to disk fails.
    """
    output = Path(output_path).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        output.write_text(
            json.dumps(config, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as e:
        logger.error("Failed to write config JSON '%s': %s", output, e)
        raise

    logger.info("Configuration saved to JSON: %s", output)
    return output
