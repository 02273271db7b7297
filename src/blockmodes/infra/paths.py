from importlib.resources import files

from platformdirs import user_config_path

PACKAGE_NAME = "blockmodes"

# Per-user settings (e.g. ~/.config/blockmodes/settings.json)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)
SETTING_PATH = USER_CONFIG_DIR / "settings.json"

# Sample settings shipped inside the package
DEFAULT_CONFIG_FILE = files("blockmodes.resources").joinpath(
    "config", "settings.sample.toml"
)
