"""Platform-specific locations for Tunefeed files."""

from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "tunefeed"


def get_config_dir() -> Path:
    """Get the configuration directory (honours XDG_CONFIG_HOME on Linux)."""
    return Path(user_config_dir(APP_NAME))


def get_config_file() -> Path:
    """Get path to the global config.yaml."""
    return get_config_dir() / "config.yaml"
