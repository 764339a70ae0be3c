"""Default configuration values and file contents."""

import yaml

from tunefeed.config.schema import GlobalConfig

DEFAULT_GLOBAL_CONFIG = GlobalConfig()


def get_default_config_content() -> str:
    """YAML text written when no config file exists yet."""
    data = DEFAULT_GLOBAL_CONFIG.model_dump(mode="json")
    header = "# Tunefeed configuration\n"
    return header + yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
