"""Configuration management for Tunefeed."""

from tunefeed.config.manager import ConfigManager
from tunefeed.config.schema import GlobalConfig

__all__ = ["ConfigManager", "GlobalConfig"]
