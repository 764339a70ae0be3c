"""Utility functions and helpers for Tunefeed."""

from tunefeed.utils.errors import (
    ConfigError,
    DocumentError,
    FeedError,
    FeedParseError,
    InvalidConfigError,
    MissingFieldError,
    TunefeedError,
)
from tunefeed.utils.paths import get_config_dir, get_config_file

__all__ = [
    # Errors
    "TunefeedError",
    "ConfigError",
    "InvalidConfigError",
    "FeedError",
    "FeedParseError",
    "MissingFieldError",
    "DocumentError",
    # Paths
    "get_config_dir",
    "get_config_file",
]
