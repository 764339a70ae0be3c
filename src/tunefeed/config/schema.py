"""Configuration schema models using Pydantic."""

from typing import Literal

from pydantic import BaseModel

from tunefeed.feed.models import DEFAULT_GENERATOR

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class GlobalConfig(BaseModel):
    """Global Tunefeed configuration."""

    version: str = "1"
    log_level: LogLevel = "INFO"

    # New documents
    default_language: str = "en"
    default_generator: str = DEFAULT_GENERATOR

    # Import
    warn_non_music_medium: bool = True
    skip_invalid_items: bool = False
