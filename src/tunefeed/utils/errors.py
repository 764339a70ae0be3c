"""Custom exceptions for Tunefeed."""


class TunefeedError(Exception):
    """Base exception for all Tunefeed errors."""

    pass


class ConfigError(TunefeedError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class FeedError(TunefeedError):
    """Feed document errors."""

    pass


class FeedParseError(FeedError):
    """RSS feed parsing errors."""

    pass


class MissingFieldError(FeedParseError):
    """An item lacks a field required to build a track.

    Attributes:
        item_index: 1-based position of the offending <item> in the channel
        field: Name of the missing element (e.g. "title", "enclosure")
    """

    def __init__(self, item_index: int, field: str) -> None:
        self.item_index = item_index
        self.field = field
        super().__init__(f"Item {item_index} is missing required field '{field}'")


class DocumentError(FeedError):
    """Feed document could not be read or written."""

    pass
