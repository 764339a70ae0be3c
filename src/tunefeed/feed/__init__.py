"""Feed model, RSS generation and RSS parsing for Tunefeed."""

from tunefeed.feed.comparison import persons_equal, value_blocks_equal, value_blocks_strict_equal
from tunefeed.feed.documents import load_document, save_document
from tunefeed.feed.escape import escape_xml
from tunefeed.feed.factory import (
    add_person,
    add_recipient,
    create_empty_album,
    create_empty_person,
    create_empty_publisher_feed,
    create_empty_recipient,
    create_empty_track,
    create_empty_video_album,
    create_support_recipients,
    detect_address_type,
    is_support_recipient,
)
from tunefeed.feed.generator import generate_album_feed, generate_publisher_feed
from tunefeed.feed.models import (
    Album,
    ExtensionElement,
    Funding,
    Inherited,
    Override,
    Person,
    PersonRole,
    PersonsOverride,
    PublisherFeed,
    PublisherReference,
    RemoteItem,
    Track,
    ValueBlock,
    ValueOverride,
    ValueRecipient,
)
from tunefeed.feed.parser import FeedParser, parse_feed, parse_publisher_feed

__all__ = [
    # Models
    "Album",
    "PublisherFeed",
    "Track",
    "Person",
    "PersonRole",
    "ValueBlock",
    "ValueRecipient",
    "Funding",
    "RemoteItem",
    "PublisherReference",
    "ExtensionElement",
    "Inherited",
    "Override",
    "PersonsOverride",
    "ValueOverride",
    # Codec
    "escape_xml",
    "generate_album_feed",
    "generate_publisher_feed",
    "FeedParser",
    "parse_feed",
    "parse_publisher_feed",
    # Comparison
    "value_blocks_equal",
    "value_blocks_strict_equal",
    "persons_equal",
    # Editing
    "create_empty_album",
    "create_empty_video_album",
    "create_empty_publisher_feed",
    "create_empty_track",
    "create_empty_person",
    "create_empty_recipient",
    "create_support_recipients",
    "detect_address_type",
    "is_support_recipient",
    "add_recipient",
    "add_person",
    # Documents
    "load_document",
    "save_document",
]
