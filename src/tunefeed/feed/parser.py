"""RSS feed parsing back into album and publisher models."""

import io
import logging
import xml.etree.ElementTree as ET  # nosec B405 - parsing goes through defusedxml
from datetime import datetime
from typing import Any

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, iterparse

from tunefeed.feed.comparison import persons_equal, value_blocks_equal
from tunefeed.feed.dates import parse_rfc822
from tunefeed.feed.extensions import from_element
from tunefeed.feed.factory import detect_address_type
from tunefeed.feed.models import (
    Album,
    ExtensionElement,
    Funding,
    Inherited,
    Person,
    PersonsOverride,
    PublisherFeed,
    PublisherReference,
    RemoteItem,
    Track,
    ValueBlock,
    ValueOverride,
    ValueRecipient,
)
from tunefeed.feed.namespaces import (
    STANDARD_NAMESPACES,
    canonical_tag,
    canonical_uri,
    itunes,
    podcast,
)
from tunefeed.feed.persons import PersonTag, fan_in
from tunefeed.utils.errors import FeedParseError, MissingFieldError

logger = logging.getLogger(__name__)

# Channel elements whose text maps straight onto a model field
_CHANNEL_TEXT_FIELDS = {
    "title": "title",
    "description": "description",
    itunes("author"): "author",
    "link": "link",
    "language": "language",
    "generator": "generator",
    podcast("guid"): "podcast_guid",
    itunes("keywords"): "keywords",
    podcast("location"): "location",
    "managingEditor": "managing_editor",
    "webMaster": "web_master",
    podcast("medium"): "medium",
}

_TRUE_VALUES = {"true", "yes", "explicit"}


def _text(element: ET.Element | None) -> str:
    if element is None or not element.text:
        return ""
    return element.text.strip()


def _attr(element: ET.Element, name: str) -> str | None:
    value = element.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _int(value: str | None, default: int = 0) -> int:
    if not value:
        return default
    try:
        return int(float(value.strip()))
    except ValueError:
        return default


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def _children(element: ET.Element):
    return (child for child in element if isinstance(child.tag, str))


def _tokenize(xml: str | bytes) -> tuple[ET.Element, dict[str, str]]:
    """Parse XML text into an element tree and the prefixes declared on its root.

    Declarations further down the tree stay with the elements that carry them.
    Elements in an alias of the podcast or itunes namespace are renamed into
    the canonical one, so the rest of the parser only sees canonical names.

    Raises:
        FeedParseError: If the document is not well-formed or is refused by defusedxml
    """
    data = xml.encode("utf-8") if isinstance(xml, str) else xml
    namespaces: dict[str, str] = {}
    root: ET.Element | None = None
    try:
        for event, item in iterparse(io.BytesIO(data), events=("start", "start-ns")):
            if event == "start-ns":
                prefix, uri = item
                if (
                    root is None
                    and prefix
                    and canonical_uri(uri) not in STANDARD_NAMESPACES.values()
                ):
                    namespaces.setdefault(prefix, uri)
                continue
            item.tag = canonical_tag(item.tag)
            if root is None:
                root = item
    except (ParseError, DefusedXmlException) as e:
        raise FeedParseError(f"Malformed feed XML: {e}") from e

    if root is None:
        raise FeedParseError("Malformed feed XML: document is empty")
    return root, namespaces


class _Channel:
    """Everything read from a <channel> before items are turned into tracks."""

    def __init__(self) -> None:
        self.fields: dict[str, Any] = {}
        self.person_tags: list[PersonTag] = []
        self.value: ValueBlock | None = None
        self.funding: list[Funding] = []
        self.categories: list[str] = []
        self.publisher: PublisherReference | None = None
        self.items: list[ET.Element] = []
        self.remote_items: list[ET.Element] = []
        self.extensions: list[ExtensionElement] = []


class FeedParser:
    """Parses album, video and publisher RSS feeds into models.

    Tracks whose persons or value block match the channel's are decoded as
    inheriting them; anything else becomes a track-level override. Elements
    the parser does not interpret are kept as extensions.
    """

    def __init__(self, skip_invalid_items: bool = False) -> None:
        """Initialize the feed parser.

        Args:
            skip_invalid_items: Log and skip items missing a title or enclosure
                instead of raising MissingFieldError.
        """
        self.skip_invalid_items = skip_invalid_items

    def parse_album(self, xml: str | bytes) -> Album:
        """Parse an album or video feed.

        The channel medium is passed through as-is, whatever it is.

        Args:
            xml: Feed XML

        Returns:
            Reconstructed Album

        Raises:
            FeedParseError: If the XML is malformed or not an RSS feed
            MissingFieldError: If an item lacks a title or enclosure URL
                (unless skip_invalid_items is set)
        """
        channel_el, namespaces = self._channel_element(xml)
        channel = self._read_channel(channel_el, collect_remote_items=False)

        persons = fan_in(channel.person_tags)
        value = channel.value or ValueBlock()
        image_url = channel.fields.get("image_url")
        default_date = channel.fields.get("pub_date")

        tracks: list[Track] = []
        for index, item in enumerate(channel.items, start=1):
            try:
                track = self._read_item(
                    item,
                    index=index,
                    track_number=len(tracks) + 1,
                    album_persons=persons,
                    album_value=value,
                    album_image_url=image_url,
                    default_date=default_date,
                )
            except MissingFieldError as e:
                if not self.skip_invalid_items:
                    raise
                logger.warning("Skipping item: %s", e)
                continue
            tracks.append(track)

        album = Album(
            **channel.fields,
            persons=persons,
            value=value,
            funding=channel.funding,
            categories=channel.categories,
            publisher=channel.publisher,
            tracks=tracks,
            extensions=channel.extensions,
            namespaces=namespaces,
        )
        logger.info("Parsed feed '%s' with %d tracks", album.title, len(tracks))
        return album

    def parse_publisher(self, xml: str | bytes) -> PublisherFeed:
        """Parse a publisher feed; channel-level remote items become its catalog.

        Raises:
            FeedParseError: If the XML is malformed or not an RSS feed
        """
        channel_el, namespaces = self._channel_element(xml)
        channel = self._read_channel(channel_el, collect_remote_items=True)
        channel.fields.pop("medium", None)

        extensions = channel.extensions + [from_element(item) for item in channel.items]
        feed = PublisherFeed(
            **channel.fields,
            persons=fan_in(channel.person_tags),
            value=channel.value or ValueBlock(),
            funding=channel.funding,
            categories=channel.categories,
            remote_items=[self._remote_item(el) for el in channel.remote_items],
            extensions=extensions,
            namespaces=namespaces,
        )
        logger.info(
            "Parsed publisher feed '%s' with %d remote items", feed.title, len(feed.remote_items)
        )
        return feed

    def _channel_element(self, xml: str | bytes) -> tuple[ET.Element, dict[str, str]]:
        root, namespaces = _tokenize(xml)
        if root.tag != "rss":
            raise FeedParseError(f"Not an RSS feed (root element: {root.tag})")
        channel = root.find("channel")
        if channel is None:
            raise FeedParseError("RSS feed missing <channel> element")
        return channel, namespaces

    def _read_channel(self, element: ET.Element, collect_remote_items: bool) -> _Channel:
        channel = _Channel()
        fields = channel.fields
        itunes_image: ET.Element | None = None

        for child in _children(element):
            tag = child.tag
            field = _CHANNEL_TEXT_FIELDS.get(tag)
            if field is not None and field not in fields:
                text = _text(child)
                if text:
                    fields[field] = text
            elif tag in ("pubDate", "lastBuildDate"):
                parsed = parse_rfc822(child.text)
                if parsed is not None:
                    fields["pub_date" if tag == "pubDate" else "last_build_date"] = parsed
            elif tag == podcast("locked"):
                fields["locked"] = _text(child).lower() == "yes"
                fields["locked_owner"] = _attr(child, "owner")
            elif tag == itunes("category"):
                text = _attr(child, "text")
                if text:
                    channel.categories.append(text)
            elif tag == "image" and "image_url" not in fields:
                fields["image_url"] = _text(child.find("url")) or None
                fields["image_title"] = _text(child.find("title")) or None
                fields["image_description"] = _text(child.find("description")) or None
            elif tag == itunes("image") and itunes_image is None:
                itunes_image = child
            elif tag == itunes("explicit"):
                fields["explicit"] = _flag(child.text)
            elif tag == itunes("owner"):
                fields["owner_name"] = _text(child.find(itunes("name"))) or None
                fields["owner_email"] = _text(child.find(itunes("email"))) or None
            elif tag == podcast("person"):
                channel.person_tags.append(self._person_tag(child))
            elif tag == podcast("value") and channel.value is None and self._is_lightning(child):
                channel.value = self._value_block(child)
            elif tag == podcast("funding"):
                channel.funding.append(
                    Funding(url=_attr(child, "url") or "", text=_text(child))
                )
            elif (
                tag == podcast("publisher")
                and channel.publisher is None
                and not collect_remote_items
                and self._publisher(child) is not None
            ):
                channel.publisher = self._publisher(child)
            elif tag == "item":
                channel.items.append(child)
            elif tag == podcast("remoteItem") and collect_remote_items:
                channel.remote_items.append(child)
            else:
                channel.extensions.append(from_element(child))

        if itunes_image is not None:
            href = _attr(itunes_image, "href")
            if not fields.get("image_url"):
                fields["image_url"] = href
            elif href != fields["image_url"]:
                channel.extensions.append(from_element(itunes_image))

        # The generator falls back to the channel title for the image title
        if fields.get("image_title") and fields["image_title"] == fields.get("title"):
            fields["image_title"] = None

        if channel.extensions:
            logger.debug("Keeping %d unrecognised channel elements", len(channel.extensions))
        return channel

    def _read_item(
        self,
        item: ET.Element,
        index: int,
        track_number: int,
        album_persons: list[Person],
        album_value: ValueBlock,
        album_image_url: str | None,
        default_date: datetime | None,
    ) -> Track:
        fields: dict[str, Any] = {"track_number": track_number}
        person_tags: list[PersonTag] = []
        value: ValueBlock | None = None
        episode: int | None = None
        extensions: list[ExtensionElement] = []
        images: list[tuple[int, ET.Element]] = []

        for child in _children(item):
            tag = child.tag
            if tag == "title" and "title" not in fields:
                fields["title"] = _text(child)
            elif tag == "description" and "description" not in fields:
                fields["description"] = _text(child) or None
            elif tag == "pubDate":
                fields["pub_date"] = parse_rfc822(child.text)
            elif tag == "guid":
                fields["guid"] = _text(child) or None
                permalink = (child.get("isPermaLink") or "").strip().lower()
                fields["guid_is_permalink"] = permalink == "true"
            elif tag == podcast("transcript") and "transcript_url" not in fields:
                fields["transcript_url"] = _attr(child, "url")
                fields["transcript_type"] = _attr(child, "type")
            elif tag == itunes("image"):
                fields["track_art_url"] = _attr(child, "href")
            elif tag == podcast("images"):
                # Dropped below when it repeats the artwork
                images.append((len(extensions), child))
            elif tag == "enclosure" and "enclosure_url" not in fields:
                fields["enclosure_url"] = _attr(child, "url")
                fields["enclosure_length"] = max(_int(child.get("length")), 0)
                fields["enclosure_type"] = _attr(child, "type")
            elif tag == itunes("duration"):
                fields["duration"] = _text(child) or None
            elif tag == podcast("season"):
                # Always written as 1
                pass
            elif tag == podcast("episode"):
                episode = _int(child.text, default=track_number)
            elif tag == itunes("explicit"):
                fields["explicit"] = _flag(child.text)
            elif tag == podcast("person"):
                person_tags.append(self._person_tag(child))
            elif tag == podcast("value") and value is None and self._is_lightning(child):
                value = self._value_block(child)
            else:
                extensions.append(from_element(child))

        if not fields.get("title"):
            raise MissingFieldError(index, "title")
        if not fields.get("enclosure_url"):
            raise MissingFieldError(index, "enclosure")

        artwork = fields.get("track_art_url") or album_image_url
        for position, element in reversed(images):
            if (_attr(element, "srcset") or "") != (artwork or ""):
                extensions.insert(position, from_element(element))

        if fields.get("pub_date") is None:
            fields["pub_date"] = default_date
        if fields.get("track_art_url") and fields["track_art_url"] == album_image_url:
            fields["track_art_url"] = None
        if episode is not None and episode != track_number:
            fields["episode"] = episode

        # Model defaults stand in for anything absent
        fields = {key: val for key, val in fields.items() if val is not None}

        # Items without their own persons/value inherit the channel's; items
        # repeating the channel's blocks (as other generators write them) too.
        persons: Inherited | PersonsOverride = Inherited()
        if person_tags:
            track_persons = fan_in(person_tags)
            if not persons_equal(track_persons, album_persons):
                persons = PersonsOverride(data=track_persons)

        track_value: Inherited | ValueOverride = Inherited()
        if value is not None and not value_blocks_equal(value, album_value):
            track_value = ValueOverride(data=value)

        return Track(**fields, persons=persons, value=track_value, extensions=extensions)

    @staticmethod
    def _person_tag(element: ET.Element) -> PersonTag:
        return PersonTag(
            name=_text(element),
            href=_attr(element, "href"),
            img=_attr(element, "img"),
            group=_attr(element, "group") or "cast",
            role=_attr(element, "role") or "host",
        )

    @staticmethod
    def _is_lightning(element: ET.Element) -> bool:
        return (element.get("type") or "lightning").strip() == "lightning"

    @staticmethod
    def _value_block(element: ET.Element) -> ValueBlock:
        recipients = []
        for child in _children(element):
            if child.tag != podcast("valueRecipient"):
                continue
            address = _attr(child, "address") or ""
            recipient_type = _attr(child, "type")
            if recipient_type not in ("lnaddress", "node"):
                recipient_type = detect_address_type(address)
            recipients.append(
                ValueRecipient(
                    name=_attr(child, "name") or "",
                    address=address,
                    split=max(_int(child.get("split")), 0),
                    type=recipient_type,
                    fee=_flag(child.get("fee")),
                    custom_key=_attr(child, "customKey"),
                    custom_value=_attr(child, "customValue"),
                )
            )
        return ValueBlock(suggested=_attr(element, "suggested"), recipients=recipients)

    @staticmethod
    def _publisher(element: ET.Element) -> PublisherReference | None:
        remote = element.find(podcast("remoteItem"))
        if remote is None:
            return None
        reference = PublisherReference(
            feed_guid=_attr(remote, "feedGuid"), feed_url=_attr(remote, "feedUrl")
        )
        return reference if reference.is_set else None

    @staticmethod
    def _remote_item(element: ET.Element) -> RemoteItem:
        return RemoteItem(
            feed_guid=_attr(element, "feedGuid"),
            feed_url=_attr(element, "feedUrl"),
            item_guid=_attr(element, "itemGuid"),
            medium=_attr(element, "medium"),
            title=_text(element) or None,
        )


def parse_feed(xml: str | bytes, skip_invalid_items: bool = False) -> Album:
    """Parse album or video feed XML into an Album."""
    return FeedParser(skip_invalid_items=skip_invalid_items).parse_album(xml)


def parse_publisher_feed(xml: str | bytes) -> PublisherFeed:
    """Parse publisher feed XML into a PublisherFeed."""
    return FeedParser().parse_publisher(xml)
