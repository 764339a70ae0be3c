"""RSS generation for album, video and publisher feeds.

Every emitter is a pure function returning XML text (possibly empty) at a
given indentation level. Optional data that is missing is left out rather
than emitted as an empty tag; nothing here raises on incomplete input.
"""

import logging

from tunefeed.feed.dates import format_rfc822
from tunefeed.feed.escape import escape_xml
from tunefeed.feed.extensions import INDENT, render_extension
from tunefeed.feed.inheritance import effective_artwork, episode_number
from tunefeed.feed.models import (
    Album,
    ChannelBase,
    Funding,
    Override,
    Person,
    PublisherFeed,
    PublisherReference,
    RemoteItem,
    Track,
    ValueBlock,
    ValueRecipient,
)
from tunefeed.feed.namespaces import STANDARD_NAMESPACES
from tunefeed.feed.persons import fan_out

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _indent(level: int) -> str:
    return INDENT * level


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _namespace_prefixes(feed: ChannelBase) -> dict[str, str]:
    """Namespace uri -> prefix for everything declared on the <rss> root."""
    prefixes = {
        uri: prefix for prefix, uri in feed.namespaces.items() if prefix not in STANDARD_NAMESPACES
    }
    prefixes.update({uri: prefix for prefix, uri in STANDARD_NAMESPACES.items()})
    return prefixes


def person_xml(person: Person, level: int) -> str:
    """One <podcast:person> line per role."""
    lines = []
    for tag in fan_out(person):
        attrs = []
        if tag.href:
            attrs.append(f'href="{escape_xml(tag.href)}"')
        if tag.img:
            attrs.append(f'img="{escape_xml(tag.img)}"')
        attrs.append(f'group="{escape_xml(tag.group)}"')
        attrs.append(f'role="{escape_xml(tag.role)}"')
        lines.append(
            f"{_indent(level)}<podcast:person {' '.join(attrs)}>"
            f"{escape_xml(tag.name)}</podcast:person>"
        )
    return "\n".join(lines)


def recipient_xml(recipient: ValueRecipient, level: int) -> str:
    attrs = [
        f'name="{escape_xml(recipient.name)}"',
        f'address="{escape_xml(recipient.address)}"',
        f'split="{recipient.split}"',
        f'type="{escape_xml(recipient.type)}"',
    ]
    if recipient.fee:
        attrs.append('fee="true"')
    if recipient.custom_key:
        attrs.append(f'customKey="{escape_xml(recipient.custom_key)}"')
    if recipient.custom_value:
        attrs.append(f'customValue="{escape_xml(recipient.custom_value)}"')
    return f"{_indent(level)}<podcast:valueRecipient {' '.join(attrs)} />"


def value_xml(value: ValueBlock, level: int) -> str:
    """Value block with its recipients in stored order; empty if no recipients."""
    if not value.recipients:
        return ""

    attrs = [f'type="{escape_xml(value.type)}"', f'method="{value.method}"']
    if value.suggested:
        attrs.append(f'suggested="{escape_xml(value.suggested)}"')

    lines = [f"{_indent(level)}<podcast:value {' '.join(attrs)}>"]
    lines.extend(recipient_xml(r, level + 1) for r in value.recipients)
    lines.append(f"{_indent(level)}</podcast:value>")
    return "\n".join(lines)


def funding_xml(funding: Funding, level: int) -> str:
    if not funding.url:
        return ""
    return (
        f'{_indent(level)}<podcast:funding url="{escape_xml(funding.url)}">'
        f"{escape_xml(funding.text)}</podcast:funding>"
    )


def remote_item_xml(item: RemoteItem, level: int) -> str:
    attrs = []
    if item.feed_guid:
        attrs.append(f'feedGuid="{escape_xml(item.feed_guid)}"')
    if item.feed_url:
        attrs.append(f'feedUrl="{escape_xml(item.feed_url)}"')
    if item.item_guid:
        attrs.append(f'itemGuid="{escape_xml(item.item_guid)}"')
    if item.medium:
        attrs.append(f'medium="{escape_xml(item.medium)}"')

    head = " ".join(["podcast:remoteItem", *attrs])
    if item.title:
        return f"{_indent(level)}<{head}>{escape_xml(item.title)}</podcast:remoteItem>"
    return f"{_indent(level)}<{head} />"


def publisher_xml(publisher: PublisherReference, level: int) -> str:
    """Publisher back-reference; the nested remote item is always medium="publisher"."""
    if not publisher.is_set:
        return ""

    attrs = ['medium="publisher"']
    if publisher.feed_guid:
        attrs.append(f'feedGuid="{escape_xml(publisher.feed_guid)}"')
    if publisher.feed_url:
        attrs.append(f'feedUrl="{escape_xml(publisher.feed_url)}"')

    return "\n".join(
        [
            f"{_indent(level)}<podcast:publisher>",
            f"{_indent(level + 1)}<podcast:remoteItem {' '.join(attrs)} />",
            f"{_indent(level)}</podcast:publisher>",
        ]
    )


def track_xml(track: Track, album: Album, level: int, prefixes: dict[str, str] | None = None) -> str:
    """Render one <item>.

    Artwork falls back to the album image. Persons and value are written only
    when the track overrides them; an inheriting track picks up the channel-level
    blocks, so editing the album changes what the track resolves to without
    touching the track itself.
    """
    inner = _indent(level + 1)
    lines = [f"{_indent(level)}<item>", f"{inner}<title>{escape_xml(track.title)}</title>"]

    if track.description:
        lines.append(f"{inner}<description>{escape_xml(track.description)}</description>")

    lines.append(f"{inner}<pubDate>{format_rfc822(track.pub_date)}</pubDate>")
    lines.append(
        f'{inner}<guid isPermaLink="{_bool(track.guid_is_permalink)}">{escape_xml(track.guid)}</guid>'
    )

    if track.transcript_url:
        lines.append(
            f'{inner}<podcast:transcript url="{escape_xml(track.transcript_url)}" '
            f'type="{escape_xml(track.transcript_type)}" />'
        )

    artwork = effective_artwork(track, album)
    if artwork:
        lines.append(f'{inner}<itunes:image href="{escape_xml(artwork)}" />')
        lines.append(f'{inner}<podcast:images srcset="{escape_xml(artwork)}" />')

    lines.append(
        f'{inner}<enclosure url="{escape_xml(track.enclosure_url)}" '
        f'length="{track.enclosure_length}" type="{escape_xml(track.enclosure_type)}"/>'
    )
    lines.append(f"{inner}<itunes:duration>{escape_xml(track.duration)}</itunes:duration>")
    lines.append(f"{inner}<podcast:season>1</podcast:season>")
    lines.append(f"{inner}<podcast:episode>{episode_number(track)}</podcast:episode>")
    lines.append(f"{inner}<itunes:explicit>{_bool(track.explicit)}</itunes:explicit>")

    if isinstance(track.persons, Override):
        for person in track.persons.data:
            lines.append(person_xml(person, level + 1))

    if isinstance(track.value, Override):
        value = value_xml(track.value.data, level + 1)
        if value:
            lines.append(value)

    for extension in track.extensions:
        lines.append(render_extension(extension, level + 1, prefixes or _namespace_prefixes(album)))

    lines.append(f"{_indent(level)}</item>")
    return "\n".join(lines)


def _channel_lines(feed: ChannelBase, medium: str) -> list[str]:
    """Channel fields from title through funding, shared by both feed kinds."""
    i2, i3 = _indent(2), _indent(3)
    lines = [
        f"{i2}<title>{escape_xml(feed.title)}</title>",
        f"{i2}<itunes:author>{escape_xml(feed.author)}</itunes:author>",
        f"{i2}<description>",
        f"{i3}{escape_xml(feed.description)}",
        f"{i2}</description>",
    ]

    if feed.link:
        lines.append(f"{i2}<link>{escape_xml(feed.link)}</link>")

    lines.append(f"{i2}<language>{escape_xml(feed.language)}</language>")
    lines.append(f"{i2}<generator>{escape_xml(feed.generator)}</generator>")
    lines.append(f"{i2}<pubDate>{format_rfc822(feed.pub_date)}</pubDate>")
    lines.append(f"{i2}<lastBuildDate>{format_rfc822(feed.last_build_date)}</lastBuildDate>")

    if feed.locked and feed.locked_owner:
        lines.append(
            f'{i2}<podcast:locked owner="{escape_xml(feed.locked_owner)}">yes</podcast:locked>'
        )
    if feed.podcast_guid:
        lines.append(f"{i2}<podcast:guid>{escape_xml(feed.podcast_guid)}</podcast:guid>")

    for category in feed.categories:
        lines.append(f'{i2}<itunes:category text="{escape_xml(category)}" />')

    if feed.keywords:
        lines.append(f"{i2}<itunes:keywords>{escape_xml(feed.keywords)}</itunes:keywords>")
    if feed.location:
        lines.append(f"{i2}<podcast:location>{escape_xml(feed.location)}</podcast:location>")
    if feed.managing_editor:
        lines.append(f"{i2}<managingEditor>{escape_xml(feed.managing_editor)}</managingEditor>")
    if feed.web_master:
        lines.append(f"{i2}<webMaster>{escape_xml(feed.web_master)}</webMaster>")

    if feed.image_url:
        lines.append(f"{i2}<image>")
        lines.append(f"{i3}<url>{escape_xml(feed.image_url)}</url>")
        lines.append(f"{i3}<title>{escape_xml(feed.image_title or feed.title)}</title>")
        if feed.image_description:
            lines.append(f"{i3}<description>{escape_xml(feed.image_description)}</description>")
        lines.append(f"{i2}</image>")
        lines.append(f'{i2}<itunes:image href="{escape_xml(feed.image_url)}" />')

    lines.append(f"{i2}<podcast:medium>{escape_xml(medium)}</podcast:medium>")
    lines.append(f"{i2}<itunes:explicit>{_bool(feed.explicit)}</itunes:explicit>")

    if feed.owner_name or feed.owner_email:
        lines.append(f"{i2}<itunes:owner>")
        if feed.owner_name:
            lines.append(f"{i3}<itunes:name>{escape_xml(feed.owner_name)}</itunes:name>")
        if feed.owner_email:
            lines.append(f"{i3}<itunes:email>{escape_xml(feed.owner_email)}</itunes:email>")
        lines.append(f"{i2}</itunes:owner>")

    for person in feed.persons:
        lines.append(person_xml(person, 2))

    value = value_xml(feed.value, 2)
    if value:
        lines.append(value)

    for funding in feed.funding:
        xml = funding_xml(funding, 2)
        if xml:
            lines.append(xml)

    return lines


def _document(feed: ChannelBase, channel_lines: list[str]) -> str:
    declarations = [f'xmlns:{prefix}="{escape_xml(uri)}"' for prefix, uri in STANDARD_NAMESPACES.items()]
    declarations.extend(
        f'xmlns:{prefix}="{escape_xml(uri)}"'
        for prefix, uri in feed.namespaces.items()
        if prefix not in STANDARD_NAMESPACES
    )
    return "\n".join(
        [
            XML_DECLARATION,
            f'<rss {" ".join(declarations)} version="2.0">',
            f"{_indent(1)}<channel>",
            *channel_lines,
            f"{_indent(1)}</channel>",
            "</rss>",
        ]
    )


def generate_album_feed(album: Album) -> str:
    """Generate the complete RSS document for an album or video feed.

    Args:
        album: Album to render

    Returns:
        XML text, ready to be written out or uploaded
    """
    prefixes = _namespace_prefixes(album)
    lines = _channel_lines(album, album.medium)

    if album.publisher is not None:
        xml = publisher_xml(album.publisher, 2)
        if xml:
            lines.append(xml)

    lines.extend(render_extension(e, 2, prefixes) for e in album.extensions)
    lines.extend(track_xml(track, album, 2, prefixes) for track in album.tracks)

    logger.debug("Rendered album feed '%s' with %d tracks", album.title, len(album.tracks))
    return _document(album, lines)


def generate_publisher_feed(publisher: PublisherFeed) -> str:
    """Generate the complete RSS document for a publisher catalog.

    The medium is always "publisher" and remote items take the place of tracks.
    """
    prefixes = _namespace_prefixes(publisher)
    lines = _channel_lines(publisher, "publisher")
    lines.extend(render_extension(e, 2, prefixes) for e in publisher.extensions)
    lines.extend(remote_item_xml(item, 2) for item in publisher.remote_items)

    logger.debug(
        "Rendered publisher feed '%s' with %d remote items",
        publisher.title,
        len(publisher.remote_items),
    )
    return _document(publisher, lines)
