"""Data models for album, video and publisher feeds."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Literal, TypeVar
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field

RecipientType = Literal["lnaddress", "node"]
ValueMethod = Literal["lnaddress", "keysend"]

DEFAULT_TRANSCRIPT_TYPE = "application/srt"
DEFAULT_ENCLOSURE_TYPE = "audio/mpeg"
DEFAULT_GENERATOR = "Tunefeed"

MUSIC_MEDIUMS = frozenset({"music", "musicL"})
KNOWN_MEDIUMS = frozenset(
    {
        "podcast",
        "podcastL",
        "music",
        "musicL",
        "video",
        "videoL",
        "film",
        "filmL",
        "audiobook",
        "audiobookL",
        "newsletter",
        "newsletterL",
        "blog",
        "blogL",
        "publisher",
        "publisherL",
        "course",
        "courseL",
    }
)

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_guid() -> str:
    return str(uuid4())


def is_music_medium(medium: str | None) -> bool:
    """Return True if the medium is one of the music mediums."""
    return medium in MUSIC_MEDIUMS


class PersonRole(BaseModel):
    """One credit held by a person (e.g. group "music", role "vocalist")."""

    group: str = "music"
    role: str = "band"


class Person(BaseModel):
    """A contributor with one or more roles.

    The wire format has no way to group roles, so a person with several roles
    becomes several ``<podcast:person>`` tags (see ``tunefeed.feed.persons``).
    """

    name: str = ""
    href: str | None = None
    img: str | None = None
    roles: list[PersonRole] = Field(default_factory=lambda: [PersonRole()], min_length=1)


class ValueRecipient(BaseModel):
    """A single payee in a value block."""

    name: str = ""
    address: str = ""
    split: int = Field(default=0, ge=0)
    type: RecipientType = "node"
    fee: bool = False
    custom_key: str | None = None
    custom_value: str | None = None


class ValueBlock(BaseModel):
    """Lightning payment split for a channel or a track."""

    type: Literal["lightning"] = "lightning"
    suggested: str | None = None
    recipients: list[ValueRecipient] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def method(self) -> ValueMethod:
        """Payment method, derived from recipient types."""
        if any(r.type == "lnaddress" for r in self.recipients):
            return "lnaddress"
        return "keysend"


class Funding(BaseModel):
    """A funding link; an empty url means no funding tag."""

    url: str = ""
    text: str = ""


class RemoteItem(BaseModel):
    """Reference to another feed or item (publisher catalog entry)."""

    feed_guid: str | None = None
    feed_url: str | None = None
    item_guid: str | None = None
    medium: str | None = None
    title: str | None = None


class PublisherReference(BaseModel):
    """Back-pointer from an album to the publisher feed that owns it."""

    feed_guid: str | None = None
    feed_url: str | None = None

    @property
    def is_set(self) -> bool:
        return bool(self.feed_guid or self.feed_url)


class ExtensionElement(BaseModel):
    """An element the codec does not interpret, kept so it survives a round trip.

    Attributes:
        tag: Element name in ElementTree notation (``{namespace-uri}local`` or ``local``)
        attributes: Attribute values keyed the same way as ``tag``
        text: Text content, if any
        children: Nested elements in document order
        tail: Text following the element inside its parent (mixed content)
    """

    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    text: str | None = None
    children: list[ExtensionElement] = Field(default_factory=list)
    tail: str | None = None


class Inherited(BaseModel):
    """Marker: the track uses its album's data."""

    kind: Literal["inherited"] = "inherited"


class Override(BaseModel, Generic[T]):
    """The track carries its own data in place of the album's."""

    kind: Literal["override"] = "override"
    data: T


PersonsOverride = Override[list[Person]]
ValueOverride = Override[ValueBlock]


class Track(BaseModel):
    """A single playable item in an album or video feed."""

    title: str = ""
    description: str | None = None
    pub_date: datetime = Field(default_factory=_utc_now)
    guid: str = Field(default_factory=_new_guid)
    guid_is_permalink: bool = False
    transcript_url: str | None = None
    transcript_type: str = DEFAULT_TRANSCRIPT_TYPE
    track_art_url: str | None = None
    enclosure_url: str = ""
    enclosure_length: int = Field(default=0, ge=0)
    enclosure_type: str = DEFAULT_ENCLOSURE_TYPE
    duration: str = "00:00:00"
    track_number: int = Field(default=1, ge=1)
    episode: int | None = None
    explicit: bool = False
    persons: Inherited | PersonsOverride = Field(
        default_factory=Inherited, discriminator="kind"
    )
    value: Inherited | ValueOverride = Field(default_factory=Inherited, discriminator="kind")
    extensions: list[ExtensionElement] = Field(default_factory=list)

    @property
    def overrides_persons(self) -> bool:
        return isinstance(self.persons, Override)

    @property
    def overrides_value(self) -> bool:
        return isinstance(self.value, Override)


class ChannelBase(BaseModel):
    """Channel-level fields shared by album and publisher feeds."""

    title: str = ""
    author: str = ""
    description: str = ""
    link: str | None = None
    language: str = "en"
    generator: str = DEFAULT_GENERATOR
    pub_date: datetime = Field(default_factory=_utc_now)
    last_build_date: datetime = Field(default_factory=_utc_now)
    locked: bool = False
    locked_owner: str | None = None
    podcast_guid: str = Field(default_factory=_new_guid)
    categories: list[str] = Field(default_factory=list)
    keywords: str | None = None
    location: str | None = None
    managing_editor: str | None = None
    web_master: str | None = None
    image_url: str | None = None
    image_title: str | None = None
    image_description: str | None = None
    explicit: bool = False
    owner_name: str | None = None
    owner_email: str | None = None
    persons: list[Person] = Field(default_factory=list)
    value: ValueBlock = Field(default_factory=ValueBlock)
    funding: list[Funding] = Field(default_factory=list)
    extensions: list[ExtensionElement] = Field(default_factory=list)
    namespaces: dict[str, str] = Field(default_factory=dict)


class Album(ChannelBase):
    """An album (or video collection) feed with its tracks."""

    medium: str = "music"
    publisher: PublisherReference | None = None
    tracks: list[Track] = Field(default_factory=list)


class PublisherFeed(ChannelBase):
    """A publisher catalog: a feed whose items reference other feeds."""

    medium: Literal["publisher"] = "publisher"
    remote_items: list[RemoteItem] = Field(default_factory=list)
