"""Constructors for new, empty feed entities."""

from tunefeed.feed.models import (
    Album,
    Person,
    PublisherFeed,
    RecipientType,
    Track,
    ValueBlock,
    ValueRecipient,
)

# Recipients offered as a voluntary 1% "support" split on new value blocks
SUPPORT_RECIPIENTS: tuple[ValueRecipient, ...] = (
    ValueRecipient(name="MSP 2.0", address="chadf@getalby.com", split=1, type="lnaddress"),
    ValueRecipient(
        name="Podcastindex.org", address="podcastindex@getalby.com", split=1, type="lnaddress"
    ),
)


def detect_address_type(address: str) -> RecipientType:
    """Lightning address (user@domain) or node pubkey."""
    return "lnaddress" if "@" in address else "node"


def create_support_recipients() -> list[ValueRecipient]:
    return [r.model_copy() for r in SUPPORT_RECIPIENTS]


def create_empty_person() -> Person:
    return Person()


def create_empty_recipient() -> ValueRecipient:
    return ValueRecipient(type="lnaddress")


def is_support_recipient(recipient: ValueRecipient) -> bool:
    """Whether a recipient is one of the preset support recipients (name and address)."""
    return any(
        recipient.name == r.name and recipient.address == r.address for r in SUPPORT_RECIPIENTS
    )


def add_recipient(value: ValueBlock, recipient: ValueRecipient | None = None) -> ValueBlock:
    """Return a copy of a value block with one more recipient.

    Adding a recipient with an address drops empty placeholder recipients.
    The first real recipient that is not a support recipient also brings in
    the support recipients.

    Args:
        value: Block to add to (left unchanged)
        recipient: Recipient to add; an empty one when omitted

    Returns:
        The new value block
    """
    if recipient is None:
        recipient = create_empty_recipient()

    current = value.recipients
    kept = [r for r in current if r.address] if recipient.address else list(current)
    recipients = [*kept, recipient]

    has_user_recipients = any(r.address and not is_support_recipient(r) for r in current)
    if recipient.address and not is_support_recipient(recipient) and not has_user_recipients:
        recipients.extend(create_support_recipients())

    return value.model_copy(update={"recipients": [r.model_copy() for r in recipients]})


def add_person(persons: list[Person], person: Person | None = None) -> list[Person]:
    """Return a new person list with a person (an empty one by default) appended."""
    return [*persons, person if person is not None else create_empty_person()]


def create_empty_track(track_number: int = 1) -> Track:
    return Track(track_number=track_number)


def create_empty_album(language: str = "en", generator: str | None = None) -> Album:
    """A new music album with one empty track."""
    album = Album(language=language, tracks=[create_empty_track(1)])
    if generator:
        album.generator = generator
    return album


def create_empty_video_album(language: str = "en", generator: str | None = None) -> Album:
    """A new music-video feed with one empty video track."""
    album = create_empty_album(language=language, generator=generator)
    album.medium = "video"
    for track in album.tracks:
        track.enclosure_type = "video/mp4"
    return album


def create_empty_publisher_feed(
    language: str = "en", generator: str | None = None
) -> PublisherFeed:
    feed = PublisherFeed(language=language)
    if generator:
        feed.generator = generator
    return feed
