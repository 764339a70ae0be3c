"""Shared fixtures for Tunefeed tests."""

from datetime import datetime, timezone

import pytest

from tunefeed.feed.models import (
    Album,
    Funding,
    Person,
    PersonRole,
    PublisherFeed,
    RemoteItem,
    Track,
    ValueBlock,
    ValueOverride,
    ValueRecipient,
)


@pytest.fixture
def release_date() -> datetime:
    """A fixed, whole-second UTC timestamp."""
    return datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def album_value() -> ValueBlock:
    """Channel value block: one lightning address and one node."""
    return ValueBlock(
        recipients=[
            ValueRecipient(name="Artist", address="a@x", split=95, type="lnaddress"),
            ValueRecipient(name="Producer", address="b", split=5, type="node"),
        ]
    )


@pytest.fixture
def album_persons() -> list[Person]:
    return [
        Person(
            name="Alice",
            href="https://example.com/alice",
            roles=[
                PersonRole(group="music", role="vocalist"),
                PersonRole(group="music", role="guitarist"),
            ],
        ),
        Person(name="Bob", roles=[PersonRole(group="music", role="drummer")]),
    ]


@pytest.fixture
def sample_album(release_date: datetime, album_value: ValueBlock, album_persons: list[Person]) -> Album:
    """Album with two tracks; the second overrides the value block."""
    return Album(
        title="Night Drive",
        author="The Examples",
        description="A synth album",
        link="https://example.com/night-drive",
        pub_date=release_date,
        last_build_date=release_date,
        podcast_guid="album-guid",
        categories=["Music"],
        keywords="synth, night",
        image_url="https://example.com/cover.jpg",
        owner_name="The Examples",
        owner_email="band@example.com",
        persons=album_persons,
        value=album_value,
        funding=[Funding(url="https://example.com/support", text="Support us")],
        tracks=[
            Track(
                title="Opening",
                pub_date=release_date,
                guid="track-1",
                enclosure_url="https://example.com/1.mp3",
                enclosure_length=1000,
                duration="03:30",
                track_number=1,
            ),
            Track(
                title="Closing",
                description="The last one",
                pub_date=release_date,
                guid="track-2",
                enclosure_url="https://example.com/2.mp3",
                enclosure_length=2000,
                duration="04:10",
                track_number=2,
                value=ValueOverride(
                    data=ValueBlock(
                        recipients=[
                            ValueRecipient(
                                name="Guest", address="c@y", split=100, type="lnaddress"
                            )
                        ]
                    )
                ),
            ),
        ],
    )


@pytest.fixture
def sample_publisher(release_date: datetime) -> PublisherFeed:
    return PublisherFeed(
        title="Example Records",
        author="Example Records",
        description="Our catalog",
        pub_date=release_date,
        last_build_date=release_date,
        podcast_guid="publisher-guid",
        remote_items=[
            RemoteItem(
                feed_guid="album-guid",
                feed_url="https://example.com/night-drive.xml",
                medium="music",
                title="Night Drive",
            ),
            RemoteItem(feed_guid="other-guid"),
        ],
    )


@pytest.fixture
def sample_config_dict() -> dict:
    return {
        "version": "1",
        "log_level": "INFO",
        "default_language": "de",
        "default_generator": "Example Studio",
        "warn_non_music_medium": False,
    }
