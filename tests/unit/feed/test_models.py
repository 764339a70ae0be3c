"""Tests for feed data models."""

import pytest
from pydantic import ValidationError

from tunefeed.feed.models import (
    Album,
    Inherited,
    Override,
    Person,
    PersonsOverride,
    PublisherFeed,
    PublisherReference,
    Track,
    ValueBlock,
    ValueOverride,
    ValueRecipient,
    is_music_medium,
)


class TestValueBlock:
    """Tests for ValueBlock.method derivation."""

    def test_method_lnaddress_when_any_recipient_is_lnaddress(self) -> None:
        value = ValueBlock(
            recipients=[
                ValueRecipient(address="node-key", split=50, type="node"),
                ValueRecipient(address="me@example.com", split=50, type="lnaddress"),
            ]
        )
        assert value.method == "lnaddress"

    def test_method_keysend_when_all_nodes(self) -> None:
        value = ValueBlock(recipients=[ValueRecipient(address="node-key", split=100, type="node")])
        assert value.method == "keysend"

    def test_method_keysend_when_empty(self) -> None:
        assert ValueBlock().method == "keysend"

    def test_stored_method_is_ignored(self) -> None:
        """Test that a method value in input data doesn't override the derived one."""
        value = ValueBlock.model_validate(
            {
                "method": "lnaddress",
                "recipients": [{"address": "node-key", "split": 100, "type": "node"}],
            }
        )
        assert value.method == "keysend"

    def test_method_included_in_dump(self) -> None:
        value = ValueBlock(recipients=[ValueRecipient(address="a@x", split=100, type="lnaddress")])
        assert value.model_dump()["method"] == "lnaddress"

    def test_negative_split_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValueRecipient(address="a@x", split=-1)


class TestPerson:
    """Tests for Person."""

    def test_default_person_has_one_role(self) -> None:
        assert len(Person().roles) == 1

    def test_person_requires_a_role(self) -> None:
        with pytest.raises(ValidationError):
            Person(name="Alice", roles=[])


class TestTrackInheritance:
    """Tests for the inherited/override union on tracks."""

    def test_new_track_inherits(self) -> None:
        track = Track(title="Song")
        assert isinstance(track.persons, Inherited)
        assert isinstance(track.value, Inherited)
        assert track.overrides_persons is False
        assert track.overrides_value is False

    def test_override_flags(self) -> None:
        track = Track(
            title="Song",
            persons=PersonsOverride(data=[Person(name="Guest")]),
            value=ValueOverride(data=ValueBlock()),
        )
        assert track.overrides_persons is True
        assert track.overrides_value is True

    def test_override_from_dict(self) -> None:
        """Test that the union is selected by its kind field."""
        track = Track.model_validate(
            {
                "title": "Song",
                "persons": {"kind": "override", "data": [{"name": "Guest"}]},
                "value": {"kind": "inherited"},
            }
        )
        assert isinstance(track.persons, Override)
        assert track.persons.data[0].name == "Guest"
        assert isinstance(track.value, Inherited)

    def test_override_requires_data(self) -> None:
        with pytest.raises(ValidationError):
            Track.model_validate({"title": "Song", "value": {"kind": "override"}})

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Track.model_validate({"title": "Song", "persons": {"kind": "maybe"}})

    def test_defaults_resolved_at_construction(self) -> None:
        track = Track()
        assert track.transcript_type == "application/srt"
        assert track.enclosure_length == 0
        assert track.enclosure_type == "audio/mpeg"
        assert track.episode is None


class TestChannels:
    """Tests for Album and PublisherFeed."""

    def test_publisher_medium_is_fixed(self) -> None:
        assert PublisherFeed().medium == "publisher"
        with pytest.raises(ValidationError):
            PublisherFeed(medium="music")  # type: ignore[arg-type]

    def test_album_medium_passes_through(self) -> None:
        assert Album(medium="podcast").medium == "podcast"

    def test_album_dump_and_validate(self, sample_album: Album) -> None:
        """Test that a dumped album validates back to the same data."""
        data = sample_album.model_dump(mode="json")
        restored = Album.model_validate(data)
        assert restored.model_dump(mode="json") == data
        assert restored.tracks[1].overrides_value is True

    def test_publisher_reference_is_set(self) -> None:
        assert PublisherReference().is_set is False
        assert PublisherReference(feed_url="https://example.com/pub.xml").is_set is True
        assert PublisherReference(feed_guid="", feed_url="").is_set is False

    def test_is_music_medium(self) -> None:
        assert is_music_medium("music") is True
        assert is_music_medium("musicL") is True
        assert is_music_medium("podcast") is False
        assert is_music_medium(None) is False
