"""Tests for person fan-out and fan-in."""

from tunefeed.feed.models import Person, PersonRole
from tunefeed.feed.persons import PersonTag, fan_in, fan_out, person_key


def _alice() -> Person:
    return Person(
        name="Alice",
        href="https://example.com/alice",
        img="https://example.com/alice.jpg",
        roles=[
            PersonRole(group="music", role="vocalist"),
            PersonRole(group="writing", role="songwriter"),
            PersonRole(group="music", role="guitarist"),
        ],
    )


class TestPersonKey:
    """Tests for the shared identity key."""

    def test_missing_and_empty_are_the_same(self) -> None:
        assert person_key("Alice", None, None) == person_key("Alice", "", "")

    def test_href_distinguishes(self) -> None:
        assert person_key("Alice", "https://a", None) != person_key("Alice", "https://b", None)


class TestFanOut:
    """Tests for fan_out."""

    def test_one_tag_per_role(self) -> None:
        tags = fan_out(_alice())
        assert len(tags) == 3
        assert [(t.group, t.role) for t in tags] == [
            ("music", "vocalist"),
            ("writing", "songwriter"),
            ("music", "guitarist"),
        ]

    def test_identity_repeated_on_every_tag(self) -> None:
        for tag in fan_out(_alice()):
            assert tag.name == "Alice"
            assert tag.href == "https://example.com/alice"
            assert tag.img == "https://example.com/alice.jpg"


class TestFanIn:
    """Tests for fan_in."""

    def test_round_trip(self) -> None:
        """Test that fan-out then fan-in reproduces the person."""
        [person] = fan_in(fan_out(_alice()))
        original = _alice()
        assert (person.name, person.href, person.img) == (original.name, original.href, original.img)
        assert {(r.group, r.role) for r in person.roles} == {(r.group, r.role) for r in original.roles}

    def test_merges_non_adjacent_tags(self) -> None:
        tags = [
            PersonTag("Alice", None, None, "music", "vocalist"),
            PersonTag("Bob", None, None, "music", "drummer"),
            PersonTag("Alice", None, None, "music", "guitarist"),
        ]
        persons = fan_in(tags)
        assert [p.name for p in persons] == ["Alice", "Bob"]
        assert [r.role for r in persons[0].roles] == ["vocalist", "guitarist"]

    def test_different_identity_stays_separate(self) -> None:
        """Test that a shared name and role doesn't merge people with different hrefs."""
        tags = [
            PersonTag("Alex", "https://one.example", None, "music", "bassist"),
            PersonTag("Alex", "https://two.example", None, "music", "bassist"),
        ]
        persons = fan_in(tags)
        assert len(persons) == 2
        assert [p.href for p in persons] == ["https://one.example", "https://two.example"]

    def test_empty_strings_become_none(self) -> None:
        [person] = fan_in([PersonTag("Alice", "", "", "cast", "host")])
        assert person.href is None
        assert person.img is None

    def test_no_tags(self) -> None:
        assert fan_in([]) == []
