"""Person fan-out and fan-in.

A ``Person`` with several roles has no single-tag representation in a feed:
each role becomes its own ``<podcast:person>`` tag repeating the person's
name, href and img. Decoding regroups those tags by the same identity key.
"""

from typing import NamedTuple

from tunefeed.feed.models import Person, PersonRole

PersonKey = tuple[str, str, str]


class PersonTag(NamedTuple):
    """One ``<podcast:person>`` tag: a person's identity plus a single role."""

    name: str
    href: str | None
    img: str | None
    group: str
    role: str


def person_key(name: str, href: str | None, img: str | None) -> PersonKey:
    """Identity of a contributor: tags sharing this key belong to one Person."""
    return (name, href or "", img or "")


def fan_out(person: Person) -> list[PersonTag]:
    """Expand a person into one tag per role, in role order."""
    return [
        PersonTag(person.name, person.href, person.img, role.group, role.role)
        for role in person.roles
    ]


def fan_in(tags: list[PersonTag]) -> list[Person]:
    """Regroup person tags into persons.

    Tags are grouped by ``person_key`` whether or not they are adjacent;
    persons come out in order of first appearance, and each person's roles
    in tag order (duplicates kept).
    """
    groups: dict[PersonKey, list[PersonTag]] = {}
    for tag in tags:
        groups.setdefault(person_key(tag.name, tag.href, tag.img), []).append(tag)

    persons = []
    for members in groups.values():
        first = members[0]
        persons.append(
            Person(
                name=first.name,
                href=first.href or None,
                img=first.img or None,
                roles=[PersonRole(group=t.group, role=t.role) for t in members],
            )
        )
    return persons
