"""Comparisons used to decide whether a track overrides its album."""

from tunefeed.feed.models import Person, PersonRole, ValueBlock


def value_blocks_equal(a: ValueBlock, b: ValueBlock) -> bool:
    """Loose comparison: same number of recipients and the same set of addresses.

    Order, names and splits are ignored, so two blocks paying the same
    addresses with different splits compare equal.
    """
    if len(a.recipients) != len(b.recipients):
        return False
    return {r.address for r in a.recipients} == {r.address for r in b.recipients}


def value_blocks_strict_equal(a: ValueBlock, b: ValueBlock) -> bool:
    """Positional comparison of name, address, split and type."""
    if len(a.recipients) != len(b.recipients):
        return False
    return all(
        (ra.name, ra.address, ra.split, ra.type) == (rb.name, rb.address, rb.split, rb.type)
        for ra, rb in zip(a.recipients, b.recipients)
    )


def _role_keys(roles: list[PersonRole]) -> set[str]:
    return {f"{r.group}|{r.role}" for r in roles}


def roles_equal(a: list[PersonRole], b: list[PersonRole]) -> bool:
    """Order-independent comparison of two role lists."""
    if len(a) != len(b):
        return False
    return _role_keys(a) == _role_keys(b)


def persons_equal(a: list[Person], b: list[Person]) -> bool:
    """Positional comparison of person names, with order-independent roles."""
    if len(a) != len(b):
        return False
    return all(pa.name == pb.name and roles_equal(pa.roles, pb.roles) for pa, pb in zip(a, b))
