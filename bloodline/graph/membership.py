"""Membership classification for the tracked lineage."""

from typing import Dict, Iterable, Mapping, Optional, FrozenSet

from ..core.person import Person


def is_lineage_seed(person: Person, sentinel: Optional[str]) -> bool:
    """True for a male carrying the root family name (case-insensitive)."""
    if not sentinel or not sentinel.strip():
        return False
    lastname = person.lastname or ''
    return person.is_male is True and lastname.casefold() == sentinel.strip().casefold()


def classify_members(
    persons: Mapping[str, Person],
    father_by_person: Dict[str, str],
    mother_by_person: Dict[str, str],
    sentinel: Optional[str],
) -> FrozenSet[str]:
    """Return the ids of persons belonging to the tracked lineage.

    A person is a member when a father or a mother was resolved for them, or
    when they seed the lineage (see is_lineage_seed). Must run once all
    parent assignments are final; it is not recomputed afterwards.

    Args:
        persons: All persons keyed by id
        father_by_person: Resolved father id per child id
        mother_by_person: Resolved mother id per child id
        sentinel: Root family name, or None to disable seeding

    Returns:
        Frozen set of member ids
    """
    members = set()
    for person_id, person in persons.items():
        if (father_by_person.get(person_id) in persons
                or mother_by_person.get(person_id) in persons
                or is_lineage_seed(person, sentinel)):
            members.add(person_id)
    return frozenset(members)


def count_seeds(persons: Iterable[Person], sentinel: Optional[str]) -> int:
    return sum(1 for p in persons if is_lineage_seed(p, sentinel))
