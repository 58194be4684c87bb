"""Read-only per-person aggregate."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .person import Person


@dataclass(frozen=True, slots=True)
class PersonView:
    """A person with resolved father, mother, spouses and children.

    Built once per person when the graph is constructed.
    """

    person: Person
    father: Optional[Person] = None
    mother: Optional[Person] = None
    spouses: Tuple[Person, ...] = ()
    children: Tuple[Person, ...] = ()

    @property
    def id(self) -> str:
        return self.person.id

    @property
    def parents(self) -> Tuple[Person, ...]:
        """Father then mother, whichever are known."""
        return tuple(p for p in (self.father, self.mother) if p is not None)
