"""Person class for representing individuals of the family graph."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Dict, Any, Self


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _cap(value: Optional[str]) -> Optional[str]:
    text = _clean(value)
    if not text:
        return None
    return text[:1].upper() + text[1:]


@dataclass(frozen=True, slots=True)
class Person:
    """An immutable demographic record.

    Attributes:
        id: Opaque unique identifier
        is_male: True, False or None when the sex is unknown
        firstname: Given name (trimmed, first letter capitalised)
        lastname: Family name (trimmed, first letter capitalised)
        is_alive: True, False or None when unknown
        birth_year, birth_month, birth_day: Birth date parts
        death_year, death_month, death_day: Death date parts
        birth_place: Place of birth
        birth_country: Country of birth
        reference_year: Year used to compute the age of living persons

    Derived (computed once, never mutated):
        fullname: First and last name joined, or None
        lifespan: Formatted year range, or None
        age: Age in years, or None without a birth year
    """

    id: str
    is_male: Optional[bool] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    is_alive: Optional[bool] = None
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    death_year: Optional[int] = None
    death_month: Optional[int] = None
    death_day: Optional[int] = None
    birth_place: Optional[str] = None
    birth_country: Optional[str] = None
    reference_year: int = field(default_factory=lambda: date.today().year,
                                repr=False, compare=False)

    fullname: Optional[str] = field(default=None, init=False, compare=False)
    lifespan: Optional[str] = field(default=None, init=False, compare=False)
    age: Optional[int] = field(default=None, init=False, compare=False)

    def __post_init__(self):
        # frozen: derived values have to go through object.__setattr__
        object.__setattr__(self, 'firstname', _cap(self.firstname))
        object.__setattr__(self, 'lastname', _cap(self.lastname))
        object.__setattr__(self, 'birth_place', _clean(self.birth_place))
        object.__setattr__(self, 'birth_country', _clean(self.birth_country))

        names = [n for n in (self.firstname, self.lastname) if n]
        object.__setattr__(self, 'fullname', ' '.join(names) or None)

        if self.birth_year and self.death_year:
            lifespan = f"{self.birth_year} – {self.death_year}"
        elif self.birth_year:
            lifespan = f"{self.birth_year}"
        elif self.death_year:
            lifespan = f"– {self.death_year}"
        else:
            lifespan = None
        object.__setattr__(self, 'lifespan', lifespan)

        age = None
        if self.birth_year is not None:
            end = self.death_year if self.death_year is not None else self.reference_year
            age = max(0, end - self.birth_year)
        object.__setattr__(self, 'age', age)

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        name = self.fullname or "Unknown"
        if self.lifespan:
            return f"{name} ({self.lifespan})"
        return name

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Person(id={self.id!r}, name={self.fullname!r})"

    @property
    def sex(self) -> str:
        """Sex as 'M', 'F' or 'U' (unknown)."""
        if self.is_male is True:
            return 'M'
        if self.is_male is False:
            return 'F'
        return 'U'

    def to_dict(self) -> Dict[str, Any]:
        """Convert person to dictionary representation.

        Returns:
            Dictionary with the constructor fields and derived values
        """
        return {
            'id': self.id,
            'is_male': self.is_male,
            'firstname': self.firstname,
            'lastname': self.lastname,
            'is_alive': self.is_alive,
            'birth_year': self.birth_year,
            'birth_month': self.birth_month,
            'birth_day': self.birth_day,
            'death_year': self.death_year,
            'death_month': self.death_month,
            'death_day': self.death_day,
            'birth_place': self.birth_place,
            'birth_country': self.birth_country,
            'fullname': self.fullname,
            'lifespan': self.lifespan,
            'age': self.age,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        """Create a Person instance from a dictionary.

        Derived keys ('fullname', 'lifespan', 'age') are ignored and
        recomputed.

        Args:
            data: Dictionary containing person data

        Returns:
            Person instance
        """
        kwargs = {
            'id': str(data['id']),
            'is_male': data.get('is_male'),
            'firstname': data.get('firstname'),
            'lastname': data.get('lastname'),
            'is_alive': data.get('is_alive'),
            'birth_year': data.get('birth_year'),
            'birth_month': data.get('birth_month'),
            'birth_day': data.get('birth_day'),
            'death_year': data.get('death_year'),
            'death_month': data.get('death_month'),
            'death_day': data.get('death_day'),
            'birth_place': data.get('birth_place'),
            'birth_country': data.get('birth_country'),
        }
        if data.get('reference_year') is not None:
            kwargs['reference_year'] = data['reference_year']
        return cls(**kwargs)
