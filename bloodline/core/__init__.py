"""Value types: persons, input rows and per-person views."""

from .person import Person
from .rows import PersonRow, SpouseLinkRow, ChildLinkRow
from .view import PersonView

__all__ = [
    'Person',
    'PersonRow',
    'SpouseLinkRow',
    'ChildLinkRow',
    'PersonView',
]
