"""The read-only family graph and its relationship resolvers."""

from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Union

from ..config import GraphConfig, default_config
from ..core.person import Person
from ..core.view import PersonView
from . import traversal

PersonRef = Union[str, Person, None]


def _key(ref: PersonRef) -> Optional[str]:
    if isinstance(ref, Person):
        return ref.id
    if isinstance(ref, str) and ref:
        return ref
    return None


class Graph:
    """Immutable graph of persons, unions and filiations.

    Instances are produced by GraphBuilder (or Graph.from_rows). Every query
    accepts a person id or a Person and never raises for unknown ids: absent
    lookups return None, an empty list or False.
    """

    def __init__(
        self,
        views: Dict[str, PersonView],
        members: FrozenSet[str],
        config: Optional[GraphConfig] = None,
        stats: Optional[Dict[str, Any]] = None,
    ):
        self._views = dict(views)
        self._members = frozenset(members)
        self._config = config or default_config
        self._stats = dict(stats or {})
        self._search_index = None

    @classmethod
    def from_rows(cls, persons, unions=None, filiations=None,
                  config: Optional[GraphConfig] = None) -> 'Graph':
        """Build a graph from raw rows."""
        from .builder import build_graph
        return build_graph(persons, unions, filiations, config)

    @property
    def config(self) -> GraphConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._views)

    def __contains__(self, ref: PersonRef) -> bool:
        return self.has(ref)

    def __iter__(self) -> Iterator[str]:
        return iter(self._views)

    def __repr__(self) -> str:
        return f"Graph(persons={len(self._views)}, members={len(self._members)})"

    # === keys

    def persons_keys(self) -> Iterator[str]:
        return iter(self._views.keys())

    def members_keys(self) -> FrozenSet[str]:
        """Ids of the tracked lineage, consumed by the layout collaborator."""
        return self._members

    # === lookup

    def has(self, ref: PersonRef) -> bool:
        key = _key(ref)
        return key is not None and key in self._views

    def person(self, ref: PersonRef) -> Optional[Person]:
        view = self.person_view(ref)
        return view.person if view else None

    def member(self, ref: PersonRef) -> Optional[Person]:
        """The person, only if they belong to the lineage."""
        return self.person(ref) if self.is_member(ref) else None

    def person_view(self, ref: PersonRef) -> Optional[PersonView]:
        key = _key(ref)
        return self._views.get(key) if key else None

    def is_member(self, ref: PersonRef) -> bool:
        key = _key(ref)
        return key is not None and key in self._members

    # === relationship resolvers (objects)

    def father_of(self, ref: PersonRef) -> Optional[Person]:
        view = self.person_view(ref)
        return view.father if view else None

    def mother_of(self, ref: PersonRef) -> Optional[Person]:
        view = self.person_view(ref)
        return view.mother if view else None

    def parents_of(self, ref: PersonRef) -> List[Person]:
        view = self.person_view(ref)
        return list(view.parents) if view else []

    def spouses_of(self, ref: PersonRef) -> List[Person]:
        view = self.person_view(ref)
        return list(view.spouses) if view else []

    def children_of(self, ref: PersonRef) -> List[Person]:
        view = self.person_view(ref)
        return list(view.children) if view else []

    # === relationship resolvers (ids)

    def father_id_of(self, ref: PersonRef) -> Optional[str]:
        father = self.father_of(ref)
        return father.id if father else None

    def mother_id_of(self, ref: PersonRef) -> Optional[str]:
        mother = self.mother_of(ref)
        return mother.id if mother else None

    def parents_id_of(self, ref: PersonRef) -> List[str]:
        return [p.id for p in self.parents_of(ref)]

    def spouses_id_of(self, ref: PersonRef) -> List[str]:
        return [p.id for p in self.spouses_of(ref)]

    def children_id_of(self, ref: PersonRef) -> List[str]:
        return [p.id for p in self.children_of(ref)]

    def siblings_id_of(self, ref: PersonRef) -> List[str]:
        """Persons sharing the father or the mother, in first-seen order."""
        key = _key(ref)
        out: List[str] = []
        for parent in self.parents_of(key):
            for child in self.children_id_of(parent):
                if child != key and child not in out:
                    out.append(child)
        return out

    # === member-filtered variants

    def member_parent_id_of(self, ref: PersonRef) -> Optional[str]:
        """Father if he is a member, else mother if she is a member."""
        father = self.father_id_of(ref)
        if father and self.is_member(father):
            return father
        mother = self.mother_id_of(ref)
        if mother and self.is_member(mother):
            return mother
        return None

    def non_member_parent_id_of(self, ref: PersonRef) -> Optional[str]:
        father = self.father_id_of(ref)
        if father and not self.is_member(father):
            return father
        mother = self.mother_id_of(ref)
        if mother and not self.is_member(mother):
            return mother
        return None

    def member_spouses_id_of(self, ref: PersonRef) -> List[str]:
        return [s for s in self.spouses_id_of(ref) if self.is_member(s)]

    def non_member_spouses_id_of(self, ref: PersonRef) -> List[str]:
        return [s for s in self.spouses_id_of(ref) if not self.is_member(s)]

    # === flags

    def has_father(self, ref: PersonRef) -> bool:
        return self.father_of(ref) is not None

    def has_mother(self, ref: PersonRef) -> bool:
        return self.mother_of(ref) is not None

    def has_parents(self, ref: PersonRef) -> bool:
        return self.has_father(ref) or self.has_mother(ref)

    def has_member_parent(self, ref: PersonRef) -> bool:
        return self.member_parent_id_of(ref) is not None

    def has_spouses(self, ref: PersonRef) -> bool:
        return bool(self.spouses_of(ref))

    def has_children(self, ref: PersonRef) -> bool:
        return bool(self.children_of(ref))

    def are_spouses(self, a: PersonRef, b: PersonRef) -> bool:
        key_b = _key(b)
        return key_b is not None and key_b in self.spouses_id_of(a)

    # === walks

    def ancestors_id_of(self, ref: PersonRef) -> List[str]:
        return traversal.ancestors_id_of(self, _key(ref))

    def bloodline_id_of(self, ref: PersonRef, max_steps: Optional[int] = None) -> List[str]:
        return traversal.bloodline_id_of(self, _key(ref), max_steps)

    def bloodline_name_of(self, ref: PersonRef, max_steps: Optional[int] = None,
                          separator: str = ' ') -> Optional[str]:
        return traversal.bloodline_name_of(self, _key(ref), max_steps, separator)

    # === kinship

    def kinship_of(self, a: PersonRef, b: PersonRef):
        """Lowest common ancestor and depths for (a, b), or None."""
        from ..kinship.resolver import kinship_of
        return kinship_of(self, _key(a), _key(b))

    def relation_of(self, a: PersonRef, b: PersonRef):
        """Named relation of a to b (KinKey)."""
        from ..kinship.relations import relation_of
        return relation_of(self, _key(a), _key(b))

    # === search

    @property
    def search_index(self):
        # built lazily; the graph never changes so the index never goes stale
        if self._search_index is None:
            from ..search.index import SearchIndex
            self._search_index = SearchIndex(self)
        return self._search_index

    def search(self, query, limit: Optional[int] = None) -> List[str]:
        """Ranked ids of persons matching a free-text or structured query."""
        return self.search_index.search(query, limit=limit)

    # === statistics

    def stats(self) -> Dict[str, Any]:
        """Counts gathered at build time plus sex and year range breakdown."""
        persons = [v.person for v in self._views.values()]
        stats = dict(self._stats)
        stats.update({
            'persons': len(persons),
            'members': len(self._members),
            'males': sum(1 for p in persons if p.sex == 'M'),
            'females': sum(1 for p in persons if p.sex == 'F'),
            'unknown_sex': sum(1 for p in persons if p.sex == 'U'),
        })
        years = [y for p in persons for y in (p.birth_year, p.death_year) if y]
        if years:
            stats['earliest_year'] = min(years)
            stats['latest_year'] = max(years)
        return stats
