"""Graph construction from flat person, union and filiation rows."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import GraphConfig, default_config
from ..core.person import Person
from ..core.rows import PersonRow, SpouseLinkRow, ChildLinkRow
from ..core.view import PersonView
from .membership import classify_members, count_seeds
from .graph import Graph

logger = logging.getLogger(__name__)

RowT = TypeVar('RowT', bound=BaseModel)


def _check_collection(name: str, rows: Any) -> None:
    if rows is None:
        return
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        raise TypeError(f"{name} must be an iterable of rows, got {type(rows).__name__}")


class GraphBuilder:
    """Builds an immutable Graph in a single pass over the rows.

    Father and mother are not stored on filiation rows: they are inferred from
    the sex of each partner of the union the child is attached to. The first
    qualifying partner wins; later conflicting assignments are ignored.
    Dangling references are skipped and malformed rows are dropped, so one bad
    row never invalidates the rest of the graph.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or default_config
        self.dropped_rows = 0

    def build(
        self,
        persons: Optional[Iterable[Any]],
        unions: Optional[Iterable[Any]] = None,
        filiations: Optional[Iterable[Any]] = None,
    ) -> Graph:
        """Build a graph.

        Args:
            persons: Person rows (mappings or PersonRow)
            unions: Spouse link rows (mappings or SpouseLinkRow)
            filiations: Child link rows (mappings or ChildLinkRow)

        Returns:
            Graph instance

        Raises:
            TypeError: If a collection is not an iterable of rows
        """
        _check_collection('persons', persons)
        _check_collection('unions', unions)
        _check_collection('filiations', filiations)
        self.dropped_rows = 0

        person_map = self._load_persons(persons or [])
        partners_by_union, spouses_by_person, union_count = self._load_unions(unions or [], person_map)
        children_by_person, father_by_person, mother_by_person, filiation_count = self._load_filiations(
            filiations or [], person_map, partners_by_union
        )

        views: Dict[str, PersonView] = {}
        for person_id, person in person_map.items():
            father = father_by_person.get(person_id)
            mother = mother_by_person.get(person_id)
            views[person_id] = PersonView(
                person=person,
                father=person_map.get(father) if father else None,
                mother=person_map.get(mother) if mother else None,
                spouses=tuple(person_map[s] for s in spouses_by_person.get(person_id, [])),
                children=tuple(person_map[c] for c in children_by_person.get(person_id, [])),
            )

        members = classify_members(person_map, father_by_person, mother_by_person,
                                   self.config.lastname_sentinel)

        stats = {
            'persons': len(person_map),
            'members': len(members),
            'seeds': count_seeds(person_map.values(), self.config.lastname_sentinel),
            'unions': union_count,
            'filiations': filiation_count,
            'dropped_rows': self.dropped_rows,
        }
        logger.info(
            "Built graph: %(persons)d persons, %(members)d members, %(unions)d unions, "
            "%(filiations)d filiations, %(dropped_rows)d dropped rows", stats
        )
        return Graph(views, members, config=self.config, stats=stats)

    def _validate(self, model: Type[RowT], raw: Any, kind: str) -> Optional[RowT]:
        if isinstance(raw, model):
            return raw
        try:
            if isinstance(raw, BaseModel):
                raw = raw.model_dump()
            return model.model_validate(raw)
        except ValidationError as e:
            self.dropped_rows += 1
            logger.warning("Dropping malformed %s row %r: %s", kind, raw, e.errors(include_url=False))
            return None

    def _load_persons(self, rows: Iterable[Any]) -> Dict[str, Person]:
        persons: Dict[str, Person] = {}
        for raw in rows:
            row = self._validate(PersonRow, raw, 'person')
            if row is None:
                continue
            if row.id in persons:
                self.dropped_rows += 1
                logger.warning("Dropping duplicate person row %s", row.id)
                continue
            persons[row.id] = Person(**row.model_dump())
        return persons

    def _load_unions(
        self,
        rows: Iterable[Any],
        persons: Dict[str, Person],
    ) -> Tuple[Dict[str, Tuple[Optional[str], Optional[str]]], Dict[str, List[str]], int]:
        partners_by_union: Dict[str, Tuple[Optional[str], Optional[str]]] = {}
        spouses_by_person: Dict[str, List[str]] = {}
        for raw in rows:
            row = self._validate(SpouseLinkRow, raw, 'spouse link')
            if row is None:
                continue
            if row.id in partners_by_union:
                self.dropped_rows += 1
                logger.warning("Dropping duplicate spouse link row %s", row.id)
                continue

            a = row.partner_a_id if row.partner_a_id in persons else None
            b = row.partner_b_id if row.partner_b_id in persons else None
            for ref, kept in ((row.partner_a_id, a), (row.partner_b_id, b)):
                if ref and not kept:
                    logger.debug("Spouse link %s references unknown person %s", row.id, ref)
            partners_by_union[row.id] = (a, b)

            if a and b and a != b:
                for x, y in ((a, b), (b, a)):
                    spouses = spouses_by_person.setdefault(x, [])
                    if y not in spouses:
                        spouses.append(y)
        return partners_by_union, spouses_by_person, len(partners_by_union)

    def _load_filiations(
        self,
        rows: Iterable[Any],
        persons: Dict[str, Person],
        partners_by_union: Dict[str, Tuple[Optional[str], Optional[str]]],
    ) -> Tuple[Dict[str, List[str]], Dict[str, str], Dict[str, str], int]:
        children_by_person: Dict[str, List[str]] = {}
        father_by_person: Dict[str, str] = {}
        mother_by_person: Dict[str, str] = {}
        count = 0
        for raw in rows:
            row = self._validate(ChildLinkRow, raw, 'child link')
            if row is None:
                continue
            child_id = row.child_id
            partners = partners_by_union.get(row.spouse_link_id)
            if partners is None or child_id not in persons:
                logger.debug("Skipping child link %s -> %s: dangling reference",
                             row.spouse_link_id, child_id)
                continue
            count += 1

            for partner in partners:
                if not partner or partner == child_id:
                    continue
                children = children_by_person.setdefault(partner, [])
                if child_id not in children:
                    children.append(child_id)

                is_male = persons[partner].is_male
                if is_male is None:
                    continue
                parents = father_by_person if is_male else mother_by_person
                current = parents.get(child_id)
                if current is None:
                    parents[child_id] = partner
                elif current != partner:
                    logger.debug("Ignoring %s %s for %s: already attributed to %s",
                                 'father' if is_male else 'mother', partner, child_id, current)
        return children_by_person, father_by_person, mother_by_person, count


def build_graph(
    persons: Optional[Iterable[Any]],
    unions: Optional[Iterable[Any]] = None,
    filiations: Optional[Iterable[Any]] = None,
    config: Optional[GraphConfig] = None,
) -> Graph:
    """Build a Graph from raw rows (see GraphBuilder.build)."""
    return GraphBuilder(config).build(persons, unions, filiations)
