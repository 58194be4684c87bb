"""Lowest-common-ancestor search along member-parent chains."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.person import Person
from ..graph.traversal import walk_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Kinship:
    """How two persons connect through their closest shared ancestor.

    Attributes:
        person_a: First endpoint
        person_b: Second endpoint
        common: Lowest common ancestor (person_a itself when a == b)
        depth_a: Generations from person_a up to common
        depth_b: Generations from person_b up to common
        a_first_up: person_a's member parent on the way up, if depth_a >= 1
        b_first_up: person_b's member parent on the way up, if depth_b >= 1
        path: Persons strictly between a and b through common, excluding
            a, b and common (a's side ascending, then b's side descending)
    """

    person_a: Person
    person_b: Person
    common: Person
    depth_a: int
    depth_b: int
    a_first_up: Optional[Person] = None
    b_first_up: Optional[Person] = None
    path: Tuple[Person, ...] = ()

    def swapped(self) -> 'Kinship':
        """The same connection seen from person_b."""
        return Kinship(
            person_a=self.person_b,
            person_b=self.person_a,
            common=self.common,
            depth_a=self.depth_b,
            depth_b=self.depth_a,
            a_first_up=self.b_first_up,
            b_first_up=self.a_first_up,
            path=tuple(reversed(self.path)),
        )


def member_chain(graph, person_id: str) -> List[str]:
    """Member-parent chain from person_id (included), bounded by the step cap."""
    return walk_up(person_id, graph.member_parent_id_of, graph.config.kinship_step_cap)


def _ends_in_cycle(graph, chain: List[str]) -> bool:
    return bool(chain) and graph.member_parent_id_of(chain[-1]) in chain


def kinship_of(graph, a: Optional[str], b: Optional[str]) -> Optional[Kinship]:
    """Find the lowest common ancestor of a and b.

    Args:
        graph: Graph to query
        a: Id of the first person
        b: Id of the second person

    Returns:
        Kinship, or None when either id is unknown, the two chains never
        meet or either chain loops back on itself
    """
    person_a = graph.person(a)
    person_b = graph.person(b)
    if person_a is None or person_b is None:
        return None

    if a == b:
        return Kinship(person_a=person_a, person_b=person_b, common=person_a,
                       depth_a=0, depth_b=0)

    up_a = member_chain(graph, a)
    up_b = member_chain(graph, b)
    if _ends_in_cycle(graph, up_a) or _ends_in_cycle(graph, up_b):
        logger.warning("Ancestor cycle above %s or %s, no kinship resolved", a, b)
        return None

    index_a: Dict[str, int] = {pid: i for i, pid in enumerate(up_a)}
    depth_b = next((j for j, pid in enumerate(up_b) if pid in index_a), None)
    if depth_b is None:
        logger.debug("No common ancestor for %s and %s", a, b)
        return None

    common_id = up_b[depth_b]
    depth_a = index_a[common_id]

    left = up_a[1:depth_a]
    right = list(reversed(up_b[1:depth_b]))
    path = tuple(graph.person(pid) for pid in left + right)

    return Kinship(
        person_a=person_a,
        person_b=person_b,
        common=graph.person(common_id),
        depth_a=depth_a,
        depth_b=depth_b,
        a_first_up=graph.person(up_a[1]) if depth_a >= 1 else None,
        b_first_up=graph.person(up_b[1]) if depth_b >= 1 else None,
        path=path,
    )
