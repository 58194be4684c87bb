"""Upward walks over the parent indices.

Both walks are unidirectional and loop-guarded: a visited set stops them
before an id repeats, and a step ceiling bounds pathologically deep data.
"""

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


def walk_up(
    start: Optional[str],
    step: Callable[[str], Optional[str]],
    limit: int,
) -> List[str]:
    """Follow ``step`` from ``start`` and collect the visited ids.

    Args:
        start: First id (included in the result), or None
        step: Maps an id to the next id up, or None to stop
        limit: Maximum number of ids returned

    Returns:
        Ordered list of ids, ``start`` first
    """
    out: List[str] = []
    seen = set()
    current = start
    while current and len(out) < limit:
        if current in seen:
            logger.warning("Cycle detected at %s after %d steps from %s", current, len(out), start)
            break
        seen.add(current)
        out.append(current)
        current = step(current)
    return out


def ancestors_id_of(graph, person_id: Optional[str]) -> List[str]:
    """Member-parent chain: the person, then father if member, else mother if member, ..."""
    if not graph.has(person_id):
        return []
    return walk_up(person_id, graph.member_parent_id_of, graph.config.ancestor_depth_limit)


def bloodline_id_of(graph, person_id: Optional[str], max_steps: Optional[int] = None) -> List[str]:
    """Patrilineal chain: the person, then father, father's father, ...

    No membership filter is applied.
    """
    if not graph.has(person_id):
        return []
    limit = graph.config.ancestor_depth_limit if max_steps is None else max_steps
    if limit < 1:
        return []
    return walk_up(person_id, graph.father_id_of, limit)


def bloodline_name_of(
    graph,
    person_id: Optional[str],
    max_steps: Optional[int] = None,
    separator: str = ' ',
) -> Optional[str]:
    """Patrilineal name: first names up the bloodline, then the family name.

    The family name is the last name of the furthest ancestor reached that has
    one. Persons without a first name are skipped.

    Returns:
        The name string, or None when nothing could be assembled
    """
    chain = [graph.person(pid) for pid in bloodline_id_of(graph, person_id, max_steps)]
    if not chain:
        return None
    parts = [p.firstname for p in chain if p.firstname]
    lastname = next((p.lastname for p in reversed(chain) if p.lastname), None)
    if lastname:
        parts.append(lastname)
    return separator.join(parts) or None
