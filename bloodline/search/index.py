"""
Person search index.

Ranks persons against a structured or free-text query. Name fields act as
hard prefix filters and birth date parts as hard equality filters; the score
rewards exact matches over prefix matches and specific fields over generic
ones. A fuzzy, phonetic fallback helps when a strict search finds nothing.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

import phonetics
from rapidfuzz import fuzz

from .normalize import normalize
from .tokenizer import SearchQuery, tokenize

logger = logging.getLogger(__name__)

_LATIN_WORD = re.compile(r'^[a-z]+$')


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A search result ready to be listed.

    Attributes:
        id: Person id
        label: Display name
        search_by: Label made unique among duplicate names
        resolve_id: Id to focus on in the lineage view: the person if they are
            a member, else their first member spouse, else None
    """
    id: str
    label: str
    search_by: str
    resolve_id: Optional[str]


@dataclass(frozen=True, slots=True)
class _Entry:
    id: str
    first: str
    last: str
    full: str
    birth_year: Optional[int]
    birth_month: Optional[int]
    birth_day: Optional[int]
    phonetic: str


def phonetic_key(text: str) -> str:
    """Metaphone code of each Latin word of an already normalised text."""
    words = [w for w in text.split() if _LATIN_WORD.match(w)]
    return ' '.join(phonetics.metaphone(w) for w in words)


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be zero or positive, got {limit}")


def _name_score(value: str, needle: str, exact: int, prefix: int, present: int) -> int:
    if value == needle:
        return exact
    if value.startswith(needle):
        return prefix
    return present


class SearchIndex:
    """Search over all persons of a graph.

    Normalised names and birth parts are computed once at construction.
    """

    # Score per field: (exact, prefix, present)
    FIRSTNAME_SCORES = (6, 4, 2)
    LASTNAME_SCORES = (6, 4, 2)
    FULLNAME_SCORES = (5, 3, 1)
    BIRTH_YEAR_SCORE = 1
    BIRTH_MONTH_SCORE = 2
    BIRTH_DAY_SCORE = 3

    def __init__(self, graph):
        self.graph = graph
        self._entries: List[_Entry] = []
        for person_id in graph.persons_keys():
            person = graph.person(person_id)
            full = normalize(f"{person.firstname or ''} {person.lastname or ''}")
            self._entries.append(_Entry(
                id=person_id,
                first=normalize(person.firstname),
                last=normalize(person.lastname),
                full=full,
                birth_year=person.birth_year,
                birth_month=person.birth_month,
                birth_day=person.birth_day,
                phonetic=phonetic_key(full),
            ))
        logger.debug("Indexed %d persons", len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def search(self, query: Union[str, SearchQuery, None], limit: Optional[int] = None) -> List[str]:
        """Return ids of matching persons, best first.

        Args:
            query: Free text (tokenized) or a SearchQuery
            limit: Maximum number of ids, or None for all

        Returns:
            Ranked list of person ids. Ties keep index order.

        Raises:
            ValueError: If limit is negative
        """
        _check_limit(limit)
        if not isinstance(query, SearchQuery):
            query = tokenize(query)
        if query.is_empty():
            return []

        first = normalize(query.firstname)
        last = normalize(query.lastname)
        full = normalize(query.fullname)

        scored: List[Tuple[int, str]] = []
        for entry in self._entries:
            # hard filters
            if first and not entry.first.startswith(first):
                continue
            if last and not entry.last.startswith(last):
                continue
            if full and not entry.full.startswith(full):
                continue
            if query.birth_year is not None and entry.birth_year != query.birth_year:
                continue
            if query.birth_month is not None and entry.birth_month != query.birth_month:
                continue
            if query.birth_day is not None and entry.birth_day != query.birth_day:
                continue

            score = 0
            if first:
                score += _name_score(entry.first, first, *self.FIRSTNAME_SCORES)
            if last:
                score += _name_score(entry.last, last, *self.LASTNAME_SCORES)
            if full:
                score += _name_score(entry.full, full, *self.FULLNAME_SCORES)
            if query.birth_year is not None:
                score += self.BIRTH_YEAR_SCORE
            if query.birth_month is not None:
                score += self.BIRTH_MONTH_SCORE
            if query.birth_day is not None:
                score += self.BIRTH_DAY_SCORE
            scored.append((score, entry.id))

        scored.sort(key=lambda s: s[0], reverse=True)
        ids = [person_id for _, person_id in scored]
        return ids[:limit] if limit is not None else ids

    def suggest(self, text: Optional[str], limit: int = 5,
                min_score: Optional[float] = None) -> List[Tuple[str, float]]:
        """Typo-tolerant name lookup.

        Full names are compared with a token-sort fuzzy ratio; names that
        sound the same (equal Metaphone codes) score 100.

        Args:
            text: Name to look for
            limit: Maximum number of suggestions
            min_score: Minimum score 0-100, defaults to config.suggest_min_score

        Returns:
            List of (person id, score) tuples, highest score first

        Raises:
            ValueError: If limit is negative
        """
        _check_limit(limit)
        needle = normalize(text)
        if not needle:
            return []
        threshold = self.graph.config.suggest_min_score if min_score is None else min_score
        needle_phonetic = phonetic_key(needle)

        results: List[Tuple[str, float]] = []
        for entry in self._entries:
            if not entry.full:
                continue
            if needle_phonetic and needle_phonetic == entry.phonetic:
                score = 100.0
            else:
                score = fuzz.token_sort_ratio(needle, entry.full)
            if score >= threshold:
                results.append((entry.id, score))

        results.sort(key=lambda r: r[1], reverse=True)
        return results[:limit]

    def labels(self, ids: Iterable[str]) -> List[SearchHit]:
        """Build display entries, disambiguating duplicate full names.

        A duplicate is labelled with the father's name, then both parents,
        then the id, whichever is unique first among the labels built so far.
        """
        buckets = self._duplicate_buckets()
        seen: Set[str] = set()
        hits = []
        for person_id in ids:
            hit = self._label(person_id, buckets, seen)
            if hit is not None:
                hits.append(hit)
        return hits

    def search_labels(self, query: Union[str, SearchQuery, None], limit: int = 20) -> List[SearchHit]:
        """Search, then label the best ``limit`` hits sorted by label."""
        hits = self.labels(self.search(query, limit=limit))
        hits.sort(key=lambda h: h.search_by.casefold())
        return hits

    def _duplicate_buckets(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for person_id in self.graph.persons_keys():
            fullname = self.graph.person(person_id).fullname
            if fullname:
                key = fullname.casefold()
                counts[key] = counts.get(key, 0) + 1
        return counts

    def _label(self, person_id: str, buckets: Dict[str, int], seen: Set[str]) -> Optional[SearchHit]:
        graph = self.graph
        person = graph.person(person_id)
        if person is None:
            return None
        firstname = person.firstname or 'Unknown'
        lastname = person.lastname or 'Unknown'
        fullname = person.fullname or f"{firstname} {lastname}"
        search_by = fullname

        if buckets.get(fullname.casefold(), 0) > 1:
            father = graph.father_of(person_id)
            mother = graph.mother_of(person_id)
            father_name = father.fullname if father else None
            mother_name = mother.fullname if mother else None
            if father_name:
                search_by = f"{firstname} ({father_name})"
                if search_by in seen:
                    if mother_name:
                        search_by = f"{firstname} ({father_name} - {mother_name})"
                        if search_by in seen:
                            search_by = f"{search_by} [{person_id}]"
                    else:
                        search_by = f"{search_by} [{person_id}]"
            elif mother_name:
                search_by = f"{lastname} ({mother_name})"
                if search_by in seen:
                    search_by = f"{search_by} [{person_id}]"
            else:
                search_by = f"{fullname} [{person_id}]"
        seen.add(search_by)

        if graph.is_member(person_id):
            resolve_id = person_id
        else:
            member_spouses = graph.member_spouses_id_of(person_id)
            resolve_id = member_spouses[0] if member_spouses else None

        return SearchHit(id=person_id, label=fullname, search_by=search_by, resolve_id=resolve_id)
