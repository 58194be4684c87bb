"""Free-text query parsing.

A query is either plain text (searched as a full name) or a sequence of
``key:value`` / ``key=value`` pairs. Keys are recognised in English, French
and Arabic and mapped to canonical fields.
"""

import re
from dataclasses import dataclass, fields
from typing import Dict, Optional

from .normalize import normalize, to_latin_digits


@dataclass
class SearchQuery:
    """Structured query; None fields are not filtered on."""
    fullname: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, '') for f in fields(self))


# Multilingual key aliases, keyed by their normalised form
ALIASES: Dict[str, str] = {}


def _add_aliases(canonical: str, *words: str) -> None:
    for word in words:
        ALIASES[normalize(word)] = canonical


_add_aliases('firstname', 'firstname', 'first', 'given', 'prénom', 'prenom', 'الاسم', 'الإسم')
_add_aliases('lastname', 'lastname', 'last', 'surname', 'nom', 'famille', 'لقب', 'اللقب')
_add_aliases('fullname', 'fullname', 'full', 'name', 'nom_complet', 'الكامل')
_add_aliases('birth', 'birth', 'born', 'dob', 'naissance', 'né', 'née', 'ميلاد', 'الميلاد')

_PAIR = re.compile(r'(?:^|\s)([\w.-]+)\s*[:=]\s*([^:=]+?)(?=\s+[\w.-]+\s*[:=]|$)')

_DAY_MONTH_YEAR = re.compile(r'\b(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})\b')
_YEAR_MONTH_DAY = re.compile(r'\b(\d{4})[./-](\d{1,2})[./-](\d{1,2})\b')
_MONTH_YEAR = re.compile(r'\b(\d{1,2})[./-](\d{4})\b')
_YEAR_MONTH = re.compile(r'\b(\d{4})[./-](\d{1,2})\b')
_YEAR = re.compile(r'\b(\d{4})\b')


def _year(text: str) -> int:
    # two-digit years are assumed to be 19xx
    return int('19' + text) if len(text) == 2 else int(text)


def _checked(year: Optional[int] = None, month: Optional[int] = None,
             day: Optional[int] = None) -> Dict[str, int]:
    if month is not None and not 1 <= month <= 12:
        return {}
    if day is not None and not 1 <= day <= 31:
        return {}
    parts = {'birth_year': year, 'birth_month': month, 'birth_day': day}
    return {k: v for k, v in parts.items() if v is not None}


def parse_birth_value(value: str) -> Dict[str, int]:
    """Parse a birth date value.

    Accepts dd/mm/yyyy (two-digit years become 19xx), yyyy/mm/dd, mm/yyyy,
    yyyy/mm or a bare four-digit year; '.', '/' and '-' are all accepted as
    separators.

    Args:
        value: Raw value, possibly with Arabic-Indic digits

    Returns:
        Dict with any of 'birth_year', 'birth_month', 'birth_day'. Empty when
        nothing valid was found.
    """
    text = to_latin_digits(value).strip()

    m = _DAY_MONTH_YEAR.search(text)
    if m:
        return _checked(_year(m.group(3)), int(m.group(2)), int(m.group(1)))
    m = _YEAR_MONTH_DAY.search(text)
    if m:
        return _checked(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    m = _MONTH_YEAR.search(text)
    if m:
        return _checked(int(m.group(2)), int(m.group(1)))
    m = _YEAR_MONTH.search(text)
    if m:
        return _checked(int(m.group(1)), int(m.group(2)))
    m = _YEAR.search(text)
    if m:
        return _checked(int(m.group(1)))
    return {}


def _assign(query: SearchQuery, name: str, value) -> None:
    # first occurrence of a field wins
    if value in (None, ''):
        return
    if getattr(query, name) is None:
        setattr(query, name, value)


def tokenize(text: Optional[str]) -> SearchQuery:
    """Turn a free-text query into a SearchQuery.

    Examples:
        >>> tokenize("firstname:Ahmed birth:1950")
        SearchQuery(fullname=None, firstname='Ahmed', lastname=None, birth_year=1950, birth_month=None, birth_day=None)
        >>> tokenize("Ahmed Zlitni").fullname
        'Ahmed Zlitni'
    """
    query = SearchQuery()
    original = (text or '').strip()
    if not original:
        return query

    saw_key = False
    for match in _PAIR.finditer(original):
        canonical = ALIASES.get(normalize(match.group(1)))
        if canonical is None:
            continue
        saw_key = True
        value = match.group(2).strip()
        if canonical == 'birth':
            for name, part in parse_birth_value(value).items():
                _assign(query, name, part)
        else:
            _assign(query, canonical, value)

    if not saw_key:
        query.fullname = original
    return query
