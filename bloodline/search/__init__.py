"""Free-text person search."""

from .normalize import normalize, strip_diacritics, to_latin_digits
from .tokenizer import SearchQuery, ALIASES, parse_birth_value, tokenize
from .index import SearchIndex, SearchHit, phonetic_key

__all__ = [
    'normalize',
    'strip_diacritics',
    'to_latin_digits',
    'SearchQuery',
    'ALIASES',
    'parse_birth_value',
    'tokenize',
    'SearchIndex',
    'SearchHit',
    'phonetic_key',
]
