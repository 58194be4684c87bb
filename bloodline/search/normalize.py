"""Text normalisation shared by the tokenizer and the search index."""

import re
import unicodedata
from typing import Optional

# Arabic-Indic (U+0660-0669) and Extended Arabic-Indic (U+06F0-06F9) digits
_DIGITS = {
    **{0x0660 + i: str(i) for i in range(10)},
    **{0x06F0 + i: str(i) for i in range(10)},
}

# anything but letters, digits, whitespace and apostrophes
_PUNCTUATION = re.compile(r"[^\w\s']|_")
_SPACES = re.compile(r'\s+')


def to_latin_digits(text: str) -> str:
    """Map Arabic-Indic digit glyphs to ASCII digits."""
    return text.translate(_DIGITS)


def strip_diacritics(text: str) -> str:
    """Remove accents and other combining marks."""
    nfkd = unicodedata.normalize('NFKD', text)
    return ''.join(char for char in nfkd if not unicodedata.combining(char))


def normalize(text: Optional[str]) -> str:
    """Normalise text for comparison.

    Diacritics are stripped, non-Latin digits mapped to ASCII, case folded,
    punctuation collapsed to single spaces.

    Examples:
        >>> normalize("  Zlitni-Aḥmed  ")
        'zlitni ahmed'
        >>> normalize("١٩٥٠")
        '1950'
    """
    if not text:
        return ''
    result = to_latin_digits(strip_diacritics(text)).casefold()
    result = _PUNCTUATION.sub(' ', result)
    return _SPACES.sub(' ', result).strip()
