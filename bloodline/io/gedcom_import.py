"""Convert GEDCOM files into graph rows.

INDI records become person rows; each FAM record becomes one union row
(HUSB/WIFE) plus one filiation row per CHIL.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from gedcom.element.family import FamilyElement
from gedcom.element.individual import IndividualElement
from gedcom.parser import Parser

from ..config import GraphConfig
from ..graph.builder import build_graph
from ..graph.graph import Graph

logger = logging.getLogger(__name__)

MONTHS = ['JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
          'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC']

_GEDCOM_DATE = re.compile(
    r'(?:(\d{1,2})\s+)?(?:(' + '|'.join(MONTHS) + r')\s+)?(\d{3,4})\b',
    re.IGNORECASE,
)

Rows = Tuple[List[Dict[str, Any]], List[Dict[str, Any]], List[Dict[str, Any]]]


def parse_gedcom_date(value: Optional[str]) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """Extract (year, month, day) from the first date in a GEDCOM date value.

    Modifiers such as ABT, BEF or BET ... AND ... are ignored.

    Examples:
        >>> parse_gedcom_date('12 MAR 1950')
        (1950, 3, 12)
        >>> parse_gedcom_date('ABT 1890')
        (1890, None, None)
    """
    if not value:
        return None, None, None
    m = _GEDCOM_DATE.search(value)
    if not m:
        return None, None, None
    day, month, year = m.groups()
    month_num = MONTHS.index(month.upper()) + 1 if month else None
    day_num = int(day) if day and month_num else None
    return int(year), month_num, day_num


def _parse_file(filepath: Path) -> Parser:
    parser = Parser()
    last_error = None

    for encoding in ('utf-8-sig', 'utf-8', 'latin-1', 'cp1252'):
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                content = f.read()
        except UnicodeDecodeError as e:
            last_error = e
            continue

        # python-gedcom reads files only; hand it a UTF-8 copy
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                         suffix='.ged', delete=False) as tmp:
            tmp.write(content)
            tmp_path = tmp.name
        try:
            parser.parse_file(tmp_path, strict=False)
            return parser
        finally:
            os.unlink(tmp_path)

    raise ValueError(f"Could not decode GEDCOM file {filepath}: {last_error}")


def _person_row(element: IndividualElement) -> Dict[str, Any]:
    first, last = element.get_name()
    gender = (element.get_gender() or '').upper()

    birth_date, birth_place = None, None
    birth = element.get_birth_data()
    if birth:
        birth_date = birth[0] or None
        birth_place = birth[1] if len(birth) > 1 and birth[1] else None
    death_year, death_month, death_day = parse_gedcom_date(element.get_death_data()[0])
    birth_year, birth_month, birth_day = parse_gedcom_date(birth_date)

    is_alive = False if element.is_deceased() or death_year else None

    return {
        'id': element.get_pointer(),
        'is_male': True if gender == 'M' else False if gender == 'F' else None,
        'firstname': first or None,
        'lastname': last or None,
        'is_alive': is_alive,
        'birth_year': birth_year,
        'birth_month': birth_month,
        'birth_day': birth_day,
        'death_year': death_year,
        'death_month': death_month,
        'death_day': death_day,
        'birth_place': birth_place,
    }


def _family_rows(element: FamilyElement) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    family_id = element.get_pointer()
    husband_id = None
    wife_id = None
    children = []

    for child in element.get_child_elements():
        tag = child.get_tag()
        value = child.get_value()
        if tag == 'HUSB' and value and husband_id is None:
            husband_id = value
        elif tag == 'WIFE' and value and wife_id is None:
            wife_id = value
        elif tag == 'CHIL' and value:
            children.append({'child_id': value, 'spouse_link_id': family_id})

    union = {'id': family_id, 'partner_a_id': husband_id, 'partner_b_id': wife_id}
    return union, children


def rows_from_gedcom(filepath: Union[str, Path]) -> Rows:
    """Read a GEDCOM file into (persons, unions, filiations) rows.

    Args:
        filepath: Path to the GEDCOM file

    Returns:
        Tuple of row lists

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file cannot be decoded
    """
    file_path = Path(filepath)
    if not file_path.exists():
        raise FileNotFoundError(f"GEDCOM file not found: {filepath}")

    parser = _parse_file(file_path)
    persons, unions, filiations = [], [], []
    for element in parser.get_root_child_elements():
        if isinstance(element, IndividualElement):
            persons.append(_person_row(element))
        elif isinstance(element, FamilyElement):
            union, children = _family_rows(element)
            unions.append(union)
            filiations.extend(children)

    logger.info("Read %d individuals and %d families from %s",
                len(persons), len(unions), file_path)
    return persons, unions, filiations


def graph_from_gedcom(filepath: Union[str, Path], config: Optional[GraphConfig] = None) -> Graph:
    """Load a GEDCOM file and build a graph."""
    persons, unions, filiations = rows_from_gedcom(filepath)
    return build_graph(persons, unions, filiations, config)
