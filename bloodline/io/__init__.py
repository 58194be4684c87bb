"""Loaders producing graph rows from snapshots and GEDCOM files."""

from .snapshot import load_snapshot, save_snapshot, graph_from_snapshot, rows_from_snapshot
from .gedcom_import import rows_from_gedcom, graph_from_gedcom, parse_gedcom_date

__all__ = [
    'load_snapshot',
    'save_snapshot',
    'graph_from_snapshot',
    'rows_from_snapshot',
    'rows_from_gedcom',
    'graph_from_gedcom',
    'parse_gedcom_date',
]
