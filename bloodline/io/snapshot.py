"""Load graph snapshots exported by the data service."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import GraphConfig
from ..graph.builder import build_graph
from ..graph.graph import Graph

logger = logging.getLogger(__name__)

PERSONS_KEY = 'persons'
UNIONS_KEY = 'spouse_links'
FILIATIONS_KEY = 'child_links'


def rows_from_snapshot(data: Dict[str, Any]) -> Tuple[List[Any], List[Any], List[Any]]:
    """Extract (persons, unions, filiations) rows from a snapshot payload.

    The payload is ``{"data": {"persons": [...], "spouse_links": [...],
    "child_links": [...]}}``; the ``data`` wrapper is optional and missing
    collections are treated as empty.

    Raises:
        TypeError: If the payload is not a JSON object
    """
    if not isinstance(data, dict):
        raise TypeError(f"Snapshot must be a JSON object, got {type(data).__name__}")
    body = data.get('data', data)
    if not isinstance(body, dict):
        raise TypeError(f"Snapshot 'data' must be a JSON object, got {type(body).__name__}")
    return (
        body.get(PERSONS_KEY) or [],
        body.get(UNIONS_KEY) or [],
        body.get(FILIATIONS_KEY) or [],
    )


def graph_from_snapshot(data: Dict[str, Any], config: Optional[GraphConfig] = None) -> Graph:
    """Build a graph from an already decoded snapshot payload."""
    persons, unions, filiations = rows_from_snapshot(data)
    return build_graph(persons, unions, filiations, config)


def load_snapshot(filepath: Union[str, Path], config: Optional[GraphConfig] = None) -> Graph:
    """Load a JSON snapshot file and build a graph.

    Args:
        filepath: Path to the snapshot
        config: Graph configuration

    Returns:
        Graph instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
    """
    file_path = Path(filepath)
    if not file_path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {filepath}")

    try:
        with open(file_path, 'r', encoding='utf-8-sig') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid snapshot {filepath}: {e}") from e

    logger.info("Loaded snapshot %s", file_path)
    return graph_from_snapshot(data, config)


def save_snapshot(filepath: Union[str, Path], persons: List[Dict[str, Any]],
                  unions: List[Dict[str, Any]], filiations: List[Dict[str, Any]]) -> None:
    """Write rows as a snapshot file readable by load_snapshot."""
    payload = {'data': {PERSONS_KEY: persons, UNIONS_KEY: unions, FILIATIONS_KEY: filiations}}
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
