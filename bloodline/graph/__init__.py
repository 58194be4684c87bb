"""Graph construction, membership and relationship queries."""

from .graph import Graph
from .builder import GraphBuilder, build_graph
from .membership import classify_members, is_lineage_seed

__all__ = [
    'Graph',
    'GraphBuilder',
    'build_graph',
    'classify_members',
    'is_lineage_seed',
]
