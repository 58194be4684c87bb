"""bloodline - An in-memory family graph answering ancestry, kinship and search queries."""

__version__ = "0.1.0"

from .config import GraphConfig, default_config
from .core.person import Person
from .core.view import PersonView
from .graph.graph import Graph
from .graph.builder import GraphBuilder, build_graph
from .kinship.resolver import Kinship
from .kinship.relations import KinKey
from .search.tokenizer import SearchQuery
from .search.index import SearchIndex, SearchHit

__all__ = [
    'GraphConfig',
    'default_config',
    'Person',
    'PersonView',
    'Graph',
    'GraphBuilder',
    'build_graph',
    'Kinship',
    'KinKey',
    'SearchQuery',
    'SearchIndex',
    'SearchHit',
]
