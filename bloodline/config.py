"""Configuration for graph construction and queries."""

from dataclasses import dataclass, replace as _replace
from typing import Optional


@dataclass(frozen=True)
class GraphConfig:
    """Tunable limits and the lineage seed used when building a graph.

    Attributes:
        lastname_sentinel: Root family name. A male carrying it belongs to
            the tracked lineage even without parents. None or '' disables this.
        ancestor_depth_limit: Maximum number of ids returned by the ancestor
            and bloodline walks.
        kinship_step_cap: Maximum chain length walked per side when looking
            for a common ancestor.
        max_kinship_depth: Generations beyond which a relation is 'distant'.
        suggest_min_score: Minimum fuzzy score (0-100) for name suggestions.
    """

    lastname_sentinel: Optional[str] = 'الزليطني'
    ancestor_depth_limit: int = 1000
    kinship_step_cap: int = 4096
    max_kinship_depth: int = 4
    suggest_min_score: float = 75.0

    def __post_init__(self):
        for name in ('ancestor_depth_limit', 'kinship_step_cap', 'max_kinship_depth'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not 0 <= self.suggest_min_score <= 100:
            raise ValueError(f"suggest_min_score must be within 0-100, got {self.suggest_min_score!r}")

    def replace(self, **changes) -> 'GraphConfig':
        """Return a copy with the given fields changed."""
        return _replace(self, **changes)


# Global configuration instance
default_config = GraphConfig()
