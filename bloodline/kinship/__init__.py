"""Kinship resolution and relation naming."""

from .resolver import Kinship, kinship_of, member_chain
from .relations import KinKey, relation_of, ancestor_key, descendant_key

__all__ = [
    'Kinship',
    'kinship_of',
    'member_chain',
    'KinKey',
    'relation_of',
    'ancestor_key',
    'descendant_key',
]
