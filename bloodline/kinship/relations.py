"""Relation naming from a kinship pattern.

The naming follows the conventions of Arabic kinship terms, where an uncle,
an aunt and a cousin are named after the branch (paternal or maternal) they
come through: 'amm / 'amma on the father's side, khal / khala on the
mother's side.
"""

from enum import Enum
from typing import Optional

from ..core.person import Person
from .resolver import kinship_of


class KinKey(str, Enum):
    """Relation of a person A to a person B ("A is B's ...")."""
    SELF = 'self'
    FATHER = 'father'
    MOTHER = 'mother'
    SON = 'son'
    DAUGHTER = 'daughter'
    GRANDFATHER = 'grandfather'
    GRANDMOTHER = 'grandmother'
    GREAT_GRANDFATHER = 'great-grandfather'
    GREAT_GRANDMOTHER = 'great-grandmother'
    GREAT_GREAT_GRANDFATHER = 'great-great-grandfather'
    GREAT_GREAT_GRANDMOTHER = 'great-great-grandmother'
    GRANDSON = 'grandson'
    GRANDDAUGHTER = 'granddaughter'
    GREAT_GRANDSON = 'great-grandson'
    GREAT_GRANDDAUGHTER = 'great-granddaughter'
    GREAT_GREAT_GRANDSON = 'great-great-grandson'
    GREAT_GREAT_GRANDDAUGHTER = 'great-great-granddaughter'
    BROTHER = 'brother'
    SISTER = 'sister'
    HUSBAND = 'husband'
    WIFE = 'wife'
    PATERNAL_UNCLE = 'paternal-uncle'
    MATERNAL_UNCLE = 'maternal-uncle'
    PATERNAL_AUNT = 'paternal-aunt'
    MATERNAL_AUNT = 'maternal-aunt'
    NEPHEW_THROUGH_BROTHER = 'nephew-through-brother'
    NIECE_THROUGH_BROTHER = 'niece-through-brother'
    NEPHEW_THROUGH_SISTER = 'nephew-through-sister'
    NIECE_THROUGH_SISTER = 'niece-through-sister'
    MALE_COUSIN_THROUGH_PATERNAL_UNCLE = 'male-cousin-through-paternal-uncle'  # ibn 'amm
    MALE_COUSIN_THROUGH_PATERNAL_AUNT = 'male-cousin-through-paternal-aunt'  # ibn 'amma
    MALE_COUSIN_THROUGH_MATERNAL_UNCLE = 'male-cousin-through-maternal-uncle'  # ibn khal
    MALE_COUSIN_THROUGH_MATERNAL_AUNT = 'male-cousin-through-maternal-aunt'  # ibn khala
    FEMALE_COUSIN_THROUGH_PATERNAL_UNCLE = 'female-cousin-through-paternal-uncle'  # bint 'amm
    FEMALE_COUSIN_THROUGH_PATERNAL_AUNT = 'female-cousin-through-paternal-aunt'  # bint 'amma
    FEMALE_COUSIN_THROUGH_MATERNAL_UNCLE = 'female-cousin-through-maternal-uncle'  # bint khal
    FEMALE_COUSIN_THROUGH_MATERNAL_AUNT = 'female-cousin-through-maternal-aunt'  # bint khala
    DISTANT = 'distant'
    UNKNOWN = 'unknown'

    def __str__(self) -> str:
        return self.value


# (male, female) label per generation distance
ANCESTOR_KEYS = {
    1: (KinKey.FATHER, KinKey.MOTHER),
    2: (KinKey.GRANDFATHER, KinKey.GRANDMOTHER),
    3: (KinKey.GREAT_GRANDFATHER, KinKey.GREAT_GRANDMOTHER),
    4: (KinKey.GREAT_GREAT_GRANDFATHER, KinKey.GREAT_GREAT_GRANDMOTHER),
}

DESCENDANT_KEYS = {
    1: (KinKey.SON, KinKey.DAUGHTER),
    2: (KinKey.GRANDSON, KinKey.GRANDDAUGHTER),
    3: (KinKey.GREAT_GRANDSON, KinKey.GREAT_GRANDDAUGHTER),
    4: (KinKey.GREAT_GREAT_GRANDSON, KinKey.GREAT_GREAT_GRANDDAUGHTER),
}

# (A is male, B's branch is paternal, A's parent is male) -> label
COUSIN_KEYS = {
    (True, True, True): KinKey.MALE_COUSIN_THROUGH_PATERNAL_UNCLE,
    (True, True, False): KinKey.MALE_COUSIN_THROUGH_PATERNAL_AUNT,
    (True, False, True): KinKey.MALE_COUSIN_THROUGH_MATERNAL_UNCLE,
    (True, False, False): KinKey.MALE_COUSIN_THROUGH_MATERNAL_AUNT,
    (False, True, True): KinKey.FEMALE_COUSIN_THROUGH_PATERNAL_UNCLE,
    (False, True, False): KinKey.FEMALE_COUSIN_THROUGH_PATERNAL_AUNT,
    (False, False, True): KinKey.FEMALE_COUSIN_THROUGH_MATERNAL_UNCLE,
    (False, False, False): KinKey.FEMALE_COUSIN_THROUGH_MATERNAL_AUNT,
}


def _gendered(table: dict, is_male: Optional[bool], depth: int) -> KinKey:
    if is_male is None:
        return KinKey.UNKNOWN
    if depth not in table:
        return KinKey.DISTANT
    male, female = table[depth]
    return male if is_male else female


def ancestor_key(is_male: Optional[bool], depth: int) -> KinKey:
    return _gendered(ANCESTOR_KEYS, is_male, depth)


def descendant_key(is_male: Optional[bool], depth: int) -> KinKey:
    return _gendered(DESCENDANT_KEYS, is_male, depth)


def _branch_of(graph, b: str, b_first_up: Optional[Person]) -> Optional[bool]:
    """True when b reaches the common ancestor through the father, False
    through the mother, None when it cannot be told."""
    if b_first_up is None:
        return None
    if b_first_up.id == graph.father_id_of(b):
        return True
    if b_first_up.id == graph.mother_id_of(b):
        return False
    return None


def relation_of(graph, a: Optional[str], b: Optional[str]) -> KinKey:
    """Name the relation of a to b.

    Spouses are recognised first, independently of any ancestor path. Then
    the lowest common ancestor drives a table keyed by both depths and the
    sex of the relevant persons. Relations further than
    config.max_kinship_depth generations, or without a common ancestor, are
    DISTANT; patterns that cannot be named (missing sex data, unresolvable
    branch) are UNKNOWN.

    Args:
        graph: Graph to query
        a: Id of the subject
        b: Id of the reference person

    Returns:
        KinKey
    """
    if not a or not b:
        return KinKey.UNKNOWN
    if a == b:
        return KinKey.SELF if graph.has(a) else KinKey.UNKNOWN

    if graph.are_spouses(a, b):
        person_a = graph.person(a)
        if person_a.is_male is True:
            return KinKey.HUSBAND
        if person_a.is_male is False:
            return KinKey.WIFE
        return KinKey.UNKNOWN

    if not graph.has(a) or not graph.has(b):
        return KinKey.UNKNOWN

    kin = kinship_of(graph, a, b)
    if kin is None:
        return KinKey.DISTANT

    max_depth = graph.config.max_kinship_depth
    if kin.depth_a > max_depth or kin.depth_b > max_depth:
        return KinKey.DISTANT

    a_male = kin.person_a.is_male

    if kin.depth_a == 0 and kin.depth_b > 0:
        return ancestor_key(a_male, kin.depth_b)
    if kin.depth_b == 0 and kin.depth_a > 0:
        return descendant_key(a_male, kin.depth_a)

    parent_a = graph.member_parent_id_of(a)
    if parent_a and parent_a == graph.member_parent_id_of(b):
        if a_male is None:
            return KinKey.UNKNOWN
        return KinKey.BROTHER if a_male else KinKey.SISTER

    # A is a sibling of B's parent
    if kin.depth_a == 1 and kin.depth_b == 2:
        paternal = _branch_of(graph, b, kin.b_first_up)
        if paternal is None or a_male is None:
            return KinKey.UNKNOWN
        if paternal:
            return KinKey.PATERNAL_UNCLE if a_male else KinKey.PATERNAL_AUNT
        return KinKey.MATERNAL_UNCLE if a_male else KinKey.MATERNAL_AUNT

    # A is a child of B's sibling
    if kin.depth_a == 2 and kin.depth_b == 1:
        through = kin.a_first_up
        if a_male is None or through is None or through.is_male is None:
            return KinKey.UNKNOWN
        if through.is_male:
            return KinKey.NEPHEW_THROUGH_BROTHER if a_male else KinKey.NIECE_THROUGH_BROTHER
        return KinKey.NEPHEW_THROUGH_SISTER if a_male else KinKey.NIECE_THROUGH_SISTER

    if kin.depth_a >= 2 and kin.depth_b >= 2:
        paternal = _branch_of(graph, b, kin.b_first_up)
        through = kin.a_first_up
        if a_male is None or paternal is None or through is None or through.is_male is None:
            return KinKey.UNKNOWN
        return COUSIN_KEYS[(a_male, paternal, through.is_male)]

    return KinKey.UNKNOWN
