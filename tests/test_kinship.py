"""Tests for common-ancestor search and relation naming."""

import pytest

from bloodline import GraphConfig, KinKey, build_graph


class TestKinship:
    """Tests for kinship_of."""

    def test_same_person(self, graph):
        kin = graph.kinship_of('a', 'a')
        assert kin.common.id == 'a'
        assert (kin.depth_a, kin.depth_b) == (0, 0)

    def test_cousins(self, graph):
        kin = graph.kinship_of('c1', 'a')
        assert kin.common.id == 'g'
        assert (kin.depth_a, kin.depth_b) == (2, 2)
        assert kin.a_first_up.id == 'uncle'
        assert kin.b_first_up.id == 'f'
        assert [p.id for p in kin.path] == ['uncle', 'f']

    def test_direct_ancestor(self, graph):
        kin = graph.kinship_of('g', 'a')
        assert kin.common.id == 'g'
        assert (kin.depth_a, kin.depth_b) == (0, 2)
        assert kin.a_first_up is None
        assert [p.id for p in kin.path] == ['f']

    def test_symmetry(self, graph):
        for a, b in [('c1', 'a'), ('uncle', 'c2'), ('g', 'sis'), ('a', 'sis')]:
            forward = graph.kinship_of(a, b)
            backward = graph.kinship_of(b, a)
            assert forward.common == backward.common
            assert backward == forward.swapped()

    def test_unknown_ids(self, graph):
        assert graph.kinship_of('a', 'ghost') is None
        assert graph.kinship_of(None, 'a') is None

    def test_no_common_ancestor(self, graph):
        # Salma is not a member, so her chain stops at herself
        assert graph.kinship_of('m', 'a') is None
        assert graph.kinship_of('z', 'a') is None


class TestRelations:
    """Tests for relation_of."""

    @pytest.mark.parametrize('a, b, expected', [
        ('a', 'a', KinKey.SELF),
        ('f', 'a', KinKey.FATHER),
        ('a', 'f', KinKey.SON),
        ('g', 'a', KinKey.GRANDFATHER),
        ('a', 'g', KinKey.GRANDSON),
        ('aunt', 'g', KinKey.DAUGHTER),
        ('g', 'c2', KinKey.GRANDFATHER),
        ('c2', 'g', KinKey.GRANDDAUGHTER),
        ('a', 'sis', KinKey.BROTHER),
        ('sis', 'a', KinKey.SISTER),
        ('uncle', 'f', KinKey.BROTHER),
        ('aunt', 'uncle', KinKey.SISTER),
        ('uncle', 'a', KinKey.PATERNAL_UNCLE),
        ('aunt', 'a', KinKey.PATERNAL_AUNT),
        ('uncle', 'c2', KinKey.MATERNAL_UNCLE),
        ('f', 'c2', KinKey.MATERNAL_UNCLE),
        ('a', 'uncle', KinKey.NEPHEW_THROUGH_BROTHER),
        ('sis', 'aunt', KinKey.NIECE_THROUGH_BROTHER),
        ('c2', 'uncle', KinKey.NIECE_THROUGH_SISTER),
        ('c1', 'a', KinKey.MALE_COUSIN_THROUGH_PATERNAL_UNCLE),
        ('c2', 'a', KinKey.FEMALE_COUSIN_THROUGH_PATERNAL_AUNT),
        ('a', 'c2', KinKey.MALE_COUSIN_THROUGH_MATERNAL_UNCLE),
        ('sis', 'c1', KinKey.FEMALE_COUSIN_THROUGH_PATERNAL_UNCLE),
        ('f', 'm', KinKey.HUSBAND),
        ('m', 'f', KinKey.WIFE),
        ('y', 'aunt', KinKey.HUSBAND),
    ])
    def test_family_relations(self, graph, a, b, expected):
        assert graph.relation_of(a, b) == expected

    def test_relation_strings(self, graph):
        assert str(graph.relation_of('uncle', 'a')) == 'paternal-uncle'
        assert KinKey('male-cousin-through-paternal-uncle') is KinKey.MALE_COUSIN_THROUGH_PATERNAL_UNCLE

    def test_unknown_ids(self, graph):
        assert graph.relation_of('a', 'ghost') == KinKey.UNKNOWN
        assert graph.relation_of(None, 'a') == KinKey.UNKNOWN
        assert graph.relation_of('ghost', 'ghost') == KinKey.UNKNOWN

    def test_unrelated_is_distant(self, graph):
        assert graph.relation_of('z', 'a') == KinKey.DISTANT

    def test_beyond_max_depth_is_distant(self, make_line):
        p_persons, p_unions, p_filiations = make_line('p', 5)
        q_persons, _, q_filiations = make_line('q', 5)
        q_unions = [{'id': f'u-q{i}', 'partner_a_id': f'q{i}'} for i in range(1, 5)]
        persons = [{'id': 'root', 'is_male': True, 'lastname': 'Zlitni'}] + p_persons + q_persons
        config = GraphConfig(lastname_sentinel='Zlitni')
        graph = build_graph(persons, p_unions + q_unions, p_filiations + q_filiations, config=config)

        assert graph.relation_of('root', 'p4') == KinKey.GREAT_GREAT_GRANDFATHER
        assert graph.relation_of('p4', 'root') == KinKey.GREAT_GREAT_GRANDSON
        assert graph.relation_of('root', 'p5') == KinKey.DISTANT
        assert graph.relation_of('p5', 'q5') == KinKey.DISTANT
        assert graph.kinship_of('p5', 'q5').common.id == 'root'

        wider = build_graph(persons, p_unions + q_unions, p_filiations + q_filiations,
                            config=config.replace(max_kinship_depth=5))
        assert wider.relation_of('p5', 'q5') == KinKey.MALE_COUSIN_THROUGH_PATERNAL_UNCLE

    def test_unknown_sex(self):
        persons = [
            {'id': 'f', 'is_male': True, 'lastname': 'Zlitni'},
            {'id': 'm', 'is_male': False},
            {'id': 'k', 'firstname': 'Kid'},
            {'id': 's'},
        ]
        unions = [
            {'id': 'u', 'partner_a_id': 'f', 'partner_b_id': 'm'},
            {'id': 'u2', 'partner_a_id': 'k', 'partner_b_id': 's'},
        ]
        graph = build_graph(persons, unions, [{'child_id': 'k', 'spouse_link_id': 'u'}],
                            config=GraphConfig(lastname_sentinel='Zlitni'))

        assert graph.relation_of('f', 'k') == KinKey.FATHER
        assert graph.relation_of('k', 'f') == KinKey.UNKNOWN
        assert graph.relation_of('s', 'k') == KinKey.UNKNOWN


def test_spouses_named_before_common_ancestor(family_rows, config):
    """Test that married cousins are husband and wife, not cousins."""
    persons, unions, filiations = family_rows
    unions = unions + [{'id': 'u4', 'partner_a_id': 'c1', 'partner_b_id': 'c2'}]
    graph = build_graph(persons, unions, filiations, config=config)

    assert graph.relation_of('c1', 'c2') == KinKey.HUSBAND
    assert graph.relation_of('c2', 'c1') == KinKey.WIFE
    assert graph.kinship_of('c1', 'c2').common.id == 'g'


def test_ancestor_cycle_resolves_no_kinship(config):
    """Test that mutually parented persons get no kinship in either direction."""
    persons = [
        {'id': 'a', 'is_male': True, 'lastname': 'Zlitni'},
        {'id': 'b', 'is_male': True, 'lastname': 'Zlitni'},
    ]
    unions = [{'id': 'ua', 'partner_a_id': 'a'}, {'id': 'ub', 'partner_a_id': 'b'}]
    filiations = [
        {'child_id': 'b', 'spouse_link_id': 'ua'},
        {'child_id': 'a', 'spouse_link_id': 'ub'},
    ]
    graph = build_graph(persons, unions, filiations, config=config)

    assert graph.kinship_of('a', 'b') is None
    assert graph.kinship_of('b', 'a') is None
    assert graph.relation_of('a', 'b') == KinKey.DISTANT
    assert graph.relation_of('b', 'a') == KinKey.DISTANT
    assert graph.kinship_of('a', 'a').depth_a == 0
