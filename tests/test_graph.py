"""Tests for graph lookups, resolvers and upward walks."""

import logging

from bloodline import Graph, GraphConfig, build_graph
from bloodline.graph.traversal import walk_up


def test_lookup(graph):
    assert 'a' in graph
    assert graph.has('a')
    assert not graph.has('ghost')
    assert not graph.has(None)
    assert not graph.has('')
    assert graph.person('a').fullname == 'Ahmed Zlitni'
    assert graph.person('ghost') is None


def test_person_object_accepted_as_reference(graph):
    a = graph.person('a')
    assert graph.father_id_of(a) == 'f'
    assert a in graph


def test_member_lookup(graph):
    assert graph.member('a') is graph.person('a')
    assert graph.member('m') is None


def test_parents(graph):
    assert graph.father_id_of('a') == 'f'
    assert graph.mother_id_of('a') == 'm'
    assert graph.parents_id_of('a') == ['f', 'm']
    assert graph.parents_id_of('g') == []
    assert graph.has_parents('a')
    assert not graph.has_parents('g')


def test_unions_partner_order_does_not_matter(graph):
    # Omar is partner B of his union but still the father
    assert graph.father_id_of('c1') == 'uncle'
    assert graph.mother_id_of('c1') == 'x'


def test_spouses_and_children(graph):
    assert graph.spouses_id_of('f') == ['m']
    assert graph.are_spouses('m', 'f')
    assert not graph.are_spouses('f', 'a')
    assert graph.children_id_of('g') == ['f', 'uncle', 'aunt']
    assert graph.children_id_of('gw') == ['f', 'uncle', 'aunt']
    assert graph.has_children('m')
    assert not graph.has_children('a')


def test_siblings(graph):
    assert graph.siblings_id_of('uncle') == ['f', 'aunt']
    assert graph.siblings_id_of('a') == ['sis']
    assert graph.siblings_id_of('g') == []


def test_member_filters(graph):
    assert graph.member_parent_id_of('a') == 'f'
    # Karim is not a member, so the member parent is the mother
    assert graph.member_parent_id_of('c2') == 'aunt'
    assert graph.non_member_parent_id_of('c2') == 'y'
    assert graph.non_member_parent_id_of('a') == 'm'
    assert graph.member_parent_id_of('g') is None
    assert graph.member_spouses_id_of('m') == ['f']
    assert graph.non_member_spouses_id_of('f') == ['m']
    assert graph.has_member_parent('c2')


def test_unknown_ids_never_raise(graph):
    assert graph.father_of('ghost') is None
    assert graph.parents_of('ghost') == []
    assert graph.spouses_id_of('ghost') == []
    assert graph.children_id_of(None) == []
    assert graph.siblings_id_of('ghost') == []
    assert graph.member_parent_id_of('ghost') is None
    assert not graph.has_father('ghost')
    assert graph.ancestors_id_of('ghost') == []
    assert graph.bloodline_id_of('ghost') == []
    assert graph.bloodline_name_of('ghost') is None


def test_person_view(graph):
    view = graph.person_view('a')
    assert view.id == 'a'
    assert view.father.id == 'f'
    assert [p.id for p in view.parents] == ['f', 'm']


def test_from_rows(family_rows, config):
    graph = Graph.from_rows(*family_rows, config=config)
    assert graph.config is config
    assert graph.is_member('a')


def test_repr(graph):
    assert repr(graph) == 'Graph(persons=13, members=8)'


class TestWalks:
    """Tests for ancestor and bloodline walks."""

    def test_ancestors(self, graph):
        assert graph.ancestors_id_of('a') == ['a', 'f', 'g']
        assert graph.ancestors_id_of('c2') == ['c2', 'aunt', 'g']
        assert graph.ancestors_id_of('g') == ['g']

    def test_ancestors_of_non_member(self, graph):
        assert graph.ancestors_id_of('m') == ['m']

    def test_bloodline(self, graph):
        assert graph.bloodline_id_of('a') == ['a', 'f', 'g']
        # father line only, member or not
        assert graph.bloodline_id_of('c2') == ['c2', 'y']
        assert graph.bloodline_id_of('a', max_steps=2) == ['a', 'f']
        assert graph.bloodline_id_of('a', max_steps=0) == []

    def test_bloodline_name(self, graph):
        assert graph.bloodline_name_of('a') == 'Ahmed Ahmed Ali Zlitni'
        assert graph.bloodline_name_of('a', separator=' ben ') == 'Ahmed ben Ahmed ben Ali ben Zlitni'

    def test_ancestor_depth_limit(self, make_line):
        persons, unions, filiations = make_line('p', 10)
        persons.append({'id': 'root', 'is_male': True, 'lastname': 'Zlitni'})
        config = GraphConfig(lastname_sentinel='Zlitni', ancestor_depth_limit=3)
        graph = build_graph(persons, unions, filiations, config=config)

        assert graph.ancestors_id_of('p10') == ['p10', 'p9', 'p8']
        assert len(graph.bloodline_id_of('p10')) == 3

    def test_cycle_terminates(self, caplog):
        persons = [
            {'id': 'a', 'is_male': True, 'lastname': 'Zlitni'},
            {'id': 'b', 'is_male': True, 'lastname': 'Zlitni'},
        ]
        unions = [{'id': 'ua', 'partner_a_id': 'a'}, {'id': 'ub', 'partner_a_id': 'b'}]
        filiations = [
            {'child_id': 'b', 'spouse_link_id': 'ua'},
            {'child_id': 'a', 'spouse_link_id': 'ub'},
        ]
        graph = build_graph(persons, unions, filiations,
                            config=GraphConfig(lastname_sentinel='Zlitni'))

        with caplog.at_level(logging.WARNING, logger='bloodline.graph.traversal'):
            assert graph.ancestors_id_of('a') == ['a', 'b']
            assert graph.bloodline_id_of('b') == ['b', 'a']
        assert 'Cycle detected' in caplog.text


def test_walk_up_limit_and_stop():
    chain = {'a': 'b', 'b': 'c', 'c': None}
    assert walk_up('a', chain.get, 10) == ['a', 'b', 'c']
    assert walk_up('a', chain.get, 2) == ['a', 'b']
    assert walk_up(None, chain.get, 10) == []
