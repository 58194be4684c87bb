"""Shared fixtures: a three-generation family around the Zlitni lineage.

    Ali Zlitni (g) + Fatma Ben (gw)                  [u0]
    ├── Ahmed Zlitni (f) + Salma Karray (m)          [u1]
    │   ├── Ahmed Zlitni (a)   b. 12/03/1950
    │   └── Mariem Zlitni (sis) b. 1955
    ├── Omar Zlitni (uncle) + Nadia Trabelsi (x)     [u2]
    │   └── Hedi Zlitni (c1)   b. 20/07/1950
    └── Aisha Zlitni (aunt) + Karim Gharbi (y)       [u3]
        └── Leila Gharbi (c2)

    Ahmed Zlitniya (z) is unrelated.
"""

import pytest

from bloodline import GraphConfig, build_graph

SENTINEL = 'Zlitni'


def person(pid, first, last, male, **extra):
    row = {'id': pid, 'firstname': first, 'lastname': last, 'is_male': male}
    row.update(extra)
    return row


@pytest.fixture
def config():
    return GraphConfig(lastname_sentinel=SENTINEL)


@pytest.fixture
def family_rows():
    persons = [
        person('g', 'Ali', 'Zlitni', True, birth_year=1890, death_year=1960),
        person('gw', 'Fatma', 'Ben', False),
        person('f', 'Ahmed', 'Zlitni', True, birth_year=1920),
        person('m', 'Salma', 'Karray', False),
        person('uncle', 'Omar', 'Zlitni', True),
        person('x', 'Nadia', 'Trabelsi', False),
        person('aunt', 'Aisha', 'Zlitni', False),
        person('y', 'Karim', 'Gharbi', True),
        person('a', 'Ahmed', 'Zlitni', True, birth_year=1950, birth_month=3, birth_day=12),
        person('sis', 'Mariem', 'Zlitni', False, birth_year=1955),
        person('c1', 'Hedi', 'Zlitni', True, birth_year=1950, birth_month=7, birth_day=20),
        person('c2', 'Leila', 'Gharbi', False),
        person('z', 'Ahmed', 'Zlitniya', True),
    ]
    unions = [
        {'id': 'u0', 'partner_a_id': 'g', 'partner_b_id': 'gw'},
        {'id': 'u1', 'partner_a_id': 'f', 'partner_b_id': 'm'},
        {'id': 'u2', 'partner_a_id': 'x', 'partner_b_id': 'uncle'},
        {'id': 'u3', 'partner_a_id': 'aunt', 'partner_b_id': 'y'},
    ]
    filiations = [
        {'child_id': 'f', 'spouse_link_id': 'u0'},
        {'child_id': 'uncle', 'spouse_link_id': 'u0'},
        {'child_id': 'aunt', 'spouse_link_id': 'u0'},
        {'child_id': 'a', 'spouse_link_id': 'u1'},
        {'child_id': 'sis', 'spouse_link_id': 'u1'},
        {'child_id': 'c1', 'spouse_link_id': 'u2'},
        {'child_id': 'c2', 'spouse_link_id': 'u3'},
    ]
    return persons, unions, filiations


@pytest.fixture
def graph(family_rows, config):
    return build_graph(*family_rows, config=config)


@pytest.fixture
def make_line():
    """Rows for a single male line of ``depth`` generations below ``root``."""
    def _line(prefix, depth, root='root'):
        persons, unions, filiations = [], [], []
        parent = root
        for i in range(1, depth + 1):
            pid = f'{prefix}{i}'
            persons.append(person(pid, f'{prefix.upper()}{i}', SENTINEL, True))
            unions.append({'id': f'u-{parent}', 'partner_a_id': parent})
            filiations.append({'child_id': pid, 'spouse_link_id': f'u-{parent}'})
            parent = pid
        return persons, unions, filiations
    return _line
