from collections import namedtuple

import pytest

from jewelry_catalog.service.hierarchy import (
    HierarchyCycleError,
    compute_levels,
    descendant_ids,
    preorder,
    would_create_cycle,
)

Node = namedtuple('Node', 'id parent_id name')

TREE = [
    Node(1, None, 'Rings'),
    Node(2, 1, 'Engagement Rings'),
    Node(3, 2, 'Solitaire'),
    Node(4, None, 'Necklaces'),
    Node(5, 1, 'bands'),
    Node(6, 4, 'Chains'),
]


def names(nodes):
    return [node.name for node in nodes]


def test_levels_follow_parent_chain():
    assert compute_levels(TREE) == {1: 0, 2: 1, 3: 2, 4: 0, 5: 1, 6: 1}


def test_levels_treat_missing_parent_as_root():
    levels = compute_levels([Node(7, 99, 'Orphan'), Node(8, 7, 'Child')])
    assert levels == {7: 0, 8: 1}


def test_levels_raise_on_cycle():
    nodes = [Node(1, 2, 'A'), Node(2, 1, 'B')]
    with pytest.raises(HierarchyCycleError):
        compute_levels(nodes)


@pytest.mark.parametrize('node_id, new_parent_id, expected', [
    (1, 1, True),
    (1, 3, True),
    (2, 3, True),
    (3, 1, False),
    (2, 4, False),
    (1, None, False),
])
def test_would_create_cycle(node_id, new_parent_id, expected):
    assert would_create_cycle(TREE, node_id, new_parent_id) is expected


def test_descendant_ids():
    assert descendant_ids(TREE, 1) == {2, 3, 5}
    assert descendant_ids(TREE, 3) == set()


def test_preorder_puts_children_right_after_parent():
    assert names(preorder(TREE)) == [
        'Necklaces', 'Chains', 'Rings', 'bands', 'Engagement Rings',
        'Solitaire',
    ]


def test_preorder_breaks_name_ties_by_id():
    nodes = [Node(3, None, 'Rings'), Node(2, None, 'rings')]
    assert [node.id for node in preorder(nodes)] == [2, 3]


def test_preorder_keeps_unreachable_nodes():
    nodes = [Node(1, None, 'Root'), Node(2, 3, 'B'), Node(3, 2, 'A')]
    assert names(preorder(nodes)) == ['Root', 'A', 'B']
