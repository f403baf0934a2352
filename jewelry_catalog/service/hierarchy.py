"""
Дерево категорий поверх плоского списка (adjacency list).

Функции принимают любые объекты с атрибутами ``id`` и ``parent_id``
(для ``preorder`` ещё ``name``): ORM-модели, схемы или namedtuple в тестах.
"""
from collections import defaultdict
from typing import Iterable, Sequence

import jewelry_catalog.constants as c


class HierarchyCycleError(ValueError):
    """Цепочка parent_id замкнулась сама на себя"""

    def __init__(self, node_id):
        super().__init__(f'Category {node_id} is its own ancestor')
        self.node_id = node_id


def _parents(nodes: Iterable) -> dict:
    return {node.id: node.parent_id for node in nodes}


def would_create_cycle(nodes: Iterable, node_id, new_parent_id) -> bool:
    """
    Станет ли узел своим же предком, если назначить ему new_parent_id.
    """
    if new_parent_id is None:
        return False
    if new_parent_id == node_id:
        return True
    parents = _parents(nodes)
    seen = set()
    current = new_parent_id
    while current is not None and current not in seen:
        if current == node_id:
            return True
        seen.add(current)
        current = parents.get(current)
    return False


def compute_levels(nodes: Iterable) -> dict:
    """
    Уровень каждого узла: 0 для корня, level(parent) + 1 для остальных.
    Узел с parent_id на отсутствующую запись считается корнем.
    """
    parents = _parents(nodes)
    levels = {}
    for node_id in parents:
        chain = []
        on_chain = set()
        current = node_id
        while current not in levels:
            if current in on_chain:
                raise HierarchyCycleError(current)
            chain.append(current)
            on_chain.add(current)
            parent_id = parents[current]
            if parent_id is None or parent_id not in parents:
                levels[current] = c.CATEGORY_ROOT_LEVEL
                chain.pop()
                break
            current = parent_id
        # разматываем цепочку от ближайшего к корню
        for chained_id in reversed(chain):
            levels[chained_id] = levels[parents[chained_id]] + 1
    return levels


def children_map(nodes: Iterable) -> dict:
    children = defaultdict(list)
    for node in nodes:
        children[node.parent_id].append(node)
    return children


def descendant_ids(nodes: Iterable, node_id) -> set:
    nodes = list(nodes)
    children = children_map(nodes)
    result = set()
    stack = [node_id]
    while stack:
        for child in children.get(stack.pop(), []):
            if child.id not in result and child.id != node_id:
                result.add(child.id)
                stack.append(child.id)
    return result


def _sibling_key(node):
    return ((node.name or '').casefold(), node.id)


def preorder(nodes: Sequence) -> list:
    """
    Порядок вывода дерева: родитель, затем его поддерево, затем следующий
    брат. Братья сортируются по имени без учёта регистра, затем по id.
    """
    nodes = list(nodes)
    ids = {node.id for node in nodes}
    children = defaultdict(list)
    roots = []
    for node in nodes:
        if node.parent_id is None or node.parent_id not in ids:
            roots.append(node)
        else:
            children[node.parent_id].append(node)

    ordered = []
    visited = set()
    stack = sorted(roots, key=_sibling_key, reverse=True)
    while stack:
        node = stack.pop()
        if node.id in visited:
            continue
        visited.add(node.id)
        ordered.append(node)
        stack.extend(
            sorted(children.get(node.id, []), key=_sibling_key, reverse=True)
        )

    # узлы из замкнутых цепочек недостижимы от корней
    if len(ordered) < len(nodes):
        ordered.extend(
            sorted(
                (node for node in nodes if node.id not in visited),
                key=_sibling_key
            )
        )
    return ordered
