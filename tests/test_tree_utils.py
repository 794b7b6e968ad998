"""Traversal and analysis helpers."""

import pytest

from object_expressions import Add, Subtract, Multiply, Divide, ConstantNode, VariableNode, OpType
from object_expressions.expression_tree.utils import (
    get_all_nodes, calculate_tree_depth, count_nodes,
    get_variables, get_constants, find_nodes_by_operator
)

x, y = VariableNode("x"), VariableNode("y")
TREE = Add(Multiply(x, ConstantNode(2)), Divide(y, ConstantNode(3), x))


def test_breadth_first_order():
    rendered = [node.render() for node in get_all_nodes(TREE)]
    assert rendered[:3] == [TREE.render(), "(x*2.0)", "(y/3.0/x)"]
    assert rendered[3:] == ["x", "2.0", "y", "3.0", "x"]


def test_depth_first_order():
    rendered = [node.render() for node in get_all_nodes(TREE, traversal_order="depth_first")]
    assert rendered == [TREE.render(), "(x*2.0)", "x", "2.0", "(y/3.0/x)", "y", "3.0", "x"]


def test_invalid_traversal_order():
    with pytest.raises(ValueError):
        get_all_nodes(TREE, traversal_order="sideways")


def test_depth_and_count():
    assert calculate_tree_depth(x) == 1
    assert calculate_tree_depth(TREE) == 3
    assert count_nodes(TREE) == 8
    assert count_nodes(TREE) == TREE.size()


def test_deep_chain_depth_is_iterative():
    node = x
    for _ in range(5000):
        node = Subtract(node)
    assert calculate_tree_depth(node) == 5001


def test_variables_and_constants():
    assert get_variables(TREE) == ["x", "y"]
    assert get_variables(ConstantNode(1)) == []
    assert get_constants(TREE) == [2.0, 3.0]


def test_find_nodes_by_operator():
    found = find_nodes_by_operator(TREE, OpType.DIVIDE)
    assert len(found) == 1
    assert found[0].render() == "(y/3.0/x)"
    assert find_nodes_by_operator(TREE, OpType.SUBTRACT) == []
