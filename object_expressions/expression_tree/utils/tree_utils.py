"""
Tree Utility Functions

Traversal and analysis helpers for expression trees. Traversals are
iterative so they are not limited by the interpreter's recursion depth.
"""

from collections import deque
from typing import List

from ..core.node import Node, ConstantNode, VariableNode, OperationNode
from ..core.operators import OpType


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = deque([node])
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.popleft()
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.operands)

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Pre-order, operands visited left to right"""
    stack = [node]
    all_nodes = []

    while stack:
        current_node = stack.pop()
        all_nodes.append(current_node)
        stack.extend(reversed(current_node.operands))

    return all_nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    max_depth = 0
    stack = [(node, 1)]

    while stack:
        current_node, depth = stack.pop()
        max_depth = max(max_depth, depth)
        for operand in current_node.operands:
            stack.append((operand, depth + 1))

    return max_depth


def count_nodes(node: Node) -> int:
    return len(_depth_first_traversal(node))


def get_variables(node: Node) -> List[str]:
    """Sorted unique variable names referenced by the tree"""
    return sorted({n.name for n in _depth_first_traversal(node) if isinstance(n, VariableNode)})


def get_constants(node: Node) -> List[float]:
    """Constant values in depth-first order"""
    return [n.value for n in _depth_first_traversal(node) if isinstance(n, ConstantNode)]


def find_nodes_by_operator(node: Node, op_type: OpType) -> List[OperationNode]:
    return [
        n for n in _depth_first_traversal(node)
        if isinstance(n, OperationNode) and n.op_type == op_type
    ]
