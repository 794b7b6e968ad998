"""Utilities for expression trees."""

from .sympy_utils import (
    to_sympy, from_sympy, latex_representation, sample_bindings, derivative_matches
)
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, count_nodes,
    get_variables, get_constants, find_nodes_by_operator
)
from .validator import ExpressionValidator

__all__ = [
    'to_sympy', 'from_sympy', 'latex_representation', 'sample_bindings', 'derivative_matches',
    'get_all_nodes', 'calculate_tree_depth', 'count_nodes',
    'get_variables', 'get_constants', 'find_nodes_by_operator',
    'ExpressionValidator'
]
