"""Core expression tree components."""

from .node import (
    Node, ConstantNode, VariableNode, OperationNode,
    Add, Subtract, Multiply, Divide,
    make_operation, apply_diff_rule,
    constant, variable, add, subtract, multiply, divide
)
from .operators import (
    NodeType, OpType, OP_SYMBOLS, SYMBOL_OP_MAP, COMPANION_OPS,
    reduce_values, evaluate_constant, evaluate_binary_op_fast
)

__all__ = [
    'Node', 'ConstantNode', 'VariableNode', 'OperationNode',
    'Add', 'Subtract', 'Multiply', 'Divide',
    'make_operation', 'apply_diff_rule',
    'constant', 'variable', 'add', 'subtract', 'multiply', 'divide',
    'NodeType', 'OpType', 'OP_SYMBOLS', 'SYMBOL_OP_MAP', 'COMPANION_OPS',
    'reduce_values', 'evaluate_constant', 'evaluate_binary_op_fast'
]
