"""Expression Tree Module

Immutable expression trees with evaluation, symbolic differentiation and
rendering.
"""

from .expression import Expression
from .core.node import (
    Node,
    ConstantNode,
    VariableNode,
    OperationNode,
    Add,
    Subtract,
    Multiply,
    Divide,
    constant,
    variable,
    add,
    subtract,
    multiply,
    divide
)
from .core.operators import NodeType, OpType, OP_SYMBOLS, COMPANION_OPS
from .utils import (
    ExpressionValidator, to_sympy, from_sympy, derivative_matches, latex_representation
)

__all__ = [
    "Expression",
    "Node", "ConstantNode", "VariableNode", "OperationNode",
    "Add", "Subtract", "Multiply", "Divide",
    "constant", "variable", "add", "subtract", "multiply", "divide",
    "NodeType", "OpType", "OP_SYMBOLS", "COMPANION_OPS",
    "ExpressionValidator", "to_sympy", "from_sympy", "derivative_matches",
    "latex_representation"
]
