"""Object Expressions Package

Arithmetic expression trees over constants and named variables, with
numeric evaluation and symbolic differentiation.
"""

from .expression_tree import (
  Expression, Node, ConstantNode, VariableNode, OperationNode,
  Add, Subtract, Multiply, Divide,
  constant, variable, add, subtract, multiply, divide,
  NodeType, OpType, ExpressionValidator,
  to_sympy, from_sympy, derivative_matches, latex_representation
)
from .errors import (
  ExpressionError, UnboundVariableError, EmptyOperandError,
  BindingShapeError, InvalidExpressionError
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level
from .config import VERSION

__version__ = VERSION
__all__ = [
  "Expression", "Node", "ConstantNode", "VariableNode", "OperationNode",
  "Add", "Subtract", "Multiply", "Divide",
  "constant", "variable", "add", "subtract", "multiply", "divide",
  "NodeType", "OpType", "ExpressionValidator",
  "to_sympy", "from_sympy", "derivative_matches", "latex_representation",
  "ExpressionError", "UnboundVariableError", "EmptyOperandError",
  "BindingShapeError", "InvalidExpressionError",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
