import numpy as np
from typing import Mapping, Optional

from ..core.node import Node, ConstantNode
from .tree_utils import calculate_tree_depth, get_all_nodes
from ... import config
from ...errors import ExpressionError, InvalidExpressionError
from ...logging_system import log_warning


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, bindings: Optional[Mapping[str, float]] = None) -> bool:
    reason = ExpressionValidator.find_problem(node, bindings)
    if reason is not None:
      log_warning(f"Rejected expression: {reason}")
      return False
    return True

  @staticmethod
  def ensure_valid(node: Node, bindings: Optional[Mapping[str, float]] = None) -> Node:
    reason = ExpressionValidator.find_problem(node, bindings)
    if reason is not None:
      raise InvalidExpressionError(reason)
    return node

  @staticmethod
  def find_problem(node: Node, bindings: Optional[Mapping[str, float]] = None) -> Optional[str]:
    """Return a description of the first problem found, or None for a valid tree."""
    if not isinstance(node, Node):
      return f"expected a Node, got {type(node).__name__}"

    # Depth is checked before any recursive traversal
    depth = calculate_tree_depth(node)
    if depth > config.MAX_EXPRESSION_DEPTH:
      return f"tree depth {depth} exceeds limit {config.MAX_EXPRESSION_DEPTH}"

    for current in get_all_nodes(node):
      if isinstance(current, ConstantNode) and not np.isfinite(current.value):
        return f"constant {current.render()} is not finite"

    if bindings is not None:
      return ExpressionValidator._test_evaluation(node, bindings)
    return None

  @staticmethod
  def _test_evaluation(node: Node, bindings: Mapping[str, float]) -> Optional[str]:
    try:
      value = node.evaluate(bindings)
    except ExpressionError as e:
      return f"evaluation failed: {e}"
    if not np.isfinite(value):
      return f"evaluation is not finite: {value}"
    return None
