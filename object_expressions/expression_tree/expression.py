import numpy as np
import sympy as sp
from typing import Callable, List, Mapping, Optional

from .core.node import Node
from .utils.tree_utils import calculate_tree_depth, get_variables
from ..errors import UnboundVariableError
from ..logging_system import LogLevel, is_enabled, log_debug, log_detail


class Expression:
  """Expression wrapper with cached rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, bindings: Mapping[str, float]) -> float:
    value = self.root.evaluate(bindings)
    if is_enabled(LogLevel.DETAILED):
      log_detail(f"{self.to_string()} = {value}")
    return value

  def evaluate_batch(self, bindings: Mapping[str, np.ndarray]) -> np.ndarray:
    return self.root.evaluate_batch(bindings)

  def differentiate(self, variable: str) -> 'Expression':
    derivative = Expression(self.root.differentiate(variable))
    if is_enabled(LogLevel.VERBOSE):
      log_debug(f"d/d{variable} {self.to_string()} -> {derivative.to_string()}")
    return derivative

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.render()
    return self._string_cache

  render = to_string

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return get_variables(self.root)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  # Function: bindings -> value, vectorised over numpy arrays
  def lambdify(self) -> Callable[[Mapping[str, np.ndarray]], np.ndarray]:
    names = self.variables()
    lambda_func = sp.lambdify([sp.Symbol(name) for name in names], self.to_sympy(), modules='numpy')

    def wrapper(bindings):
      missing = [name for name in names if name not in bindings]
      if missing:
        raise UnboundVariableError(missing[0])
      return lambda_func(*[bindings[name] for name in names])
    return wrapper

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.root!r})"

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root
