import numbers
import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Tuple
from .operators import (
  NodeType, OpType, OP_SYMBOLS, SYMBOL_OP_MAP, COMPANION_OPS,
  reduce_values, evaluate_constant, evaluate_binary_op_fast
)
from ...errors import BindingShapeError, EmptyOperandError, UnboundVariableError


class Node(ABC):
  """Immutable expression tree node with cached hash and size"""

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    object.__setattr__(self, '_hash_cache', None)
    object.__setattr__(self, '_size_cache', None)

  def __setattr__(self, name, value):
    raise AttributeError(f"{type(self).__name__} is immutable")

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} is immutable")

  @property
  def operands(self) -> Tuple['Node', ...]:
    return ()

  @abstractmethod
  def evaluate(self, bindings: Mapping[str, float]) -> float:
    pass

  @abstractmethod
  def differentiate(self, variable: str) -> 'Node':
    pass

  @abstractmethod
  def render(self) -> str:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def evaluate_batch(self, bindings: Mapping[str, np.ndarray]) -> np.ndarray:
    """Evaluate the tree for many binding samples at once.

    Every binding is a scalar or a 1-D array; all arrays must share a length.
    """
    arrays, n_samples = _prepare_batch_bindings(bindings)
    return self._evaluate_batch(arrays, n_samples)

  @abstractmethod
  def _evaluate_batch(self, arrays: Dict[str, np.ndarray], n_samples: int) -> np.ndarray:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      object.__setattr__(self, '_size_cache', self._compute_size())
    return self._size_cache

  def _compute_size(self) -> int:
    return 1 + sum(operand.size() for operand in self.operands)

  def __hash__(self) -> int:
    if self._hash_cache is None:
      object.__setattr__(self, '_hash_cache', self._compute_hash())
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    if self is other:
      return True
    return self._kind == other._kind and self._same_structure(other)

  @abstractmethod
  def _same_structure(self, other: "Node") -> bool:
    pass

  def __str__(self) -> str:
    return self.render()

  # Arithmetic operators build binary operations; numbers become constants.
  def __add__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Add(self, other)

  def __radd__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Add(other, self)

  def __sub__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Subtract(self, other)

  def __rsub__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Subtract(other, self)

  def __mul__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Multiply(self, other)

  def __rmul__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Multiply(other, self)

  def __truediv__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Divide(self, other)

  def __rtruediv__(self, other):
    other = _coerce_operand(other)
    return NotImplemented if other is None else Divide(other, self)


class ConstantNode(Node):
  __slots__ = ('_value',)
  _kind = NodeType.CONSTANT

  def __init__(self, value: float):
    super().__init__()
    object.__setattr__(self, '_value', float(value))

  @property
  def value(self) -> float:
    return self._value

  def evaluate(self, bindings: Mapping[str, float]) -> float:
    return self._value

  def differentiate(self, variable: str) -> 'ConstantNode':
    return ConstantNode(0.0)

  def render(self) -> str:
    return repr(self._value)

  def to_sympy(self) -> sp.Expr:
    return sp.Float(self._value)

  def _evaluate_batch(self, arrays, n_samples):
    return evaluate_constant(n_samples, self._value)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    # hash(nan) is per-object, so all nans share one key
    return hash((self._kind, 'nan' if np.isnan(self._value) else self._value))

  def _same_structure(self, other) -> bool:
    if np.isnan(self._value):
      return bool(np.isnan(other._value))
    return self._value == other._value

  def __reduce__(self):
    return (ConstantNode, (self._value,))

  def __repr__(self) -> str:
    return f"ConstantNode({self._value!r})"


class VariableNode(Node):
  __slots__ = ('_name',)
  _kind = NodeType.VARIABLE

  def __init__(self, name: str):
    if not isinstance(name, str):
      raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
    super().__init__()
    object.__setattr__(self, '_name', name)

  @property
  def name(self) -> str:
    return self._name

  def evaluate(self, bindings: Mapping[str, float]) -> float:
    try:
      return float(bindings[self._name])
    except KeyError:
      raise UnboundVariableError(self._name) from None

  def differentiate(self, variable: str) -> 'ConstantNode':
    return ConstantNode(1.0) if variable == self._name else ConstantNode(0.0)

  def render(self) -> str:
    return self._name

  def to_sympy(self) -> sp.Expr:
    return sp.Symbol(self._name)

  def _evaluate_batch(self, arrays, n_samples):
    try:
      return arrays[self._name]
    except KeyError:
      raise UnboundVariableError(self._name) from None

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((self._kind, self._name))

  def _same_structure(self, other) -> bool:
    return self._name == other._name

  def __reduce__(self):
    return (VariableNode, (self._name,))

  def __repr__(self) -> str:
    return f"VariableNode({self._name!r})"


class OperationNode(Node):
  """n-ary operation folded left to right with the reducer of its tag"""

  __slots__ = ('_op_type', '_operands')
  _kind = NodeType.OPERATION

  def __init__(self, op_type, *operands: Node):
    if isinstance(op_type, str):
      if op_type not in SYMBOL_OP_MAP:
        raise ValueError(f"Unknown operation symbol: {op_type!r}")
      op_type = SYMBOL_OP_MAP[op_type]
    op_type = OpType(op_type)
    if not operands:
      raise EmptyOperandError(OP_SYMBOLS[op_type])
    for operand in operands:
      if not isinstance(operand, Node):
        raise TypeError(f"Operands must be Node instances, got {type(operand).__name__}")
    super().__init__()
    object.__setattr__(self, '_op_type', op_type)
    object.__setattr__(self, '_operands', tuple(operands))

  @property
  def op_type(self) -> OpType:
    return self._op_type

  @property
  def symbol(self) -> str:
    return OP_SYMBOLS[self._op_type]

  @property
  def operands(self) -> Tuple[Node, ...]:
    return self._operands

  def evaluate(self, bindings: Mapping[str, float]) -> float:
    result = self._operands[0].evaluate(bindings)
    for operand in self._operands[1:]:
      result = reduce_values(result, operand.evaluate(bindings), self._op_type)
    return result

  def differentiate(self, variable: str) -> Node:
    if len(self._operands) == 1:
      return self._operands[0].differentiate(variable)
    first, rest = self._operands[0], self._operands[1:]
    if len(rest) == 1:
      right = rest[0]
    else:
      right = make_operation(COMPANION_OPS[self._op_type], *rest)
    return apply_diff_rule(self._op_type, variable, first, right)

  def render(self) -> str:
    return '(' + self.symbol.join(operand.render() for operand in self._operands) + ')'

  def to_sympy(self) -> sp.Expr:
    result = self._operands[0].to_sympy()
    for operand in self._operands[1:]:
      term = operand.to_sympy()
      if self._op_type == OpType.ADD:
        result = sp.Add(result, term)
      elif self._op_type == OpType.SUBTRACT:
        result = sp.Add(result, sp.Mul(-1, term))
      elif self._op_type == OpType.MULTIPLY:
        result = sp.Mul(result, term)
      else:
        result = sp.Mul(result, sp.Pow(term, -1))
    return result

  def _evaluate_batch(self, arrays, n_samples):
    result = self._operands[0]._evaluate_batch(arrays, n_samples)
    for operand in self._operands[1:]:
      right_val = operand._evaluate_batch(arrays, n_samples)
      result = evaluate_binary_op_fast(result, right_val, self._op_type)
    return result

  def _compute_hash(self) -> int:
    return hash((self._kind, self._op_type, self._operands))

  def _same_structure(self, other) -> bool:
    return self._op_type == other._op_type and self._operands == other._operands

  def __reduce__(self):
    # Rebuilt through the constructor; the immutability guard rejects setattr
    return (make_operation, (self._op_type, *self._operands))

  def __repr__(self) -> str:
    args = ', '.join(repr(operand) for operand in self._operands)
    return f"{OPERATION_NAMES[self._op_type]}({args})"


class Add(OperationNode):
  __slots__ = ()

  def __init__(self, *operands: Node):
    super().__init__(OpType.ADD, *operands)


class Subtract(OperationNode):
  __slots__ = ()

  def __init__(self, *operands: Node):
    super().__init__(OpType.SUBTRACT, *operands)


class Multiply(OperationNode):
  __slots__ = ()

  def __init__(self, *operands: Node):
    super().__init__(OpType.MULTIPLY, *operands)


class Divide(OperationNode):
  __slots__ = ()

  def __init__(self, *operands: Node):
    super().__init__(OpType.DIVIDE, *operands)


OPERATION_CLASSES = {
  OpType.ADD: Add,
  OpType.SUBTRACT: Subtract,
  OpType.MULTIPLY: Multiply,
  OpType.DIVIDE: Divide,
}
OPERATION_NAMES = {op_type: cls.__name__ for op_type, cls in OPERATION_CLASSES.items()}


def make_operation(op_type: OpType, *operands: Node) -> OperationNode:
  return OPERATION_CLASSES[OpType(op_type)](*operands)


def apply_diff_rule(op_type: OpType, variable: str, left: Node, right: Node) -> Node:
  """Derivative of the binary operation `left op right`.

  Sum and difference rules, the product rule and the quotient rule
  (a/b)' = (a'b - ab') / (b*b).
  """
  if op_type == OpType.ADD:
    return Add(left.differentiate(variable), right.differentiate(variable))
  elif op_type == OpType.SUBTRACT:
    return Subtract(left.differentiate(variable), right.differentiate(variable))
  elif op_type == OpType.MULTIPLY:
    return Add(
      Multiply(left, right.differentiate(variable)),
      Multiply(left.differentiate(variable), right)
    )
  elif op_type == OpType.DIVIDE:
    return Divide(
      Subtract(
        Multiply(left.differentiate(variable), right),
        Multiply(left, right.differentiate(variable))
      ),
      Multiply(right, right)
    )
  raise ValueError(f"Unknown operation type: {op_type!r}")


def _coerce_operand(value) -> Optional[Node]:
  if isinstance(value, Node):
    return value
  if isinstance(value, numbers.Real):
    return ConstantNode(value)
  return None


def _prepare_batch_bindings(bindings: Mapping[str, np.ndarray]) -> Tuple[Dict[str, np.ndarray], int]:
  arrays = {}
  lengths = set()
  for name, values in bindings.items():
    array = np.array(values, dtype=np.float64)
    if array.ndim > 1:
      raise BindingShapeError(f"Binding '{name}' must be a scalar or 1-D array, got shape {array.shape}")
    if array.ndim == 1:
      lengths.add(array.shape[0])
    arrays[name] = array

  if len(lengths) > 1:
    raise BindingShapeError(f"Bindings have mismatched lengths: {sorted(lengths)}")
  n_samples = lengths.pop() if lengths else 1

  for name, array in arrays.items():
    if array.ndim == 0:
      arrays[name] = np.full(n_samples, float(array), dtype=np.float64)
  return arrays, n_samples


# Construction API
def constant(value: float) -> ConstantNode:
  return ConstantNode(value)


def variable(name: str) -> VariableNode:
  return VariableNode(name)


def add(*operands: Node) -> Add:
  return Add(*operands)


def subtract(*operands: Node) -> Subtract:
  return Subtract(*operands)


def multiply(*operands: Node) -> Multiply:
  return Multiply(*operands)


def divide(*operands: Node) -> Divide:
  return Divide(*operands)
