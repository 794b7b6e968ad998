import numpy as np
import numba
from enum import IntEnum


class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  OPERATION = 2


class OpType(IntEnum):
  ADD = 0
  SUBTRACT = 1
  MULTIPLY = 2
  DIVIDE = 3


# Mapping dictionaries
OP_SYMBOLS = {
  OpType.ADD: '+',
  OpType.SUBTRACT: '-',
  OpType.MULTIPLY: '*',
  OpType.DIVIDE: '/',
}
SYMBOL_OP_MAP = {symbol: op_type for op_type, symbol in OP_SYMBOLS.items()}

# Tag of the inner operation when a chain a o b o c ... is split as a o (b o' c ...):
# a - b - c == a - (b + c) and a / b / c == a / (b * c)
COMPANION_OPS = {
  OpType.ADD: OpType.ADD,
  OpType.SUBTRACT: OpType.ADD,
  OpType.MULTIPLY: OpType.MULTIPLY,
  OpType.DIVIDE: OpType.MULTIPLY,
}


def reduce_values(left: float, right: float, op_type: OpType) -> float:
  """Binary reducer used by the scalar fold.

  Division follows IEEE-754: x/0 is +-inf and 0/0 is nan, never an exception.
  """
  left_val = np.float64(left)
  right_val = np.float64(right)
  with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
    if op_type == OpType.ADD:
      result = left_val + right_val
    elif op_type == OpType.SUBTRACT:
      result = left_val - right_val
    elif op_type == OpType.MULTIPLY:
      result = left_val * right_val
    elif op_type == OpType.DIVIDE:
      result = np.divide(left_val, right_val)
    else:
      raise ValueError(f"Unknown operation type: {op_type!r}")
  return float(result)


@numba.njit(cache=True, inline='always')
def evaluate_constant(n_samples, value):
  return np.full(n_samples, value, dtype=np.float64)


@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op_fast(left_val, right_val, op_type):
  if op_type == OpType.ADD:
    return left_val + right_val
  elif op_type == OpType.SUBTRACT:
    return left_val - right_val
  elif op_type == OpType.MULTIPLY:
    return left_val * right_val
  elif op_type == OpType.DIVIDE:
    return left_val / right_val
  return np.zeros_like(left_val)
