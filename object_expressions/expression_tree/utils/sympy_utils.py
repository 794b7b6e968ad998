import numpy as np
import sympy as sp
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..core.node import Node, ConstantNode, VariableNode, Add, Multiply, Divide
from .tree_utils import get_variables
from ... import config
from ...logging_system import LogLevel, is_enabled, log_debug, log_warning


def to_sympy(node: Node) -> sp.Expr:
  """Convert an expression tree to an equivalent SymPy expression"""
  return node.to_sympy()


def from_sympy(sympy_expr: sp.Expr) -> Node:
  """Convert a SymPy expression into an expression tree.

  Supports symbols, real numbers, Add, Mul and Pow with a non-zero integer
  exponent. Add and Mul keep the order of `args`.
  """
  if isinstance(sympy_expr, sp.Symbol):
    return VariableNode(sympy_expr.name)

  if sympy_expr.is_number:
    if not sympy_expr.is_real:
      raise ValueError(f"Cannot convert non-real number: {sympy_expr}")
    return ConstantNode(float(sympy_expr))

  if isinstance(sympy_expr, sp.Add):
    return Add(*[from_sympy(arg) for arg in sympy_expr.args])

  if isinstance(sympy_expr, sp.Mul):
    return Multiply(*[from_sympy(arg) for arg in sympy_expr.args])

  if isinstance(sympy_expr, sp.Pow):
    base, exponent = sympy_expr.args
    if exponent.is_Integer and exponent != 0:
      power = abs(int(exponent))
      # Each factor is converted separately so the tree shares no nodes
      factors = [from_sympy(base) for _ in range(power)]
      product = factors[0] if power == 1 else Multiply(*factors)
      return product if exponent > 0 else Divide(ConstantNode(1.0), product)

  raise ValueError(f"Unsupported SymPy expression: {sympy_expr}")


def latex_representation(node: Node) -> str:
  """Get LaTeX representation of the expression"""
  return sp.latex(node.to_sympy())


def sample_bindings(variables: Sequence[str], n_samples: Optional[int] = None,
                    low: float = 0.5, high: float = 2.0, seed: int = 0) -> List[Dict[str, float]]:
  """Random binding contexts drawn uniformly from [low, high)"""
  if n_samples is None:
    n_samples = config.VERIFY_SAMPLES
  rng = np.random.default_rng(seed)
  return [
    {name: float(rng.uniform(low, high)) for name in variables}
    for _ in range(n_samples)
  ]


def derivative_matches(node: Node, variable: str,
                       samples: Optional[Iterable[Mapping[str, float]]] = None,
                       tolerance: Optional[float] = None) -> bool:
  """
  Check node.differentiate(variable) numerically against sympy.diff.

  Returns:
      True if both derivatives agree at every sample binding
  """
  if tolerance is None:
    tolerance = config.VERIFY_TOLERANCE
  if samples is None:
    samples = sample_bindings(sorted(set(get_variables(node)) | {variable}))

  derivative = node.differentiate(variable)
  reference = sp.diff(node.to_sympy(), sp.Symbol(variable))

  for bindings in samples:
    ours = derivative.evaluate(bindings)
    substitutions = {sp.Symbol(name): value for name, value in bindings.items()}
    theirs = float(reference.evalf(subs=substitutions))
    if not np.isclose(ours, theirs, rtol=tolerance, atol=tolerance):
      log_warning(f"Derivative mismatch for {node.render()} at {dict(bindings)}: {ours} != {theirs}")
      return False

  if is_enabled(LogLevel.VERBOSE):
    log_debug(f"Derivative of {node.render()} in {variable} matches sympy")
  return True
