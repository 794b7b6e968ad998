import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from object_expressions import (
  Expression, Add, Subtract, Multiply, Divide, ConstantNode, VariableNode,
  UnboundVariableError, derivative_matches
)
from object_expressions.logging_system import LogLevel, configure_logging, log_milestone


def build_composite():
  """(x+y+z) * (17-x) * (-10 / ((x+y)*3))"""
  x, y, z = VariableNode('x'), VariableNode('y'), VariableNode('z')
  return Multiply(
    Add(x, y, z),
    Subtract(ConstantNode(17), x),
    Divide(ConstantNode(-10), Multiply(Add(x, y), ConstantNode(3)))
  )


def main():
  configure_logging(LogLevel.MINIMAL)
  bindings = {'x': 3.0, 'y': 7.0, 'z': -100.0}
  x = VariableNode('x')

  print(Add(ConstantNode(33), VariableNode('x'), VariableNode('y')).evaluate(bindings))

  composite = Expression(build_composite())
  print(composite.evaluate(bindings))
  print(composite.differentiate('x').evaluate(bindings))
  print(composite.differentiate('x').to_string())
  print(composite.to_string())

  print(Multiply(x, x, x).differentiate('x').render())
  print(Subtract(x, VariableNode('y'), ConstantNode(3)).differentiate('x').render())

  # Vectorised evaluation over a grid of x values
  grid = np.linspace(1.0, 5.0, 5)
  print(Multiply(x, x, x).differentiate('x').evaluate_batch({'x': grid}))

  try:
    Add(x, VariableNode('w')).evaluate(bindings)
  except UnboundVariableError as e:
    print(f"{e.code}: {e}")

  if derivative_matches(composite.root, 'x', samples=[bindings]):
    log_milestone("Composite derivative agrees with sympy")


if __name__ == "__main__":
  main()
