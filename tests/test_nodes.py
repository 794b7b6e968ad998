"""Construction, immutability, rendering and structural equality of nodes."""

import copy
import pickle

import pytest

from object_expressions import (
    Add, Subtract, Multiply, Divide, ConstantNode, VariableNode, OperationNode,
    OpType, EmptyOperandError, constant, variable, add, subtract, multiply, divide
)


def test_constant_renders_float_form():
    assert ConstantNode(3).render() == "3.0"
    assert ConstantNode(-10.0).render() == "-10.0"
    assert ConstantNode(0.5).render() == "0.5"


def test_variable_renders_bare_name():
    assert VariableNode("alpha").render() == "alpha"


def test_operation_renders_fully_parenthesized():
    x, y, z = VariableNode("x"), VariableNode("y"), VariableNode("z")
    assert Add(x, y, z).render() == "(x+y+z)"
    assert Multiply(Add(x, y), ConstantNode(2)).render() == "((x+y)*2.0)"
    assert Divide(x).render() == "(x)"


def test_composite_render():
    x, y, z = VariableNode("x"), VariableNode("y"), VariableNode("z")
    expr = Multiply(
        Add(x, y, z),
        Subtract(ConstantNode(17), x),
        Divide(ConstantNode(-10), Multiply(Add(x, y), ConstantNode(3)))
    )
    assert expr.render() == "((x+y+z)*(17.0-x)*(-10.0/((x+y)*3.0)))"
    assert str(expr) == expr.render()


def test_render_is_deterministic():
    x = VariableNode("x")
    expr = Divide(Multiply(x, x, ConstantNode(2)), Subtract(x, ConstantNode(1)))
    assert expr.render() == expr.render()
    assert expr.differentiate("x").render() == expr.differentiate("x").render()


def test_zero_operands_rejected():
    for cls in (Add, Subtract, Multiply, Divide):
        with pytest.raises(EmptyOperandError) as excinfo:
            cls()
        assert excinfo.value.code == "EMPTY_OPERAND"


def test_non_node_operand_rejected():
    with pytest.raises(TypeError):
        Add(VariableNode("x"), 3)


def test_operation_from_symbol_or_tag():
    x, y = VariableNode("x"), VariableNode("y")
    assert OperationNode("*", x, y) == Multiply(x, y)
    assert OperationNode(OpType.SUBTRACT, x, y).symbol == "-"
    with pytest.raises(ValueError):
        OperationNode("^", x, y)


def test_invalid_leaf_values():
    with pytest.raises(TypeError):
        VariableNode(1)
    with pytest.raises(ValueError):
        ConstantNode("not a number")


def test_nodes_are_immutable():
    x = VariableNode("x")
    c = ConstantNode(2)
    op = Add(x, c)
    with pytest.raises(AttributeError):
        c.value = 5
    with pytest.raises(AttributeError):
        x._name = "y"
    with pytest.raises(AttributeError):
        op._operands = ()
    assert isinstance(op.operands, tuple)


def test_structural_equality_and_hash():
    x, y = VariableNode("x"), VariableNode("y")
    assert Add(x, y) == Add(VariableNode("x"), VariableNode("y"))
    assert hash(Add(x, y)) == hash(Add(VariableNode("x"), VariableNode("y")))
    assert Add(x, y) != Add(y, x)
    assert Add(x, y) != Subtract(x, y)
    assert ConstantNode(1) != VariableNode("x")
    assert len({Multiply(x, y), Multiply(x, y), Multiply(y, x)}) == 2


def test_repr_uses_constructor_names():
    x = VariableNode("x")
    assert repr(Add(x, ConstantNode(1))) == "Add(VariableNode('x'), ConstantNode(1.0))"
    assert repr(OperationNode("/", x, x)) == "Divide(VariableNode('x'), VariableNode('x'))"


def test_size_counts_nodes():
    x = VariableNode("x")
    assert x.size() == 1
    assert Multiply(x, x, x).size() == 4
    assert Add(Multiply(x, x), ConstantNode(1)).size() == 5


def test_operator_overloads_build_operations():
    x, y = VariableNode("x"), VariableNode("y")
    assert (x + 1).render() == "(x+1.0)"
    assert (2 * x).render() == "(2.0*x)"
    assert (1 - x).render() == "(1.0-x)"
    assert (x / y).render() == "(x/y)"
    assert (x - y) == Subtract(x, y)
    with pytest.raises(TypeError):
        x + "a"


def test_construction_functions():
    x = variable("x")
    assert constant(4) == ConstantNode(4.0)
    assert add(x, x) == Add(x, x)
    assert subtract(x, x) == Subtract(x, x)
    assert multiply(x, x) == Multiply(x, x)
    assert divide(x, x) == Divide(x, x)


def test_nan_constants_are_structurally_equal():
    first, second = ConstantNode(float("nan")), ConstantNode(float("nan"))
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1
    assert ConstantNode(float("nan")) != ConstantNode(1.0)


def test_pickle_round_trip():
    x = VariableNode("x")
    tree = Add(Multiply(x, ConstantNode(2)), Divide(x, VariableNode("y"), ConstantNode(3)))
    restored = pickle.loads(pickle.dumps(tree))
    assert restored == tree
    assert type(restored) is Add
    assert type(restored.operands[1]) is Divide
    assert restored.render() == tree.render()
    assert restored.evaluate({"x": 3.0, "y": 2.0}) == tree.evaluate({"x": 3.0, "y": 2.0})


def test_deepcopy_and_copy():
    x = VariableNode("x")
    tree = Subtract(x, ConstantNode(2), Multiply(x, x))
    duplicate = copy.deepcopy(tree)
    assert duplicate == tree
    assert duplicate is not tree
    assert duplicate.operands[0] is not tree.operands[0]
    assert copy.copy(tree) == tree
    assert copy.deepcopy(ConstantNode(1.5)) == ConstantNode(1.5)
