"""Exception types raised by expression construction and evaluation."""

from __future__ import annotations


class ExpressionError(Exception):
    """Base class for expression errors."""

    def __init__(self, message: str, code: str = "EXPRESSION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class UnboundVariableError(ExpressionError, LookupError):
    """Raised when a variable has no entry in the supplied bindings."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable '{name}' is not bound", code="UNBOUND_VARIABLE")


class EmptyOperandError(ExpressionError):
    """Raised when an operation is constructed without operands."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(
            f"Operation '{symbol}' requires at least one operand", code="EMPTY_OPERAND"
        )


class BindingShapeError(ExpressionError):
    """Raised when batch bindings cannot be aligned into one sample axis."""

    def __init__(self, message: str):
        super().__init__(message, code="BINDING_SHAPE")


class InvalidExpressionError(ExpressionError):
    """Raised when a tree fails validation."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_EXPRESSION")
