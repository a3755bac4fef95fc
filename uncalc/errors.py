# errors.py
"""
Error taxonomy for the calculator.

Two disjoint families:

- ``ParseError`` subclasses are raised while compiling text into a postfix
  program. They carry the 0-based position of the offending character.
- ``EvalError`` subclasses are raised while executing a compiled program.

Each kind of failure is its own class, so callers can tell them apart with
``except``/``isinstance`` instead of matching on messages.
"""

from __future__ import annotations

from typing import Optional


class CalculatorError(Exception):
    """Base class for calculator errors."""
    pass


# ---------------------------
# Syntax errors (compile time)
# ---------------------------

class ParseError(CalculatorError):
    """Raised when an expression is malformed."""

    default_message = "Syntax error"

    def __init__(self, message: Optional[str] = None, pos: Optional[int] = None):
        self.message = message or self.default_message
        self.pos = pos
        super().__init__(self.message if pos is None else f"{self.message} at pos {pos}")


class OperandTooBig(ParseError):
    default_message = "Operand too big"


class MissingOperator(ParseError):
    default_message = "Missing operator"


class MissingOperand(ParseError):
    default_message = "Missing operand"


class MissingOperatorBeforeParen(ParseError):
    default_message = "Missing operator before '('"


class MissingOperandBeforeParen(ParseError):
    default_message = "Missing operand before ')'"


class MissingOpenParen(ParseError):
    default_message = "Missing '('"


class MissingCloseParen(ParseError):
    default_message = "Missing ')'"


class UnknownOperator(ParseError):
    default_message = "Unknown operator"


class EmptyExpression(ParseError):
    default_message = "Empty expression"


# ---------------------------
# Arithmetic errors (run time)
# ---------------------------

class EvalError(CalculatorError, ArithmeticError):
    """Raised when evaluating a compiled program fails."""
    pass


class DivisionByZero(EvalError):
    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class ModuloByZero(DivisionByZero):
    def __init__(self, message: str = "Modulo by zero"):
        super().__init__(message)


class IntegerOverflow(EvalError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Integer overflow: result {value} does not fit in 32 bits")
