# instructions.py
"""
Postfix instruction model and the operator registry.

A compiled expression is a flat sequence of three kinds of instruction:

- ``Literal``  pushes a constant.
- ``BinaryOp`` pops two values (right operand first) and pushes the result.
- ``UnaryOp``  pops one value and pushes the result.

Operator behaviour is not attached to the instruction classes. Each
``OperatorKind`` has exactly one ``OperatorSpec`` (precedence, arity and the
function that computes it) in a single read-only table that both the parser
and the evaluator consult.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union

from uncalc.errors import (
    DivisionByZero,
    IntegerOverflow,
    ModuloByZero,
    OperandTooBig,
    UnknownOperator,
)

# Largest literal accepted in an expression.
NUMBER_MAX = 99_999_999

# Arithmetic is carried out on 32-bit signed integers.
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

# Internal symbol of unary minus. It is never accepted from the input text.
UNARY_MINUS = '#'


class OperatorKind(Enum):
    """Operator tags; the value is the operator's printed symbol."""
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    POW = '^'
    NEG = UNARY_MINUS

    @property
    def symbol(self) -> str:
        return self.value


# --------------------------
# Instructions
# --------------------------

@dataclass(frozen=True)
class Literal:
    """Pushes ``value`` onto the evaluation stack."""
    value: int

    @classmethod
    def from_digits(cls, digits: str, pos: Optional[int] = None) -> "Literal":
        """Build a literal from a run of decimal digits.

        The running value is checked against NUMBER_MAX after every digit so
        that very long digit runs fail as soon as they cross the limit.
        Raises ValueError if ``digits`` is empty or holds a non-digit.
        """
        if not digits:
            raise ValueError("Literal needs at least one digit")
        value = 0
        for d in digits:
            if not '0' <= d <= '9':
                raise ValueError(f"Not a decimal digit: {d!r}")
            if value > NUMBER_MAX:
                raise OperandTooBig(pos=pos)
            value = value * 10 + (ord(d) - ord('0'))
        if value > NUMBER_MAX:
            raise OperandTooBig(pos=pos)
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BinaryOp:
    kind: OperatorKind

    @property
    def spec(self) -> "OperatorSpec":
        return OPERATORS_BY_KIND[self.kind]

    def __str__(self) -> str:
        return self.kind.symbol


@dataclass(frozen=True)
class UnaryOp:
    kind: OperatorKind

    @property
    def spec(self) -> "OperatorSpec":
        return OPERATORS_BY_KIND[self.kind]

    def __str__(self) -> str:
        return self.kind.symbol


Instruction = Union[Literal, BinaryOp, UnaryOp]


# --------------------------
# Arithmetic
# --------------------------

def _checked(value: int) -> int:
    if value < INT_MIN or value > INT_MAX:
        raise IntegerOverflow(value)
    return value


def _add(a: int, b: int) -> int:
    return _checked(a + b)


def _sub(a: int, b: int) -> int:
    return _checked(a - b)


def _mul(a: int, b: int) -> int:
    return _checked(a * b)


def _truncating_quotient(a: int, b: int) -> int:
    # Python's // floors; round toward zero instead.
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero()
    return _checked(_truncating_quotient(a, b))


def _mod(a: int, b: int) -> int:
    if b == 0:
        raise ModuloByZero()
    # Remainder takes the sign of the dividend.
    return a - b * _truncating_quotient(a, b)


def _pow(base: int, exponent: int) -> int:
    """Integer power by repeated multiplication.

    A negative exponent yields 0 rather than a fraction. This mirrors the
    historical behaviour of the calculator and is kept on purpose.
    """
    if exponent < 0:
        return 0
    if abs(base) <= 1:
        # 0, 1 and -1 never overflow; skip the multiplication loop.
        return base ** exponent
    result = 1
    for _ in range(exponent):
        result = _checked(result * base)
    return result


def _neg(a: int) -> int:
    return _checked(-a)


# --------------------------
# Operator registry
# --------------------------

@dataclass(frozen=True)
class OperatorSpec:
    """Static metadata of one operator."""
    kind: OperatorKind
    precedence: int
    arity: int
    apply: Callable[..., int]

    @property
    def symbol(self) -> str:
        return self.kind.symbol

    def instruction(self) -> Instruction:
        """Construct the instruction that executes this operator."""
        if self.arity == 1:
            return UnaryOp(self.kind)
        return BinaryOp(self.kind)


_SPECS = (
    OperatorSpec(OperatorKind.ADD, precedence=1, arity=2, apply=_add),
    OperatorSpec(OperatorKind.SUB, precedence=1, arity=2, apply=_sub),
    OperatorSpec(OperatorKind.MUL, precedence=2, arity=2, apply=_mul),
    OperatorSpec(OperatorKind.DIV, precedence=2, arity=2, apply=_div),
    OperatorSpec(OperatorKind.MOD, precedence=2, arity=2, apply=_mod),
    OperatorSpec(OperatorKind.POW, precedence=3, arity=2, apply=_pow),
    OperatorSpec(OperatorKind.NEG, precedence=4, arity=1, apply=_neg),
)

OPERATORS: Mapping[str, OperatorSpec] = MappingProxyType({s.symbol: s for s in _SPECS})
OPERATORS_BY_KIND: Mapping[OperatorKind, OperatorSpec] = MappingProxyType({s.kind: s for s in _SPECS})


def lookup_operator(symbol: str, pos: Optional[int] = None) -> OperatorSpec:
    """Return the spec registered for ``symbol`` or raise UnknownOperator."""
    try:
        return OPERATORS[symbol]
    except KeyError:
        raise UnknownOperator(f"Unknown operator {symbol!r}", pos) from None
