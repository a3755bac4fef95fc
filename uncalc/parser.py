# parser.py
"""
Shunting-yard compiler from infix text to a postfix program.

The parser is fed the expression one character at a time and writes
instructions as soon as their operands are known; no token list or syntax
tree is built. Alongside the operator stack it keeps a running count of the
operands available at the current parenthesis level. Every emitted operator
consumes ``arity`` operands and produces one, so the count drops by
``arity - 1``; if it would fall to zero the operator has nothing to work on
and compilation fails. This bookkeeping is what guarantees that the
resulting program never underflows the evaluation stack.

Usage::

    program = compile_expression("2 + 3 * 4")
    str(program)        # '2 3 4 * +'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from uncalc.errors import (
    EmptyExpression,
    MissingCloseParen,
    MissingOpenParen,
    MissingOperand,
    MissingOperandBeforeParen,
    MissingOperator,
    MissingOperatorBeforeParen,
    ParseError,
    UnknownOperator,
)
from uncalc.instructions import UNARY_MINUS, Instruction, Literal, OperatorSpec, lookup_operator
from uncalc.program import PostfixProgram

logger = logging.getLogger(__name__)

_DIGITS = frozenset('0123456789')
_BLANKS = frozenset(' \t')


def is_digit(ch: str) -> bool:
    """ASCII decimal digits only; other Unicode digits are not numbers here."""
    return ch in _DIGITS


def is_blank(ch: str) -> bool:
    return ch in _BLANKS


# --------------------------
# Operator stack entries
# --------------------------

@dataclass(frozen=True)
class OpenParen:
    """Marks a '(' and remembers the operand count of the enclosing level."""
    saved_count: int


@dataclass(frozen=True)
class PendingOperator:
    spec: OperatorSpec


StackEntry = Union[OpenParen, PendingOperator]


class Parser:
    """Single-use, character-driven expression compiler.

    Call ``feed`` for every character of the expression, then ``finish`` to
    obtain the ``PostfixProgram``. Errors are raised as ``ParseError``
    subclasses as soon as the offending character is seen.
    """

    def __init__(self):
        self._output: List[Instruction] = []
        self._stack: List[StackEntry] = []
        self._digits = ''
        self._operand_count = 0
        self._after_operand = False
        self._pos = 0
        self._finished = False

    def feed(self, ch: str) -> None:
        """Consume one character of the expression."""
        if self._finished:
            raise RuntimeError("Parser already finished; create a new Parser")
        try:
            if is_digit(ch):
                self._digits += ch
            else:
                self._flush_digits()
                if is_blank(ch):
                    pass
                elif ch == '(':
                    self._open_paren()
                elif ch == ')':
                    self._close_paren()
                else:
                    self._operator(ch)
        except ParseError:
            # State is inconsistent after an error; refuse further input.
            self._finished = True
            raise
        self._pos += 1

    def finish(self) -> PostfixProgram:
        """Complete compilation and return the program."""
        if self._finished:
            raise RuntimeError("Parser already finished; create a new Parser")
        self._finished = True
        self._flush_digits()
        self._close_paren(finale=True)
        if not self._output:
            raise EmptyExpression(pos=self._pos)
        return PostfixProgram.from_instructions(self._output)

    # ---- digit runs ----

    def _flush_digits(self) -> None:
        """Turn a pending digit run into a literal."""
        if not self._digits:
            return
        start = self._pos - len(self._digits)
        if self._after_operand:
            # Two values with nothing between them, e.g. "2 3" or "(1)2".
            raise MissingOperator(pos=start)
        self._output.append(Literal.from_digits(self._digits, pos=start))
        self._digits = ''
        self._operand_count += 1
        self._after_operand = True

    # ---- parentheses ----

    def _open_paren(self) -> None:
        if self._after_operand:
            raise MissingOperatorBeforeParen(pos=self._pos)
        self._stack.append(OpenParen(self._operand_count))
        self._operand_count = 0
        self._after_operand = False

    def _close_paren(self, finale: bool = False) -> None:
        """Unwind the stack down to the matching '('.

        With ``finale`` set this acts as the implicit ')' at the end of the
        input: the stack must drain completely and any '(' left on it is
        unbalanced.
        """
        while self._stack:
            entry = self._stack.pop()
            if isinstance(entry, OpenParen):
                if finale:
                    raise MissingCloseParen(pos=self._pos)
                if self._operand_count < 1:
                    raise MissingOperandBeforeParen(pos=self._pos)
                # The group counts as a single operand of the outer level.
                self._operand_count = entry.saved_count + 1
                self._after_operand = True
                return
            self._emit(entry.spec)
        if not finale:
            raise MissingOpenParen(pos=self._pos)

    # ---- operators ----

    def _operator(self, ch: str) -> None:
        if ch == UNARY_MINUS:
            raise UnknownOperator(f"Unknown operator {ch!r}", self._pos)
        if ch == '-' and not self._after_operand:
            ch = UNARY_MINUS
        spec = lookup_operator(ch, self._pos)

        # A prefix operator has no left operand, so nothing pending can be
        # complete yet; only binary operators unwind the stack.
        if spec.arity == 2:
            while self._stack:
                top = self._stack[-1]
                if isinstance(top, OpenParen) or top.spec.precedence < spec.precedence:
                    break
                self._stack.pop()
                self._emit(top.spec)

        self._stack.append(PendingOperator(spec))
        self._after_operand = False

    def _emit(self, spec: OperatorSpec) -> None:
        self._operand_count -= spec.arity - 1
        if self._operand_count <= 0:
            raise MissingOperand(f"Missing operand for {spec.symbol!r}", self._pos)
        self._output.append(spec.instruction())


def compile_expression(text: str) -> PostfixProgram:
    """Compile ``text`` into a ``PostfixProgram``.

    Raises a ``ParseError`` subclass describing the first problem found.
    """
    parser = Parser()
    for ch in text:
        parser.feed(ch)
    program = parser.finish()
    logger.debug(f"Compiled {text!r} to {program}")
    return program
