"""UnCalc: integer arithmetic expressions compiled to postfix and evaluated on a stack."""

from uncalc.errors import (
    CalculatorError,
    DivisionByZero,
    EmptyExpression,
    EvalError,
    IntegerOverflow,
    MissingCloseParen,
    MissingOpenParen,
    MissingOperand,
    MissingOperandBeforeParen,
    MissingOperator,
    MissingOperatorBeforeParen,
    ModuloByZero,
    OperandTooBig,
    ParseError,
    UnknownOperator,
)
from uncalc.evaluator import Evaluator, evaluate
from uncalc.instructions import (
    OPERATORS,
    BinaryOp,
    Instruction,
    Literal,
    OperatorKind,
    OperatorSpec,
    UnaryOp,
)
from uncalc.parser import Parser, compile_expression
from uncalc.program import PostfixProgram, format_program

__version__ = "0.1.0"
