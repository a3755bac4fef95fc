# test_evaluator.py

import pytest

from uncalc.errors import DivisionByZero, EvalError, IntegerOverflow, ModuloByZero
from uncalc.evaluator import Evaluator, evaluate
from uncalc.instructions import BinaryOp, Literal, OperatorKind, UnaryOp
from uncalc.parser import compile_expression
from uncalc.program import PostfixProgram


def calc(text):
    return evaluate(compile_expression(text))


@pytest.mark.parametrize("text, expected", [
    ("99999999", 99999999),
    ("2+3*4", 14),
    ("(2+3)*4", 20),
    ("5-3", 2),
    ("5*-3", -15),
    ("-5+3", -2),
    ("--5", 5),
    ("---5", -5),
    ("5 - -3", 8),
    ("10-4-3", 3),
    ("100/10/5", 2),
    ("-7/2", -3),
    ("-7%2", -1),
    ("7%-2", 1),
    ("2^3", 8),
    ("2^0", 1),
    ("2^-1", 0),
    ("2^3^2", 64),
    ("-2^2", 4),
    ("2*3^2", 18),
    ("-(4-10)*(2+1)", 18),
    ("((((1+1))))^((2))", 4),
])
def test_evaluate_expressions(text, expected):
    assert calc(text) == expected


def test_division_by_zero_is_runtime_error():
    program = compile_expression("5/0")
    with pytest.raises(DivisionByZero):
        evaluate(program)


def test_modulo_by_zero_is_runtime_error():
    program = compile_expression("5%0")
    with pytest.raises(ModuloByZero):
        evaluate(program)


def test_zero_divisor_from_subexpression():
    with pytest.raises(DivisionByZero):
        calc("10/(3-3)")


def test_overflow():
    with pytest.raises(IntegerOverflow):
        calc("99999999*99999999")
    with pytest.raises(IntegerOverflow):
        calc("2^31")
    with pytest.raises(IntegerOverflow):
        calc("-(2^30)*2-1")


def test_largest_and_smallest_results():
    assert calc("2^30-1+2^30") == 2 ** 31 - 1
    assert calc("-2^31") == -(2 ** 31)
    assert calc("-(2^30)*2") == -(2 ** 31)


def test_arithmetic_errors_share_base_class():
    with pytest.raises(EvalError):
        calc("1/0")
    with pytest.raises(ArithmeticError):
        calc("1%0")


def test_program_is_reusable():
    program = compile_expression("(1+2)*-3")
    evaluator = Evaluator()
    assert evaluator.eval(program) == -9
    assert evaluator.eval(program) == -9
    assert evaluate(program) == -9


def test_hand_built_program():
    program = PostfixProgram.from_instructions([
        Literal(6),
        Literal(4),
        UnaryOp(OperatorKind.NEG),
        BinaryOp(OperatorKind.SUB),
    ])
    assert evaluate(program) == 10


def test_modulo_by_zero_is_a_division_by_zero():
    with pytest.raises(DivisionByZero) as e:
        evaluate(compile_expression("5%0"))
    assert isinstance(e.value, ModuloByZero)
    assert str(e.value) == "Modulo by zero"
