# evaluator.py
"""Stack machine that executes a compiled postfix program."""

from __future__ import annotations

import logging
from typing import List

from uncalc.instructions import Literal
from uncalc.program import PostfixProgram

logger = logging.getLogger(__name__)


class Evaluator:
    """Runs postfix programs against a fresh value stack.

    The evaluator holds no state between runs; operator behaviour comes from
    the registry entry of each instruction.
    """

    def eval(self, program: PostfixProgram) -> int:
        """Evaluate ``program`` and return its integer result or raise EvalError."""
        stack: List[int] = []
        for instruction in program:
            if isinstance(instruction, Literal):
                stack.append(instruction.value)
                continue
            spec = instruction.spec
            # Operands come off in reverse; restore source order.
            args = [stack.pop() for _ in range(spec.arity)]
            args.reverse()
            stack.append(spec.apply(*args))
        result = stack.pop()
        logger.debug(f"Evaluated {program} = {result}")
        return result


def evaluate(program: PostfixProgram) -> int:
    """Convenience wrapper around ``Evaluator().eval``."""
    return Evaluator().eval(program)
