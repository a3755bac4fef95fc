# program.py
"""Compiled (postfix) form of an expression and its text rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from uncalc.instructions import Instruction


@dataclass(frozen=True)
class PostfixProgram:
    """An ordered, immutable sequence of instructions.

    Programs produced by the parser always leave exactly one value on the
    stack when run from left to right, so one program can be evaluated any
    number of times without compiling the text again.
    """
    instructions: Tuple[Instruction, ...]

    @classmethod
    def from_instructions(cls, instructions: Iterable[Instruction]) -> "PostfixProgram":
        return cls(tuple(instructions))

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __str__(self) -> str:
        return format_program(self)


def format_program(program: PostfixProgram) -> str:
    """Render ``program`` as space separated tokens, e.g. ``2 3 4 * +``.

    Unary minus is printed as ``#`` so it can't be mistaken for subtraction.
    """
    return ' '.join(str(instruction) for instruction in program)
