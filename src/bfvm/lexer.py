from __future__ import annotations

import enum
from typing import List, NamedTuple, Optional

from .errors import Position


class Instruction(enum.Enum):
    MOVE_LEFT = '<'
    MOVE_RIGHT = '>'
    INCREMENT = '+'
    DECREMENT = '-'
    INPUT = ','
    OUTPUT = '.'
    JUMP_FORWARD = '['
    JUMP_BACKWARD = ']'

    @classmethod
    def from_char(cls, ch: str) -> Optional[Instruction]:
        try:
            return cls(ch)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class LocalisedInstruction(NamedTuple):
    instruction: Instruction
    line: int
    column: int

    @property
    def position(self) -> Position:
        return Position(self.line, self.column)


def tokenize(source: str) -> List[LocalisedInstruction]:
    """Pick the instructions out of ``source``, with 1-indexed line and column."""
    out: List[LocalisedInstruction] = []
    # only "\n" ends a line, so positions agree with format_error
    for line_no, line in enumerate(source.split('\n'), start=1):
        if line.endswith('\r'):
            line = line[:-1]
        for col_no, ch in enumerate(line, start=1):
            instr = Instruction.from_char(ch)
            if instr is not None:
                out.append(LocalisedInstruction(instr, line_no, col_no))
    return out
