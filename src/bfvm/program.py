from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import UnmatchedCloseBracket, UnmatchedOpenBracket
from .lexer import Instruction, LocalisedInstruction, tokenize

logger = logging.getLogger("bfvm")


def match_brackets(instructions: Sequence[LocalisedInstruction]) -> Dict[int, int]:
    """Pair every ``[`` with its ``]`` in one pass.

    The returned table maps both directions, so ``table[table[i]] == i`` for
    every bracket index ``i``. Raises ``UnmatchedCloseBracket`` at the first
    ``]`` with nothing to close, or ``UnmatchedOpenBracket`` at the earliest
    ``[`` still open when the scan ends.
    """
    open_brackets: List[int] = []
    table: Dict[int, int] = {}

    for pos, instr in enumerate(instructions):
        if instr.instruction is Instruction.JUMP_FORWARD:
            open_brackets.append(pos)
        elif instr.instruction is Instruction.JUMP_BACKWARD:
            if not open_brackets:
                raise UnmatchedCloseBracket(message='Unmatched "]"', position=instr.position)
            start = open_brackets.pop()
            table[start] = pos
            table[pos] = start

    if open_brackets:
        # bottom of the stack is the earliest one
        first = instructions[open_brackets[0]]
        raise UnmatchedOpenBracket(message='Unmatched "["', position=first.position)

    return table


@dataclass(frozen=True, eq=False)
class BfProgram:
    """A validated program: instructions plus the bracket jump table.

    Never mutated after ``validate``, so one instance can back any number of
    virtual machines at once.
    """

    name: str
    instructions: Tuple[LocalisedInstruction, ...]
    jump_table: Mapping[int, int]
    source: Optional[str] = None

    @classmethod
    def validate(cls, instructions: Sequence[LocalisedInstruction], *, name: str = "<program>",
                 source: Optional[str] = None) -> BfProgram:
        instructions = tuple(instructions)
        table = match_brackets(instructions)
        program = cls(
            name=name,
            instructions=instructions,
            jump_table=MappingProxyType(table),
            source=source,
        )
        logger.debug("Validated %s: %d instructions, %d loops", name, len(program), program.loop_count)
        return program

    @classmethod
    def from_string(cls, source: str, *, name: str = "<string>") -> BfProgram:
        return cls.validate(tokenize(source), name=name, source=source)

    @classmethod
    def from_file(cls, path: str | Path, *, encoding: str = "utf-8") -> BfProgram:
        p = Path(path)
        return cls.from_string(p.read_text(encoding=encoding), name=str(p))

    def match(self, index: int) -> int:
        return self.jump_table[index]

    @property
    def loop_count(self) -> int:
        return len(self.jump_table) // 2

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> LocalisedInstruction:
        return self.instructions[index]
