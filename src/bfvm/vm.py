from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Dict, Optional

from .errors import BFVMError, IOFailure
from .lexer import Instruction
from .program import BfProgram
from .tape import Tape, TapeConfig

logger = logging.getLogger("bfvm")


class VirtualMachine:
    """Runs one validated program against a tape of its own.

    ``[`` carries the loop test and ``]`` jumps back to it unconditionally,
    so a loop body runs while the cell under the head is non-zero on entry.
    """

    def __init__(self, program: BfProgram, config: Optional[TapeConfig] = None):
        self.program = program
        self.tape = Tape(config)
        self.pc = 0
        self.steps = 0
        self.input: Optional[BinaryIO] = None
        self.output: Optional[BinaryIO] = None

        self.op_map: Dict[Instruction, Callable[[int], int]] = {
            Instruction.MOVE_LEFT: self.move_left,
            Instruction.MOVE_RIGHT: self.move_right,
            Instruction.INCREMENT: self.increment,
            Instruction.DECREMENT: self.decrement,
            Instruction.INPUT: self.read_byte,
            Instruction.OUTPUT: self.write_byte,
            Instruction.JUMP_FORWARD: self.loop_enter,
            Instruction.JUMP_BACKWARD: self.loop_exit,
        }

    def _position(self, pc: int):
        return self.program[pc].position

    def move_left(self, pc: int) -> int:
        self.tape.move_left(position=self._position(pc))
        return pc + 1

    def move_right(self, pc: int) -> int:
        self.tape.move_right(position=self._position(pc))
        return pc + 1

    def increment(self, pc: int) -> int:
        self.tape.increment()
        return pc + 1

    def decrement(self, pc: int) -> int:
        self.tape.decrement()
        return pc + 1

    def read_byte(self, pc: int) -> int:
        try:
            data = self.input.read(1)
        except (OSError, ValueError) as e:
            raise IOFailure(message=f"Failed to read input: {e}", position=self._position(pc), cause=e) from e
        # end of input leaves the cell as it was
        if data:
            self.tape.set_byte(data[0])
        return pc + 1

    def write_byte(self, pc: int) -> int:
        try:
            self.output.write(bytes([self.tape.get_byte()]))
            self.output.flush()
        except (OSError, ValueError) as e:
            raise IOFailure(message=f"Failed to write output: {e}", position=self._position(pc), cause=e) from e
        return pc + 1

    def loop_enter(self, pc: int) -> int:
        if self.tape.is_zero():
            return self.program.match(pc) + 1
        return pc + 1

    def loop_exit(self, pc: int) -> int:
        return self.program.match(pc)

    def step(self) -> int:
        """Execute the instruction under the program counter and advance it."""
        instr = self.program[self.pc]
        self.pc = self.op_map[instr.instruction](self.pc)
        self.steps += 1
        return self.pc

    def interpret(self, input: BinaryIO, output: BinaryIO) -> int:
        """Run until the program counter passes the end of the program.

        Returns the number of instructions executed. Any error stops the run
        on the spot; the tape and program counter are left as they were when
        it happened.
        """
        self.input = input
        self.output = output
        program_len = len(self.program)
        logger.debug("Running %s (%d instructions, %d cells)", self.program.name, program_len, len(self.tape))

        try:
            while self.pc < program_len:
                self.step()
        except BFVMError as e:
            logger.debug("Run of %s stopped after %d steps: %s", self.program.name, self.steps, e)
            raise

        logger.debug("Finished %s in %d steps", self.program.name, self.steps)
        return self.steps
