from __future__ import annotations

import contextlib
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from .cell import cell_for_bits
from .program import BfProgram
from .tape import TapeConfig
from .vm import VirtualMachine
from .writer import TrailingNewlineWriter


@dataclass(frozen=True)
class RunOptions:
    cells: Optional[int] = None
    extensible: bool = False
    cell_bits: int = 8
    trailing_newline: bool = True

    def tape_config(self) -> TapeConfig:
        return TapeConfig(cells=self.cells, extensible=self.extensible, cell=cell_for_bits(self.cell_bits))


@dataclass(frozen=True)
class RunResult:
    steps: int
    head: int
    tape_length: int


def run_program(program: BfProgram, *, options: Optional[RunOptions] = None,
                input: Optional[BinaryIO] = None, output: Optional[BinaryIO] = None) -> RunResult:
    options = options or RunOptions()
    input = input if input is not None else sys.stdin.buffer
    output = output if output is not None else sys.stdout.buffer

    vm = VirtualMachine(program, options.tape_config())
    with contextlib.ExitStack() as stack:
        if options.trailing_newline:
            output = stack.enter_context(TrailingNewlineWriter(output))
        steps = vm.interpret(input, output)
    return RunResult(steps=steps, head=vm.tape.head, tape_length=len(vm.tape))


def run_string(source: str, *, name: str = "<string>", options: Optional[RunOptions] = None,
               input: Optional[BinaryIO] = None, output: Optional[BinaryIO] = None) -> RunResult:
    program = BfProgram.from_string(source, name=name)
    return run_program(program, options=options, input=input, output=output)


def run_file(path: str | Path, *, options: Optional[RunOptions] = None, encoding: str = "utf-8",
             input: Optional[BinaryIO] = None, output: Optional[BinaryIO] = None) -> RunResult:
    program = BfProgram.from_file(path, encoding=encoding)
    return run_program(program, options=options, input=input, output=output)
