from .api import RunOptions, RunResult, run_file, run_program, run_string
from .cell import U8, U16, U32, Cell, WrappingCell, cell_for_bits
from .errors import (
    BFVMError,
    BracketError,
    IOFailure,
    MoveOutOfBounds,
    Position,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
    format_error,
)
from .lexer import Instruction, LocalisedInstruction, tokenize
from .program import BfProgram, match_brackets
from .tape import Tape, TapeConfig
from .vm import VirtualMachine
from .writer import TrailingNewlineWriter

__all__ = [
    'BfProgram',
    'match_brackets',
    'Instruction',
    'LocalisedInstruction',
    'tokenize',
    'Cell',
    'WrappingCell',
    'U8',
    'U16',
    'U32',
    'cell_for_bits',
    'Tape',
    'TapeConfig',
    'VirtualMachine',
    'TrailingNewlineWriter',
    'Position',
    'BFVMError',
    'BracketError',
    'MoveOutOfBounds',
    'UnmatchedOpenBracket',
    'UnmatchedCloseBracket',
    'IOFailure',
    'format_error',
    'RunOptions',
    'RunResult',
    'run_program',
    'run_string',
    'run_file',
]
