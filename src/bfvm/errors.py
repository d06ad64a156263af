from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional


class Position(NamedTuple):
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _hint_for(err: BFVMError) -> Optional[str]:
    if isinstance(err, UnmatchedOpenBracket):
        return 'Every "[" needs a later "]" closing it.'
    if isinstance(err, UnmatchedCloseBracket):
        return 'This "]" has no earlier "[" to return to.'
    if isinstance(err, MoveOutOfBounds):
        if err.head == 0:
            return 'The tape has no cells to the left of cell 0.'
        return 'Use --extensible or a larger --cells value to let the head move further right.'
    return None


@dataclass
class BFVMError(Exception):
    message: str
    position: Optional[Position] = None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (line {self.position.line}, col {self.position.column})"


@dataclass
class BracketError(BFVMError):
    pass


@dataclass
class UnmatchedOpenBracket(BracketError):
    pass


@dataclass
class UnmatchedCloseBracket(BracketError):
    pass


@dataclass
class MoveOutOfBounds(BFVMError):
    head: int = 0
    tape_length: int = 0


@dataclass
class IOFailure(BFVMError):
    cause: Optional[Exception] = None


def format_error(err: BFVMError, *, name: str, source: Optional[str] = None) -> str:
    """Render an error for humans: location prefix, source context and a hint."""
    kind = type(err).__name__
    if err.position is None:
        return f"{name}: {kind}: {err.message}"

    out = f"{name}:{err.position}: {kind}: {err.message}"
    if source is not None:
        out += "\n" + _build_context(source.split('\n'), err.position.line)
    hint = _hint_for(err)
    if hint:
        out += f"\nHint: {hint}"
    return out
