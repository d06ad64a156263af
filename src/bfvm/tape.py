from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .cell import U8, WrappingCell
from .errors import MoveOutOfBounds, Position

logger = logging.getLogger("bfvm")

DEFAULT_CELLS = 30000


@dataclass(frozen=True)
class TapeConfig:
    cells: Optional[int] = None
    extensible: bool = False
    cell: WrappingCell = U8

    def __post_init__(self) -> None:
        if self.cells is not None and self.cells < 1:
            raise ValueError(f"Tape needs at least one cell, got {self.cells}")

    @property
    def length(self) -> int:
        return DEFAULT_CELLS if self.cells is None else int(self.cells)


class Tape:
    """A row of cells under a read/write head.

    The head starts on cell 0 and may never move left of it. A fixed tape
    also refuses to move past its last cell; an extensible one doubles in
    length instead.
    """

    def __init__(self, config: Optional[TapeConfig] = None):
        config = config or TapeConfig()
        self.cell = config.cell
        self.extensible = config.extensible
        self.cells = np.zeros(config.length, dtype=self.cell.dtype)
        self.head = 0

    def __len__(self) -> int:
        return len(self.cells)

    def move_left(self, *, position: Optional[Position] = None) -> None:
        if self.head == 0:
            raise MoveOutOfBounds(
                message="Cannot move left of the first cell",
                position=position,
                head=self.head,
                tape_length=len(self.cells),
            )
        self.head -= 1

    def move_right(self, *, position: Optional[Position] = None) -> None:
        if self.head == len(self.cells) - 1:
            if not self.extensible:
                raise MoveOutOfBounds(
                    message=f"Cannot move right of the last cell ({self.head})",
                    position=position,
                    head=self.head,
                    tape_length=len(self.cells),
                )
            self._grow()
        self.head += 1

    def _grow(self) -> None:
        old_len = len(self.cells)
        self.cells = np.concatenate([self.cells, np.zeros(old_len, dtype=self.cell.dtype)])
        logger.debug("Tape grown from %d to %d cells", old_len, len(self.cells))

    def current(self) -> np.unsignedinteger:
        return self.cells[self.head]

    def increment(self) -> None:
        self.cells[self.head] = self.cell.increment(self.cells[self.head])

    def decrement(self) -> None:
        self.cells[self.head] = self.cell.decrement(self.cells[self.head])

    def set_byte(self, byte: int) -> None:
        self.cells[self.head] = self.cell.from_byte(byte)

    def get_byte(self) -> int:
        return self.cell.to_byte(self.cells[self.head])

    def is_zero(self) -> bool:
        return int(self.cells[self.head]) == 0

    def snapshot(self, start: int = 0, end: Optional[int] = None) -> np.ndarray:
        return self.cells[start:end].copy()
