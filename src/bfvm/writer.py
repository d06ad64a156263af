from __future__ import annotations

from typing import BinaryIO, Optional

NEWLINE = 0x0A


class TrailingNewlineWriter:
    """Output guard that makes sure the output ends in a newline.

    Writes go straight through to ``inner``. When the guard is closed
    (explicitly or by leaving its ``with`` block, error or not) and the last
    byte written was not ``\\n``, a single newline is added. The inner
    stream itself is left open.
    """

    def __init__(self, inner: BinaryIO):
        self.inner = inner
        self.last_byte: Optional[int] = None
        self.closed = False

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = self.inner.write(view)
            # sinks that do not report a count took everything
            if written is None:
                return
            view = view[written:]

    def write(self, data: bytes) -> int:
        self._write_all(data)
        if data:
            self.last_byte = data[-1]
        return len(data)

    def flush(self) -> None:
        self.inner.flush()

    @property
    def needs_newline(self) -> bool:
        return self.last_byte is not None and self.last_byte != NEWLINE

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.needs_newline:
            self._write_all(b"\n")
            self.last_byte = NEWLINE
        self.inner.flush()

    def __enter__(self) -> TrailingNewlineWriter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
