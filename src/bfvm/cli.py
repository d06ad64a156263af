#!/usr/bin/env python3
# Brainfuck interpreter.
#
# Loads a program file, checks its brackets and runs it on a virtual machine
# wired to stdin/stdout. The tape holds --cells cells (30000 by default) and
# only grows past them with --extensible.
#
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .api import RunOptions, run_program
from .cell import CELL_TYPES
from .errors import BFVMError, format_error
from .program import BfProgram


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bfvm", description="Brainfuck interpreter.")
    parser.add_argument("program", help="Path to the file containing the brainfuck program")
    parser.add_argument("-c", "--cells", type=_positive_int, default=None,
                        help="Initial size of the tape (default 30000)")
    parser.add_argument("-e", "--extensible", action="store_true",
                        help="Grow the tape when the head moves past its end")
    parser.add_argument("--cell-bits", type=int, choices=sorted(CELL_TYPES), default=8,
                        help="Width of each cell in bits (default 8)")
    parser.add_argument("--no-trailing-newline", action="store_true",
                        help="Do not add a newline when the output does not end with one")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug information to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    options = RunOptions(
        cells=args.cells,
        extensible=args.extensible,
        cell_bits=args.cell_bits,
        trailing_newline=not args.no_trailing_newline,
    )

    try:
        source = Path(args.program).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"bfvm: {args.program}: {getattr(e, 'strerror', None) or e}", file=sys.stderr)
        return 1

    try:
        program = BfProgram.from_string(source, name=args.program)
    except BFVMError as e:
        print(format_error(e, name=args.program, source=source), file=sys.stderr)
        return 1

    try:
        run_program(program, options=options)
    except BFVMError as e:
        sys.stdout.flush()
        print(format_error(e, name=program.name, source=program.source), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
