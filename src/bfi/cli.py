from __future__ import annotations

import argparse
import logging
import sys
import time

from pathlib import Path
from typing import List, Optional

from .api import RunOptions, execute
from .errors import BFIError
from .streams import BytesSource, StreamSink, StreamSource
from .tape import DEFAULT_TAPE_SIZE

logger = logging.getLogger(__name__)


def _format_dump(cells: bytes, width: int = 8) -> str:
    rows = []
    for i in range(0, len(cells), width):
        row = " ".join(f"{b:3d}" for b in cells[i:i + width])
        rows.append(f"{i:5d}: {row}")
    return "\n".join(rows)


def _bounded_int(minimum: int):
    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {value}")
        return value
    return convert


_non_negative_int = _bounded_int(0)
_positive_int = _bounded_int(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Run a Brainfuck program.",
    )
    parser.add_argument("file", help="Brainfuck source file")
    parser.add_argument("--input", dest="input_text", default=None,
                        help="Program input (default: read stdin as bytes)")
    parser.add_argument("--max-steps", type=_non_negative_int, default=None, help="Abort after this many instructions")
    parser.add_argument("--tape-size", type=_positive_int, default=DEFAULT_TAPE_SIZE,
                        help=f"Initial tape size in cells (default {DEFAULT_TAPE_SIZE}, grows on demand)")
    parser.add_argument("--dump", type=int, default=0, metavar="N",
                        help="Print the first N tape cells to stderr after the run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        code = Path(args.file).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        print(f"bfi: couldn't read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1

    if args.input_text is not None:
        source = BytesSource(args.input_text)
    else:
        source = StreamSource(sys.stdin.buffer)
    sink = StreamSink(sys.stdout.buffer)
    options = RunOptions(tape_size=args.tape_size, max_steps=args.max_steps)

    start = time.time()
    try:
        interp = execute(code, input_source=source, sink=sink, options=options)
    except BFIError as e:
        sys.stdout.flush()
        print(f"bfi: {e}", file=sys.stderr)
        return 1
    end = time.time()

    logger.debug("execution took %.2f ms (%d steps)", (end - start) * 1000, interp.steps)
    if args.dump > 0:
        print(_format_dump(interp.tape.cells(0, args.dump)), file=sys.stderr)
    return 0
