from __future__ import annotations

import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import OutOfBounds, StepLimitExceeded
from .interpreter import Interpreter
from .lexer import parse
from .state import ExecutionState
from .streams import BufferSink, ByteSink, ByteSource, BytesSource
from .tape import DEFAULT_TAPE_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = DEFAULT_TAPE_SIZE
    max_steps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tape_size < 1:
            raise ValueError(f"tape_size must be at least 1, got {self.tape_size}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must not be negative, got {self.max_steps}")


@dataclass(frozen=True)
class RunResult:
    output: bytes
    state: ExecutionState
    tape: bytes

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')


def _run_bounded(interp: Interpreter, max_steps: int) -> ExecutionState:
    # Step bound wraps the core loop; the interpreter itself never gives up.
    while not interp.halted:
        if interp.steps >= max_steps:
            state = interp.state
            raise StepLimitExceeded(
                message=f"StepLimitExceeded: program still running after {max_steps} steps (ip {state.ip})",
                limit=max_steps,
                state=state,
            )
        interp.step()
    return interp.state


def execute(
    source: str,
    *,
    input_source: Optional[ByteSource] = None,
    sink: Optional[ByteSink] = None,
    options: Optional[RunOptions] = None,
) -> Interpreter:
    opts = options or RunOptions()
    interp = Interpreter(parse(source), source=input_source, sink=sink, tape_size=opts.tape_size)
    if opts.max_steps is None:
        interp.run()
    else:
        _run_bounded(interp, opts.max_steps)
    return interp


def run_string(source: str, *, input_data: bytes | str = b'', options: Optional[RunOptions] = None) -> RunResult:
    sink = BufferSink()
    try:
        interp = execute(source, input_source=BytesSource(input_data), sink=sink, options=options)
    except (OutOfBounds, StepLimitExceeded) as e:
        # Bytes written before the failure are still part of the result.
        e.output = sink.getvalue()
        raise
    return RunResult(output=sink.getvalue(), state=interp.state, tape=interp.tape.cells())


def run_file(
    path: str | Path,
    *,
    input_data: bytes | str = b'',
    options: Optional[RunOptions] = None,
    encoding: str = 'utf-8',
) -> RunResult:
    p = Path(path)
    logger.debug("loading %s", p)
    # Undecodable bytes become U+FFFD, which is a comment.
    return run_string(p.read_text(encoding=encoding, errors='replace'), input_data=input_data, options=options)
