from __future__ import annotations

import logging

from typing import Callable, Dict, Optional

from .errors import OutOfBounds, make_bounds_error
from .lexer import Instruction, Program, parse
from .state import ExecutionState
from .streams import BufferSink, ByteSink, ByteSource, BytesSource
from .tape import DEFAULT_TAPE_SIZE, Tape

logger = logging.getLogger(__name__)


class Interpreter:
    """Runs one Program against a fresh Tape.

    An instance is good for a single run; build a new one to run again.
    ``,`` on an exhausted source stores 0. ``<`` at cell 0 raises OutOfBounds.
    """

    def __init__(
        self,
        program: Program | str,
        *,
        source: Optional[ByteSource] = None,
        sink: Optional[ByteSink] = None,
        tape_size: int = DEFAULT_TAPE_SIZE,
    ):
        if isinstance(program, str):
            program = parse(program)
        self.program = program
        self.source = source if source is not None else BytesSource()
        self.sink = sink if sink is not None else BufferSink()
        self.tape = Tape(tape_size)
        self.ip = 0
        self.steps = 0

        self._handlers: Dict[Instruction, Callable[[], None]] = {
            Instruction.MOVE_RIGHT: self.tape.move_right,
            Instruction.MOVE_LEFT: self.tape.move_left,
            Instruction.INCREMENT: self.tape.increment,
            Instruction.DECREMENT: self.tape.decrement,
            Instruction.OUTPUT: self._output,
            Instruction.INPUT: self._input,
            Instruction.LOOP_START: self._loop_start,
            Instruction.LOOP_END: self._loop_end,
        }

    @property
    def halted(self) -> bool:
        return self.ip >= len(self.program)

    @property
    def state(self) -> ExecutionState:
        return ExecutionState(ip=self.ip, pointer=self.tape.pointer, steps=self.steps, halted=self.halted)

    def _output(self) -> None:
        self.sink.write_byte(self.tape.read())

    def _input(self) -> None:
        value = self.source.read_byte()
        self.tape.write(0 if value is None else value)

    def _loop_start(self) -> None:
        if self.tape.read() == 0:
            self.ip = self.program.jumps[self.ip]

    def _loop_end(self) -> None:
        if self.tape.read() != 0:
            self.ip = self.program.jumps[self.ip]

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has halted."""
        if self.halted:
            return False

        kind = self.program.tokens[self.ip].kind
        try:
            self._handlers[kind]()
        except OutOfBounds as e:
            raise make_bounds_error(position=self.ip, pointer=self.tape.pointer) from e

        # A taken jump leaves ip on the partner bracket; stepping past it is
        # the same for both directions.
        self.ip += 1
        self.steps += 1
        return not self.halted

    def run(self) -> ExecutionState:
        logger.debug("run: %d instructions, tape %d cells", len(self.program), len(self.tape))
        while self.step():
            pass
        logger.debug("halted after %d steps, pointer at %d", self.steps, self.tape.pointer)
        return self.state
