from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .state import ExecutionState


def _locate(source: str, offset: int) -> Tuple[int, int]:
    # 1-based (line, column) of a character offset.
    line = source.count('\n', 0, offset) + 1
    line_start = source.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"  {'':4s} | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if "unmatched ']'" in msg:
        return 'A loop is closed that was never opened. Remove the "]" or add a "[" before it.'
    if "unmatched '['" in msg:
        return 'A loop is opened but never closed. Add a matching "]".'
    if 'left of cell 0' in msg:
        return 'The tape does not wrap. Move right with ">" before moving left.'
    return None


@dataclass
class BFIError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class UnbalancedBrackets(BFIError):
    position: int
    offset: int
    line: int
    column: int
    context: str


@dataclass
class OutOfBounds(BFIError):
    position: Optional[int] = None
    pointer: int = 0
    output: bytes = b''


@dataclass
class StepLimitExceeded(BFIError):
    limit: int
    state: ExecutionState = field(default_factory=ExecutionState)
    output: bytes = b''


def make_bracket_error(*, message: str, source: str, position: int, offset: int) -> UnbalancedBrackets:
    line, column = _locate(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    return UnbalancedBrackets(
        message=f"UnbalancedBrackets: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        position=position,
        offset=offset,
        line=line,
        column=column,
        context=ctx,
    )


def make_bounds_error(*, position: Optional[int] = None, pointer: int = 0) -> OutOfBounds:
    message = "cannot move left of cell 0"
    if position is not None:
        message += f" (instruction {position})"
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    return OutOfBounds(
        message=f"OutOfBounds: {message}{hint_block}",
        position=position,
        pointer=pointer,
    )
