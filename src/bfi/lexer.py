from __future__ import annotations

import enum
import logging

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import make_bracket_error

logger = logging.getLogger(__name__)


class Instruction(enum.Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'


BF_OPS = frozenset(i.value for i in Instruction)


@dataclass(frozen=True)
class Token:
    kind: Instruction
    offset: int  # index into the raw source

    @property
    def lexeme(self) -> str:
        return self.kind.value


# eq=False: identity hashing, since ``jumps`` is a dict.
@dataclass(frozen=True, eq=False)
class Program:
    """Parsed, immutable instruction sequence plus its bracket table.

    ``tokens[i]`` is the instruction at ip ``i``. ``jumps`` maps the ip of every
    ``[`` to the ip of its matching ``]`` and the other way round.
    """
    source: str
    tokens: Tuple[Token, ...]
    jumps: Dict[int, int]

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        return tuple(t.kind for t in self.tokens)

    def __str__(self) -> str:
        return ''.join(t.lexeme for t in self.tokens)


def tokenize(source: str) -> List[Token]:
    # Anything outside the eight commands is a comment.
    return [Token(Instruction(ch), i) for i, ch in enumerate(source) if ch in BF_OPS]


def build_jump_table(tokens: List[Token], *, source: str = '') -> Dict[int, int]:
    jumps: Dict[int, int] = {}
    stack: List[int] = []

    for pos, tok in enumerate(tokens):
        if tok.kind is Instruction.LOOP_START:
            stack.append(pos)
        elif tok.kind is Instruction.LOOP_END:
            if not stack:
                raise make_bracket_error(
                    message=f"Unmatched ']' at position {pos}",
                    source=source,
                    position=pos,
                    offset=tok.offset,
                )
            start = stack.pop()
            jumps[start] = pos
            jumps[pos] = start

    if stack:
        # Report the innermost unclosed loop.
        pos = stack[-1]
        raise make_bracket_error(
            message=f"Unmatched '[' at position {pos}",
            source=source,
            position=pos,
            offset=tokens[pos].offset,
        )

    return jumps


def parse(source: str) -> Program:
    tokens = tokenize(source)
    jumps = build_jump_table(tokens, source=source)
    logger.debug("parsed %d instructions (%d chars), %d loops", len(tokens), len(source), len(jumps) // 2)
    return Program(source=source, tokens=tuple(tokens), jumps=jumps)
