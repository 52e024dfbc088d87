from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionState:
    ip: int = 0
    pointer: int = 0
    steps: int = 0
    halted: bool = False
