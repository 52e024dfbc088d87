from __future__ import annotations

import numpy as np

from .errors import make_bounds_error

DEFAULT_TAPE_SIZE = 30000


class Tape:
    """Linear byte memory with a data pointer.

    Cells are 8-bit and wrap on increment/decrement. The tape grows to the right
    on demand; moving left of cell 0 raises OutOfBounds.
    """

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size < 1:
            raise ValueError(f"tape size must be at least 1, got {size}")
        self.memory = np.zeros(size, dtype=np.uint8)
        self.pointer = 0

    def __len__(self) -> int:
        return len(self.memory)

    def move_right(self) -> None:
        self.pointer += 1
        if self.pointer >= len(self.memory):
            # Double the allocation so repeated growth stays amortized O(1).
            grown = np.zeros(len(self.memory) * 2, dtype=np.uint8)
            grown[:len(self.memory)] = self.memory
            self.memory = grown

    def move_left(self) -> None:
        if self.pointer == 0:
            raise make_bounds_error(pointer=self.pointer)
        self.pointer -= 1

    def increment(self) -> None:
        self.memory[self.pointer] = (int(self.memory[self.pointer]) + 1) & 0xFF

    def decrement(self) -> None:
        self.memory[self.pointer] = (int(self.memory[self.pointer]) - 1) & 0xFF

    def read(self) -> int:
        return int(self.memory[self.pointer])

    def write(self, value: int) -> None:
        self.memory[self.pointer] = int(value) & 0xFF

    def cells(self, start: int = 0, stop: int | None = None) -> bytes:
        return self.memory[start:stop].tobytes()
