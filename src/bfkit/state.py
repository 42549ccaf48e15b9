from __future__ import annotations

import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, TextIO


@dataclass
class ExecutionContext:
    """
    Tape machine that parsed programs run against.

    The tape starts with a single zero cell and grows to the right on demand.
    Moving left of cell 0 is a no-op. Cell arithmetic wraps modulo
    ``2 ** cell_bits``.

    Streams default to the process stdin/stdout, looked up at call time.
    """

    cell_bits: int = 8
    stdin: Optional[TextIO] = None
    stdout: Optional[TextIO] = None
    tape: List[int] = field(default_factory=lambda: [0])
    cursor: int = 0
    input_buffer: Deque[int] = field(default_factory=deque)

    @property
    def mask(self) -> int:
        return (1 << self.cell_bits) - 1

    # ===== Pointer =====

    def move_right(self, count: int = 1) -> None:
        self.cursor += count
        if self.cursor >= len(self.tape):
            self.tape.extend([0] * (self.cursor - len(self.tape) + 1))

    def move_left(self, count: int = 1) -> None:
        self.cursor = max(0, self.cursor - count)

    # ===== Cells =====

    def read(self) -> int:
        return self.tape[self.cursor]

    def write(self, value: int) -> None:
        self.tape[self.cursor] = value & self.mask

    def increment(self, count: int = 1) -> None:
        self.write(self.read() + count)

    def decrement(self, count: int = 1) -> None:
        self.write(self.read() - count)

    def current_cell_is_zero(self) -> bool:
        return self.tape[self.cursor] == 0

    # ===== I/O =====

    def input(self) -> None:
        """Store the next input byte, reading another line when the buffer runs dry."""
        if not self.input_buffer:
            stream = self.stdin if self.stdin is not None else sys.stdin
            line = stream.readline()
            if not line:
                # end of input
                self.write(0)
                return
            if isinstance(line, str):
                line = line.encode('utf-8')
            self.input_buffer.extend(line)
        self.write(self.input_buffer.popleft())

    def output(self) -> None:
        stream = self.stdout if self.stdout is not None else sys.stdout
        stream.write(chr(self.read() & 0xFF))
        stream.flush()

    # ===== Diagnostics =====

    def dump(self, count: int = 100) -> List[int]:
        cells = self.tape[:count]
        return cells + [0] * (count - len(cells))

    def reset(self) -> None:
        self.tape = [0]
        self.cursor = 0
        self.input_buffer.clear()
