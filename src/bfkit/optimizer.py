"""
Peephole optimizer for bytecode.

One left-to-right pass that folds runs of Add/Sub into a single weighted op
and runs of MoveRight/MoveLeft into a single move. Runs that cancel out
vanish. Nothing is reordered: Read, Write, Jump, JumpNotZero and Exit pass
through untouched and end any run, so I/O order and loop structure are kept.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Type

from . import bytecode as bc
from .bytecode import ByteCode, ByteProgram

_ARITH = (bc.Add, bc.Sub)
_MOVES = (bc.MoveRight, bc.MoveLeft)


def _signed(op: ByteCode) -> int:
    if isinstance(op, (bc.Add, bc.MoveRight)):
        return op.count
    return -op.count


def _flush(total: int, pos: Type, neg: Type) -> Optional[ByteCode]:
    if total > 0:
        return pos(total)
    if total < 0:
        return neg(-total)
    return None


def _family(op: ByteCode) -> Optional[Tuple[type, ...]]:
    if isinstance(op, _ARITH):
        return _ARITH
    if isinstance(op, _MOVES):
        return _MOVES
    return None


def optimize(byte_code: Iterable[ByteCode]) -> List[ByteCode]:
    """Coalesce adjacent arithmetic and pointer moves; drop zero-sum runs."""
    optimized: List[ByteCode] = []
    family: Optional[Tuple[type, ...]] = None
    total = 0

    def flush():
        if family is None:
            return
        op = _flush(total, *family)
        if op is not None:
            optimized.append(op)

    for op in byte_code:
        kind = _family(op)
        if kind is not None and kind is family:
            total += _signed(op)
            continue
        flush()
        family, total = kind, 0
        if kind is None:
            optimized.append(op)
            continue
        # A run that cancelled to nothing may have left two runs of the same
        # kind adjacent; pick the earlier one back up.
        if optimized and _family(optimized[-1]) is kind:
            total = _signed(optimized.pop())
        total += _signed(op)
    flush()
    return optimized


class Optimizer:
    def __init__(self, program: ByteProgram):
        self.program = program

    def optimize(self) -> ByteProgram:
        return ByteProgram(optimize(self.program.ops))
