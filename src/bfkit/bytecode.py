from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Union

from .state import ExecutionContext


@dataclass(frozen=True)
class Label:
    name: str

    def __str__(self) -> str:
        return self.name


# ---------------- Ops ----------------
@dataclass(frozen=True)
class Add:
    count: int = 1


@dataclass(frozen=True)
class Sub:
    count: int = 1


@dataclass(frozen=True)
class MoveRight:
    count: int = 1


@dataclass(frozen=True)
class MoveLeft:
    count: int = 1


@dataclass(frozen=True)
class Read:
    pass


@dataclass(frozen=True)
class Write:
    pass


@dataclass(frozen=True)
class Jump:
    label: Label


@dataclass(frozen=True)
class JumpNotZero:
    label: Label


@dataclass(frozen=True)
class Exit:
    pass


ByteCode = Union[Add, Sub, MoveRight, MoveLeft, Read, Write, Jump, JumpNotZero, Exit]


@dataclass
class ByteProgram:
    ops: List[ByteCode] = field(default_factory=list)

    def __iter__(self) -> Iterator[ByteCode]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    def emit(self, out: TextIO, target: Optional[str] = None) -> None:
        from .asm import emit

        emit(self.ops, out, target=target)

    def execute(self, context: Optional[ExecutionContext] = None) -> ExecutionContext:
        if context is None:
            context = ExecutionContext()
        execute_bytecode(self.ops, context)
        return context


# ---------------- Execution ----------------
def _resolve_jumps(ops: List[ByteCode]) -> Dict[int, int]:
    """Map each Jump to its test and each JumpNotZero to the op after its Jump."""
    entries: Dict[Label, int] = {}
    targets: Dict[int, int] = {}
    for i, op in enumerate(ops):
        if isinstance(op, Jump):
            entries[op.label] = i
    for i, op in enumerate(ops):
        if isinstance(op, JumpNotZero):
            start = entries[op.label]
            targets[start] = i
            targets[i] = start + 1
    return targets


def execute_bytecode(ops: Iterable[ByteCode], context: ExecutionContext) -> None:
    """Run raw or optimized bytecode against ``context`` until Exit or the end."""
    ops = list(ops)
    targets = _resolve_jumps(ops)
    pc = 0
    while pc < len(ops):
        op = ops[pc]
        if isinstance(op, Add):
            context.increment(op.count)
        elif isinstance(op, Sub):
            context.decrement(op.count)
        elif isinstance(op, MoveRight):
            context.move_right(op.count)
        elif isinstance(op, MoveLeft):
            context.move_left(op.count)
        elif isinstance(op, Read):
            context.input()
        elif isinstance(op, Write):
            context.output()
        elif isinstance(op, Jump):
            pc = targets[pc]
            continue
        elif isinstance(op, JumpNotZero):
            if not context.current_cell_is_zero():
                pc = targets[pc]
                continue
        elif isinstance(op, Exit):
            return
        pc += 1
