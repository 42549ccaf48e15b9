"""
AST for tape programs.

A program is one top-level ``Block``: an ordered list of expressions. Every
expression but ``Loop`` is a single primitive tape operation. A ``Loop`` owns
the ``Block`` between a matching ``[`` and ``]`` and behaves like
``while (*cell != 0) { block }``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .state import ExecutionContext


# ---------------- Expressions ----------------
class Expr:
    def run(self, context: ExecutionContext) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class MoveRight(Expr):
    def run(self, context: ExecutionContext) -> None:
        context.move_right()


@dataclass(frozen=True)
class MoveLeft(Expr):
    def run(self, context: ExecutionContext) -> None:
        context.move_left()


@dataclass(frozen=True)
class Increment(Expr):
    def run(self, context: ExecutionContext) -> None:
        context.increment()


@dataclass(frozen=True)
class Decrement(Expr):
    def run(self, context: ExecutionContext) -> None:
        context.decrement()


@dataclass(frozen=True)
class Output(Expr):
    def run(self, context: ExecutionContext) -> None:
        context.output()


@dataclass(frozen=True)
class Input(Expr):
    def run(self, context: ExecutionContext) -> None:
        context.input()


@dataclass(frozen=True)
class Loop(Expr):
    body: "Block"

    def run(self, context: ExecutionContext) -> None:
        # Guard is checked before every pass, including the first.
        while not context.current_cell_is_zero():
            self.body.run(context)


# ---------------- Statements ----------------
@dataclass
class Block:
    exprs: List[Expr] = field(default_factory=list)

    def append(self, expr: Expr) -> None:
        self.exprs.append(expr)

    def run(self, context: ExecutionContext) -> None:
        for expr in self.exprs:
            expr.run(context)

    def __iter__(self) -> Iterator[Expr]:
        return iter(self.exprs)

    def __len__(self) -> int:
        return len(self.exprs)


@dataclass
class Program:
    entry: Block

    def run(self, context: Optional[ExecutionContext] = None) -> ExecutionContext:
        """Run the parsed program, on a fresh context unless one is given."""
        if context is None:
            context = ExecutionContext()
        self.entry.run(context)
        return context


def dump_ast(node, indent: int = 0) -> str:
    pad = '  ' * indent
    if isinstance(node, Program):
        return dump_ast(node.entry, indent)
    if isinstance(node, Block):
        return "\n".join(dump_ast(e, indent) for e in node) if len(node) else f"{pad}(empty)"
    if isinstance(node, Loop):
        return f"{pad}Loop\n{dump_ast(node.body, indent + 1)}"
    return f"{pad}{type(node).__name__}"
