from __future__ import annotations

from typing import List

from . import bytecode as bc
from . import nodes
from .bytecode import ByteCode, ByteProgram, Label


class SimpleCompiler:
    """
    Lowers a parsed program to linear bytecode.

    Every primitive expression becomes one unit-sized op. A loop becomes

        Jump(L)            ; go straight to the test
        <body>
        JumpNotZero(L)     ; back to the body while the cell is non-zero

    so the guard is tested before the first pass. Labels come from a counter
    owned by the compiler instance and are never reused.
    """

    def __init__(self):
        self.loop_count = 0

    def compile_program(self, program: nodes.Program) -> ByteProgram:
        byte_code = self.compile_block(program.entry)
        byte_code.append(bc.Exit())
        return ByteProgram(byte_code)

    def compile_block(self, block: nodes.Block) -> List[ByteCode]:
        byte_code: List[ByteCode] = []
        for expr in block:
            byte_code.extend(self.compile_expr(expr))
        return byte_code

    def compile_expr(self, expr: nodes.Expr) -> List[ByteCode]:
        if isinstance(expr, nodes.MoveRight):
            return [bc.MoveRight(1)]
        if isinstance(expr, nodes.MoveLeft):
            return [bc.MoveLeft(1)]
        if isinstance(expr, nodes.Increment):
            return [bc.Add(1)]
        if isinstance(expr, nodes.Decrement):
            return [bc.Sub(1)]
        if isinstance(expr, nodes.Output):
            return [bc.Write()]
        if isinstance(expr, nodes.Input):
            return [bc.Read()]
        if isinstance(expr, nodes.Loop):
            loop_label = self.next_loop_label()
            byte_code: List[ByteCode] = [bc.Jump(loop_label)]
            byte_code.extend(self.compile_block(expr.body))
            byte_code.append(bc.JumpNotZero(loop_label))
            return byte_code
        raise TypeError(f"Unknown expression: {expr!r}")

    def next_loop_label(self) -> Label:
        label = Label(f"LOOP{self.loop_count}")
        self.loop_count += 1
        return label
