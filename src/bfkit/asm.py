"""
x86-64 NASM emitter.

Register conventions of the generated program:
  rsp  cursor into ``tape`` (a statically reserved .bss buffer)

Each bytecode op becomes a small fixed instruction group. Reads and writes
are single-byte syscalls on stdin/stdout. The emitter trusts its input.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, TextIO

from . import bytecode as bc
from .bytecode import ByteCode

TAPE_SIZE = 10000
ENTRY = 'start'


@dataclass(frozen=True)
class Target:
    name: str
    object_format: str
    sys_read: int
    sys_write: int
    sys_exit: int


TARGETS: Dict[str, Target] = {
    'macos': Target('macos', 'macho64', sys_read=0x2000003, sys_write=0x2000004, sys_exit=0x2000001),
    'linux': Target('linux', 'elf64', sys_read=0, sys_write=1, sys_exit=60),
}


def default_target() -> str:
    return 'macos' if sys.platform == 'darwin' else 'linux'


def get_target(name: Optional[str] = None) -> Target:
    name = name or default_target()
    try:
        return TARGETS[name]
    except KeyError:
        raise ValueError(f"Unknown target '{name}' (expected one of: {', '.join(sorted(TARGETS))})") from None


def emit(byte_code: Iterable[ByteCode], out: TextIO, *, target: Optional[str] = None,
         tape_size: int = TAPE_SIZE) -> None:
    tgt = get_target(target)
    emit_prelude(out)
    for op in byte_code:
        out.write(compile_to_native_code(op, tgt))
    emit_bss(out, tape_size)


def emit_prelude(out: TextIO) -> None:
    out.write(f"global {ENTRY}\n")
    out.write("\n")
    out.write("section .text\n")
    out.write("\n")
    out.write(f"{ENTRY}:\n")
    out.write("  mov rsp, tape\n")


def emit_bss(out: TextIO, tape_size: int = TAPE_SIZE) -> None:
    out.write("\n")
    out.write("section .bss\n")
    out.write(f"tape: resb {tape_size}\n")


def _syscall(number: int, comment: str, fd: int) -> str:
    return (
        f"  mov rax, {number:#x} ; {comment}\n"
        f"  mov rdi, {fd}\n"
        "  mov rsi, rsp\n"
        "  mov rdx, 1\n"
        "  syscall\n"
    )


def compile_to_native_code(op: ByteCode, target: Target) -> str:
    if isinstance(op, bc.Add):
        return f"  add byte [rsp], {op.count & 0xFF}\n"
    if isinstance(op, bc.Sub):
        return f"  sub byte [rsp], {op.count & 0xFF}\n"
    if isinstance(op, bc.MoveRight):
        return f"  add rsp, {op.count}\n"
    if isinstance(op, bc.MoveLeft):
        return f"  sub rsp, {op.count}\n"
    if isinstance(op, bc.Read):
        return _syscall(target.sys_read, "read", 0)
    if isinstance(op, bc.Write):
        return _syscall(target.sys_write, "write", 1)
    if isinstance(op, bc.Jump):
        # Enter the loop at its test; the body starts right after.
        return f"  jmp _{op.label}\n{op.label}:\n"
    if isinstance(op, bc.JumpNotZero):
        return (
            f"_{op.label}:\n"
            "  cmp byte [rsp], 0\n"
            f"  jne {op.label}\n"
        )
    if isinstance(op, bc.Exit):
        return (
            f"  mov rax, {target.sys_exit:#x} ; exit\n"
            "  mov rdi, 0\n"
            "  syscall\n"
        )
    raise TypeError(f"Unknown bytecode: {op!r}")
