from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union

from .asm import emit
from .bytecode import ByteProgram
from .compiler import SimpleCompiler
from .lexer import BufferSource
from .nodes import Program
from .optimizer import Optimizer
from .parser import Parser
from .state import ExecutionContext
from .toolchain import build_executable as _build_executable

Source = Union[str, bytes]


@dataclass(frozen=True)
class CompileOptions:
    optimize: bool = False
    target: Optional[str] = None


@dataclass(frozen=True)
class CompileResult:
    bytecode: ByteProgram
    asm: str


def _as_bytes(source: Source) -> bytes:
    return source.encode('utf-8') if isinstance(source, str) else bytes(source)


def parse_string(source: Source) -> Program:
    return Parser(BufferSource(_as_bytes(source))).parse()


def parse_file(path: Union[str, Path]) -> Program:
    return parse_string(Path(path).read_bytes())


def interpret_string(source: Source, *, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                     cell_bits: int = 8) -> ExecutionContext:
    """Parse the whole program, then run it on a fresh tape."""
    program = parse_string(source)
    context = ExecutionContext(cell_bits=cell_bits, stdin=stdin, stdout=stdout)
    return program.run(context)


def interpret_file(path: Union[str, Path], **kwargs) -> ExecutionContext:
    return interpret_string(Path(path).read_bytes(), **kwargs)


def compile_string(source: Source, *, options: Optional[CompileOptions] = None) -> CompileResult:
    options = options or CompileOptions()
    program = parse_string(source)
    byte_program = SimpleCompiler().compile_program(program)
    if options.optimize:
        byte_program = Optimizer(byte_program).optimize()
    out = io.StringIO()
    emit(byte_program, out, target=options.target)
    return CompileResult(bytecode=byte_program, asm=out.getvalue())


def compile_file(path: Union[str, Path], *, options: Optional[CompileOptions] = None) -> CompileResult:
    return compile_string(Path(path).read_bytes(), options=options)


def build_executable(source: Source, output: Union[str, Path], *, options: Optional[CompileOptions] = None,
                     keep_temps: bool = False) -> Path:
    options = options or CompileOptions()
    result = compile_string(source, options=options)
    return _build_executable(result.asm, output, options.target, keep_temps=keep_temps)
