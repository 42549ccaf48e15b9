from .api import (
    CompileOptions,
    CompileResult,
    build_executable,
    compile_file,
    compile_string,
    interpret_file,
    interpret_string,
    parse_file,
    parse_string,
)
from .compiler import SimpleCompiler
from .errors import BFError, ParseError, ToolchainError, UnmatchedCloseBrace, UnmatchedOpenBrace
from .optimizer import Optimizer, optimize
from .parser import Parser, parse
from .repl import Repl
from .state import ExecutionContext
from .tokens import EOF, Token, token_of

__all__ = [
    'CompileOptions',
    'CompileResult',
    'build_executable',
    'compile_file',
    'compile_string',
    'interpret_file',
    'interpret_string',
    'parse_file',
    'parse_string',
    'SimpleCompiler',
    'BFError',
    'ParseError',
    'ToolchainError',
    'UnmatchedCloseBrace',
    'UnmatchedOpenBrace',
    'Optimizer',
    'optimize',
    'Parser',
    'parse',
    'Repl',
    'ExecutionContext',
    'EOF',
    'Token',
    'token_of',
]
