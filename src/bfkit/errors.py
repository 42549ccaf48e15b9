from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    if not lines:
        return ""
    idx = min(max(1, line_no_1), len(lines))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column > 0:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'open':
        return "Every '[' needs a matching ']' before the end of the program."
    if kind == 'close':
        return "This ']' closes a loop that was never opened."
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ParseError(BFError):
    line: int
    column: int
    context: str = ""


@dataclass
class UnmatchedOpenBrace(ParseError):
    pass


@dataclass
class UnmatchedCloseBrace(ParseError):
    pass


@dataclass
class ToolchainError(BFError):
    command: Sequence[str] = ()
    returncode: Optional[int] = None
    stderr: str = ""


def _make_parse_error(cls, brace: str, kind: str, line: int, column: int, source: Optional[bytes]) -> ParseError:
    message = f"Unmatched '{brace}' starting at line: {line}, column: {column}"
    ctx = ""
    if source is not None:
        ctx = _build_context(source.decode('utf-8', errors='replace').split('\n'), line, column)
    if ctx:
        hint = _hint_for(kind)
        hint_block = f"\nHint: {hint}" if hint else ""
        message = f"{message}\n{ctx}{hint_block}"
    return cls(message=message, line=line, column=column, context=ctx)


def make_unmatched_open(line: int, column: int, source: Optional[bytes] = None) -> UnmatchedOpenBrace:
    return _make_parse_error(UnmatchedOpenBrace, '[', 'open', line, column, source)


def make_unmatched_close(line: int, column: int, source: Optional[bytes] = None) -> UnmatchedCloseBrace:
    return _make_parse_error(UnmatchedCloseBrace, ']', 'close', line, column, source)
