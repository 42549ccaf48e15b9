"""
Tests for parsing, bracket errors and inline execution.
"""

import io

import pytest

from bfkit import nodes
from bfkit.errors import UnmatchedCloseBrace, UnmatchedOpenBrace
from bfkit.lexer import BufferSource
from bfkit.parser import Parser, parse
from bfkit.state import ExecutionContext


def _parse(code: bytes):
    parser = Parser(BufferSource(code))
    program = parser.parse()
    return parser, program


def test_well_bracketed_program():
    parser, program = _parse(b"><+[-]+.")
    assert parser.nesting == 0
    assert [type(e) for e in program.entry] == [
        nodes.MoveRight, nodes.MoveLeft, nodes.Increment, nodes.Loop, nodes.Increment, nodes.Output,
    ]
    loop = program.entry.exprs[3]
    assert [type(e) for e in loop.body] == [nodes.Decrement]


def test_nested_loops():
    parser, program = _parse(b"[[>]<]")
    assert parser.nesting == 0
    outer = program.entry.exprs[0]
    inner = outer.body.exprs[0]
    assert isinstance(inner, nodes.Loop)
    assert isinstance(inner.body.exprs[0], nodes.MoveRight)
    assert isinstance(outer.body.exprs[1], nodes.MoveLeft)


def test_comments_make_no_nodes():
    _, program = _parse(b"hello world\n\t 0123456789")
    assert len(program.entry) == 0


def test_unmatched_open_brace_reports_the_bracket():
    with pytest.raises(UnmatchedOpenBrace) as exc:
        _parse(b"++>+[+")
    assert (exc.value.line, exc.value.column) == (1, 5)
    assert "line: 1, column: 5" in str(exc.value)


def test_unmatched_open_brace_reports_innermost_unclosed():
    with pytest.raises(UnmatchedOpenBrace) as exc:
        _parse(b"+[[-]")
    assert (exc.value.line, exc.value.column) == (1, 2)


def test_unmatched_open_brace_at_end_of_line():
    with pytest.raises(UnmatchedOpenBrace) as exc:
        _parse(b"++\n+[\n+")
    assert (exc.value.line, exc.value.column) == (2, 2)


def test_unmatched_open_brace_as_last_byte():
    with pytest.raises(UnmatchedOpenBrace) as exc:
        _parse(b"+[")
    assert (exc.value.line, exc.value.column) == (1, 2)


def test_unmatched_close_brace():
    with pytest.raises(UnmatchedCloseBrace) as exc:
        _parse(b"+]")
    assert (exc.value.line, exc.value.column) == (1, 2)


def test_unmatched_close_after_balanced_loop():
    with pytest.raises(UnmatchedCloseBrace) as exc:
        _parse(b"[-]\n  ]")
    assert (exc.value.line, exc.value.column) == (2, 3)


def test_error_has_source_excerpt():
    with pytest.raises(UnmatchedCloseBrace) as exc:
        _parse(b"+\n+]\n+")
    ctx = exc.value.context
    assert ">    2 | +]" in ctx
    assert "^" in ctx
    assert "Hint:" in str(exc.value)


def test_functional_parse_returns_block():
    block = parse(BufferSource(b"+-"))
    assert isinstance(block, nodes.Block)
    assert len(block) == 2


def test_inline_execution_runs_top_level_statements():
    out = io.StringIO()
    ctx = ExecutionContext(stdout=out)
    parser = Parser(BufferSource(b"+++.>+"), execute=True, context=ctx)
    parser.parse()
    assert out.getvalue() == "\x03"
    assert ctx.tape == [3, 1]


def test_inline_execution_creates_private_context():
    parser = Parser(BufferSource(b"++"), execute=True)
    parser.parse()
    assert parser.context.read() == 2


def test_plain_parse_does_not_execute():
    ctx = ExecutionContext()
    Parser(BufferSource(b"+++"), context=ctx).parse()
    assert ctx.read() == 0


class _WatchingSource(BufferSource):
    """Records the current cell each time the parser asks for a token."""

    def __init__(self, data, context):
        super().__init__(data)
        self.context = context
        self.seen = []

    def next_token(self):
        tok = super().next_token()
        self.seen.append((tok.token.name, self.context.read()))
        return tok


def test_loop_body_is_not_run_while_it_is_parsed():
    ctx = ExecutionContext()
    source = _WatchingSource(b"++[-]", ctx)
    Parser(source, execute=True, context=ctx).parse()
    assert source.seen == [
        ('INCREMENT', 0),
        ('INCREMENT', 1),
        ('JUMP_FORWARD', 2),
        ('DECREMENT', 2),
        ('JUMP_BACK', 2),
        ('EOF', 0),
    ]


def test_loop_with_zero_guard_never_runs():
    out = io.StringIO()
    _, program = _parse(b"[.]")
    program.run(ExecutionContext(stdout=out))
    assert out.getvalue() == ""


def test_loop_runs_to_fixpoint():
    _, program = _parse(b"+++++[>++<-]")
    ctx = program.run()
    assert ctx.tape == [0, 10]
