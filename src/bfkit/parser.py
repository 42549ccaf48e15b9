"""
Parsing tape programs.

The parser builds a ``Program`` (one top-level ``Block``) from any token
source. Loops are parsed recursively: a ``[`` opens a nested call that returns
at the matching ``]``.

Because every expression is a single tape operation the parser can also run
the program while parsing it. Only top-level expressions run this way, right
after they are parsed; a loop runs once its whole body has been read. This is
what lets the REPL execute input line by line.
"""
from __future__ import annotations

from typing import Dict, Optional

from . import nodes
from .errors import make_unmatched_close, make_unmatched_open
from .lexer import TokenSource
from .nodes import Block, Program
from .state import ExecutionContext
from .tokens import PositionedToken, Token


_SIMPLE_EXPRS: Dict[Token, nodes.Expr] = {
    Token.MOVE_RIGHT: nodes.MoveRight(),
    Token.MOVE_LEFT: nodes.MoveLeft(),
    Token.INCREMENT: nodes.Increment(),
    Token.DECREMENT: nodes.Decrement(),
    Token.OUTPUT: nodes.Output(),
    Token.INPUT: nodes.Input(),
}


class Parser:
    def __init__(self, source: TokenSource, *, execute: bool = False,
                 context: Optional[ExecutionContext] = None):
        self.source = source
        self.execute = execute
        if context is None and execute:
            context = ExecutionContext()
        self.context = context
        self.nesting = 0

    def parse(self) -> Program:
        return Program(self.parse_block())

    def parse_block(self, opener: Optional[PositionedToken] = None) -> Block:
        """
        Parse expressions until the end of the current nesting level.

        ``opener`` is the ``[`` that started this level, used to report it if
        the input ends before it is closed.
        """
        block = Block()
        while True:
            meta = self.source.next_token()
            token = meta.token

            if token is Token.COMMENT:
                continue

            if token is Token.JUMP_FORWARD:
                self.nesting += 1
                expr = nodes.Loop(self.parse_block(opener=meta))
            elif token is Token.JUMP_BACK:
                if self.nesting == 0:
                    raise make_unmatched_close(meta.line, meta.column, self.source.snapshot())
                self.nesting -= 1
                return block
            elif token is Token.EOF:
                if self.nesting > 0:
                    raise make_unmatched_open(opener.line, opener.column, self.source.snapshot())
                return block
            else:
                expr = _SIMPLE_EXPRS[token]

            if self.execute and self.nesting == 0:
                expr.run(self.context)
            block.append(expr)


def parse(source: TokenSource, execute_inline: bool = False,
          context: Optional[ExecutionContext] = None) -> Block:
    return Parser(source, execute=execute_inline, context=context).parse_block()
