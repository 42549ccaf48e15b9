from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# Byte value that ends a stream. Never a command byte.
EOF = 255


class Token(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    JUMP_FORWARD = '['
    JUMP_BACK = ']'
    COMMENT = ''
    EOF = None


def _build_table() -> Tuple[Token, ...]:
    table = [Token.COMMENT] * 256
    for tok in Token:
        if tok.value:
            table[ord(tok.value)] = tok
    table[EOF] = Token.EOF
    return tuple(table)


_TABLE = _build_table()


def token_of(byte: int) -> Token:
    """Map one input byte to its token. Anything unrecognised is a comment."""
    return _TABLE[byte & 0xFF]


@dataclass(frozen=True)
class PositionedToken:
    token: Token
    line: int
    column: int
