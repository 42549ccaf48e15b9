"""
Tests for byte -> token mapping and source position tracking.
"""

from bfkit.lexer import BufferSource
from bfkit.tokens import EOF, Token, token_of

COMMANDS = {
    ord('>'): Token.MOVE_RIGHT,
    ord('<'): Token.MOVE_LEFT,
    ord('+'): Token.INCREMENT,
    ord('-'): Token.DECREMENT,
    ord('.'): Token.OUTPUT,
    ord(','): Token.INPUT,
    ord('['): Token.JUMP_FORWARD,
    ord(']'): Token.JUMP_BACK,
}


def test_command_bytes():
    for byte, expected in COMMANDS.items():
        assert token_of(byte) is expected


def test_every_other_byte_is_a_comment():
    for byte in range(256):
        if byte in COMMANDS or byte == EOF:
            continue
        assert token_of(byte) is Token.COMMENT, byte


def test_sentinel_is_eof():
    assert EOF == 255
    assert token_of(255) is Token.EOF


def test_positions_across_newlines():
    source = BufferSource(b"+\n-x\n\n>")
    seen = [(t.token, t.line, t.column) for t in (source.next_token() for _ in range(7))]
    assert seen == [
        (Token.INCREMENT, 1, 1),
        (Token.COMMENT, 1, 2),      # the newline itself
        (Token.DECREMENT, 2, 1),
        (Token.COMMENT, 2, 2),
        (Token.COMMENT, 2, 3),
        (Token.COMMENT, 3, 1),
        (Token.MOVE_RIGHT, 4, 1),
    ]


def test_exhausted_buffer_yields_eof_forever():
    source = BufferSource(b"><")
    assert source.next_token().token is Token.MOVE_RIGHT
    assert source.next_token().token is Token.MOVE_LEFT
    for _ in range(3):
        tok = source.next_token()
        assert tok.token is Token.EOF
        assert (tok.line, tok.column) == (1, 3)
