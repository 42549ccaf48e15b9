"""
Token sources.

Lexing is one byte to one token, so it runs lazily in lockstep with the
parser: each ``next_token`` call consumes exactly one byte. Two sources share
the same contract: ``BufferSource`` over a fixed buffer and ``StreamSource``
over a channel fed by another thread.
"""
from __future__ import annotations

import logging
from typing import Optional

from .channel import Channel, ChannelClosed, Status, StatusMessage
from .tokens import PositionedToken, Token, token_of

log = logging.getLogger(__name__)


class TokenSource:
    def __init__(self, data: bytes = b''):
        self.code = bytearray(data)
        self.index = 0
        self.line = 1
        self.column = 1

    def _next_buffered(self) -> Optional[PositionedToken]:
        if self.index >= len(self.code):
            return None
        raw = self.code[self.index]
        tok = PositionedToken(token_of(raw), self.line, self.column)
        self.index += 1
        if raw == ord('\n'):
            self.line += 1
            self.column = 0
        self.column += 1
        return tok

    def eof_token(self) -> PositionedToken:
        return PositionedToken(Token.EOF, self.line, self.column)

    def next_token(self) -> PositionedToken:
        raise NotImplementedError

    def snapshot(self) -> Optional[bytes]:
        """Full source text for error excerpts, when the source still has it."""
        return None


class BufferSource(TokenSource):
    """Fixed buffer. Yields Eof forever once exhausted."""

    def next_token(self) -> PositionedToken:
        tok = self._next_buffered()
        return tok if tok is not None else self.eof_token()

    def snapshot(self) -> Optional[bytes]:
        return bytes(self.code)


class StreamSource(TokenSource):
    """
    Bytes arrive as chunks over ``data_channel``.

    When the buffer runs dry a READY status goes out on ``status_channel`` and
    the source blocks until the next chunk. A closed channel on either side
    reads as end of stream.
    """

    def __init__(self, data_channel: Channel, status_channel: Channel):
        super().__init__()
        self.data_channel = data_channel
        self.status_channel = status_channel

    def next_token(self) -> PositionedToken:
        while True:
            tok = self._next_buffered()
            if tok is not None:
                return tok
            try:
                self.status_channel.send(StatusMessage(Status.READY))
            except ChannelClosed:
                return self.eof_token()
            try:
                chunk = self.data_channel.recv()
            except ChannelClosed:
                log.debug("data channel closed, ending stream")
                return self.eof_token()
            # Consumed bytes are never revisited.
            del self.code[:self.index]
            self.index = 0
            self.code.extend(chunk)
