"""
Interactive REPL.

Two threads cooperate. The driver reads operator input one line at a time;
the parser worker owns a ``StreamSource`` and parses with inline execution.
The worker announces READY each time it has consumed everything it was given
and the driver only sends the next line after seeing it, so at most one line
of unexecuted input is ever in flight. EXITED ends the session, with the parse
error if there was one.
"""
from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, TextIO

from .channel import Channel, ChannelClosed, Status, StatusMessage
from .errors import ParseError
from .lexer import StreamSource
from .nodes import Program
from .parser import Parser
from .state import ExecutionContext
from .tokens import EOF

log = logging.getLogger(__name__)

__all__ = ['Repl', 'ReplWorker', 'Status', 'StatusMessage']


class ReplWorker:
    """Parser side of the protocol. ``run`` is the thread body."""

    def __init__(self, data_channel: Channel, status_channel: Channel,
                 context: Optional[ExecutionContext] = None):
        self.data_channel = data_channel
        self.status_channel = status_channel
        self.source = StreamSource(data_channel, status_channel)
        self.parser = Parser(self.source, execute=True, context=context)
        self.program: Optional[Program] = None
        self.error: Optional[ParseError] = None

    @property
    def context(self) -> ExecutionContext:
        return self.parser.context

    def run(self) -> None:
        try:
            try:
                self.program = self.parser.parse()
            except ParseError as err:
                self.error = err
            # Late sends from the driver must fail from here on.
            self.data_channel.close()
            try:
                self.status_channel.send(StatusMessage(Status.EXITED, self.error))
            except ChannelClosed:
                log.debug("driver went away before EXITED")
        finally:
            self.data_channel.close()
            self.status_channel.close()


class Repl:
    """Driver side of the protocol: prompts, reads lines, feeds the worker."""

    TERMINATORS = ('quit', 'exit')

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None, *, prompt: str = 'bf> ', cell_bits: int = 8):
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.prompt = prompt
        self.data_channel = Channel('data')
        self.status_channel = Channel('status')
        self.context = ExecutionContext(cell_bits=cell_bits, stdin=stdin, stdout=stdout)
        self.worker = ReplWorker(self.data_channel, self.status_channel, context=self.context)
        self.running = False
        self.error: Optional[ParseError] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> Optional[ParseError]:
        """Run the session until the operator quits or the program fails to parse."""
        self._thread = threading.Thread(target=self.worker.run, name='parse', daemon=True)
        self._thread.start()
        self.running = True

        self._await_status()
        if self.running:
            self._display_prompt(False)
        while self.running:
            line = self._read_line()
            if not line:
                self._send(bytes([EOF]))
                continue
            command = line.strip().lower()
            if not command:
                self._display_prompt(False)
                continue
            if command in self.TERMINATORS:
                self._send(bytes([EOF]))
                continue
            self._send(line.encode('utf-8'))
            if self.running:
                self._display_prompt('.' in line)

        self._thread.join()
        return self.error

    def stop(self) -> None:
        """Cancel the session. The worker sees end of stream at its next read."""
        self.running = False
        self.data_channel.close()

    def _read_line(self) -> str:
        stream = self.stdin if self.stdin is not None else sys.stdin
        return stream.readline()

    def _display_prompt(self, newline: bool) -> None:
        stream = self.stdout if self.stdout is not None else sys.stdout
        if newline:
            stream.write('\n')
        stream.write(self.prompt)
        stream.flush()

    def _send(self, data: bytes) -> None:
        try:
            self.data_channel.send(data)
        except ChannelClosed:
            log.debug("worker gone, treating send failure as EXITED")
            self.running = False
            return
        self._await_status()

    def _await_status(self) -> None:
        try:
            message = self.status_channel.recv()
        except ChannelClosed:
            log.debug("status channel closed, treating as EXITED")
            self.running = False
            return
        log.debug("worker status: %s", message.status.name)
        if message.status is Status.EXITED:
            self.running = False
            self.error = message.error
            if self.error is not None:
                stream = self.stderr if self.stderr is not None else sys.stderr
                stream.write(f"\n{self.error}\n")
                stream.flush()
