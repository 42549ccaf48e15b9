"""
Blocking channel used between the REPL driver and the parser worker.

Either end may ``close`` the channel. After that every ``send`` raises
``ChannelClosed``; ``recv`` still drains messages sent before the close and
then raises ``ChannelClosed`` as well. Closing is the only cancellation
signal in the REPL protocol.
"""
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Deque, Optional

from .errors import ParseError


class ChannelClosed(Exception):
    pass


class Channel:
    def __init__(self, name: str = 'channel'):
        self.name = name
        self._items: Deque[Any] = deque()
        self._closed = False
        self._cond = threading.Condition()

    def send(self, item: Any) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosed(self.name)
            self._items.append(item)
            self._cond.notify()

    def recv(self) -> Any:
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if self._items:
                return self._items.popleft()
            raise ChannelClosed(self.name)

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()


class Status(Enum):
    READY = auto()
    EXITED = auto()


@dataclass(frozen=True)
class StatusMessage:
    status: Status
    error: Optional[ParseError] = None
