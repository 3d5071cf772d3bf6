"""Adapters for stream sockets."""
from __future__ import annotations

import socket
from typing import Optional

from .base import ByteSink, ByteSource


class SocketSource(ByteSource):
    """Reads from a connected stream socket with one recv_into() call.

    A non-blocking socket with nothing pending yields None.
    """

    def __init__(self, sock: socket.socket):
        self._sock = sock

    def read_into(self, view: memoryview) -> Optional[int]:
        try:
            return self._sock.recv_into(view)
        except BlockingIOError:
            return None


class SocketSink(ByteSink):
    """Writes to a connected stream socket with one send() call.

    A non-blocking socket whose send buffer is full yields None.
    """

    def __init__(self, sock: socket.socket):
        self._sock = sock

    def write_from(self, view: memoryview) -> Optional[int]:
        try:
            return self._sock.send(view)
        except BlockingIOError:
            return None
