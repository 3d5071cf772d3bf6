"""Adapters for pyserial ports.

The port's own timeout decides how long a single attempt may block:
with timeout=0 a read returns whatever is pending, possibly nothing.
serial.SerialException is never caught here.
"""
from __future__ import annotations

import logging
from typing import Optional

import serial

from .base import ByteSink, ByteSource

logger = logging.getLogger(__name__)


class SerialSource(ByteSource):
    """Reads from an open serial.Serial port.

    Only the bytes already pending are requested (at least one), since
    pyserial's read(n) otherwise waits for all n bytes.

    Note: pyserial signals a read timeout with an empty result, which is
    reported here as None (no data yet) rather than 0 (end of stream).
    """

    def __init__(self, port: serial.Serial):
        self._port = port

    def read_into(self, view: memoryview) -> Optional[int]:
        size = min(len(view), max(1, self._port.in_waiting))
        data = self._port.read(size)
        count = len(data)
        if count == 0:
            return None
        view[:count] = data
        return count


class SerialSink(ByteSink):
    """Writes to an open serial.Serial port."""

    def __init__(self, port: serial.Serial):
        self._port = port

    def write_from(self, view: memoryview) -> Optional[int]:
        written = self._port.write(view)
        if written is None:
            # Some pyserial backends do not report a count
            logger.debug("Serial backend did not report a write count")
            return len(view)
        return written
