"""Adapters for raw operating system file descriptors."""
from __future__ import annotations

import os
from typing import Optional

from .base import ByteSink, ByteSource


class FileDescriptorSource(ByteSource):
    """Reads from a file descriptor with one readv(2) call per attempt.

    A non-blocking descriptor with no data yields None.
    """

    def __init__(self, fd: int):
        self._fd = fd

    @property
    def fd(self) -> int:
        return self._fd

    def read_into(self, view: memoryview) -> Optional[int]:
        try:
            return os.readv(self._fd, [view])
        except BlockingIOError:
            return None


class FileDescriptorSink(ByteSink):
    """Writes to a file descriptor with one write(2) call per attempt.

    A non-blocking descriptor with no room yields None.
    """

    def __init__(self, fd: int):
        self._fd = fd

    @property
    def fd(self) -> int:
        return self._fd

    def write_from(self, view: memoryview) -> Optional[int]:
        try:
            return os.write(self._fd, view)
        except BlockingIOError:
            return None
