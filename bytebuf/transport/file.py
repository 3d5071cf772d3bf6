"""Adapters for binary file-like objects (io.RawIOBase, io.BufferedIOBase)."""
from __future__ import annotations

from typing import BinaryIO, Optional

from .base import ByteSink, ByteSource


class FileSource(ByteSource):
    """Reads from any object providing readinto()."""

    def __init__(self, file: BinaryIO):
        self._file = file

    def read_into(self, view: memoryview) -> Optional[int]:
        return self._file.readinto(view)


class FileSink(ByteSink):
    """Writes to any object providing write().

    Buffered writers report the full length even if they only queued the
    data; raw writers may report a partial count or None.
    """

    def __init__(self, file: BinaryIO):
        self._file = file

    def write_from(self, view: memoryview) -> Optional[int]:
        return self._file.write(view)
