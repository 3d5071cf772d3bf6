"""Stream helpers built on Buffer: a delimited record reader and a drain loop.

These own the retry policy that Buffer.read_into() and Buffer.write_to()
deliberately leave to their callers.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from .buffer import Buffer
from .transport import as_sink, as_source

logger = logging.getLogger(__name__)

DEFAULT_READ_CHUNK_SIZE = 4096  # bytes


class LineReader:
    """Pull-based reader splitting a byte stream into delimited records.

    Records are consumed from the buffer with skip(), so reading a line
    never moves the bytes that follow it.

    Example:
        >>> import os
        >>> r, w = os.pipe()
        >>> os.write(w, b"one\\ntwo\\nthr")
        11
        >>> os.close(w)
        >>> list(LineReader(r))
        [b'one\\n', b'two\\n', b'thr']
    """

    def __init__(
        self,
        source: Any,
        delimiter: bytes = b"\n",
        chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
        buffer: Optional[Buffer] = None,
    ):
        """Initialize reader.

        Args:
            source: ByteSource, or anything transport.as_source() accepts
            delimiter: Record terminator, kept at the end of each record
            chunk_size: Maximum bytes requested per read
            buffer: Buffer to accumulate into (default: a new one)
        """
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self._source = as_source(source)
        self._delimiter = delimiter
        self._chunk_size = chunk_size
        self._buffer = buffer if buffer is not None else Buffer()
        self._eof = False
        # Content offset where the delimiter search resumes
        self._scanned = 0

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def at_eof(self) -> bool:
        """True once the source reported end of stream."""
        return self._eof

    def fill(self) -> Optional[int]:
        """Perform a single read from the source.

        Returns:
            The source's result: bytes read, 0 at end of stream, or None
            if nothing was available
        """
        count = self._buffer.read_into(self._source, self._chunk_size)
        if count == 0:
            logger.debug("End of stream reached")
            self._eof = True
        return count

    def read_line(self) -> bytes:
        """Return the next complete record, delimiter included.

        Returns:
            Record bytes, or empty bytes if no complete record is buffered.
        """
        index = self._buffer.find(self._delimiter, self._scanned)
        if index == -1:
            # The delimiter may straddle the next read
            self._scanned = max(0, len(self._buffer) - len(self._delimiter) + 1)
            return b""

        end = index + len(self._delimiter)
        line = bytes(self._buffer.data[:end])
        self._buffer.skip(end)
        self._scanned = 0
        return line

    def read_remainder(self) -> bytes:
        """Return and consume whatever is buffered, complete record or not."""
        rest = bytes(self._buffer)
        self._buffer.clear()
        self._scanned = 0
        return rest

    def __iter__(self) -> Iterator[bytes]:
        """Yield records until end of stream, then any trailing partial record.

        A non-blocking source with nothing available ends iteration early;
        iterate again once it is readable.
        """
        while True:
            line = self.read_line()
            if line:
                yield line
                continue

            if self._eof:
                rest = self.read_remainder()
                if rest:
                    yield rest
                return

            if self.fill() is None:
                return


def drain(buffer: Buffer, sink: Any) -> int:
    """Write buffer content to `sink` until empty or the sink would block.

    Args:
        buffer: Buffer whose content is consumed as it is written
        sink: ByteSink, or anything transport.as_sink() accepts

    Returns:
        Total number of bytes written
    """
    sink = as_sink(sink)
    total = 0
    while buffer:
        count = buffer.write_to(sink)
        if not count:
            break
        total += count
    return total
