"""Dynamically resizable byte buffer.

Storage layout:

              capacity
    <--------------------------------------->
     skip            length
    <----><------------------------>
    +----+--------------------------+-------+
    |    |         content          |  free |
    +----+--------------------------+-------+

Bytes consumed from the front are only skipped over; they are reclaimed
by repacking the content to offset 0 the next time space is needed.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .allocator import Allocator, get_default_allocator
from .errors import (
    EmptyBufferError,
    InvalidArgumentError,
    InvalidOffsetError,
    LengthOverflowError,
)
from .formatting import DEFAULT_ENCODING, render_into
from .transport import ByteSink, ByteSource, as_sink, as_source

logger = logging.getLogger(__name__)

MIN_ALLOCATION_SIZE = 32  # bytes
TEXT_TERMINATOR = b"\0"

BytesLike = Union[bytes, bytearray, memoryview]


class Buffer:
    """Contiguous byte buffer with O(1) consumption from the front.

    Not thread-safe: a buffer must only be used by one thread at a time.
    Views returned by `data` and `reserve()` are invalidated by the next
    mutating call.

    Example:
        >>> buf = Buffer()
        >>> buf.append(b"GET / HTTP/1.1\\r\\n")
        >>> buf.find(b" ")
        3
        >>> buf.skip(4)
        >>> bytes(buf)
        b'/ HTTP/1.1\\r\\n'
    """

    def __init__(self, initial_size: int = 0, allocator: Optional[Allocator] = None):
        """Initialize buffer.

        Args:
            initial_size: Bytes to allocate up front (0 to allocate lazily)
            allocator: Allocator for storage, or None for the process-wide default
        """
        if initial_size < 0:
            raise InvalidArgumentError(f"invalid initial size {initial_size}")

        self._allocator = allocator or get_default_allocator()
        self._storage: Optional[bytearray] = None
        self._skip = 0
        self._length = 0

        if initial_size > 0:
            self._resize(initial_size)

    # --- Accessors ---

    @property
    def allocator(self) -> Allocator:
        return self._allocator

    @property
    def length(self) -> int:
        """Number of bytes of content."""
        return self._length

    @property
    def capacity(self) -> int:
        """Total size of the storage, including skipped and free bytes."""
        return len(self._storage) if self._storage is not None else 0

    @property
    def skipped(self) -> int:
        """Number of consumed bytes still occupying the front of the storage."""
        return self._skip

    @property
    def free_space(self) -> int:
        """Bytes available after the content without growing."""
        return self.capacity - self._length - self._skip

    @property
    def data(self) -> memoryview:
        """Writable view of the content."""
        if self._storage is None:
            return memoryview(bytearray())
        return memoryview(self._storage)[self._skip:self._skip + self._length]

    def find(self, sub: bytes, start: int = 0) -> int:
        """Return the content offset of the first `sub` at or after `start`, or -1."""
        if self._storage is None:
            return -1
        start = min(max(start, 0), self._length)
        index = self._storage.find(sub, self._skip + start, self._skip + self._length)
        return index - self._skip if index >= 0 else -1

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def __bytes__(self) -> bytes:
        if self._storage is None:
            return b""
        return bytes(self._storage[self._skip:self._skip + self._length])

    def __repr__(self) -> str:
        return (
            f"Buffer(length={self._length}, skip={self._skip}, "
            f"capacity={self.capacity})"
        )

    # --- Lifecycle ---

    def clear(self) -> None:
        """Drop the content but keep the storage for reuse."""
        self._skip = 0
        self._length = 0

    def reset(self) -> None:
        """Drop the content and release the storage."""
        if self._storage is not None:
            self._allocator.release(self._storage)
        self._storage = None
        self._skip = 0
        self._length = 0

    def __enter__(self) -> Buffer:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.reset()

    # --- Storage management ---

    def repack(self) -> None:
        """Move the content to the start of the storage, reclaiming skipped bytes."""
        if self._skip == 0:
            return

        storage = self._storage
        storage[:self._length] = storage[self._skip:self._skip + self._length]
        self._skip = 0

    def ensure_free_space(self, size: int) -> None:
        """Make sure at least `size` bytes are free after the content.

        Repacks first; if that is not enough, grows the storage by exactly
        the missing amount.

        Raises:
            AllocationError: If the storage cannot grow. The content is kept.
        """
        if self.free_space >= size:
            return

        self.repack()

        free_space = self.free_space
        if free_space < size:
            self._resize(self.capacity + size - free_space)

    def reserve(self, size: int) -> memoryview:
        """Return a writable view of `size` free bytes after the content.

        Write into it, then call increase_length() with the number of bytes
        actually written.

        Raises:
            AllocationError: If the storage cannot grow
        """
        if size < 0:
            raise InvalidArgumentError(f"invalid reservation size {size}")

        self.ensure_free_space(size)
        if self._storage is None:
            return memoryview(bytearray())

        start = self._skip + self._length
        return memoryview(self._storage)[start:start + size]

    def increase_length(self, n: int) -> None:
        """Account for `n` bytes written directly after the content.

        Raises:
            LengthOverflowError: If `n` exceeds the free space
        """
        if n < 0:
            raise InvalidArgumentError(f"invalid length increment {n}")
        if n > self.free_space:
            raise LengthOverflowError("length increment too large")

        self._length += n

    def _grow_for_insert(self, size: int) -> None:
        if self._storage is None:
            self._resize(max(size, MIN_ALLOCATION_SIZE))
            return

        if self.free_space >= size:
            return

        self.repack()
        if self.free_space >= size:
            return

        capacity = self.capacity
        if size > capacity:
            new_capacity = capacity + size
        else:
            new_capacity = capacity * 2
        self._resize(new_capacity)

    def _resize(self, size: int) -> None:
        if self._storage is None:
            storage = self._allocator.allocate(size)
        else:
            storage = self._allocator.reallocate(self._storage, size)

        logger.debug(f"Resized buffer storage from {self.capacity} to {size} bytes")
        self._storage = storage

    def _check_invariants(self) -> bool:
        capacity = self.capacity
        assert self._skip + self._length <= capacity, "content overflows storage"
        assert self._length > 0 or self._skip == 0, "empty buffer with non-zero skip"
        assert (self._storage is None) == (capacity == 0), "storage/capacity mismatch"
        return True

    # --- Adding content ---

    def insert(self, offset: int, data: BytesLike, size: Optional[int] = None) -> None:
        """Insert the first `size` bytes of `data` at content offset `offset`.

        Args:
            offset: Position in the content, 0 <= offset <= length
            data: Bytes to insert
            size: Number of bytes of `data` to use (default: all of it)

        Raises:
            InvalidOffsetError: If `offset` is outside the content
            InvalidArgumentError: If `size` is negative or larger than `data`
            AllocationError: If the storage cannot grow
        """
        if size is None:
            size = len(data)
        elif size < 0 or size > len(data):
            raise InvalidArgumentError(f"invalid size {size} for {len(data)} bytes of data")

        if size == 0:
            return

        if offset < 0 or offset > self._length:
            raise InvalidOffsetError("invalid offset")

        # Copy first: data may be a view into our own storage
        chunk = bytes(memoryview(data)[:size])

        self._grow_for_insert(size)

        storage = self._storage
        start = self._skip + offset
        end = self._skip + self._length
        if offset < self._length:
            storage[start + size:end + size] = storage[start:end]
        storage[start:start + size] = chunk

        self._length += size
        assert self._check_invariants()

    def append(self, data: BytesLike, size: Optional[int] = None) -> None:
        """Append the first `size` bytes of `data` (default: all of it)."""
        self.insert(self._length, data, size)

    def append_buffer(self, other: Buffer) -> None:
        """Append the content of another buffer, which is left unchanged."""
        self.append(bytes(other))

    def append_text(self, text: str, encoding: str = DEFAULT_ENCODING) -> None:
        """Append encoded text, without any terminator."""
        self.append(text.encode(encoding))

    def append_formatted(self, fmt: str, *args: Any, encoding: str = DEFAULT_ENCODING) -> None:
        """Append the printf-style rendering of `fmt % args`.

        The output is rendered straight into the free space. If it does not
        fit, the buffer grows by exactly what is missing and renders again.

        Raises:
            InvalidArgumentError: If `fmt` is empty
            FormatError: If the arguments do not match the format
            AllocationError: If the storage cannot grow

        Example:
            >>> buf = Buffer()
            >>> buf.append_formatted("%s=%d;", "port", 8080)
            >>> bytes(buf)
            b'port=8080;'
        """
        if not fmt:
            raise InvalidArgumentError("empty format string")

        # Room for a terminator, which is never counted as content
        self.ensure_free_space(len(fmt) + 1)

        while True:
            start = self._skip + self._length
            window = memoryview(self._storage)[start:start + self.free_space]
            try:
                required = render_into(window, fmt, args, encoding)
            finally:
                window.release()

            if required < self.free_space:
                self._length += required
                assert self._check_invariants()
                return

            self.ensure_free_space(required + 1)

    # --- Removing content ---

    def truncate(self, length: int) -> None:
        """Shorten the content to at most `length` bytes."""
        if length < 0:
            raise InvalidArgumentError(f"invalid length {length}")

        self._length = min(self._length, length)
        if self._length == 0:
            self._skip = 0

    def skip(self, n: int) -> None:
        """Consume up to `n` bytes from the front without moving any data."""
        if n < 0:
            raise InvalidArgumentError(f"invalid skip count {n}")

        n = min(n, self._length)
        self._length -= n
        self._skip += n

        if self._length == 0:
            self._skip = 0

        assert self._check_invariants()

    def remove_before(self, offset: int, n: int) -> int:
        """Remove up to `n` bytes ending at content offset `offset`.

        `offset` is clamped to the content length and `n` to `offset`.

        Returns:
            Number of bytes actually removed
        """
        if offset < 0 or n < 0:
            raise InvalidArgumentError(f"invalid removal of {n} bytes before {offset}")

        offset = min(offset, self._length)
        n = min(n, offset)
        if n == 0:
            return 0

        storage = self._storage
        start = self._skip + offset
        end = self._skip + self._length
        if offset < self._length:
            storage[start - n:end - n] = storage[start:end]

        self._length -= n
        if self._length == 0:
            self._skip = 0

        assert self._check_invariants()
        return n

    def remove_after(self, offset: int, n: int) -> int:
        """Remove up to `n` bytes starting at content offset `offset`.

        `offset` is clamped to the content length and `n` to the bytes
        left after it.

        Returns:
            Number of bytes actually removed
        """
        if offset < 0 or n < 0:
            raise InvalidArgumentError(f"invalid removal of {n} bytes after {offset}")

        offset = min(offset, self._length)
        n = min(n, self._length - offset)
        if n == 0:
            return 0

        storage = self._storage
        start = self._skip + offset
        end = self._skip + self._length
        storage[start:end - n] = storage[start + n:end]

        self._length -= n
        if self._length == 0:
            self._skip = 0

        assert self._check_invariants()
        return n

    def remove(self, n: int) -> int:
        """Remove up to `n` bytes from the end of the content."""
        return self.remove_before(self._length, n)

    # --- Extraction ---

    def extract(self) -> bytearray:
        """Hand the content over as a right-sized block and reset the buffer.

        The returned block belongs to the caller.

        Raises:
            EmptyBufferError: If the buffer has no content
            AllocationError: If the storage cannot be shrunk
        """
        if self._storage is None or self._length == 0:
            raise EmptyBufferError("cannot extract content from an empty buffer")

        self.repack()
        block = self._allocator.reallocate(self._storage, self._length)
        logger.debug(f"Extracted {len(block)} bytes from buffer")

        self._storage = None
        self._skip = 0
        self._length = 0
        return block

    def extract_text(self) -> bytearray:
        """Like extract(), with a terminator byte appended to the content.

        An empty buffer yields just the terminator.
        """
        self.append(TEXT_TERMINATOR)
        return self.extract()

    def duplicate(self) -> bytearray:
        """Return a copy of the content, leaving the buffer unchanged.

        Raises:
            EmptyBufferError: If the buffer has no content
        """
        if self._storage is None or self._length == 0:
            raise EmptyBufferError("cannot duplicate an empty buffer")

        block = self._allocator.allocate(self._length)
        block[:] = self._storage[self._skip:self._skip + self._length]
        return block

    def duplicate_text(self) -> bytearray:
        """Return a copy of the content followed by a terminator byte."""
        size = self._length + len(TEXT_TERMINATOR)
        block = self._allocator.allocate(size)
        if self._storage is not None:
            block[:self._length] = self._storage[self._skip:self._skip + self._length]
        block[self._length:size] = TEXT_TERMINATOR
        return block

    # --- I/O ---

    def read_into(self, source: Union[ByteSource, Any], n: int) -> Optional[int]:
        """Read up to `n` bytes from `source` into the free space, once.

        Args:
            source: ByteSource, or anything transport.as_source() accepts
            n: Maximum number of bytes to read

        Returns:
            The source's own result: bytes read, 0 at end of stream, or None
            if a non-blocking source had nothing available. Source failures
            propagate unchanged.
        """
        source = as_source(source)
        view = self.reserve(n)
        try:
            count = source.read_into(view)
        finally:
            view.release()

        if count:
            self._length += count
        return count

    def write_to(self, sink: Union[ByteSink, Any]) -> Optional[int]:
        """Write the content to `sink` once and consume what was written.

        Args:
            sink: ByteSink, or anything transport.as_sink() accepts

        Returns:
            The sink's own result: bytes written, or None if a non-blocking
            sink could not accept data. Sink failures propagate unchanged.
        """
        sink = as_sink(sink)
        view = self.data
        try:
            count = sink.write_from(view)
        finally:
            view.release()

        if count:
            self.skip(count)
        return count
