"""bytebuf - Resizable byte buffers for parsers, readers and output assemblers."""

from .allocator import (
    Allocator,
    DefaultAllocator,
    LimitedAllocator,
    get_default_allocator,
    set_default_allocator,
)
from .buffer import Buffer, MIN_ALLOCATION_SIZE, TEXT_TERMINATOR
from .errors import (
    ByteBufferError,
    InvalidArgumentError,
    InvalidOffsetError,
    LengthOverflowError,
    AllocationError,
    EmptyBufferError,
    FormatError,
)
from .stream import LineReader, drain
from .transport import ByteSource, ByteSink

__version__ = "0.1.0"

__all__ = [
    "Buffer",
    "MIN_ALLOCATION_SIZE",
    "TEXT_TERMINATOR",
    "Allocator",
    "DefaultAllocator",
    "LimitedAllocator",
    "get_default_allocator",
    "set_default_allocator",
    "ByteBufferError",
    "InvalidArgumentError",
    "InvalidOffsetError",
    "LengthOverflowError",
    "AllocationError",
    "EmptyBufferError",
    "FormatError",
    "LineReader",
    "drain",
    "ByteSource",
    "ByteSink",
]
