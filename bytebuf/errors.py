"""Exception types raised by buffer operations."""


class ByteBufferError(Exception):
    """Base class for all buffer failures."""
    pass


class InvalidArgumentError(ByteBufferError, ValueError):
    """Raised when an argument is out of range for the current buffer."""
    pass


class InvalidOffsetError(InvalidArgumentError):
    """Raised when an offset lies beyond the buffer content."""
    pass


class LengthOverflowError(InvalidArgumentError):
    """Raised when a length increment exceeds the free space."""
    pass


class AllocationError(ByteBufferError, MemoryError):
    """Raised when an allocator cannot satisfy a request."""
    def __init__(self, message, size=None):
        super().__init__(message)
        self.size = size


class EmptyBufferError(ByteBufferError):
    """Raised when an operation needs content and the buffer has none."""
    pass


class FormatError(ByteBufferError):
    """Raised when formatted text cannot be rendered."""
    pass
