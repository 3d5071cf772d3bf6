"""Abstract base class for storage allocators.

An Allocator hands out the contiguous byte blocks a Buffer stores its
content in. Blocks are plain bytearrays, so any allocator can be swapped
for another without the buffer noticing.

Key principles:
- Every request is fallible and reports failure with AllocationError
- reallocate() may move the block; callers must use the returned one
- Released blocks must not be used again
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class Allocator(ABC):
    """Abstract allocator interface used by Buffer for its storage."""

    @abstractmethod
    def allocate(self, size: int) -> bytearray:
        """Allocate a block of `size` bytes.

        Args:
            size: Block size in bytes

        Returns:
            New block. Its content is unspecified.

        Raises:
            AllocationError: If the request cannot be satisfied
        """
        pass

    @abstractmethod
    def release(self, block: bytearray) -> None:
        """Return a block to the allocator.

        Releasing None is a no-op.
        """
        pass

    @abstractmethod
    def reallocate(self, block: bytearray, size: int) -> bytearray:
        """Resize a block, preserving its first min(len(block), size) bytes.

        Args:
            block: Block previously returned by this allocator
            size: New size in bytes

        Returns:
            The resized block, which may or may not be `block` itself.

        Raises:
            AllocationError: If the request cannot be satisfied. `block` is
                left untouched in that case.
        """
        pass

    def allocate_zeroed(self, count: int, size: int) -> bytearray:
        """Allocate a zero-filled block for `count` items of `size` bytes."""
        block = self.allocate(count * size)
        block[:] = bytes(len(block))
        return block
