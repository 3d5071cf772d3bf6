"""Default allocator backed by Python's own memory manager.

Also holds the process-wide allocator slot used by buffers that are not
given an allocator explicitly.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import AllocationError
from .base import Allocator

logger = logging.getLogger(__name__)


class DefaultAllocator(Allocator):
    """Allocator handing out plain bytearrays."""

    def allocate(self, size: int) -> bytearray:
        try:
            return bytearray(size)
        except MemoryError as e:
            logger.error(f"Cannot allocate {size} bytes")
            raise AllocationError(f"cannot allocate {size} bytes", size) from e

    def release(self, block: bytearray) -> None:
        # Memory goes back once the last reference is dropped
        pass

    def allocate_zeroed(self, count: int, size: int) -> bytearray:
        # bytearray(n) is already zero-filled
        return self.allocate(count * size)

    def reallocate(self, block: bytearray, size: int) -> bytearray:
        current = len(block)
        if size == current:
            return block

        try:
            try:
                if size > current:
                    block.extend(bytes(size - current))
                else:
                    del block[size:]
                return block
            except BufferError:
                # Exported memoryviews pin the block; move it instead
                new_block = bytearray(size)
                keep = min(current, size)
                new_block[:keep] = block[:keep]
                return new_block
        except MemoryError as e:
            logger.error(f"Cannot resize block from {current} to {size} bytes")
            raise AllocationError(
                f"cannot resize block from {current} to {size} bytes", size
            ) from e


_default_allocator: Allocator = DefaultAllocator()


def get_default_allocator() -> Allocator:
    """Return the allocator used by buffers created without one."""
    return _default_allocator


def set_default_allocator(allocator: Optional[Allocator]) -> None:
    """Replace the process-wide default allocator.

    Set it before creating buffers: existing buffers keep the allocator
    they were created with.

    Args:
        allocator: New default, or None to restore DefaultAllocator
    """
    global _default_allocator
    if allocator is None:
        allocator = DefaultAllocator()
    _default_allocator = allocator
    logger.debug(f"Default allocator set to {type(allocator).__name__}")
