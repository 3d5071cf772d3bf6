"""Allocator enforcing a ceiling on outstanding bytes."""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import AllocationError
from .base import Allocator
from .default import DefaultAllocator

logger = logging.getLogger(__name__)


class LimitedAllocator(Allocator):
    """Allocator that refuses requests once `limit` bytes are handed out.

    Useful to put a memory budget on buffers fed by untrusted peers, where
    an unbounded stream would otherwise grow storage forever.

    Blocks handed out by Buffer.extract(), duplicate() or duplicate_text()
    stay counted until the caller passes them to release().
    """

    def __init__(self, limit: int, parent: Optional[Allocator] = None):
        """Initialize allocator.

        Args:
            limit: Maximum number of bytes outstanding at any time
            parent: Allocator actually serving requests (default: DefaultAllocator)
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._limit = limit
        self._parent = parent or DefaultAllocator()
        self._in_use = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def in_use(self) -> int:
        """Bytes currently handed out and not released."""
        return self._in_use

    def allocate(self, size: int) -> bytearray:
        self._check(size)
        block = self._parent.allocate(size)
        self._in_use += len(block)
        return block

    def release(self, block: bytearray) -> None:
        if block is None:
            return
        self._in_use = max(0, self._in_use - len(block))
        self._parent.release(block)

    def reallocate(self, block: bytearray, size: int) -> bytearray:
        current = len(block)
        if size > current:
            self._check(size - current)
        new_block = self._parent.reallocate(block, size)
        self._in_use += len(new_block) - current
        return new_block

    def _check(self, extra: int) -> None:
        if self._in_use + extra > self._limit:
            logger.error(
                f"Allocation of {extra} bytes refused "
                f"({self._in_use}/{self._limit} bytes in use)"
            )
            raise AllocationError(
                f"allocation limit of {self._limit} bytes exceeded", extra
            )
