"""Abstract byte source and byte sink interfaces.

Buffer.read_into() and Buffer.write_to() talk to the outside world through
these two interfaces. Implementations can wrap file descriptors, sockets,
serial ports, or anything else that moves bytes.

Key principles:
- One call, one transfer attempt: adapters never loop or retry
- Results pass through unchanged: a count, 0 for end of stream, or None
  when a non-blocking endpoint has nothing to transfer
- Failures are the endpoint's own exceptions and are never wrapped
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class ByteSource(ABC):
    """Something a buffer can read bytes from."""

    @abstractmethod
    def read_into(self, view: memoryview) -> Optional[int]:
        """Attempt a single read of up to len(view) bytes into `view`.

        Args:
            view: Writable destination

        Returns:
            Number of bytes read, 0 at end of stream, or None if the
            source is non-blocking and no data is available
        """
        pass


class ByteSink(ABC):
    """Something a buffer can write bytes to."""

    @abstractmethod
    def write_from(self, view: memoryview) -> Optional[int]:
        """Attempt a single write of up to len(view) bytes from `view`.

        Args:
            view: Bytes to send

        Returns:
            Number of bytes written, or None if the sink is non-blocking
            and cannot accept data right now
        """
        pass
