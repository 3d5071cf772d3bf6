"""Storage allocators for buffers."""

from .base import Allocator
from .default import DefaultAllocator, get_default_allocator, set_default_allocator
from .limited import LimitedAllocator

__all__ = [
    "Allocator",
    "DefaultAllocator",
    "LimitedAllocator",
    "get_default_allocator",
    "set_default_allocator",
]
