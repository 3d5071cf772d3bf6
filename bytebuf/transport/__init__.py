"""Byte sources and sinks used by buffer read/write adapters."""
from __future__ import annotations

import socket as _socket

import serial as _serial

from .base import ByteSink, ByteSource
from .fd import FileDescriptorSink, FileDescriptorSource
from .file import FileSink, FileSource
from .serial import SerialSink, SerialSource
from .socket import SocketSink, SocketSource


def as_source(obj) -> ByteSource:
    """Adapt `obj` to the ByteSource interface.

    Accepts a ByteSource (returned as-is), an int file descriptor, a socket,
    a pyserial port, or a binary file object providing readinto().

    Raises:
        TypeError: If `obj` cannot be read from
    """
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, int):
        return FileDescriptorSource(obj)
    if isinstance(obj, _socket.socket):
        return SocketSource(obj)
    if isinstance(obj, _serial.SerialBase):
        return SerialSource(obj)
    if hasattr(obj, "readinto"):
        return FileSource(obj)
    raise TypeError(f"cannot read bytes from {type(obj).__name__}")


def as_sink(obj) -> ByteSink:
    """Adapt `obj` to the ByteSink interface.

    Accepts a ByteSink (returned as-is), an int file descriptor, a socket,
    a pyserial port, or a binary file object providing write().

    Raises:
        TypeError: If `obj` cannot be written to
    """
    if isinstance(obj, ByteSink):
        return obj
    if isinstance(obj, int):
        return FileDescriptorSink(obj)
    if isinstance(obj, _socket.socket):
        return SocketSink(obj)
    if isinstance(obj, _serial.SerialBase):
        return SerialSink(obj)
    if hasattr(obj, "write"):
        return FileSink(obj)
    raise TypeError(f"cannot write bytes to {type(obj).__name__}")


__all__ = [
    "ByteSource",
    "ByteSink",
    "FileDescriptorSource",
    "FileDescriptorSink",
    "FileSource",
    "FileSink",
    "SocketSource",
    "SocketSink",
    "SerialSource",
    "SerialSink",
    "as_source",
    "as_sink",
]
