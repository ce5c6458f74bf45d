"""Byte source protocol and block arithmetic for chunked uploads."""

from __future__ import annotations

import os
from typing import Any, Protocol, runtime_checkable

from .file_source import FileSource
from .bytes_source import BytesSource


@runtime_checkable
class ByteSource(Protocol):
    """A finite, randomly readable run of bytes."""

    @property
    def size(self) -> int: ...

    def read(self, offset: int, length: int) -> bytes: ...


def block_length(offset: int, size: int, block_size: int) -> int:
    """Length of the block starting at ``offset``; 0 once ``offset`` reaches ``size``."""
    if block_size <= 0:
        raise ValueError("block_size must be > 0")
    return max(0, min(block_size, size - offset))


def block_count(size: int, block_size: int) -> int:
    """Number of data blocks for ``size`` bytes (no zero-length trailing block)."""
    if block_size <= 0:
        raise ValueError("block_size must be > 0")
    return -(-max(0, size) // block_size)


def as_byte_source(obj: Any) -> ByteSource:
    """Adapt bytes-like objects and filesystem paths into a ByteSource.

    A ``str`` is treated as a path, never as content.
    """
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BytesSource(obj)
    if isinstance(obj, (str, os.PathLike)):
        return FileSource(obj)
    if isinstance(obj, ByteSource):
        return obj
    raise TypeError(f"unsupported byte source: {type(obj).__name__}")


__all__ = ["ByteSource", "as_byte_source", "block_count", "block_length"]
