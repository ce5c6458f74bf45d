"""Byte source backed by a file on disk."""

from __future__ import annotations

import os
from pathlib import Path


class FileSource:
    """Reads ranges of a file; the size is captured once at construction."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._size = self.path.stat().st_size

    @property
    def size(self) -> int:
        return self._size

    def read(self, offset: int, length: int) -> bytes:
        if offset < 0 or length < 0:
            raise ValueError("offset and length must be >= 0")
        length = max(0, min(length, self._size - offset))
        if length == 0:
            return b""
        with self.path.open("rb") as fh:
            fh.seek(offset)
            return fh.read(length)


__all__ = ["FileSource"]
