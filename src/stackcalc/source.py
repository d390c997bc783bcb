# src/stackcalc/source.py
"""Byte cursor over a source buffer.

Files are memory mapped read-only; in-memory text is encoded to UTF-8.
``None`` marks the end of the stream, so every byte value 0-255 stays a
valid result of ``read_byte``/``peek_byte``.
"""

from __future__ import annotations

import logging
import mmap
import os
from typing import Callable, Optional, Tuple, Union

from .diagnostics import SourceError

logger = logging.getLogger(__name__)

Buffer = Union[bytes, mmap.mmap]


class SourceCursor:
    def __init__(self, data: Buffer, filename: str = "<stdin>", _mapping: Optional[mmap.mmap] = None,
                 _fd: Optional[int] = None):
        self.data = data
        self.size = len(data)
        self.pos = 0
        self.filename = filename
        self._mapping = _mapping
        self._fd = _fd
        self.closed = False

    @classmethod
    def open(cls, path: Union[str, os.PathLike]) -> "SourceCursor":
        filename = os.fspath(path)
        try:
            fd = os.open(filename, os.O_RDONLY)
        except OSError as e:
            raise SourceError(f"failed to open file {filename}: {e.strerror}") from e

        try:
            size = os.fstat(fd).st_size
        except OSError as e:
            os.close(fd)
            raise SourceError(f"failed to stat file {filename}: {e.strerror}") from e

        if size == 0:
            # mmap refuses empty files
            logger.debug("opened empty source %s", filename)
            return cls(b"", filename=filename, _fd=fd)

        try:
            mapping = mmap.mmap(fd, size, access=mmap.ACCESS_READ)
        except (OSError, ValueError) as e:
            os.close(fd)
            raise SourceError(f"failed to mmap file {filename}: {e}") from e

        logger.debug("mapped %s (%d bytes)", filename, size)
        return cls(mapping, filename=filename, _mapping=mapping, _fd=fd)

    @classmethod
    def from_text(cls, text: Union[str, bytes], filename: str = "<stdin>") -> "SourceCursor":
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        return cls(data, filename=filename)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        errors = []
        if self._mapping is not None:
            try:
                self._mapping.close()
            except (OSError, BufferError) as e:
                errors.append(f"failed to munmap file: {e}")
            self._mapping = None
        if self._fd is not None:
            try:
                os.close(self._fd)
            except OSError as e:
                errors.append(f"failed to close file: {e.strerror}")
            self._fd = None
        self.data = b""
        if errors:
            raise SourceError("; ".join(errors))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # -- cursor operations -------------------------------------------------

    @property
    def position(self) -> int:
        return self.pos

    def at_end(self) -> bool:
        return self.pos >= self.size

    def peek_byte(self, offset: int = 0) -> Optional[int]:
        index = self.pos + offset
        if index >= self.size:
            return None
        return self.data[index]

    def read_byte(self) -> Optional[int]:
        if self.pos >= self.size:
            return None
        byte = self.data[self.pos]
        self.pos += 1
        return byte

    def skip_while(self, predicate: Callable[[int], bool]) -> int:
        """Advance while ``predicate`` holds for the current byte; returns bytes skipped."""
        start = self.pos
        while self.pos < self.size and predicate(self.data[self.pos]):
            self.pos += 1
        return self.pos - start

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, self.size)

    def slice(self, start: int, end: int) -> bytes:
        return bytes(self.data[start:end])

    def line_column(self, offset: Optional[int] = None) -> Tuple[int, int]:
        """1-based line and column of ``offset``, found by rescanning from the start."""
        if offset is None:
            offset = self.pos
        offset = max(0, min(offset, self.size))
        line, column = 1, 1
        for index in range(offset):
            if self.data[index] == 0x0A:
                line += 1
                column = 1
            else:
                column += 1
        return line, column

    def __repr__(self):
        return f"SourceCursor({self.filename!r}, pos={self.pos}, size={self.size})"
