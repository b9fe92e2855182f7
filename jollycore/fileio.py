"""Raw and write-buffered file handles opened by access flags."""

from __future__ import annotations

import enum
import os
from typing import Any

from jollycore.memory import Buffer


class Access(enum.IntFlag):
    RO = 1 << 0
    WO = 1 << 1
    RW = RO | WO
    TXT = 1 << 2
    APP = 1 << 3


def _open_args(access: Access) -> tuple[int, str]:
    readable = bool(access & Access.RO)
    writable = bool(access & Access.WO)
    append = bool(access & Access.APP)
    binary = getattr(os, "O_BINARY", 0)

    if readable and writable:
        flags = os.O_RDWR | os.O_CREAT | (os.O_APPEND if append else 0)
        return flags | binary, "a+b" if append else "r+b"
    if writable:
        flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
        return flags | binary, "ab" if append else "wb"
    if readable:
        return os.O_RDONLY | binary, "rb"
    raise ValueError("access must allow reading, writing or both")


class FileBase:
    """An unbuffered file handle."""

    def __init__(self, path: str | os.PathLike[str], access: Access) -> None:
        flags, mode = _open_args(Access(access))
        fd = os.open(path, flags, 0o666)
        self._handle = os.fdopen(fd, mode, buffering=0)
        self.access = Access(access)

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Write data; return the number of bytes written."""
        return self._handle.write(bytes(data)) or 0

    def read(self, size: int) -> bytes:
        """Read up to size bytes."""
        return self._handle.read(size) or b""

    def read_all(self) -> bytes:
        """Read everything up to the end of the file."""
        return self._handle.readall()

    def flush(self) -> None:
        self._handle.flush()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    def __enter__(self) -> FileBase:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class File(FileBase):
    """A file whose writes are gathered in a buffer and written out in blocks."""

    def __init__(self, path: str | os.PathLike[str], access: Access) -> None:
        super().__init__(path, access)
        self.data = Buffer()

    def write(self, data: bytes | bytearray | memoryview | int) -> int:
        """Buffer data, writing full blocks to the file; return bytes accepted."""
        chunk = bytes((data,)) if isinstance(data, int) else bytes(data)
        rest = self.data.write(chunk)
        while rest:
            super().write(self.data.contents())
            self.data.flush()
            rest = self.data.write(rest)
        return len(chunk)

    def commit(self) -> int:
        """Write out whatever is buffered; return the bytes written."""
        written = super().write(self.data.contents())
        self.data.flush()
        return written

    def close(self) -> None:
        if not self.closed and len(self.data):
            self.commit()
        super().close()


def fopen(path: str | os.PathLike[str], access: Access) -> File:
    """Open a write-buffered file."""
    return File(path, access)


def fopen_raw(path: str | os.PathLike[str], access: Access) -> FileBase:
    """Open an unbuffered file."""
    return FileBase(path, access)