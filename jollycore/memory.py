"""Fixed-capacity byte buffers and block alignment helpers."""

from __future__ import annotations

BLOCK_32 = 32
BLOCK_64 = 64
BLOCK_128 = 128
BLOCK_256 = 256
BLOCK_512 = 512
BLOCK_1024 = 1024
BLOCK_2048 = 2048
BLOCK_4096 = 4096
BLOCK_8192 = 8192

DEFAULT_ALIGNMENT = BLOCK_32


def align_size256(size: int) -> int:
    """Round size up to a multiple of 32 bytes (0 stays 0)."""
    if size < 0:
        raise ValueError("size must not be negative")
    if size == 0:
        return 0
    return ((size - 1) // BLOCK_32 + 1) * BLOCK_32


class Buffer:
    """A fixed-capacity byte buffer filled from the front."""

    def __init__(self, size: int = BLOCK_4096) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.size = size
        self.index = 0
        self._data = bytearray(size)

    def write(self, data: bytes | bytearray | memoryview | int) -> bytes:
        """Append as much of data as fits; return the part that did not fit."""
        chunk = bytes((data,)) if isinstance(data, int) else bytes(data)
        count = min(len(chunk), self.size - self.index)
        self._data[self.index:self.index + count] = chunk[:count]
        self.index += count
        return chunk[count:]

    def write_repeat(self, character: int, count: int) -> int:
        """Append character up to count times; return how many were written."""
        filler = bytes((character,))
        written = max(0, min(count, self.size - self.index))
        self._data[self.index:self.index + written] = filler * written
        self.index += written
        return written

    def read(self, size: int) -> bytes:
        """Remove and return up to size bytes from the front."""
        count = max(0, min(size, self.index))
        out = bytes(self._data[:count])
        remaining = self.index - count
        self._data[:remaining] = self._data[count:self.index]
        self._data[remaining:self.index] = bytes(count)
        self.index = remaining
        return out

    def remaining(self) -> int:
        """Free space left in the buffer."""
        return self.size - self.index

    def flush(self) -> None:
        """Clear the buffer."""
        self._data[:] = bytes(self.size)
        self.index = 0

    def contents(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._data[:self.index])

    def _check(self, index: int) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"index {index} out of range for buffer of size {self.size}")

    def __getitem__(self, index: int) -> int:
        self._check(index)
        return self._data[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._check(index)
        self._data[index] = value

    def __len__(self) -> int:
        return self.index

    def __repr__(self) -> str:
        return f"Buffer(size={self.size}, index={self.index})"