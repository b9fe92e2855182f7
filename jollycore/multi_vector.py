"""Structure-of-arrays container: several columns grown and shrunk together."""

from __future__ import annotations

from typing import Any

from jollycore.memory import BLOCK_32

MULTI_VECTOR_DEFAULT_SIZE = BLOCK_32


class MultiVector:
    """Parallel columns holding one value per column for each row."""

    def __init__(self, columns: int, size: int = 0) -> None:
        if columns < 1:
            raise ValueError("a multi vector needs at least one column")
        reserve = max(size, MULTI_VECTOR_DEFAULT_SIZE)
        self._columns: list[list[Any]] = [[None] * reserve for _ in range(columns)]
        self._size = 0

    @property
    def reserve(self) -> int:
        """Number of rows that fit before the columns grow."""
        return len(self._columns[0])

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self._columns)

    def resize(self, size: int) -> None:
        """Change the capacity of every column, keeping the rows held."""
        if size < self._size:
            raise ValueError(f"cannot shrink below the {self._size} rows held")
        for column in self._columns:
            if size > len(column):
                column.extend([None] * (size - len(column)))
            else:
                del column[size:]

    def add(self, *args: Any) -> None:
        """Append one row, one value per column."""
        if len(args) != len(self._columns):
            raise TypeError(f"expected {len(self._columns)} values, got {len(args)}")
        if self.reserve <= self._size:
            self.resize(self.reserve * 2)
        for column, value in zip(self._columns, args):
            column[self._size] = value
        self._size += 1

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"row {index} out of range for {self._size} rows")

    def get(self, column: int, index: int) -> Any:
        """The value of a column at a row."""
        if not 0 <= column < len(self._columns):
            raise IndexError(f"column {column} out of range")
        self._check(index)
        return self._columns[column][index]

    def remove(self, index: int) -> None:
        """Delete a row by moving the last row into its place."""
        self._check(index)
        last = self._size - 1
        for column in self._columns:
            column[index] = column[last]
            column[last] = None
        self._size = last

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"MultiVector(width={self.width}, size={self._size}, reserve={self.reserve})"