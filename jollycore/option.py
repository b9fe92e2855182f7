"""Optional values, results carrying errors, and small numeric helpers."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")

_NOTHING: Any = object()


def clamp(value: T, low: T, high: T) -> T:
    """Limit value to [low, high]."""
    result = low if value < low else value
    return high if result > high else result


class Error(Exception):
    """Base error with a message."""

    def message(self) -> str:
        return str(self) if self.args else "error"


class Option:
    """A value that may be absent."""

    __slots__ = ("value", "some")

    def __init__(self, value: Any = _NOTHING) -> None:
        self.some = value is not _NOTHING
        self.value = value if self.some else None

    def get(self) -> Any:
        if not self.some:
            raise ValueError("option holds no value")
        return self.value

    def get_or(self, other: Any) -> Any:
        return self.value if self.some else other

    def some_then(self, fn: Callable[[Any], Any]) -> Any:
        """Apply fn when a value is present, otherwise return self."""
        return fn(self) if self.some else self

    def none_then(self, fn: Callable[[Any], Any]) -> Any:
        """Apply fn when no value is present, otherwise return self."""
        return self if self.some else fn(self)

    def __bool__(self) -> bool:
        return self.some

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self.some == other.some and self.value == other.value

    def __repr__(self) -> str:
        return f"Option({self.value!r})" if self.some else "Option()"


class Result:
    """A value, or the error that prevented it."""

    __slots__ = ("value", "err")

    def __init__(self, value: Any = None, *, error: Any = None) -> None:
        self.value = None if error is not None else value
        self.err = error

    def get(self) -> Any:
        if self.err is not None:
            if isinstance(self.err, BaseException):
                raise self.err
            raise ValueError(f"result holds an error: {self.err!r}")
        return self.value

    def get_or(self, other: Any) -> Any:
        return self.value if self.err is None else other

    def some_then(self, fn: Callable[[Any], Any]) -> Any:
        """Apply fn when there is no error, otherwise return self."""
        return fn(self) if self.err is None else self

    def none_then(self, fn: Callable[[Any], Any]) -> Any:
        """Apply fn when there is an error, otherwise return self."""
        return self if self.err is None else fn(self)

    def __bool__(self) -> bool:
        return self.err is None

    def __repr__(self) -> str:
        if self.err is None:
            return f"Result({self.value!r})"
        return f"Result(error={self.err!r})"