"""Severity-tagged line logging to pluggable sinks."""

from __future__ import annotations

import abc
import enum
import sys
from typing import TextIO

from jollycore.sync import Mutex


class Severity(enum.Enum):
    INFO = "info"
    WARN = "warn"
    CRIT = "crit"

    @property
    def prefix(self) -> str:
        return f"{self.value}: "


class Sink(abc.ABC):
    """Destination for log output."""

    @abc.abstractmethod
    def write(self, data: bytes | str) -> None:
        """Write data to the sink."""

    @abc.abstractmethod
    def flush(self) -> None:
        """Push buffered output out."""


class StdoutSink(Sink):
    """Writes to standard output (or a given text stream) under a lock."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = Mutex()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, data: bytes | str) -> None:
        text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
        with self._lock:
            self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()


class Logger:
    """Writes one line per message, prefixed with its severity."""

    _instance: Logger | None = None

    def __init__(self, sink: Sink | None = None) -> None:
        self.sink = sink if sink is not None else StdoutSink()

    def log(self, level: Severity, message: str) -> None:
        self.sink.write(level.prefix)
        self.sink.write(message)
        self.sink.write("\n")
        self.sink.flush()

    def info(self, message: str) -> None:
        self.log(Severity.INFO, message)

    def warn(self, message: str) -> None:
        self.log(Severity.WARN, message)

    def crit(self, message: str) -> None:
        self.log(Severity.CRIT, message)

    @staticmethod
    def instance() -> Logger:
        """The shared logger, created on first use."""
        if Logger._instance is None:
            Logger._instance = Logger()
        return Logger._instance