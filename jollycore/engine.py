"""Engine main loop driving named systems, plus a scope timer."""

from __future__ import annotations

import abc
import threading
import time
from typing import Any

from jollycore.atom import Atom
from jollycore.ecs import Ecs
from jollycore.sync import RWLock


class Timer:
    """Measures the time spent inside a with block, in milliseconds."""

    def __init__(self) -> None:
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> Timer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed = (time.perf_counter() - self._start) * 1000.0


class System(abc.ABC):
    """A unit of work the engine starts, steps every frame and stops."""

    @abc.abstractmethod
    def init(self) -> None:
        """Called once when the system is added."""

    @abc.abstractmethod
    def term(self) -> None:
        """Called once when the engine stops."""

    @abc.abstractmethod
    def step(self, dt: float) -> None:
        """Called every frame with the previous frame's time in milliseconds."""


class SystemThread(System):
    """A system whose run method works on its own thread."""

    def __init__(self) -> None:
        self._thread: threading.Thread | None = None

    def init(self) -> None:
        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

    def term(self) -> None:
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    @abc.abstractmethod
    def run(self) -> None:
        """Body of the system's thread."""


class Engine:
    """Owns the systems and the entity store and runs the frame loop."""

    _instance: Engine | None = None

    def __init__(self) -> None:
        self._systems: dict[str, System] = {}
        self.ecs = Ecs()
        self._busy = RWLock()
        self._run = Atom(True)

    def add(self, name: str, system: System) -> None:
        """Register a system under name and initialise it."""
        self._systems[name] = system
        system.init()

    def get(self, name: str) -> System:
        return self._systems[name]

    def run(self) -> None:
        """Step every system until stopped, then terminate them all."""
        dt = 0.0
        while self._run.get():
            with self._busy.read():
                with Timer() as timer:
                    for system in list(self._systems.values()):
                        system.step(dt)
            dt = timer.elapsed

        for system in list(self._systems.values()):
            system.term()

    def stop(self) -> None:
        self._run.set(False)

    def get_lock(self) -> RWLock:
        return self._busy

    @staticmethod
    def instance() -> Engine:
        """The shared engine, created on first use."""
        if Engine._instance is None:
            Engine._instance = Engine()
        return Engine._instance