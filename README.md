# jollycore

Core building blocks for a small game engine, in plain Python with no
third-party dependencies.

## What is inside

- `jollycore.ryu`: shortest round-trip formatting of doubles in scientific
  notation (`dtos`) and a correctly rounding parser for decimal literals that
  allows `_` digit separators (`stod`). The building blocks (`d2d`,
  `d2d_small_int`, `to_chars`, `DecimalF64` and the logarithm helpers) are
  public too. `stod` raises `ValueError` on malformed input, more than 17
  mantissa digits or more than 4 exponent digits.
- `jollycore.hashing`: 32-bit FNV-1a. `fnv1a` hashes bytes, and `hash_value`
  hashes strings (UTF-8), bytes, bools, ints, floats and tuples of these by
  their byte form.
- `jollycore.memory`: `Buffer`, a fixed-capacity byte buffer (4096 bytes by
  default). It has `write`, which returns the part that did not fit,
  `write_repeat`, `read`, `remaining`, `flush` and `contents`. The module also
  has `align_size256`, which rounds a size up to a multiple of 32.
- `jollycore.option`: `Option` and `Result` with `get`, `get_or`,
  `some_then` and `none_then`. There are also `clamp` and an `Error`
  exception class.
- `jollycore.hashset`: `HashSet`, an open-addressing Robin Hood hash set. It
  supports `add`, `remove`, `has`, `in`, iteration, `len` and `resize`.
- `jollycore.multi_vector`: `MultiVector`, a structure-of-arrays container
  whose columns grow together. `remove` moves the last row into the gap.
- `jollycore.sync`: `Mutex` (re-entrant), a bounded counting `Semaphore` and
  a writer-priority `RWLock` with `read()` / `write()` sides usable in `with`.
  `rview` / `wview` hold the read or write side of an object's `get_lock()`
  while it is used.
- `jollycore.atom`: `Atom`, a lock-protected cell with `get`, `set`, `add`,
  `sub` and `cmpxchg`. `cmpxchg` returns `(stored, value_seen)`. A
  `MemoryOrder` argument is checked for what each operation allows.
- `jollycore.log`: `Logger` writes lines prefixed `info: `, `warn: ` or
  `crit: ` to a `Sink`. The default sink is `StdoutSink`, and
  `Logger.instance()` returns a shared logger.
- `jollycore.fileio`: `fopen` returns a `File` that gathers writes in a
  `Buffer` and writes them out on `commit` or `close`. `fopen_raw` returns an
  unbuffered `FileBase`. Both are opened with `Access` flags (`RO`, `WO`,
  `RW`, `APP`).
- `jollycore.ecs`: an entity-component system made of `Ecs`, `Pool`, `Group`,
  `SparseSet`, `EntityId` and `EcsEvent`.
  - Entity ids carry an 8-bit generation, and destroyed slots are reused.
  - A component's type is the type of the object added.
  - A group is kept up to date as components are added and removed.
- `jollycore.engine`: `Engine` steps named `System`s until `stop()` is
  called, then calls `term` on each one. `SystemThread` runs its `run` method
  on its own thread. `Timer` measures the time spent in a `with` block, in
  milliseconds.

## Install

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Examples

Formatting and parsing doubles:

    from jollycore.ryu import dtos, stod

    dtos(5.0)                    # '5e0'
    stod("123_456.5e2")          # 12345650.0

A hash set:

    from jollycore.hashset import HashSet

    s = HashSet([2, 4, 6, 8, 2])
    len(s)                       # 4
    6 in s                       # True

An entity-component system:

    from dataclasses import dataclass
    from jollycore.ecs import Ecs

    @dataclass
    class Position:
        x: float
        y: float

    @dataclass
    class Name:
        value: str

    world = Ecs()
    e = world.create()
    world.add(e, Position(1.0, 2.0))
    world.add(e, Name("player"))

    for entity, (pos, name) in world.group(Position, Name):
        print(entity.id(), name.value, pos.x)

Running systems on an engine:

    from jollycore.engine import Engine, System

    class Counter(System):
        def __init__(self):
            self.steps = 0
        def init(self):
            pass
        def term(self):
            pass
        def step(self, dt):
            self.steps += 1
            if self.steps == 3:
                Engine.instance().stop()

    engine = Engine.instance()
    engine.add("counter", Counter())
    engine.run()

## What it does not do

This is a library only.

- It has no command-line program.
- It has no window, input handling, rendering or shader inspection. The
  engine loop steps whatever systems you give it.
- The logger takes messages that are already formatted. It has no
  placeholder substitution of its own.