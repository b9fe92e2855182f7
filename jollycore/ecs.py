"""Entity-component store: sparse sets, component pools and entity groups."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from jollycore.sync import RWLock, rview, wview

GEN_SHIFT = 24
GEN_MASK = 0xFF << GEN_SHIFT
ID_MASK = 0xFFFFFFFF & ~GEN_MASK
MAX_GENERATION = 0xFF
MAX_POOLS = 64


@dataclass(frozen=True)
class EntityId:
    """An entity handle: 8 bits of generation above 24 bits of slot id."""

    value: int

    @classmethod
    def make(cls, ident: int, gen: int = 0) -> EntityId:
        return cls(((gen << GEN_SHIFT) & GEN_MASK) | (ident & ID_MASK))

    def gen(self) -> int:
        return (self.value & GEN_MASK) >> GEN_SHIFT

    def id(self) -> int:
        return self.value & ID_MASK

    def __int__(self) -> int:
        return self.id()


class SparseSet:
    """Maps entity ids to positions in a packed list of entities."""

    def __init__(self) -> None:
        self._sparse: dict[int, int] = {}
        self.dense: list[EntityId] = []

    def index(self, e: EntityId) -> int | None:
        """Position of e in the packed list, or None if absent."""
        return self._sparse.get(e.id())

    def add(self, e: EntityId) -> None:
        if self.has(e):
            raise ValueError(f"entity {e.id()} is already in the set")
        self._sparse[e.id()] = len(self.dense)
        self.dense.append(e)

    def remove(self, e: EntityId) -> None:
        """Remove e, moving the last entity into its place."""
        idx = self.index(e)
        if idx is None:
            raise KeyError(f"entity {e.id()} is not in the set")
        last = self.dense.pop()
        del self._sparse[e.id()]
        if idx < len(self.dense):
            self.dense[idx] = last
            self._sparse[last.id()] = idx

    def has(self, e: EntityId) -> bool:
        return e.id() in self._sparse

    def __iter__(self) -> Iterator[EntityId]:
        return iter(list(self.dense))

    def __len__(self) -> int:
        return len(self.dense)


class Pool:
    """Packed storage of one component type, indexed by entity."""

    def __init__(self, component_type: type) -> None:
        self.component_type = component_type
        self.set = SparseSet()
        self.components: list[Any] = []
        self.busy = RWLock()

    def add(self, e: EntityId, item: Any) -> None:
        if self.has(e):
            raise ValueError("entity already contains this component")
        self.set.add(e)
        self.components.append(item)

    def remove(self, e: EntityId) -> None:
        idx = self.set.index(e)
        if idx is None:
            raise KeyError("entity does not contain this component")
        last = self.components.pop()
        if idx < len(self.components):
            self.components[idx] = last
        self.set.remove(e)

    def has(self, e: EntityId) -> bool:
        return self.set.has(e)

    def get(self, e: EntityId) -> Any:
        idx = self.set.index(e)
        if idx is None:
            raise KeyError("entity does not contain this component")
        return self.components[idx]

    def get_lock(self) -> RWLock:
        return self.busy

    def __iter__(self) -> Iterator[tuple[EntityId, Any]]:
        return iter(list(zip(self.set.dense, self.components)))

    def __len__(self) -> int:
        return len(self.components)


class Group:
    """The entities holding every one of several component types."""

    def __init__(self, state: Ecs, component_types: tuple[type, ...]) -> None:
        self.set = SparseSet()
        self.state = state
        self.component_types = component_types
        self.busy = RWLock()

    def add(self, e: EntityId) -> None:
        if self.has(e):
            raise ValueError("entity is already in this group")
        self.set.add(e)

    def remove(self, e: EntityId) -> None:
        if not self.has(e):
            raise KeyError("entity is not in this group")
        self.set.remove(e)

    def has(self, e: EntityId) -> bool:
        return self.set.has(e)

    def get(self, e: EntityId) -> tuple[Any, ...]:
        if not self.has(e):
            raise KeyError("entity is not in this group")
        return tuple(self.state.get(e, t) for t in self.component_types)

    def get_lock(self) -> RWLock:
        return self.busy

    def __iter__(self) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        return ((e, self.get(e)) for e in list(self.set.dense))

    def __len__(self) -> int:
        return len(self.set)


class EcsEvent(enum.Enum):
    CREATE = 0
    DESTROY = 1
    ADD = 2
    DEL = 3


EcsCallback = Callable[["Ecs", EntityId, EcsEvent], None]


class Ecs:
    """Creates entities, stores their components and keeps groups up to date."""

    def __init__(self) -> None:
        self.entities: list[EntityId] = []
        self.bitset: list[int] = []
        self._pools: dict[type, Pool] = {}
        self._pool_index: dict[type, int] = {}
        self._groups: dict[tuple[type, ...], tuple[Group, int]] = {}
        self._callbacks: dict[EcsEvent, list[EcsCallback]] = {ev: [] for ev in EcsEvent}
        self.busy = RWLock()
        self._free: int | None = None

    def _check_alive(self, e: EntityId) -> None:
        ident = e.id()
        if ident >= len(self.entities) or self.entities[ident] != e:
            raise KeyError(f"entity {ident} (generation {e.gen()}) is not alive")

    def create(self) -> EntityId:
        """Make a new entity, reusing a destroyed slot with a new generation."""
        if self._free is None:
            entity = EntityId.make(len(self.entities))
            self.entities.append(entity)
            self.bitset.append(0)
        else:
            ident = self._free
            slot = self.entities[ident]
            self._free = None if slot.id() == ID_MASK else slot.id()
            entity = EntityId.make(ident, (slot.gen() + 1) % MAX_GENERATION)
            self.entities[ident] = entity
        self.callback(entity, EcsEvent.CREATE)
        return entity

    def destroy(self, e: EntityId) -> None:
        """Remove an entity and every component it holds."""
        self._check_alive(e)
        self.callback(e, EcsEvent.DESTROY)
        link = ID_MASK if self._free is None else self._free
        self.entities[e.id()] = EntityId.make(link, e.gen())
        self.bitset[e.id()] = 0
        self._free = e.id()

    def callback(self, e: EntityId, event: EcsEvent) -> None:
        for cb in list(self._callbacks[event]):
            cb(self, e, event)

    def add_callback(self, event: EcsEvent, cb: EcsCallback) -> None:
        self._callbacks[event].append(cb)

    def _register_pool(self, component_type: type) -> Pool:
        if len(self._pools) >= MAX_POOLS:
            raise RuntimeError("max pool size reached")
        self._pool_index[component_type] = len(self._pools)
        pool = Pool(component_type)
        self._pools[component_type] = pool

        def on_destroy(state: Ecs, e: EntityId, event: EcsEvent) -> None:
            if pool.has(e):
                with wview(pool):
                    pool.remove(e)

        self.add_callback(EcsEvent.DESTROY, on_destroy)
        return pool

    def _bits(self, component_type: type) -> int:
        self.view(component_type)
        return 1 << self._pool_index[component_type]

    def _register_group(self, types: tuple[type, ...]) -> Group:
        bits = 0
        for t in types:
            bits |= self._bits(t)
        group = Group(self, types)
        self._groups[types] = (group, bits)

        for e, entity_bits in zip(self.entities, self.bitset):
            if entity_bits and entity_bits & bits == bits:
                group.add(e)

        def on_add(state: Ecs, e: EntityId, event: EcsEvent) -> None:
            if state.bitset[e.id()] & bits == bits and not group.has(e):
                with wview(group):
                    group.add(e)

        def on_del(state: Ecs, e: EntityId, event: EcsEvent) -> None:
            if group.has(e) and state.bitset[e.id()] & bits != bits:
                with wview(group):
                    group.remove(e)

        def on_destroy(state: Ecs, e: EntityId, event: EcsEvent) -> None:
            if group.has(e):
                with wview(group):
                    group.remove(e)

        self.add_callback(EcsEvent.ADD, on_add)
        self.add_callback(EcsEvent.DEL, on_del)
        self.add_callback(EcsEvent.DESTROY, on_destroy)
        return group

    def add(self, e: EntityId, item: Any) -> None:
        """Attach a component; its type is the type of item."""
        self._check_alive(e)
        component_type = type(item)
        pool = self.view(component_type)
        with wview(pool):
            pool.add(e, item)
        self.bitset[e.id()] |= 1 << self._pool_index[component_type]
        self.callback(e, EcsEvent.ADD)

    def remove(self, e: EntityId, component_type: type) -> None:
        """Detach the component of the given type."""
        self._check_alive(e)
        pool = self.view(component_type)
        with wview(pool):
            pool.remove(e)
        self.bitset[e.id()] &= ~(1 << self._pool_index[component_type])
        self.callback(e, EcsEvent.DEL)

    def get(self, e: EntityId, component_type: type) -> Any:
        with rview(self.view(component_type)) as pool:
            return pool.get(e)

    def has(self, e: EntityId, component_type: type) -> bool:
        with rview(self.view(component_type)) as pool:
            return pool.has(e)

    def view(self, component_type: type) -> Pool:
        """The pool of a component type, created on first use."""
        pool = self._pools.get(component_type)
        if pool is None:
            pool = self._register_pool(component_type)
        return pool

    def group(self, *args: type) -> Group:
        """The group of entities holding all the given types, created on first use."""
        if not args:
            raise TypeError("a group needs at least one component type")
        entry = self._groups.get(args)
        if entry is None:
            return self._register_group(args)
        return entry[0]

    def get_lock(self) -> RWLock:
        return self.busy