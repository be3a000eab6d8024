"""Stage - per-sprite slot storage with component queries."""

from __future__ import annotations

from typing import Any, Generator, TypeVar, cast

from drift.types import DeadSlotError, SlotId

T = TypeVar("T")


class Stage:
    """Owns one state slot per sprite.

    Each slot holds at most one component of a given type. Slots never share
    components, so systems may treat every slot independently.
    """

    def __init__(self) -> None:
        self._components: dict[type, dict[int, Any]] = {}
        self._next_id: int = 0
        self._alive: set[int] = set()

    def spawn(self, *components: Any) -> SlotId:
        sid = self._next_id
        self._next_id += 1
        self._alive.add(sid)
        for component in components:
            self.attach(sid, component)
        return sid

    def despawn(self, slot_id: SlotId) -> None:
        self._alive.discard(slot_id)
        for store in self._components.values():
            store.pop(slot_id, None)

    def attach(self, slot_id: SlotId, component: Any) -> None:
        ctype = type(component)
        if slot_id not in self._alive:
            raise DeadSlotError(
                slot_id,
                f"Cannot attach {ctype.__name__} to dead slot {slot_id}",
            )
        self._components.setdefault(ctype, {})[slot_id] = component

    def detach(self, slot_id: SlotId, component_type: type) -> None:
        store = self._components.get(component_type)
        if store is not None:
            store.pop(slot_id, None)

    def get(self, slot_id: SlotId, component_type: type[T]) -> T:
        if slot_id not in self._alive:
            raise DeadSlotError(slot_id, f"Slot {slot_id} is not alive")
        store = self._components.get(component_type)
        if store is None or slot_id not in store:
            raise KeyError(
                f"Slot {slot_id} has no {component_type.__name__} component"
            )
        return cast(T, store[slot_id])

    def has(self, slot_id: SlotId, component_type: type) -> bool:
        if slot_id not in self._alive:
            return False
        store = self._components.get(component_type)
        return store is not None and slot_id in store

    def query(
        self, *types: type
    ) -> Generator[tuple[SlotId, tuple[Any, ...]], None, None]:
        """Yield (slot_id, components) for every slot holding all *types*.

        Slots are visited in spawn order.
        """
        if not types:
            return
        base_store = self._components.get(types[0])
        if base_store is None:
            return

        for sid in sorted(base_store):
            if sid not in self._alive:
                continue
            components: list[Any] = []
            for ctype in types:
                store = self._components.get(ctype)
                if store is None or sid not in store:
                    break
                components.append(store[sid])
            else:
                yield sid, tuple(components)

    def slots(self) -> frozenset[SlotId]:
        return frozenset(self._alive)

    def alive(self, slot_id: SlotId) -> bool:
        return slot_id in self._alive

    def __len__(self) -> int:
        return len(self._alive)
