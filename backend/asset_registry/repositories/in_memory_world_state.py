from __future__ import annotations

from dataclasses import dataclass, field

from asset_registry.domain.errors import StoreError
from asset_registry.repositories.world_state import SnapshotStateIterator, in_range


@dataclass
class InMemoryWorldState:
    """
    World state en mémoire.
    - Déterministe (scan trié par clé)
    - Facile à tester
    - Compte les curseurs ouverts pour détecter les fuites
    """
    _items: dict[str, bytes] = field(default_factory=dict)
    _open_iterators: set[int] = field(default_factory=set)

    def get_state(self, key: str) -> bytes | None:
        value = self._items.get(key)
        if not value:
            return None
        return value

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise StoreError("key cannot be empty")
        self._items[key] = bytes(value)

    def delete_state(self, key: str) -> None:
        self._items.pop(key, None)

    def get_state_by_range(self, start_key: str, end_key: str) -> SnapshotStateIterator:
        entries = [
            (k, v)
            for k, v in sorted(self._items.items())
            if in_range(k, start_key, end_key)
        ]
        it = SnapshotStateIterator(entries, on_close=self._release)
        self._open_iterators.add(id(it))
        return it

    @property
    def open_iterators(self) -> int:
        return len(self._open_iterators)

    def _release(self, it: SnapshotStateIterator) -> None:
        self._open_iterators.discard(id(it))
