from __future__ import annotations

from typing import Iterator, Protocol


class StateIterator(Protocol):
    """Curseur d'un range scan. Doit être fermé (close() ou bloc `with`)."""

    def __iter__(self) -> Iterator[tuple[str, bytes]]:
        ...

    def close(self) -> None:
        ...

    def __enter__(self) -> "StateIterator":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...


class WorldState(Protocol):
    """Key-value namespace holding the current asset documents.

    Every backend failure is raised as StoreError. An empty value is
    indistinguishable from an absent key for callers.
    """

    def get_state(self, key: str) -> bytes | None:
        ...

    def put_state(self, key: str, value: bytes) -> None:
        ...

    def delete_state(self, key: str) -> None:
        ...

    def get_state_by_range(self, start_key: str, end_key: str) -> StateIterator:
        """Entries with start_key <= key < end_key, ascending. "" on both sides = whole namespace."""
        ...


def in_range(key: str, start_key: str, end_key: str) -> bool:
    if start_key and key < start_key:
        return False
    if end_key and key >= end_key:
        return False
    return True


class SnapshotStateIterator:
    """StateIterator over entries captured when the scan was opened."""

    def __init__(self, entries: list[tuple[str, bytes]], *, on_close=None) -> None:
        self._entries = entries
        self._pos = 0
        self._closed = False
        self._on_close = on_close

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[tuple[str, bytes]]:
        return self

    def __next__(self) -> tuple[str, bytes]:
        if self._closed or self._pos >= len(self._entries):
            raise StopIteration
        entry = self._entries[self._pos]
        self._pos += 1
        return entry

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close(self)

    def __enter__(self) -> "SnapshotStateIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
