from __future__ import annotations

import json
import tempfile
import threading
from pathlib import Path

from asset_registry.domain.errors import StoreError
from asset_registry.repositories.world_state import SnapshotStateIterator, in_range


class JsonWorldState:
    """World state persisted in a single JSON file.

    Layout: {"version": 1, "state": {"<key>": "<utf-8 document>"}}.
    Every write rewrites the file through a unique temp file + replace,
    under an instance lock so concurrent writers never lose each other's keys.
    """

    def __init__(self, *, state_path: Path) -> None:
        self._path = state_path
        self._lock = threading.Lock()

    def get_state(self, key: str) -> bytes | None:
        text = self._read_state_file()["state"].get(key)
        if not text:
            return None
        return text.encode("utf-8")

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise StoreError("key cannot be empty")
        try:
            text = value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StoreError(f"world_state.json: value for '{key}' is not UTF-8") from e

        # read-modify-write sérialisé
        with self._lock:
            payload = self._read_state_file()
            payload["state"][key] = text
            self._write_state_file(payload)

    def delete_state(self, key: str) -> None:
        with self._lock:
            payload = self._read_state_file()
            if payload["state"].pop(key, None) is None:
                return
            self._write_state_file(payload)
    def get_state_by_range(self, start_key: str, end_key: str) -> SnapshotStateIterator:
        state = self._read_state_file()["state"]
        entries = [
            (k, v.encode("utf-8"))
            for k, v in sorted(state.items())
            if in_range(k, start_key, end_key)
        ]
        return SnapshotStateIterator(entries)

    # ---------- helpers ----------
    def _read_state_file(self) -> dict:
        if not self._path.exists():
            return {"version": 1, "state": {}}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(f"world_state.json: cannot read {self._path} ({e})") from e

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"world_state.json: invalid JSON ({e})") from e

        if not isinstance(payload, dict):
            raise StoreError("world_state.json: root must be an object")

        if payload.get("version") != 1:
            raise StoreError("world_state.json: version must be 1")

        state = payload.get("state")
        if not isinstance(state, dict):
            raise StoreError("world_state.json: 'state' must be an object")

        for k, v in state.items():
            if not isinstance(v, str):
                raise StoreError(f"world_state.json: value for '{k}' must be a string")

        return payload

    def _write_state_file(self, payload: dict) -> None:
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=self._path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n")
            Path(tmp_name).replace(self._path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"world_state.json: cannot write {self._path} ({e})") from e
