from __future__ import annotations

from typing import Iterator

from sqlalchemy import LargeBinary, String, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column

from asset_registry.db import init_db, new_session
from asset_registry.db_base import Base
from asset_registry.domain.errors import StoreError


class WorldStateRow(Base):
    __tablename__ = "world_state"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class SqlStateIterator:
    """Range scan streamed from an open session; close() releases the session."""

    def __init__(self, session: Session, start_key: str, end_key: str) -> None:
        self._session = session
        self._closed = False

        stmt = select(WorldStateRow.key, WorldStateRow.value)
        if start_key:
            stmt = stmt.where(WorldStateRow.key >= start_key)
        if end_key:
            stmt = stmt.where(WorldStateRow.key < end_key)
        stmt = stmt.order_by(WorldStateRow.key.asc())

        try:
            self._result = session.execute(stmt)
        except SQLAlchemyError as e:
            self.close()
            raise StoreError(f"failed to open range scan ({e})") from e

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[tuple[str, bytes]]:
        return self

    def __next__(self) -> tuple[str, bytes]:
        if self._closed:
            raise StopIteration
        try:
            row = self._result.fetchone()
        except SQLAlchemyError as e:
            raise StoreError(f"range scan failed ({e})") from e
        if row is None:
            raise StopIteration
        key, value = row
        return key, bytes(value)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        result = getattr(self, "_result", None)
        if result is not None:
            result.close()
        self._session.close()

    def __enter__(self) -> "SqlStateIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SqlWorldState:
    """
    SQL implementation aligned with JsonWorldState behavior:
    - get_state(): None if unknown key or empty value
    - put_state(): insert or overwrite
    - delete_state(): no-op on unknown key
    - get_state_by_range(): ordered by key, end_key exclusive
    """

    def __init__(self) -> None:
        # ensure tables exist (V1 simple). Later we can move to migrations.
        try:
            init_db()
        except SQLAlchemyError as e:
            raise StoreError(f"cannot initialise world_state table ({e})") from e

    def get_state(self, key: str) -> bytes | None:
        try:
            with new_session() as s:
                row = s.get(WorldStateRow, key)
                if row is None or not row.value:
                    return None
                return bytes(row.value)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to read from world state: {e}") from e

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise StoreError("key cannot be empty")
        try:
            with new_session() as s:
                row = s.get(WorldStateRow, key)
                if row is None:
                    s.add(WorldStateRow(key=key, value=bytes(value)))
                else:
                    row.value = bytes(value)
                s.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to put to world state: {e}") from e

    def delete_state(self, key: str) -> None:
        try:
            with new_session() as s:
                row = s.get(WorldStateRow, key)
                if row is None:
                    return
                s.delete(row)
                s.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to delete from world state: {e}") from e

    def get_state_by_range(self, start_key: str, end_key: str) -> SqlStateIterator:
        return SqlStateIterator(new_session(), start_key, end_key)
