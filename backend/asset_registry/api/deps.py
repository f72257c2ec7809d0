from __future__ import annotations

from functools import lru_cache

from asset_registry.settings import get_settings
from asset_registry.repositories.json_world_state import JsonWorldState
from asset_registry.repositories.sql_world_state import SqlWorldState
from asset_registry.repositories.world_state import WorldState


@lru_cache
def get_world_state() -> WorldState:
    # If ASSET_REGISTRY_DATABASE_URL is set -> use SQL world state (Postgres/SQLite)
    settings = get_settings()
    if settings.database_url:
        return SqlWorldState()

    return JsonWorldState(state_path=settings.data_dir / "world_state.json")
