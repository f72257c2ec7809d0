from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from asset_registry.settings import get_settings


def _default_sqlite_url() -> str:
    # fallback dev: backend/data/asset_registry.db
    settings = get_settings()
    db_path = settings.data_dir / "asset_registry.db"
    return f"sqlite:///{db_path.as_posix()}"


def get_database_url() -> str:
    url = get_settings().database_url
    if url:
        return url
    return _default_sqlite_url()


@lru_cache
def get_engine() -> Engine:
    url = get_database_url()

    # sqlite needs check_same_thread for FastAPI sync access
    connect_args = {}
    if url.startswith("sqlite:///"):
        connect_args = {"check_same_thread": False}

    return create_engine(url, future=True, connect_args=connect_args)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


def new_session() -> Session:
    return get_session_factory()()


def init_db() -> None:
    # import here to avoid circular imports
    from asset_registry.repositories.sql_world_state import WorldStateRow  # noqa: F401
    from asset_registry.db_base import Base

    engine = get_engine()
    Base.metadata.create_all(engine)


def reset_db_caches() -> None:
    """Forget cached engine/session factory (database URL changed)."""
    get_session_factory.cache_clear()
    get_engine.cache_clear()
