import os
import sys
from logging.config import fileConfig

from sqlalchemy import pool

from sqlalchemy import create_engine


# --- add project root to sys.path (so "asset_registry.*" imports work)
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from alembic import context

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from asset_registry.db_base import Base
target_metadata = Base.metadata

# Ensure the world state table is registered on Base.metadata for autogenerate
from asset_registry.repositories.sql_world_state import WorldStateRow  # noqa: F401, E402


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Configures the context with just a URL, so calls to context.execute()
    emit the given string to the script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = os.getenv("ASSET_REGISTRY_DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("ASSET_REGISTRY_DATABASE_URL is required to run migrations.")

    connectable = create_engine(url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
