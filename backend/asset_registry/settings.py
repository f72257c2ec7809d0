from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str | None = None


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("ASSET_REGISTRY_DATA_DIR")
    if env and env.strip():
        p = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # asset_registry/settings.py -> asset_registry/ -> backend/
        p = Path(__file__).resolve().parents[1] / "data"

    # Le dossier data peut être créé automatiquement
    p.mkdir(parents=True, exist_ok=True)

    db_url = os.getenv("ASSET_REGISTRY_DATABASE_URL")
    return Settings(
        data_dir=p,
        database_url=db_url.strip() if db_url and db_url.strip() else None,
    )
