from __future__ import annotations

import logging

from asset_registry.domain.asset import Asset, check_creation_rules, make_asset_id
from asset_registry.domain.asset_codec import decode_asset, encode_asset
from asset_registry.domain.errors import (
    AssetAlreadyExistsError,
    AssetNotFoundError,
)
from asset_registry.domain.seed_assets import SEED_ASSETS
from asset_registry.repositories.world_state import WorldState


log = logging.getLogger(__name__)


def init_ledger(state: WorldState) -> int:
    """
    Écrit le catalogue initial dans le world state.
    Séquentiel, sans rollback : la première erreur interrompt les écritures
    restantes et remonte telle quelle (les écritures déjà faites restent).
    """
    written = 0
    for asset in SEED_ASSETS:
        state.put_state(asset.id, encode_asset(asset))
        written += 1
    log.info("Seeded %d assets", written)
    return written


def create_asset(
    state: WorldState,
    *,
    owner: str,
    status: str,
    asset_type: str,
    department: str,
    code: str,
    value: int,
    date: str,
) -> Asset:
    asset = Asset.create(
        owner=owner,
        status=status,
        asset_type=asset_type,
        department=department,
        code=code,
        value=value,
        date=date,
    )

    if asset_exists(state, asset.id):
        raise AssetAlreadyExistsError(asset.id)

    check_creation_rules(asset)

    state.put_state(asset.id, encode_asset(asset))
    log.info("Created asset %s (type=%r, status=%r)", asset.id, asset.asset_type, asset.status)
    return asset


def read_asset(state: WorldState, asset_id: str) -> Asset:
    raw = state.get_state(asset_id)
    # contenu vide == absent
    if not raw:
        raise AssetNotFoundError(asset_id)

    log.debug("Read asset %s", asset_id)
    return decode_asset(raw)


def update_asset(
    state: WorldState,
    *,
    owner: str,
    status: str,
    asset_type: str,
    department: str,
    code: str,
    value: int,
    date: str,
) -> Asset:
    """Overwrite every field of an existing asset.

    Creation rules are not applied here: a deal may leave its initial status.
    """
    asset_id = make_asset_id(owner, code)
    if not asset_exists(state, asset_id):
        raise AssetNotFoundError(asset_id)

    asset = Asset.create(
        owner=owner,
        status=status,
        asset_type=asset_type,
        department=department,
        code=code,
        value=value,
        date=date,
    )
    state.put_state(asset.id, encode_asset(asset))
    log.info("Updated asset %s", asset.id)
    return asset


def delete_asset(state: WorldState, asset_id: str) -> None:
    if not asset_exists(state, asset_id):
        raise AssetNotFoundError(asset_id)

    state.delete_state(asset_id)
    log.info("Deleted asset %s", asset_id)


def asset_exists(state: WorldState, asset_id: str) -> bool:
    return bool(state.get_state(asset_id))


def get_all_assets(state: WorldState) -> list[Asset]:
    # "" / "" => scan ouvert sur tout le namespace
    assets: list[Asset] = []
    with state.get_state_by_range("", "") as results:
        for _key, raw in results:
            assets.append(decode_asset(raw))
    log.debug("Listed %d assets", len(assets))
    return assets
