from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response

from asset_registry.api.deps import get_world_state
from asset_registry.api.mappers.asset_mapper import asset_to_response
from asset_registry.api.schemas.assets import AssetExistsResponse, AssetResponse, AssetWriteRequest
from asset_registry.domain.errors import (
    AssetAlreadyExistsError,
    AssetNotFoundError,
    AssetRegistryError,
    InvalidAssetStateError,
)
from asset_registry.services import asset_registry_service as registry


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/assets", tags=["assets"])


@router.post("/init", status_code=204)
def init_ledger() -> Response:
    try:
        registry.init_ledger(get_world_state())
    except AssetRegistryError as e:
        logger.exception("Failed to seed world state: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")
    return Response(status_code=204)


@router.post("", status_code=201, response_model=AssetResponse)
def create_asset(req: AssetWriteRequest) -> AssetResponse:
    try:
        asset = registry.create_asset(get_world_state(), **req.model_dump())
    except AssetAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidAssetStateError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except AssetRegistryError as e:
        logger.exception("Failed to create asset: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")

    return asset_to_response(asset)


@router.get("", response_model=list[AssetResponse])
def list_assets() -> list[AssetResponse]:
    try:
        assets = registry.get_all_assets(get_world_state())
    except AssetRegistryError as e:
        logger.exception("Failed to list assets: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")
    return [asset_to_response(a) for a in assets]


@router.put("", response_model=AssetResponse)
def update_asset(req: AssetWriteRequest) -> AssetResponse:
    try:
        asset = registry.update_asset(get_world_state(), **req.model_dump())
    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssetRegistryError as e:
        logger.exception("Failed to update asset: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")

    return asset_to_response(asset)


@router.get("/{asset_id:path}/exists", response_model=AssetExistsResponse)
def asset_exists(asset_id: str) -> AssetExistsResponse:
    try:
        exists = registry.asset_exists(get_world_state(), asset_id)
    except AssetRegistryError as e:
        logger.exception("Failed to check asset %s: %s", asset_id, e)
        raise HTTPException(status_code=500, detail="Internal error")

    return AssetExistsResponse(asset_id=asset_id, exists=exists)


@router.get("/{asset_id:path}", response_model=AssetResponse)
def read_asset(asset_id: str) -> AssetResponse:
    try:
        asset = registry.read_asset(get_world_state(), asset_id)
    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssetRegistryError as e:
        logger.exception("Failed to read asset %s: %s", asset_id, e)
        raise HTTPException(status_code=500, detail="Internal error")

    return asset_to_response(asset)


@router.delete("/{asset_id:path}", status_code=204)
def delete_asset(asset_id: str) -> Response:
    try:
        registry.delete_asset(get_world_state(), asset_id)
    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssetRegistryError as e:
        logger.exception("Failed to delete asset %s: %s", asset_id, e)
        raise HTTPException(status_code=500, detail="Internal error")

    return Response(status_code=204)
