from __future__ import annotations

from asset_registry.api.schemas.assets import AssetResponse
from asset_registry.domain.asset import Asset


def asset_to_response(asset: Asset) -> AssetResponse:
    return AssetResponse(
        ID=asset.id,
        Owner=asset.owner,
        Status=asset.status,
        Type=asset.asset_type,
        Department=asset.department,
        Code=asset.code,
        Value=asset.value,
        Date=asset.date,
    )
