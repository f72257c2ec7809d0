from __future__ import annotations


class AssetRegistryError(Exception):
    """Base class for every error raised by the asset registry."""


class AssetAlreadyExistsError(AssetRegistryError):
    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"the asset {asset_id} already exists")


class AssetNotFoundError(AssetRegistryError):
    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"the asset {asset_id} does not exist")


class InvalidAssetStateError(AssetRegistryError):
    """Creation rule of the asset category rejected the record."""

    def __init__(self, asset_id: str, status: str) -> None:
        self.asset_id = asset_id
        self.status = status
        # message métier (russe) conservé tel quel
        super().__init__(f"статус актива {asset_id} не соответсвует правилам")


class StoreError(AssetRegistryError):
    """World state backend failed (read, write, delete or scan)."""


class AssetEncodeError(AssetRegistryError):
    pass


class AssetDecodeError(AssetRegistryError):
    pass
