from __future__ import annotations

import json

from asset_registry.domain.asset import Asset
from asset_registry.domain.errors import AssetDecodeError, AssetEncodeError

# Champs du document stocké (noms exacts, partagés avec les autres exécuteurs)
STRING_FIELDS = ("ID", "Owner", "Status", "Type", "Department", "Code", "Date")
INT_FIELDS = ("Value",)


def to_record(asset: Asset) -> dict:
    return {
        "ID": asset.id,
        "Owner": asset.owner,
        "Status": asset.status,
        "Type": asset.asset_type,
        "Department": asset.department,
        "Code": asset.code,
        "Value": asset.value,
        "Date": asset.date,
    }


def from_record(d: dict) -> Asset:
    if not isinstance(d, dict):
        raise AssetDecodeError("asset record must be an object")

    values: dict = {key: _req_str(d, key) for key in STRING_FIELDS}
    values.update({key: _req_int(d, key) for key in INT_FIELDS})

    try:
        return Asset(
            id=values["ID"],
            owner=values["Owner"],
            status=values["Status"],
            asset_type=values["Type"],
            department=values["Department"],
            code=values["Code"],
            value=values["Value"],
            date=values["Date"],
        )
    except ValueError as e:
        raise AssetDecodeError(str(e)) from e


def encode_asset(asset: Asset) -> bytes:
    """Serialize an Asset into the UTF-8 JSON document written to the world state."""
    rec = to_record(asset)
    for key in STRING_FIELDS:
        if not isinstance(rec[key], str):
            raise AssetEncodeError(f"field '{key}' must be a string (asset {asset.id!r})")
    for key in INT_FIELDS:
        if isinstance(rec[key], bool) or not isinstance(rec[key], int):
            raise AssetEncodeError(f"field '{key}' must be an integer (asset {asset.id!r})")

    try:
        return json.dumps(rec, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise AssetEncodeError(str(e)) from e


def decode_asset(raw: bytes) -> Asset:
    """Parse a world state document back into an Asset.

    Stricter than a plain field copy: a document whose ID is not Owner:Code
    is rejected with AssetDecodeError, so a single such record written by
    another executor makes get_all_assets fail as a whole.
    """
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AssetDecodeError(f"invalid asset document ({e})") from e
    return from_record(data)


def _req_str(d: dict, key: str) -> str:
    if key not in d:
        raise AssetDecodeError(f"missing field '{key}'")
    v = d[key]
    if not isinstance(v, str):
        raise AssetDecodeError(f"field '{key}' must be a string")
    return v


def _req_int(d: dict, key: str) -> int:
    if key not in d:
        raise AssetDecodeError(f"missing field '{key}'")
    v = d[key]
    # bool est un int en Python : on le refuse explicitement
    if isinstance(v, bool) or not isinstance(v, int):
        raise AssetDecodeError(f"field '{key}' must be an integer")
    return v
