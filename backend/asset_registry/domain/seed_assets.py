from __future__ import annotations

from asset_registry.domain.asset import Asset

_WAREHOUSE = "Склад"
_READY_FOR_SALE = "Готов к продаже"
_STORAGE = "Хранение"


def _stock(code: str, value: int, time: str) -> Asset:
    return Asset.create(
        owner=_WAREHOUSE,
        status=_READY_FOR_SALE,
        asset_type=_STORAGE,
        department=_WAREHOUSE,
        code=code,
        value=value,
        date=f"02.04.2023 {time}",
    )


# Catalogue initial du registre (ordre d'écriture conservé)
SEED_ASSETS: tuple[Asset, ...] = (
    _stock("М2", 60, "09:01"),
    _stock("М3", 130, "09:04"),
    _stock("М2а", 20, "09:08"),
    _stock("М4", 80, "09:09"),
    _stock("М8", 190, "09:15"),
    _stock("А2", 340, "09:32"),
    _stock("А19", 540, "09:45"),
    _stock("Бр1", 10, "09:52"),
    _stock("Л8", 35, "09:55"),
    _stock("Ц7", 40, "09:58"),
)
