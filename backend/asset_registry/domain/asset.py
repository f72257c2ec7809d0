# dataclasses : classes "données" ; frozen=True => objet IMMUTABLE
from dataclasses import dataclass

# Enum : ensemble fini de catégories reconnues
from enum import Enum
from typing import Callable

from asset_registry.domain.errors import InvalidAssetStateError


ID_SEPARATOR = ":"

# Statut imposé à la création d'une "Сделка"
DEAL_INITIAL_STATUS = "Первичная договоренность"


def make_asset_id(owner: str, code: str) -> str:
    """Identifiant public d'un actif : Owner + ":" + Code (sert aussi de clé du store)."""
    return f"{owner}{ID_SEPARATOR}{code}"


# 1) Catégorie d'actif, dérivée du champ libre Type
# On hérite de "str" pour garder la valeur brute sérialisable
class AssetCategory(str, Enum):
    # Сделка : une affaire en cours, soumise à la règle de création
    DEAL = "Сделка"

    # Хранение : stock en entrepôt
    STORAGE = "Хранение"

    # tout autre Type (libre, sans règle)
    OTHER = ""

    @classmethod
    def of(cls, asset_type: str) -> "AssetCategory":
        for member in cls:
            if member is not cls.OTHER and member.value == asset_type:
                return member
        return cls.OTHER


# 2) Asset : un enregistrement du registre
@dataclass(frozen=True)
class Asset:
    id: str
    owner: str
    status: str
    asset_type: str
    department: str
    code: str
    # entier sans borne : 0 et négatif acceptés
    value: int
    # horodatage libre, jamais parsé
    date: str

    @classmethod
    def create(
        cls,
        *,
        owner: str,
        status: str,
        asset_type: str,
        department: str,
        code: str,
        value: int,
        date: str,
    ) -> "Asset":
        return cls(
            id=make_asset_id(owner, code),  # l'id n'est jamais fourni par l'appelant
            owner=owner,
            status=status,
            asset_type=asset_type,
            department=department,
            code=code,
            value=value,
            date=date,
        )

    def __post_init__(self) -> None:
        # l'id doit rester cohérent avec Owner/Code
        if isinstance(self.owner, str) and isinstance(self.code, str):
            expected = make_asset_id(self.owner, self.code)
            if self.id != expected:
                raise ValueError(f"Asset id '{self.id}' does not match owner/code ('{expected}')")

    @property
    def category(self) -> AssetCategory:
        return AssetCategory.of(self.asset_type)


# 3) Règles de création par catégorie
CreationRule = Callable[[Asset], None]


def _deal_requires_initial_agreement(asset: Asset) -> None:
    if asset.status != DEAL_INITIAL_STATUS:
        raise InvalidAssetStateError(asset.id, asset.status)


CREATION_RULES: dict[AssetCategory, CreationRule] = {
    AssetCategory.DEAL: _deal_requires_initial_agreement,
}


def check_creation_rules(asset: Asset) -> None:
    """Raise InvalidAssetStateError if the category of `asset` forbids its creation as-is.

    Only applied on creation: an update may move a deal to any status.
    """
    rule = CREATION_RULES.get(asset.category)
    if rule is not None:
        rule(asset)
