import pytest

from asset_registry.domain.asset import DEAL_INITIAL_STATUS, Asset
from asset_registry.domain.asset_codec import encode_asset
from asset_registry.domain.errors import (
    AssetAlreadyExistsError,
    AssetDecodeError,
    AssetNotFoundError,
    InvalidAssetStateError,
    StoreError,
)
from asset_registry.domain.seed_assets import SEED_ASSETS
from asset_registry.repositories.in_memory_world_state import InMemoryWorldState
from asset_registry.services.asset_registry_service import (
    asset_exists,
    create_asset,
    delete_asset,
    get_all_assets,
    init_ledger,
    read_asset,
    update_asset,
)


def fields(**overrides) -> dict:
    d = dict(
        owner="Склад",
        status="Готов к продаже",
        asset_type="Хранение",
        department="Склад",
        code="М2",
        value=60,
        date="02.04.2023 09:01",
    )
    d.update(overrides)
    return d


class FailingPutWorldState(InMemoryWorldState):
    """Écritures OK jusqu'à `fail_after`, puis StoreError."""

    def __init__(self, fail_after: int) -> None:
        super().__init__()
        self.fail_after = fail_after
        self.puts = 0

    def put_state(self, key: str, value: bytes) -> None:
        if self.puts >= self.fail_after:
            raise StoreError("failed to put to world state: disk full")
        self.puts += 1
        super().put_state(key, value)


class FailingGetWorldState(InMemoryWorldState):
    def get_state(self, key: str) -> bytes | None:
        raise StoreError("failed to read from world state: timeout")


def test_create_then_read_returns_same_record():
    state = InMemoryWorldState()
    created = create_asset(state, **fields())

    got = read_asset(state, "Склад:М2")

    assert got == created
    assert got == Asset(id="Склад:М2", **fields())


def test_create_duplicate_raises_already_exists_whatever_the_fields():
    state = InMemoryWorldState()
    create_asset(state, **fields())

    with pytest.raises(AssetAlreadyExistsError) as exc_info:
        create_asset(state, **fields(status="Продан", value=1, department="Офис"))

    assert exc_info.value.asset_id == "Склад:М2"
    assert read_asset(state, "Склад:М2").value == 60


def test_duplicate_check_runs_before_deal_rule():
    state = InMemoryWorldState()
    create_asset(state, **fields(code="С1", asset_type="Сделка", status=DEAL_INITIAL_STATUS))

    with pytest.raises(AssetAlreadyExistsError):
        create_asset(state, **fields(code="С1", asset_type="Сделка", status="Закрыта"))


def test_deal_creation_requires_initial_agreement():
    state = InMemoryWorldState()

    with pytest.raises(InvalidAssetStateError) as exc_info:
        create_asset(state, **fields(code="С1", asset_type="Сделка", status="Готов к продаже"))

    assert exc_info.value.asset_id == "Склад:С1"
    assert not asset_exists(state, "Склад:С1")

    create_asset(state, **fields(code="С1", asset_type="Сделка", status=DEAL_INITIAL_STATUS))
    assert read_asset(state, "Склад:С1").status == DEAL_INITIAL_STATUS


def test_read_missing_raises_not_found():
    with pytest.raises(AssetNotFoundError):
        read_asset(InMemoryWorldState(), "Склад:М2")


def test_read_empty_value_is_not_found():
    state = InMemoryWorldState()
    state.put_state("Склад:М2", b"")

    with pytest.raises(AssetNotFoundError):
        read_asset(state, "Склад:М2")
    assert not asset_exists(state, "Склад:М2")


def test_read_corrupted_value_raises_decode_error():
    state = InMemoryWorldState()
    state.put_state("Склад:М2", b"{broken")

    with pytest.raises(AssetDecodeError):
        read_asset(state, "Склад:М2")


def test_update_is_full_replacement():
    state = InMemoryWorldState()
    create_asset(state, **fields())

    new_fields = fields(status="Продан", asset_type="Транспорт", department="Логистика", value=-5, date="")
    update_asset(state, **new_fields)

    assert read_asset(state, "Склад:М2") == Asset(id="Склад:М2", **new_fields)


def test_update_does_not_recheck_deal_rule():
    state = InMemoryWorldState()
    create_asset(state, **fields(code="С1", asset_type="Сделка", status=DEAL_INITIAL_STATUS))

    update_asset(state, **fields(code="С1", asset_type="Сделка", status="Закрыта"))

    assert read_asset(state, "Склад:С1").status == "Закрыта"


def test_update_and_delete_missing_raise_not_found():
    state = InMemoryWorldState()

    with pytest.raises(AssetNotFoundError):
        update_asset(state, **fields())
    with pytest.raises(AssetNotFoundError):
        delete_asset(state, "Склад:М2")


def test_exists_tracks_create_and_delete():
    state = InMemoryWorldState()
    assert asset_exists(state, "Склад:М2") is False

    create_asset(state, **fields())
    assert asset_exists(state, "Склад:М2") is True

    delete_asset(state, "Склад:М2")
    assert asset_exists(state, "Склад:М2") is False
    with pytest.raises(AssetNotFoundError):
        read_asset(state, "Склад:М2")


def test_exists_surfaces_read_errors():
    with pytest.raises(StoreError):
        asset_exists(FailingGetWorldState(), "Склад:М2")


def test_init_ledger_then_list_returns_seed_set():
    state = InMemoryWorldState()
    assert init_ledger(state) == len(SEED_ASSETS)

    assets = get_all_assets(state)

    assert set(assets) == set(SEED_ASSETS)
    assert len(assets) == 10
    # ordre du store : lexicographique par clé
    assert [a.id for a in assets] == sorted(a.id for a in SEED_ASSETS)
    assert state.open_iterators == 0


def test_init_ledger_twice_keeps_same_content():
    state = InMemoryWorldState()
    init_ledger(state)
    init_ledger(state)

    assert len(get_all_assets(state)) == len(SEED_ASSETS)


def test_list_size_follows_create_and_delete():
    state = InMemoryWorldState()
    init_ledger(state)

    create_asset(state, **fields(code="Н1"))
    assert len(get_all_assets(state)) == 11

    delete_asset(state, "Склад:М2")
    delete_asset(state, "Склад:Н1")
    assert len(get_all_assets(state)) == 9


def test_list_aborts_on_bad_record_and_releases_cursor():
    state = InMemoryWorldState()
    init_ledger(state)
    state.put_state("Склад:Б", b"not json")

    with pytest.raises(AssetDecodeError):
        get_all_assets(state)

    assert state.open_iterators == 0


def test_init_ledger_stops_on_first_store_error_without_rollback():
    state = FailingPutWorldState(fail_after=3)

    with pytest.raises(StoreError):
        init_ledger(state)

    assert [a.id for a in get_all_assets(state)] == sorted(a.id for a in SEED_ASSETS[:3])


def test_create_propagates_store_error():
    state = FailingPutWorldState(fail_after=0)

    with pytest.raises(StoreError):
        create_asset(state, **fields())


def test_seed_documents_match_wire_encoding():
    state = InMemoryWorldState()
    init_ledger(state)

    for asset in SEED_ASSETS:
        assert state.get_state(asset.id) == encode_asset(asset)


def test_list_rejects_document_whose_id_differs_from_owner_and_code():
    state = InMemoryWorldState()
    init_ledger(state)
    doc = encode_asset(SEED_ASSETS[0]).replace("Склад:М2".encode("utf-8"), "Склад:ХХ".encode("utf-8"))
    state.put_state("Склад:ХХ", doc)

    with pytest.raises(AssetDecodeError):
        get_all_assets(state)

    assert state.open_iterators == 0
