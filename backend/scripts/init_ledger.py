from __future__ import annotations

import logging

from asset_registry.api.deps import get_world_state
from asset_registry.services.asset_registry_service import get_all_assets, init_ledger


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    state = get_world_state()
    init_ledger(state)
    print({"assets": len(get_all_assets(state))})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
