"""Wires the JSON repository, policy and import adapter for the CLI.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockledger.domain.policy import LedgerPolicy
from stockledger.infrastructure import settings
from stockledger.infrastructure.importing.row_adapter import RowAdapter
from stockledger.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)


def inventory_repository() -> JsonInventoryRepository:
    data_dir = settings.data_dir()
    return JsonInventoryRepository(
        data_dir / "products.json", data_dir / "transactions.json"
    )


def ledger_policy() -> LedgerPolicy:
    return settings.load_policy()


def row_adapter() -> RowAdapter:
    return RowAdapter()
