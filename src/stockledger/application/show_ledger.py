"""Application service: Show Ledger use case (query)."""

from __future__ import annotations

from stockledger.application.dto import TransactionDTO
from stockledger.domain.repository.inventory_repository import InventoryRepository


class ShowLedgerHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(
        self, product_id: str | None = None, limit: int | None = None
    ) -> list[TransactionDTO]:
        """Newest entries first. Entries of deleted products are included."""
        entries = list(reversed(self._inventory_repo.load().transactions))
        if product_id is not None:
            entries = [e for e in entries if e.product_id == product_id]
        if limit is not None:
            entries = entries[:limit]
        return [TransactionDTO.from_transaction(e) for e in entries]
