"""Application service: Bulk Update use case."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from stockledger.application.dto import BulkResultDTO
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.bulk_mutation import (
    BulkOperation,
    BulkRequest,
    apply_bulk,
)


class BulkUpdateHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(
        self,
        product_ids: Iterable[str],
        operation: BulkOperation,
        quantity: Decimal | str | int | None = None,
    ) -> BulkResultDTO:
        """Apply one operation to every selected product, all or nothing.

        Deleting products leaves their ledger history in place.
        """
        selected = list(product_ids)
        snapshot = self._inventory_repo.load()

        result = apply_bulk(
            snapshot.products,
            selected,
            BulkRequest(operation=operation, quantity=quantity),  # type: ignore[arg-type]
            policy=self._policy,
        )

        snapshot = snapshot.with_products(result.products).append_transactions(
            result.transactions
        )
        self._inventory_repo.save(snapshot.products, snapshot.transactions)

        return BulkResultDTO(
            operation=operation.value,
            affected=len(result.removed_ids) or len(result.transactions),
            entries=len(result.transactions),
        )
