"""Application service: Remove Product use case."""

from __future__ import annotations

import structlog

from stockledger.domain.exceptions import NotFoundError
from stockledger.domain.repository.inventory_repository import InventoryRepository

logger = structlog.get_logger(__name__)


class RemoveProductHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self, product_id: str) -> None:
        """Delete a product from the catalog.

        Its transactions stay in the ledger; they carry their own copy of
        the product name.
        """
        snapshot = self._inventory_repo.load()
        if snapshot.find_product(product_id) is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")

        remaining = [p for p in snapshot.products if p.id != product_id]
        self._inventory_repo.save(remaining, snapshot.transactions)
        logger.info("product.removed", product_id=product_id)
