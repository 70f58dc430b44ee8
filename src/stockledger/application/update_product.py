"""Application service: Update Product use case."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog

from stockledger.application.dto import ProductLineDTO
from stockledger.domain.exceptions import NotFoundError, ValidationError
from stockledger.domain.model.product import DEFAULT_CODE
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(self, product_id: str, **changes: Any) -> ProductLineDTO:
        """Edit a product's catalog fields.

        A cost change here is recorded in the cost history exactly as a
        priced stock entry would be. Existing ledger entries keep the
        name they were written with.
        """
        snapshot = self._inventory_repo.load()
        product = snapshot.find_product(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")

        updated = product.edit(
            changes, datetime.now(timezone.utc), self._policy.history_retention
        )

        if updated.code != product.code and updated.code != DEFAULT_CODE:
            clash = snapshot.find_by_code(updated.code)
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Product code '{updated.code}' already exists")

        if updated != product:
            snapshot = snapshot.replace_product(updated)
            self._inventory_repo.save(snapshot.products, snapshot.transactions)
            logger.info(
                "product.updated",
                product_id=product.id,
                fields=sorted(k for k, v in changes.items() if v is not None),
            )
        return ProductLineDTO.from_product(updated, self._policy)
