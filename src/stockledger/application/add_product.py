"""Application service: Add Product use case."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog

from stockledger.application.dto import ProductLineDTO
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.product import DEFAULT_CODE, Product
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(self, name: str, category: str, **fields: Any) -> ProductLineDTO:
        """Add a new product to the catalog.

        Extra keyword arguments are the optional catalog fields accepted
        by ``Product.create`` (code, unit, stock levels, prices).
        """
        product = Product.create(
            name=name,
            category=category,
            at=datetime.now(timezone.utc),
            **fields,
        )

        snapshot = self._inventory_repo.load()
        if product.code != DEFAULT_CODE and snapshot.find_by_code(product.code):
            raise ValidationError(f"Product code '{product.code}' already exists")

        # Newest products go first, the same way the catalog screen lists them
        products = (product,) + snapshot.products
        self._inventory_repo.save(products, snapshot.transactions)

        logger.info("product.added", product_id=product.id, code=product.code)
        return ProductLineDTO.from_product(product, self._policy)
