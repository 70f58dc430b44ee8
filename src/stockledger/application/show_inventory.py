"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from stockledger.application.dto import ProductLineDTO
from stockledger.domain.exceptions import ValidationError
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository

SORTABLE_FIELDS = (
    "code",
    "name",
    "category",
    "current_stock",
    "min_stock",
    "safety_stock",
    "monthly_consumption",
    "cost_price",
    "sale_price",
)


class ShowInventoryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(
        self,
        search: str = "",
        category: str | None = None,
        sort_by: str = "name",
        descending: bool = False,
    ) -> list[ProductLineDTO]:
        """List products with their status, cost alarm and autonomy.

        ``search`` matches a case-insensitive substring of the name or a
        substring of the code.
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'. Choose one of: {', '.join(SORTABLE_FIELDS)}"
            )

        products = self._inventory_repo.load().products
        if category:
            products = tuple(p for p in products if p.category == category)
        if search:
            needle = search.lower()
            products = tuple(
                p for p in products if needle in p.name.lower() or search in p.code
            )

        def key(product):
            value = getattr(product, sort_by)
            return value.lower() if isinstance(value, str) else value

        ordered = sorted(products, key=key, reverse=descending)
        return [ProductLineDTO.from_product(p, self._policy) for p in ordered]

    def categories(self) -> list[str]:
        return sorted({p.category for p in self._inventory_repo.load().products})
