"""InventorySnapshot: the whole catalog plus the ledger at one instant.

Handlers load one snapshot, compute the next one and save it wholesale.
Nothing holds on to a snapshot and changes it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from stockledger.domain.model.product import Product
from stockledger.domain.model.transaction import Transaction


@dataclass(frozen=True)
class InventorySnapshot:

    products: tuple[Product, ...] = ()
    transactions: tuple[Transaction, ...] = ()  # commit order, oldest first

    def find_product(self, product_id: str) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def find_by_code(self, code: str) -> Product | None:
        for product in self.products:
            if product.code == code:
                return product
        return None

    def with_products(self, products: Iterable[Product]) -> InventorySnapshot:
        return replace(self, products=tuple(products))

    def replace_product(self, product: Product) -> InventorySnapshot:
        return self.with_products(
            product if p.id == product.id else p for p in self.products
        )

    def append_transactions(
        self, transactions: Iterable[Transaction]
    ) -> InventorySnapshot:
        return replace(self, transactions=self.transactions + tuple(transactions))
