"""Abstract persistence contract for the catalog and the ledger.

Defined in the domain layer so the domain never depends on
infrastructure. There is no transactional guarantee beyond "the last
save wins"; handlers therefore save products and transactions together
in one call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from stockledger.domain.model.product import Product
from stockledger.domain.model.snapshot import InventorySnapshot
from stockledger.domain.model.transaction import Transaction


class InventoryRepository(ABC):

    @abstractmethod
    def load(self) -> InventorySnapshot:
        """Return the full catalog and ledger."""

    @abstractmethod
    def save(
        self, products: Sequence[Product], transactions: Sequence[Transaction]
    ) -> None:
        """Replace the stored catalog and ledger with these."""
