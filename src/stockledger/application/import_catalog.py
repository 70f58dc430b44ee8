"""Application service: Import Catalog use case.

Takes rows that have already been through an import adapter and
reconciles them into the stored catalog. The ledger is saved back
untouched; imports never write transactions.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from stockledger.domain.model.import_row import ImportRow
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.catalog_reconciler import ImportSummary, reconcile


class ImportCatalogHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(self, rows: Iterable[ImportRow], rejected: int = 0) -> ImportSummary:
        """Reconcile ``rows`` into the catalog.

        ``rejected`` is the number of source rows the adapter already
        dropped; they are reported as skipped.
        """
        snapshot = self._inventory_repo.load()
        result = reconcile(snapshot.products, rows, policy=self._policy)
        self._inventory_repo.save(result.products, snapshot.transactions)

        summary = result.summary
        if rejected:
            summary = replace(summary, skipped=summary.skipped + rejected)
        return summary
