"""Application service: Show Summary use case (query)."""

from __future__ import annotations

from stockledger.application.dto import SummaryDTO
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.inventory_stats import summarize


class ShowSummaryHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(self) -> SummaryDTO:
        summary = summarize(self._inventory_repo.load().products, self._policy)
        return SummaryDTO(
            total_items=summary.total_items,
            unique_items=summary.unique_items,
            critical_count=summary.critical_count,
            total_cost_value=summary.total_cost_value,
            total_sale_value=summary.total_sale_value,
            category_values=dict(sorted(summary.category_values.items())),
            critical_products=[p.name for p in summary.critical_products],
        )
