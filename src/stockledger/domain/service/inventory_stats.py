"""Catalog-wide stock figures for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from stockledger.domain.model.product import Product
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.service.classifier import StockStatus, classify_status

CRITICAL_PREVIEW_SIZE = 5


@dataclass(frozen=True)
class InventorySummary:
    total_items: Decimal
    unique_items: int
    critical_count: int
    total_cost_value: Decimal
    total_sale_value: Decimal
    category_values: dict[str, Decimal] = field(default_factory=dict)
    critical_products: tuple[Product, ...] = ()


def summarize(
    products: Iterable[Product], policy: LedgerPolicy = DEFAULT_POLICY
) -> InventorySummary:
    catalog = tuple(products)
    critical = [
        p for p in catalog if classify_status(p, policy) == StockStatus.CRITICAL
    ]

    category_values: dict[str, Decimal] = {}
    for p in catalog:
        category_values[p.category] = (
            category_values.get(p.category, Decimal("0")) + p.current_stock * p.cost_price
        )

    return InventorySummary(
        total_items=sum((p.current_stock for p in catalog), Decimal("0")),
        unique_items=len(catalog),
        critical_count=len(critical),
        total_cost_value=sum(
            (p.current_stock * p.cost_price for p in catalog), Decimal("0")
        ),
        total_sale_value=sum(
            (p.current_stock * p.sale_price for p in catalog), Decimal("0")
        ),
        category_values=category_values,
        critical_products=tuple(critical[:CRITICAL_PREVIEW_SIZE]),
    )
