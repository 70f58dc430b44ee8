"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stockledger.domain.model.product import Product
from stockledger.domain.model.transaction import Transaction
from stockledger.domain.policy import LedgerPolicy
from stockledger.domain.service.classifier import assess

DATE_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductLineDTO:
    """Output: one catalog entry with its derived alert fields."""

    id: str
    code: str
    name: str
    category: str
    unit: str
    current_stock: Decimal
    min_stock: Decimal
    safety_stock: Decimal
    monthly_consumption: Decimal
    cost_price: Decimal
    sale_price: Decimal
    previous_cost_price: Decimal | None
    status: str
    cost_alarm: bool
    autonomy_days: int | None
    recent_costs: tuple[Decimal, ...]

    @staticmethod
    def from_product(product: Product, policy: LedgerPolicy) -> ProductLineDTO:
        assessment = assess(product, policy)
        return ProductLineDTO(
            id=product.id,
            code=product.code,
            name=product.name,
            category=product.category,
            unit=product.unit,
            current_stock=product.current_stock,
            min_stock=product.min_stock,
            safety_stock=product.safety_stock,
            monthly_consumption=product.monthly_consumption,
            cost_price=product.cost_price,
            sale_price=product.sale_price,
            previous_cost_price=product.previous_cost_price,
            status=assessment.status.value,
            cost_alarm=assessment.cost_alarm,
            autonomy_days=assessment.autonomy_days,
            recent_costs=tuple(entry.price for entry in product.cost_history[:3]),
        )


@dataclass(frozen=True)
class TransactionDTO:
    """Output: one ledger line as displayed to the user."""

    id: str
    product_id: str
    product_name: str
    type: str
    quantity: Decimal
    unit_cost: Decimal
    date: str  # formatted, e.g. "2026-10-18 14:05 UTC"
    notes: str

    @staticmethod
    def from_transaction(entry: Transaction) -> TransactionDTO:
        return TransactionDTO(
            id=entry.id,
            product_id=entry.product_id,
            product_name=entry.product_name,
            type=entry.type.value,
            quantity=entry.quantity,
            unit_cost=entry.unit_cost,
            date=entry.date.strftime(DATE_FORMAT),
            notes=entry.notes,
        )


@dataclass(frozen=True)
class MovementDTO:
    """Output: result of a single stock movement."""

    product_id: str
    product_name: str
    type: str
    quantity: Decimal
    previous_stock: Decimal
    current_stock: Decimal
    cost_price: Decimal
    notes: str


@dataclass(frozen=True)
class BulkResultDTO:
    operation: str
    affected: int
    entries: int


@dataclass(frozen=True)
class SummaryDTO:
    total_items: Decimal
    unique_items: int
    critical_count: int
    total_cost_value: Decimal
    total_sale_value: Decimal
    category_values: dict[str, Decimal]
    critical_products: list[str]  # names
