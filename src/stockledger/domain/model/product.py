"""Product aggregate.

A product is a catalog entry for a raw material or finished good. It is a
frozen value: every change returns a new Product, so callers can hold a
snapshot of the catalog and replace it wholesale after a commit.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.value_objects import CostHistoryEntry, non_negative

DEFAULT_CODE = "N/A"
DEFAULT_UNIT = "KG"

TEXT_FIELDS = ("code", "name", "category", "unit")
NUMERIC_FIELDS = (
    "current_stock",
    "min_stock",
    "safety_stock",
    "monthly_consumption",
    "cost_price",
    "sale_price",
)
EDITABLE_FIELDS = TEXT_FIELDS + NUMERIC_FIELDS


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Invariants:
    - ``current_stock`` is never negative
    - ``previous_cost_price`` only moves when ``cost_price`` actually changes
    - ``cost_history`` is most-recent-first and bounded by the retention
      window the caller passes in
    """

    id: str
    code: str
    name: str
    category: str
    unit: str = DEFAULT_UNIT
    current_stock: Decimal = Decimal("0")
    min_stock: Decimal = Decimal("0")
    safety_stock: Decimal = Decimal("0")
    monthly_consumption: Decimal = Decimal("0")
    cost_price: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    previous_stock: Decimal = Decimal("0")
    previous_cost_price: Decimal | None = None
    cost_history: tuple[CostHistoryEntry, ...] = ()

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        *,
        name: str,
        category: str,
        at: datetime,
        code: str | None = None,
        unit: str | None = None,
        current_stock: Any = 0,
        min_stock: Any = 0,
        safety_stock: Any = 0,
        monthly_consumption: Any = 0,
        cost_price: Any = 0,
        sale_price: Any = 0,
    ) -> Product:
        """Create a new catalog entry with a fresh id and a seeded history."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not category or not category.strip():
            raise ValidationError("Product category is required")

        stock = non_negative(current_stock, "current_stock")
        cost = non_negative(cost_price, "cost_price")

        return Product(
            id=str(uuid.uuid4()),
            code=(code or "").strip() or DEFAULT_CODE,
            name=name.strip(),
            category=category.strip(),
            unit=(unit or "").strip() or DEFAULT_UNIT,
            current_stock=stock,
            min_stock=non_negative(min_stock, "min_stock"),
            safety_stock=non_negative(safety_stock, "safety_stock"),
            monthly_consumption=non_negative(monthly_consumption, "monthly_consumption"),
            cost_price=cost,
            sale_price=non_negative(sale_price, "sale_price"),
            previous_stock=stock,
            previous_cost_price=cost,
            cost_history=(CostHistoryEntry(price=cost, date=at),),
        )

    # --- Mutations (all return a new Product) ---------------------------------

    def with_cost(
        self, new_cost: Decimal, at: datetime, retention: int | None
    ) -> Product:
        """Merge a cost observation into the price fields.

        This is the single cost-history rule used by stock movements,
        catalog edits and imports alike. ``previous_cost_price`` and the
        history only move on a strict change; an empty history is seeded
        even when the cost is unchanged.
        """
        if new_cost < 0:
            raise ValidationError(f"Unit cost cannot be negative, got {new_cost}")

        if new_cost != self.cost_price:
            history = (CostHistoryEntry(price=new_cost, date=at),) + self.cost_history
            return replace(
                self,
                cost_price=new_cost,
                previous_cost_price=self.cost_price,
                cost_history=_truncate(history, retention),
            )

        if not self.cost_history:
            return replace(
                self, cost_history=(CostHistoryEntry(price=new_cost, date=at),)
            )

        return self

    def with_stock(self, new_stock: Decimal) -> Product:
        """Set the stock level, flooring at zero."""
        return replace(
            self,
            previous_stock=self.current_stock,
            current_stock=max(Decimal("0"), new_stock),
        )

    def edit(
        self, changes: dict[str, Any], at: datetime, retention: int | None
    ) -> Product:
        """Apply a catalog edit.

        Only keys in ``EDITABLE_FIELDS`` are accepted; a ``None`` value
        means "leave as is". A cost change goes through ``with_cost``.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Cannot edit field(s): {', '.join(sorted(unknown))}"
            )

        updates: dict[str, Any] = {}
        for name in TEXT_FIELDS:
            value = changes.get(name)
            if value is None:
                continue
            value = str(value).strip()
            if not value:
                raise ValidationError(f"Product {name} cannot be blank")
            if value != getattr(self, name):
                updates[name] = value

        for name in NUMERIC_FIELDS:
            if name == "cost_price" or changes.get(name) is None:
                continue
            value = non_negative(changes[name], name)
            if value != getattr(self, name):
                updates[name] = value

        result = self
        if "current_stock" in updates:
            result = result.with_stock(updates.pop("current_stock"))
        if updates:
            result = replace(result, **updates)
        if changes.get("cost_price") is not None:
            result = result.with_cost(
                non_negative(changes["cost_price"], "cost_price"), at, retention
            )
        return result


def _truncate(
    history: tuple[CostHistoryEntry, ...], retention: int | None
) -> tuple[CostHistoryEntry, ...]:
    if retention is None:
        return history
    return history[:retention]
