"""Domain service: Stock Mutation Engine.

Applies one movement to one product and returns the next product value
together with the ledger entry that records it. The two are always built
together here so a caller cannot end up with one and not the other.

Pure: no I/O, no shared state, the input product is never modified.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import structlog

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.product import Product
from stockledger.domain.model.transaction import (
    Transaction,
    TransactionRequest,
    TransactionType,
)
from stockledger.domain.model.value_objects import to_decimal
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy

logger = structlog.get_logger(__name__)

NOTE_SEPARATOR = " | "


def apply_movement(
    product: Product,
    request: TransactionRequest,
    *,
    now: datetime | None = None,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> tuple[Product, Transaction]:
    """Apply an ENTRY, EXIT or ADJUSTMENT to ``product``.

    Raises ValidationError before building anything if the quantity or
    unit cost is out of range. An EXIT larger than the stock on hand is
    not an error: stock floors at zero and the ledger keeps the quantity
    that was asked for.
    """
    quantity = to_decimal(request.quantity, "quantity")
    unit_cost = (
        None if request.unit_cost is None else to_decimal(request.unit_cost, "unit cost")
    )
    _validate(request.type, quantity, unit_cost)

    at = now or datetime.now(timezone.utc)
    notes = (request.notes or "").strip()

    if request.type == TransactionType.EXIT:
        updated = product.with_stock(product.current_stock - quantity)
        if quantity > product.current_stock:
            logger.info(
                "stock.exit_clamped",
                product_id=product.id,
                requested=str(quantity),
                available=str(product.current_stock),
            )
        recorded_cost = product.cost_price
    else:
        if request.type == TransactionType.ENTRY:
            new_stock = product.current_stock + quantity
        else:
            new_stock = quantity
        updated = product.with_stock(new_stock)
        if unit_cost is not None:
            updated = updated.with_cost(unit_cost, at, policy.history_retention)
        recorded_cost = updated.cost_price
        if updated.cost_price != product.cost_price:
            notes = _cost_change_note(notes, product.cost_price, updated.cost_price)

    entry = Transaction(
        id=str(uuid.uuid4()),
        product_id=product.id,
        product_name=product.name,
        type=request.type,
        quantity=quantity,
        unit_cost=recorded_cost,
        date=at,
        notes=notes,
    )
    return updated, entry


def _validate(
    kind: TransactionType, quantity: Decimal, unit_cost: Decimal | None
) -> None:
    if kind in (TransactionType.ENTRY, TransactionType.EXIT):
        if quantity <= 0:
            raise ValidationError(
                f"{kind.value} quantity must be positive, got {quantity}"
            )
    elif quantity < 0:
        raise ValidationError(
            f"Adjustment target cannot be negative, got {quantity}"
        )
    if unit_cost is not None and unit_cost < 0:
        raise ValidationError(f"Unit cost cannot be negative, got {unit_cost}")


def _cost_change_note(notes: str, old: Decimal, new: Decimal) -> str:
    message = f"Cost updated from {old:.2f} to {new:.2f}"
    if notes:
        return f"{notes}{NOTE_SEPARATOR}{message}"
    return message
