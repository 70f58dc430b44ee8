"""Domain service: Bulk Mutation Coordinator.

Applies one operation to a selection of products as a single
snapshot-to-snapshot step. Uses the same validate-then-mutate split as
the reservation service it grew out of: the whole selection is checked
first, and only then is anything computed, so a bad batch leaves no
partial result behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable

import structlog

from stockledger.domain.exceptions import NotFoundError, ValidationError
from stockledger.domain.model.product import Product
from stockledger.domain.model.transaction import (
    Transaction,
    TransactionRequest,
    TransactionType,
)
from stockledger.domain.model.value_objects import to_decimal
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.service.stock_mutation import apply_movement

logger = structlog.get_logger(__name__)


class BulkOperation(Enum):
    ZERO_STOCK = "zero_stock"
    ADD_QUANTITY = "add_quantity"
    DELETE = "delete"


@dataclass(frozen=True)
class BulkRequest:
    operation: BulkOperation
    quantity: Decimal | None = None  # ADD_QUANTITY only


@dataclass(frozen=True)
class BulkResult:
    products: tuple[Product, ...]
    transactions: tuple[Transaction, ...]
    removed_ids: frozenset[str] = frozenset()


def apply_bulk(
    products: Iterable[Product],
    selected_ids: Iterable[str],
    request: BulkRequest,
    *,
    now: datetime | None = None,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> BulkResult:
    """Apply ``request`` to every selected product.

    Entries come out in catalog order and share one timestamp. Each one
    is computed from the product as it was in the input catalog.
    """
    catalog = tuple(products)
    selected = frozenset(selected_ids)

    # Phase 1: validate the whole batch before computing anything
    if not selected:
        raise ValidationError("Select at least one product")

    known = {p.id for p in catalog}
    missing = sorted(selected - known)
    if missing:
        raise NotFoundError(f"Unknown product id(s): {', '.join(missing)}")

    movement = _movement_for(request)

    # Phase 2: compute the next snapshot
    if request.operation == BulkOperation.DELETE:
        remaining = tuple(p for p in catalog if p.id not in selected)
        logger.info("bulk.deleted", count=len(selected))
        return BulkResult(products=remaining, transactions=(), removed_ids=selected)

    at = now or datetime.now(timezone.utc)
    updated: list[Product] = []
    entries: list[Transaction] = []

    for product in catalog:
        if product.id not in selected or not _applies(request.operation, product):
            updated.append(product)
            continue
        next_product, entry = apply_movement(product, movement, now=at, policy=policy)
        updated.append(next_product)
        entries.append(entry)

    logger.info(
        "bulk.applied",
        operation=request.operation.value,
        selected=len(selected),
        entries=len(entries),
    )
    return BulkResult(products=tuple(updated), transactions=tuple(entries))


def _movement_for(request: BulkRequest) -> TransactionRequest | None:
    """The single movement every selected product receives (None for DELETE)."""
    if request.operation == BulkOperation.ZERO_STOCK:
        return TransactionRequest(
            type=TransactionType.ADJUSTMENT,
            quantity=Decimal("0"),
            notes="Bulk adjustment: zero stock",
        )
    if request.operation == BulkOperation.ADD_QUANTITY:
        if request.quantity is None:
            raise ValidationError("Bulk entry requires a quantity")
        quantity = to_decimal(request.quantity, "quantity")
        if quantity <= 0:
            raise ValidationError(
                f"Bulk entry quantity must be positive, got {quantity}"
            )
        return TransactionRequest(
            type=TransactionType.ENTRY,
            quantity=quantity,
            notes=f"Bulk entry: +{quantity} units",
        )
    return None


def _applies(operation: BulkOperation, product: Product) -> bool:
    # Zeroing an empty product would only add a no-op ledger entry
    if operation == BulkOperation.ZERO_STOCK:
        return product.current_stock > 0
    return True
