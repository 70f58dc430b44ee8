"""Application service: Record Movement use case.

Loads the current snapshot, runs the stock mutation engine on one
product and saves the updated product together with its ledger entry
in a single call.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from stockledger.application.dto import MovementDTO
from stockledger.domain.exceptions import NotFoundError, ValidationError
from stockledger.domain.model.transaction import TransactionRequest, TransactionType
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy
from stockledger.domain.repository.inventory_repository import InventoryRepository
from stockledger.domain.service.stock_mutation import apply_movement

logger = structlog.get_logger(__name__)


class RecordMovementHandler:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        policy: LedgerPolicy = DEFAULT_POLICY,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._policy = policy

    def handle(
        self,
        product_id: str,
        movement_type: TransactionType | str,
        quantity: Decimal | str | int,
        unit_cost: Decimal | str | None = None,
        notes: str = "",
    ) -> MovementDTO:
        """Record an ENTRY, EXIT or ADJUSTMENT against one product."""
        kind = _parse_type(movement_type)

        snapshot = self._inventory_repo.load()
        product = snapshot.find_product(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")

        request = TransactionRequest(
            type=kind,
            quantity=quantity,  # type: ignore[arg-type]
            unit_cost=unit_cost,  # type: ignore[arg-type]
            notes=notes,
        )
        updated, entry = apply_movement(product, request, policy=self._policy)

        snapshot = snapshot.replace_product(updated).append_transactions([entry])
        self._inventory_repo.save(snapshot.products, snapshot.transactions)

        logger.info(
            "movement.recorded",
            product_id=product.id,
            type=kind.value,
            quantity=str(entry.quantity),
            stock=str(updated.current_stock),
        )
        return MovementDTO(
            product_id=updated.id,
            product_name=entry.product_name,
            type=kind.value,
            quantity=entry.quantity,
            previous_stock=updated.previous_stock,
            current_stock=updated.current_stock,
            cost_price=updated.cost_price,
            notes=entry.notes,
        )


def _parse_type(value: TransactionType | str) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(value.upper())
    except ValueError as exc:
        raise ValidationError(f"Unknown movement type: {value!r}") from exc
