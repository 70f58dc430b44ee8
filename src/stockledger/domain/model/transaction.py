"""Ledger records.

A Transaction is written once, at commit time, and never edited or
deleted. It keeps a copy of the product name so the ledger still reads
correctly after the product is renamed or removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransactionType(Enum):
    ENTRY = "ENTRY"
    EXIT = "EXIT"
    ADJUSTMENT = "ADJUSTMENT"


@dataclass(frozen=True)
class TransactionRequest:
    """What the caller asked for.

    ``quantity`` is a delta for ENTRY/EXIT and the absolute target level
    for ADJUSTMENT.
    """

    type: TransactionType
    quantity: Decimal
    unit_cost: Decimal | None = None
    notes: str = ""


@dataclass(frozen=True)
class Transaction:
    id: str
    product_id: str
    product_name: str  # snapshot at commit time
    type: TransactionType
    quantity: Decimal  # as requested, even when an EXIT was clamped
    unit_cost: Decimal
    date: datetime
    notes: str = ""
