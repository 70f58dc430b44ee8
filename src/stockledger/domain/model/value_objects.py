"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation

from stockledger.domain.exceptions import ValidationError


@dataclass(frozen=True)
class CostHistoryEntry:
    """One point of a product's unit-cost evolution."""

    price: Decimal
    date: datetime


def to_decimal(value: str | float | int | Decimal, field: str = "value") -> Decimal:
    """Coerce a numeric input to Decimal.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")`` and
    not its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid {field}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {field}: {value!r}")
    return result


def non_negative(value: str | float | int | Decimal, field: str) -> Decimal:
    """Coerce to Decimal and reject negatives."""
    result = to_decimal(value, field)
    if result < 0:
        raise ValidationError(f"{field} cannot be negative, got {result}")
    return result
