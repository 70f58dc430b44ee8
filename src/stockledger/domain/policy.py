"""Policy constants for classification and cost history.

Past releases of the stock tool disagreed on two knobs: how many cost
history entries to keep, and what counts as the ATTENTION band. Both are
carried here as data instead of literals in the services.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from stockledger.domain.exceptions import ValidationError


class AttentionRule(Enum):
    SAFETY_STOCK = "safety_stock"
    MIN_STOCK_RATIO = "min_stock_ratio"


@dataclass(frozen=True)
class LedgerPolicy:
    """Tunable business constants.

    ``history_retention`` of ``None`` keeps the cost history unbounded.
    """

    history_retention: int | None = 5
    attention_rule: AttentionRule = AttentionRule.SAFETY_STOCK
    attention_ratio: Decimal = Decimal("1.5")
    days_per_month: int = 30

    def __post_init__(self) -> None:
        if self.history_retention is not None and self.history_retention < 1:
            raise ValidationError("Cost history retention must be at least 1")
        if not self.attention_ratio.is_finite() or self.attention_ratio <= 0:
            raise ValidationError("Attention ratio must be positive")
        if self.days_per_month <= 0:
            raise ValidationError("Days per month must be positive")


DEFAULT_POLICY = LedgerPolicy()
