"""Alert & forecast classification.

Pure functions of a product snapshot; nothing here changes the product.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR
from enum import Enum

from stockledger.domain.model.product import Product
from stockledger.domain.policy import DEFAULT_POLICY, AttentionRule, LedgerPolicy


class StockStatus(Enum):
    CRITICAL = "CRITICAL"
    ATTENTION = "ATTENTION"
    NORMAL = "NORMAL"


@dataclass(frozen=True)
class ProductAssessment:
    status: StockStatus
    cost_alarm: bool
    autonomy_days: int | None  # None: no tracked consumption, indeterminate


def classify_status(
    product: Product, policy: LedgerPolicy = DEFAULT_POLICY
) -> StockStatus:
    """CRITICAL wins over ATTENTION when both thresholds are hit."""
    if product.current_stock <= product.min_stock:
        return StockStatus.CRITICAL
    if product.current_stock <= _attention_threshold(product, policy):
        return StockStatus.ATTENTION
    return StockStatus.NORMAL


def has_cost_alarm(product: Product) -> bool:
    """True when the latest cost is above the last distinct previous cost."""
    if product.previous_cost_price is None:
        return False
    return product.cost_price > product.previous_cost_price


def autonomy_days(
    product: Product, policy: LedgerPolicy = DEFAULT_POLICY
) -> int | None:
    """Days of supply left at the recorded monthly consumption.

    Returns None rather than 0 when consumption is not tracked, so an
    item nobody consumes never reads as running out today.
    """
    if product.monthly_consumption <= 0:
        return None
    days = product.current_stock * policy.days_per_month / product.monthly_consumption
    return int(days.to_integral_value(rounding=ROUND_FLOOR))


def assess(
    product: Product, policy: LedgerPolicy = DEFAULT_POLICY
) -> ProductAssessment:
    return ProductAssessment(
        status=classify_status(product, policy),
        cost_alarm=has_cost_alarm(product),
        autonomy_days=autonomy_days(product, policy),
    )


def _attention_threshold(product: Product, policy: LedgerPolicy):
    if policy.attention_rule == AttentionRule.MIN_STOCK_RATIO:
        return product.min_stock * policy.attention_ratio
    return product.safety_stock
