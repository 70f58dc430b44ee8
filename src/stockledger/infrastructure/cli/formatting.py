"""Shared number formatting for CLI tables."""

from __future__ import annotations

from decimal import Decimal


def qty(value: Decimal) -> str:
    """``Decimal("12.500")`` -> ``"12.5"``; ``Decimal("1E+2")`` -> ``"100"``."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def money(value: Decimal) -> str:
    return f"{value:,.2f}"


def autonomy(days: int | None) -> str:
    return "indeterminate" if days is None else f"{days} days"
