"""ImportRow: the strict record a catalog import is made of.

Adapters turn loosely-typed spreadsheet rows into ImportRows; by the
time a row gets here every number is already a Decimal. A field left as
``None`` means the source had no such column, so the existing value is
kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ImportRow:

    code: str | None
    name: str | None = None
    category: str | None = None
    unit: str | None = None
    current_stock: Decimal | None = None
    min_stock: Decimal | None = None
    safety_stock: Decimal | None = None
    monthly_consumption: Decimal | None = None
    cost_price: Decimal | None = None
    sale_price: Decimal | None = None
    line: int | None = field(default=None, compare=False)  # source line, for logs

    def present_fields(self) -> dict[str, Any]:
        """Every catalog field except ``code`` that the row actually carries."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("code", "line") and getattr(self, f.name) is not None
        }
