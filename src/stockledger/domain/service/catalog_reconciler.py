"""Domain service: Catalog Reconciler.

Upserts a batch of import rows into the catalog, matching on the
business ``code``. Merging reuses ``Product.edit``, so a cost change
from an import follows exactly the same history rule as a stock entry.

Best-effort per row: a row that cannot be applied is skipped, logged and
counted, and the rest of the batch goes through. An import is a catalog
correction, not a stock movement, so no ledger entries are produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

import structlog

from stockledger.domain.exceptions import ValidationError
from stockledger.domain.model.import_row import ImportRow
from stockledger.domain.model.product import DEFAULT_CODE, Product
from stockledger.domain.policy import DEFAULT_POLICY, LedgerPolicy

logger = structlog.get_logger(__name__)

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class ImportSummary:
    added: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.added + self.updated + self.unchanged + self.skipped


@dataclass(frozen=True)
class ReconcileResult:
    products: tuple[Product, ...]
    summary: ImportSummary


def reconcile(
    catalog: Iterable[Product],
    rows: Iterable[ImportRow],
    *,
    now: datetime | None = None,
    policy: LedgerPolicy = DEFAULT_POLICY,
) -> ReconcileResult:
    """Merge ``rows`` into ``catalog``.

    Existing products keep their position; new ones are appended in row
    order. Running the same rows twice is a no-op the second time.

    The ``N/A`` placeholder is shared by any number of hand-entered
    products, so it never identifies one: rows carrying it are skipped
    and placeholder products are never matched.
    """
    at = now or datetime.now(timezone.utc)
    products = list(catalog)
    by_code = {}
    for index, product in enumerate(products):
        if product.code != DEFAULT_CODE:
            by_code.setdefault(product.code, index)

    added = updated = unchanged = skipped = 0

    for row in rows:
        code = (row.code or "").strip()
        if not code or code.upper() == DEFAULT_CODE:
            logger.warning(
                "import.row_skipped",
                line=row.line,
                code=code,
                reason="missing code" if not code else "placeholder code",
            )
            skipped += 1
            continue

        try:
            if code in by_code:
                index = by_code[code]
                merged = products[index].edit(
                    row.present_fields(), at, policy.history_retention
                )
                if merged == products[index]:
                    unchanged += 1
                else:
                    products[index] = merged
                    updated += 1
            else:
                products.append(_create_from_row(code, row, at))
                by_code[code] = len(products) - 1
                added += 1
        except ValidationError as exc:
            logger.warning(
                "import.row_skipped", line=row.line, code=code, reason=str(exc)
            )
            skipped += 1

    summary = ImportSummary(
        added=added, updated=updated, unchanged=unchanged, skipped=skipped
    )
    logger.info(
        "import.reconciled",
        added=added,
        updated=updated,
        unchanged=unchanged,
        skipped=skipped,
    )
    return ReconcileResult(products=tuple(products), summary=summary)


def _create_from_row(code: str, row: ImportRow, at: datetime) -> Product:
    values = row.present_fields()
    return Product.create(
        code=code,
        name=values.pop("name", ""),
        category=values.pop("category", None) or UNCATEGORIZED,
        at=at,
        **values,
    )
