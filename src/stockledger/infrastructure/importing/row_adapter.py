"""Import adapter: loose spreadsheet rows -> strict ImportRow records.

Spreadsheets name their columns in many ways ("COD", "Código", "SKU")
and hold numbers as text in either decimal convention. All of that is
resolved here, so the reconciler only ever sees ImportRow values with
Decimal numerics.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from stockledger.domain.model.import_row import ImportRow

logger = structlog.get_logger(__name__)

# Normalized header -> ImportRow field. Headers are lower-cased, stripped of
# accents, and every run of non-alphanumerics becomes one space.
COLUMN_SYNONYMS: dict[str, tuple[str, ...]] = {
    "code": ("code", "cod", "codigo", "sku", "item code"),
    "name": ("name", "product", "product name", "produto", "materia prima", "descricao"),
    "category": ("category", "categoria"),
    "unit": ("unit", "unidade", "und", "un", "uom"),
    "current_stock": (
        "current stock", "currentstock", "stock", "quantity",
        "estoque atual", "est atual", "atual", "quantidade",
    ),
    "min_stock": (
        "min stock", "minstock", "minimum stock",
        "estoque minimo", "est minimo", "minimo",
    ),
    "safety_stock": (
        "safety stock", "safetystock",
        "estoque seguranca", "estoque de seguranca", "est seguranca", "seguranca",
    ),
    "monthly_consumption": (
        "monthly consumption", "monthlyconsumption", "consumo mensal", "consumo",
    ),
    "cost_price": (
        "cost price", "costprice", "cost", "unit cost",
        "custo", "custo un", "custo un r", "preco de custo", "preco custo",
    ),
    "sale_price": (
        "sale price", "saleprice", "price",
        "venda", "venda un r", "preco venda", "preco de venda", "preco",
    ),
}

_HEADER_LOOKUP = {
    synonym: field_name
    for field_name, synonyms in COLUMN_SYNONYMS.items()
    for synonym in synonyms
}

NUMERIC_COLUMNS = (
    "current_stock",
    "min_stock",
    "safety_stock",
    "monthly_consumption",
    "cost_price",
    "sale_price",
)
TEXT_COLUMNS = ("code", "name", "category", "unit")


def normalize_header(header: str) -> str:
    decomposed = unicodedata.normalize("NFKD", str(header))
    ascii_only = decomposed.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", " ", ascii_only.lower()).strip()


def parse_number(value: Any) -> Decimal | None:
    """Parse a spreadsheet cell as a Decimal.

    Accepts native numbers, ``"1234.56"``, ``"1.234,56"``, ``"1,234.56"``,
    ``"1.234.567"`` and ``"12,5"``; currency symbols and spaces are ignored.
    Blank cells give None.

    A separator that appears more than once is a thousands separator. A
    single dot with no comma is read as a decimal point, so ``"1.500"`` is
    one and a half; sheets that write thousands that way must use a
    native numeric cell or a decimal comma (``"1.500,00"``).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
        if not number.is_finite():
            raise ValueError(f"not a number: {value!r}")
        return number

    text = re.sub(r"[^\d,.\-]", "", str(value))
    if not text:
        if str(value).strip():
            raise ValueError(f"not a number: {value!r}")
        return None

    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif text.count(".") > 1:
        text = text.replace(".", "")
    elif text.count(",") > 1:
        text = text.replace(",", "")
    elif "," in text:
        text = text.replace(",", ".")

    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {value!r}") from exc


class SpreadsheetRow(BaseModel):
    """One import row after column resolution, before domain handoff."""

    model_config = ConfigDict(frozen=True)

    code: str | None = None
    name: str | None = None
    category: str | None = None
    unit: str | None = None
    current_stock: Decimal | None = None
    min_stock: Decimal | None = None
    safety_stock: Decimal | None = None
    monthly_consumption: Decimal | None = None
    cost_price: Decimal | None = None
    sale_price: Decimal | None = None

    @field_validator(*TEXT_COLUMNS, mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        if v is None:
            return None
        if isinstance(v, float) and v.is_integer():
            v = int(v)  # Excel stores numeric codes as floats
        text = str(v).strip()
        return text or None

    @field_validator(*NUMERIC_COLUMNS, mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Decimal | None:
        number = parse_number(v)
        if number is not None and number < 0:
            raise ValueError("must not be negative")
        return number

    def to_import_row(self, line: int | None = None) -> ImportRow:
        return ImportRow(**self.model_dump(), line=line)


@dataclass(frozen=True)
class AdaptedBatch:
    rows: list[ImportRow] = field(default_factory=list)
    rejected: int = 0


class RowAdapter:
    """Maps raw ``{header: cell}`` dicts onto ImportRow."""

    def resolve_columns(self, headers: Iterable[str]) -> dict[str, str]:
        """Return ``{source header: field name}`` for recognised headers.

        When two headers resolve to the same field the first one wins.
        """
        mapping: dict[str, str] = {}
        taken: set[str] = set()
        for header in headers:
            field_name = _HEADER_LOOKUP.get(normalize_header(header))
            if field_name is None or field_name in taken:
                continue
            mapping[header] = field_name
            taken.add(field_name)
        return mapping

    def adapt(
        self,
        raw: Mapping[str, Any],
        columns: Mapping[str, str],
        line: int | None = None,
    ) -> ImportRow:
        values = {
            columns[header]: cell for header, cell in raw.items() if header in columns
        }
        return SpreadsheetRow(**values).to_import_row(line)

    def adapt_rows(
        self, source_rows: Iterable[tuple[int, Mapping[str, Any]]]
    ) -> AdaptedBatch:
        """Adapt ``(line, record)`` pairs as produced by the readers.

        Rows that fail validation are logged and counted, never raised.
        """
        rows: list[ImportRow] = []
        rejected = 0
        columns: dict[str, str] | None = None

        for line, raw in source_rows:
            if all(_is_blank(v) for v in raw.values()):
                continue
            if columns is None:
                columns = self.resolve_columns(raw.keys())
                logger.debug("import.columns_resolved", columns=columns)
            try:
                rows.append(self.adapt(raw, columns, line))
            except ValidationError as exc:
                rejected += 1
                logger.warning(
                    "import.row_rejected",
                    line=line,
                    errors=[
                        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                        for err in exc.errors()
                    ],
                )

        return AdaptedBatch(rows=rows, rejected=rejected)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
