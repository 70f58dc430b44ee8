"""JSON-file-backed implementation of InventoryRepository.

Products and transactions live in two files next to each other. Every
``save`` rewrites both in full; decimals are stored as strings so no
precision is lost on the way through JSON.

A save first writes both payloads to ``*.tmp`` siblings and only then
renames them over the live files, so a failed write leaves the previous
state untouched instead of a product change without its ledger entry.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Sequence

import structlog

from stockledger.domain.model.product import Product
from stockledger.domain.model.snapshot import InventorySnapshot
from stockledger.domain.model.transaction import Transaction, TransactionType
from stockledger.domain.model.value_objects import CostHistoryEntry
from stockledger.domain.repository.inventory_repository import InventoryRepository

logger = structlog.get_logger(__name__)


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, products_path: Path, transactions_path: Path) -> None:
        self._products_path = products_path
        self._transactions_path = transactions_path
        self._ensure_file(products_path)
        self._ensure_file(transactions_path)

    # --- InventoryRepository interface ----------------------------------------

    def load(self) -> InventorySnapshot:
        return InventorySnapshot(
            products=tuple(
                self._product_to_domain(raw) for raw in self._load_raw(self._products_path)
            ),
            transactions=tuple(
                self._transaction_to_domain(raw)
                for raw in self._load_raw(self._transactions_path)
            ),
        )

    def save(
        self, products: Sequence[Product], transactions: Sequence[Transaction]
    ) -> None:
        staged = self._stage(
            [
                (self._products_path, [self._product_to_raw(p) for p in products]),
                (
                    self._transactions_path,
                    [self._transaction_to_raw(t) for t in transactions],
                ),
            ]
        )
        for tmp, path in staged:
            os.replace(tmp, path)
        logger.debug(
            "inventory.saved", products=len(products), transactions=len(transactions)
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "name": product.name,
            "category": product.category,
            "unit": product.unit,
            "current_stock": str(product.current_stock),
            "previous_stock": str(product.previous_stock),
            "min_stock": str(product.min_stock),
            "safety_stock": str(product.safety_stock),
            "monthly_consumption": str(product.monthly_consumption),
            "cost_price": str(product.cost_price),
            "sale_price": str(product.sale_price),
            "previous_cost_price": (
                None
                if product.previous_cost_price is None
                else str(product.previous_cost_price)
            ),
            "cost_history": [
                {"price": str(entry.price), "date": entry.date.isoformat()}
                for entry in product.cost_history
            ],
        }

    @staticmethod
    def _product_to_domain(raw: dict) -> Product:
        previous_cost = raw.get("previous_cost_price")
        return Product(
            id=raw["id"],
            code=raw["code"],
            name=raw["name"],
            category=raw["category"],
            unit=raw.get("unit", "KG"),
            current_stock=Decimal(raw["current_stock"]),
            previous_stock=Decimal(raw.get("previous_stock", raw["current_stock"])),
            min_stock=Decimal(raw.get("min_stock", "0")),
            safety_stock=Decimal(raw.get("safety_stock", "0")),
            monthly_consumption=Decimal(raw.get("monthly_consumption", "0")),
            cost_price=Decimal(raw.get("cost_price", "0")),
            sale_price=Decimal(raw.get("sale_price", "0")),
            previous_cost_price=None if previous_cost is None else Decimal(previous_cost),
            cost_history=tuple(
                CostHistoryEntry(
                    price=Decimal(h["price"]), date=datetime.fromisoformat(h["date"])
                )
                for h in raw.get("cost_history", [])
            ),
        )

    @staticmethod
    def _transaction_to_raw(entry: Transaction) -> dict:
        return {
            "id": entry.id,
            "product_id": entry.product_id,
            "product_name": entry.product_name,
            "type": entry.type.value,
            "quantity": str(entry.quantity),
            "unit_cost": str(entry.unit_cost),
            "date": entry.date.isoformat(),
            "notes": entry.notes,
        }

    @staticmethod
    def _transaction_to_domain(raw: dict) -> Transaction:
        return Transaction(
            id=raw["id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            type=TransactionType(raw["type"]),
            quantity=Decimal(raw["quantity"]),
            unit_cost=Decimal(raw.get("unit_cost", "0")),
            date=datetime.fromisoformat(raw["date"]),
            notes=raw.get("notes", ""),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _load_raw(path: Path) -> list[dict]:
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _stage(payloads: list[tuple[Path, list[dict]]]) -> list[tuple[Path, Path]]:
        """Write every payload to a temp file; returns ``(tmp, target)`` pairs."""
        texts = [
            (path, json.dumps(records, indent=2, ensure_ascii=False) + "\n")
            for path, records in payloads
        ]
        staged: list[tuple[Path, Path]] = []
        try:
            for path, text in texts:
                tmp = path.with_name(path.name + ".tmp")
                staged.append((tmp, path))
                tmp.write_text(text, encoding="utf-8")
        except OSError:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise
        return staged

    @staticmethod
    def _ensure_file(path: Path) -> None:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")
