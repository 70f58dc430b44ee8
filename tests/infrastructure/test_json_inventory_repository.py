"""Tests for the JSON-file persistence synchronizer."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from stockledger.application.record_movement import RecordMovementHandler
from stockledger.domain.model.transaction import TransactionRequest, TransactionType
from stockledger.domain.service.stock_mutation import apply_movement
from stockledger.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from tests.fakes import make_product

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _repo(tmp_path):
    return JsonInventoryRepository(
        tmp_path / "data" / "products.json", tmp_path / "data" / "transactions.json"
    )


def test_files_are_created_empty(tmp_path):
    repo = _repo(tmp_path)
    snapshot = repo.load()
    assert snapshot.products == ()
    assert snapshot.transactions == ()
    assert (tmp_path / "data" / "products.json").read_text(encoding="utf-8") == "[]"


def test_saved_state_loads_back_equal(tmp_path):
    product = make_product(
        current_stock="12.5", cost_price="10", previous_cost_price=None, history=[10]
    )
    updated, entry = apply_movement(
        product,
        TransactionRequest(TransactionType.ENTRY, Decimal("2"), Decimal("10.75"), "Açúcar"),
        now=NOW,
    )

    repo = _repo(tmp_path)
    repo.save([updated], [entry])
    snapshot = _repo(tmp_path).load()

    assert snapshot.products == (updated,)
    assert snapshot.transactions == (entry,)


def test_decimals_are_stored_as_strings(tmp_path):
    repo = _repo(tmp_path)
    repo.save([make_product(cost_price="0.10")], [])
    raw = json.loads((tmp_path / "data" / "products.json").read_text(encoding="utf-8"))
    assert raw[0]["cost_price"] == "0.10"
    assert raw[0]["previous_cost_price"] is None


def test_save_replaces_previous_contents(tmp_path):
    repo = _repo(tmp_path)
    repo.save([make_product(id="a"), make_product(id="b")], [])
    repo.save([make_product(id="b")], [])
    assert [p.id for p in repo.load().products] == ["b"]


def test_failed_ledger_write_keeps_previous_state(tmp_path, monkeypatch):
    repo = _repo(tmp_path)
    repo.save([make_product(id="p1", current_stock=10)], [])
    before = repo.load()

    original_write_text = Path.write_text

    def failing_write_text(self, *args, **kwargs):
        if self.name.startswith("transactions"):
            raise OSError("disk full")
        return original_write_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "write_text", failing_write_text)

    with pytest.raises(OSError, match="disk full"):
        RecordMovementHandler(repo).handle("p1", "EXIT", "4")

    monkeypatch.undo()
    after = _repo(tmp_path).load()
    assert after == before
    assert after.products[0].current_stock == Decimal("10")
    assert sorted(p.name for p in (tmp_path / "data").iterdir()) == [
        "products.json",
        "transactions.json",
    ]
