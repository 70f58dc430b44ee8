"""Integration tests for catalog add / update / remove and the queries."""

from decimal import Decimal

import pytest

from stockledger.application.add_product import AddProductHandler
from stockledger.application.record_movement import RecordMovementHandler
from stockledger.application.remove_product import RemoveProductHandler
from stockledger.application.show_inventory import ShowInventoryHandler
from stockledger.application.show_ledger import ShowLedgerHandler
from stockledger.application.show_summary import ShowSummaryHandler
from stockledger.application.update_product import UpdateProductHandler
from stockledger.domain.exceptions import NotFoundError, ValidationError
from tests.fakes import FakeInventoryRepository, make_product


def _setup():
    return FakeInventoryRepository(
        [
            make_product(id="1", code="1001", name="Wheat Flour", category="Raw", current_stock=40, cost_price=3),
            make_product(id="2", code="2001", name="Box 30x30", category="Packaging", current_stock=2, min_stock=5),
            make_product(id="3", code="1002", name="Rye Flour", category="Raw", current_stock=10, monthly_consumption=0),
        ]
    )


class TestAddProduct:

    def test_add_product(self):
        repo = _setup()
        dto = AddProductHandler(repo).handle(
            name="Cocoa", category="Raw", code="3001", cost_price="45.5", current_stock="12"
        )
        assert dto.code == "3001"
        assert dto.cost_price == Decimal("45.5")
        assert repo.load().products[0].id == dto.id

    def test_duplicate_code_rejected(self):
        repo = _setup()
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo).handle(name="Other", category="Raw", code="1001")
        assert repo.save_count == 0

    def test_placeholder_code_may_repeat(self):
        repo = _setup()
        AddProductHandler(repo).handle(name="A", category="Raw")
        AddProductHandler(repo).handle(name="B", category="Raw")
        assert len(repo.load().products) == 5

    def test_missing_category_rejected(self):
        with pytest.raises(ValidationError, match="category is required"):
            AddProductHandler(_setup()).handle(name="Cocoa", category="")


class TestUpdateProduct:

    def test_rename_does_not_rewrite_ledger(self):
        repo = _setup()
        RecordMovementHandler(repo).handle("1", "ENTRY", 5)

        UpdateProductHandler(repo).handle("1", name="Flour T55")

        assert repo.get("1").name == "Flour T55"
        assert repo.transactions[0].product_name == "Wheat Flour"

    def test_cost_edit_records_history(self):
        repo = _setup()
        dto = UpdateProductHandler(repo).handle("1", cost_price="4")
        assert dto.previous_cost_price == Decimal("3")
        assert dto.cost_alarm is True
        assert dto.recent_costs[0] == Decimal("4")

    def test_code_collision_rejected(self):
        with pytest.raises(ValidationError, match="already exists"):
            UpdateProductHandler(_setup()).handle("1", code="2001")

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            UpdateProductHandler(_setup()).handle("nope", name="X")

    def test_no_change_skips_save(self):
        repo = _setup()
        UpdateProductHandler(repo).handle("1", name="Wheat Flour")
        assert repo.save_count == 0


class TestRemoveProduct:

    def test_remove_keeps_transactions(self):
        repo = _setup()
        RecordMovementHandler(repo).handle("2", "EXIT", 1)

        RemoveProductHandler(repo).handle("2")

        assert repo.get("2") is None
        ledger = ShowLedgerHandler(repo).handle()
        assert [e.product_name for e in ledger] == ["Box 30x30"]

    def test_remove_unknown(self):
        with pytest.raises(NotFoundError):
            RemoveProductHandler(_setup()).handle("nope")


class TestQueries:

    def test_inventory_lines_carry_derived_fields(self):
        lines = {line.id: line for line in ShowInventoryHandler(_setup()).handle()}
        assert lines["2"].status == "CRITICAL"
        assert lines["1"].status == "NORMAL"
        assert lines["1"].autonomy_days == 60
        assert lines["3"].autonomy_days is None

    def test_search_and_category_filter(self):
        handler = ShowInventoryHandler(_setup())
        assert [l.name for l in handler.handle(search="flour")] == ["Rye Flour", "Wheat Flour"]
        assert [l.name for l in handler.handle(search="2001")] == ["Box 30x30"]
        assert [l.name for l in handler.handle(category="Packaging")] == ["Box 30x30"]

    def test_sort_by_stock_descending(self):
        lines = ShowInventoryHandler(_setup()).handle(sort_by="current_stock", descending=True)
        assert [l.id for l in lines] == ["1", "3", "2"]

    def test_invalid_sort_field(self):
        with pytest.raises(ValidationError, match="Cannot sort"):
            ShowInventoryHandler(_setup()).handle(sort_by="id")

    def test_categories(self):
        assert ShowInventoryHandler(_setup()).categories() == ["Packaging", "Raw"]

    def test_ledger_newest_first_and_filtered(self):
        repo = _setup()
        handler = RecordMovementHandler(repo)
        handler.handle("1", "ENTRY", 1)
        handler.handle("2", "ENTRY", 2)
        handler.handle("1", "EXIT", 3)

        entries = ShowLedgerHandler(repo).handle()
        assert [e.quantity for e in entries] == [Decimal("3"), Decimal("2"), Decimal("1")]

        only_flour = ShowLedgerHandler(repo).handle(product_id="1", limit=1)
        assert [(e.type, e.quantity) for e in only_flour] == [("EXIT", Decimal("3"))]

    def test_summary(self):
        summary = ShowSummaryHandler(_setup()).handle()
        assert summary.unique_items == 3
        assert summary.critical_count == 1
        assert summary.critical_products == ["Box 30x30"]
        assert list(summary.category_values) == ["Packaging", "Raw"]
