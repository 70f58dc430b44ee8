"""End-to-end tests for the click CLI against a temporary data directory."""

import logging
from decimal import Decimal

import pytest
import structlog
from click.testing import CliRunner

from stockledger.infrastructure.cli.main import cli
from stockledger.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def run(data_dir):
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(
            cli,
            list(args),
            input=input,
            env={"STOCKLEDGER_DATA_DIR": str(data_dir)},
        )

    return invoke


def _snapshot(data_dir):
    return JsonInventoryRepository(
        data_dir / "products.json", data_dir / "transactions.json"
    ).load()


def _add_flour(run):
    result = run(
        "product", "add", "--name", "Wheat Flour", "--category", "Raw",
        "--code", "1001", "--stock", "10", "--safety-stock", "5",
        "--consumption", "30", "--cost", "3.20",
    )
    assert result.exit_code == 0, result.output
    return result


class TestProductCommands:

    def test_add_and_list(self, run, data_dir):
        result = _add_flour(run)
        assert "Product 'Wheat Flour' added" in result.output

        listing = run("product", "list")
        assert listing.exit_code == 0
        assert "Wheat Flour" in listing.output
        assert "10 days" in listing.output

    def test_duplicate_code_is_a_click_error(self, run):
        _add_flour(run)
        result = run("product", "add", "--name", "Other", "--category", "Raw", "--code", "1001")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_update_and_remove(self, run, data_dir):
        _add_flour(run)
        product_id = _snapshot(data_dir).products[0].id

        assert run("product", "update", "--id", product_id, "--cost", "4").exit_code == 0
        assert _snapshot(data_dir).products[0].previous_cost_price == Decimal("3.20")

        result = run("product", "remove", "--id", product_id, "--yes")
        assert result.exit_code == 0
        assert _snapshot(data_dir).products == ()


class TestStockCommands:

    def test_entry_and_exit(self, run, data_dir):
        _add_flour(run)
        product_id = _snapshot(data_dir).products[0].id

        entry = run("stock", "entry", "--id", product_id, "--quantity", "5", "--cost", "3.50")
        assert entry.exit_code == 0, entry.output
        assert "stock 10 -> 15" in entry.output
        assert "Cost updated from 3.20 to 3.50" in entry.output

        exit_ = run("stock", "exit", "--id", product_id, "--quantity", "100", "--yes")
        assert exit_.exit_code == 0, exit_.output
        assert "stock 15 -> 0" in exit_.output

        assert len(_snapshot(data_dir).transactions) == 2

    def test_exit_requires_confirmation(self, run, data_dir):
        _add_flour(run)
        product_id = _snapshot(data_dir).products[0].id

        result = run("stock", "exit", "--id", product_id, "--quantity", "1", input="n\n")

        assert result.exit_code == 1
        assert _snapshot(data_dir).transactions == ()

    def test_unknown_product(self, run):
        result = run("stock", "entry", "--id", "missing", "--quantity", "1")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_bad_quantity(self, run, data_dir):
        _add_flour(run)
        product_id = _snapshot(data_dir).products[0].id
        result = run("stock", "adjust", "--id", product_id, "--quantity", "-3")
        assert result.exit_code == 1
        assert "cannot be negative" in result.output


class TestBulkCommands:

    def test_add_then_zero(self, run, data_dir):
        _add_flour(run)
        run("product", "add", "--name", "Salt", "--category", "Raw", "--code", "1002")
        ids = [p.id for p in _snapshot(data_dir).products]

        added = run("bulk", "add", "--id", ids[0], "--id", ids[1], "--quantity", "2")
        assert added.exit_code == 0, added.output
        assert "2 product(s)" in added.output

        zeroed = run("bulk", "zero", "--id", ids[0], "--id", ids[1], "--yes")
        assert zeroed.exit_code == 0, zeroed.output
        assert all(p.current_stock == 0 for p in _snapshot(data_dir).products)
        assert len(_snapshot(data_dir).transactions) == 4

    def test_unknown_id_aborts_batch(self, run, data_dir):
        _add_flour(run)
        product_id = _snapshot(data_dir).products[0].id

        result = run("bulk", "delete", "--id", product_id, "--id", "ghost", "--yes")

        assert result.exit_code == 1
        assert len(_snapshot(data_dir).products) == 1


class TestCatalogAndReports:

    def test_import_then_summary_and_ledger(self, run, data_dir, tmp_path):
        _add_flour(run)
        sheet = tmp_path / "catalog.csv"
        sheet.write_text(
            "Código;Produto;Categoria;Estoque Atual;Custo\n"
            "1001;Wheat Flour;Raw;10;3,20\n"
            "2001;Box 30x30;Packaging;0;1,10\n"
            ";Nameless;Raw;1;1\n",
            encoding="utf-8",
        )

        imported = run("catalog", "import", str(sheet))
        assert imported.exit_code == 0, imported.output
        assert "1 added, 0 updated, 1 unchanged, 1 skipped" in imported.output

        summary = run("report", "summary")
        assert summary.exit_code == 0
        assert "Products:         2" in summary.output
        assert "Critical items:   1" in summary.output
        assert "! Box 30x30" in summary.output

        ledger = run("ledger", "list")
        assert "No transactions recorded." in ledger.output

    def test_unsupported_import_file(self, run, tmp_path):
        sheet = tmp_path / "catalog.txt"
        sheet.write_text("x", encoding="utf-8")
        result = run("catalog", "import", str(sheet))
        assert result.exit_code == 1
        assert "Unsupported" in result.output

    def test_import_with_explicit_delimiter(self, run, data_dir, tmp_path):
        sheet = tmp_path / "catalog.csv"
        sheet.write_text("code|name|category\n7|Milk|Dairy\n", encoding="utf-8")

        result = run("catalog", "import", str(sheet), "--delimiter", "|")

        assert result.exit_code == 0, result.output
        assert "1 added" in result.output
        assert _snapshot(data_dir).products[0].name == "Milk"

    def test_categories(self, run):
        assert "No categories yet." in run("product", "categories").output
        _add_flour(run)
        run("product", "add", "--name", "Box", "--category", "Packaging")

        result = run("product", "categories")

        assert result.exit_code == 0
        assert result.output.splitlines() == ["Packaging", "Raw"]
