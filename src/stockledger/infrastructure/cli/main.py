import click

from stockledger.infrastructure import settings
from stockledger.infrastructure.cli.bulk_commands import bulk_add, bulk_delete, bulk_zero
from stockledger.infrastructure.cli.catalog_commands import catalog_import
from stockledger.infrastructure.cli.product_commands import (
    product_add,
    product_categories,
    product_list,
    product_remove,
    product_update,
)
from stockledger.infrastructure.cli.report_commands import ledger_list, report_summary
from stockledger.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_entry,
    stock_exit,
)
from stockledger.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Stock ledger for raw materials and finished goods."""
    configure_logging(level=settings.log_level(), json=settings.log_json())


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Record stock movements."""


@cli.group()
def bulk() -> None:
    """Apply one operation to several products."""


@cli.group()
def catalog() -> None:
    """Import catalog data."""


@cli.group()
def ledger() -> None:
    """Browse the transaction ledger."""


@cli.group()
def report() -> None:
    """Inventory reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_categories)
product.add_command(product_update)
product.add_command(product_remove)
stock.add_command(stock_entry)
stock.add_command(stock_exit)
stock.add_command(stock_adjust)
bulk.add_command(bulk_zero)
bulk.add_command(bulk_add)
bulk.add_command(bulk_delete)
catalog.add_command(catalog_import)
ledger.add_command(ledger_list)
report.add_command(report_summary)
