"""CLI commands for bulk operations over a product selection."""

from __future__ import annotations

import click

from stockledger.application.bulk_update import BulkUpdateHandler
from stockledger.domain.exceptions import DomainException
from stockledger.domain.service.bulk_mutation import BulkOperation
from stockledger.infrastructure.bootstrap import inventory_repository, ledger_policy

_ids_option = click.option(
    "--id", "product_ids", multiple=True, required=True,
    help="Product ID (repeat for each selected product).",
)


def _run(product_ids: tuple[str, ...], operation: BulkOperation, quantity=None):
    try:
        handler = BulkUpdateHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        return handler.handle(product_ids, operation, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("zero")
@_ids_option
@click.confirmation_option(prompt="Zero the stock of the selected products?")
def bulk_zero(product_ids: tuple[str, ...]) -> None:
    """Set stock to zero for every selected product."""
    result = _run(product_ids, BulkOperation.ZERO_STOCK)
    click.echo(f"Stock zeroed on {result.affected} product(s).")


@click.command("add")
@_ids_option
@click.option("--quantity", required=True, help="Quantity added to each product.")
def bulk_add(product_ids: tuple[str, ...], quantity: str) -> None:
    """Add the same quantity to every selected product."""
    result = _run(product_ids, BulkOperation.ADD_QUANTITY, quantity)
    click.echo(f"Entry of {quantity} recorded on {result.affected} product(s).")


@click.command("delete")
@_ids_option
@click.confirmation_option(prompt="Permanently delete the selected products?")
def bulk_delete(product_ids: tuple[str, ...]) -> None:
    """Delete every selected product (ledger history is kept)."""
    result = _run(product_ids, BulkOperation.DELETE)
    click.echo(f"{result.affected} product(s) deleted.")
