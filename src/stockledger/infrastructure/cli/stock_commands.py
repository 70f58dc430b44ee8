"""CLI commands for single-product stock movements."""

from __future__ import annotations

import click

from stockledger.application.dto import MovementDTO
from stockledger.application.record_movement import RecordMovementHandler
from stockledger.domain.exceptions import DomainException
from stockledger.domain.model.transaction import TransactionType
from stockledger.infrastructure.bootstrap import inventory_repository, ledger_policy
from stockledger.infrastructure.cli.formatting import money, qty


def _record(
    product_id: str,
    kind: TransactionType,
    quantity: str,
    cost: str | None,
    notes: str,
) -> MovementDTO:
    try:
        handler = RecordMovementHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        return handler.handle(
            product_id, kind, quantity, unit_cost=cost, notes=notes
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _report(result: MovementDTO) -> None:
    click.echo(
        f"{result.type} {qty(result.quantity)} on '{result.product_name}': "
        f"stock {qty(result.previous_stock)} -> {qty(result.current_stock)}, "
        f"cost {money(result.cost_price)}"
    )
    if result.notes:
        click.echo(f"Notes: {result.notes}")


@click.command("entry")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Quantity received.")
@click.option("--cost", default=None, help="Unit cost of this lot.")
@click.option("--notes", default="", help="Free-text notes.")
def stock_entry(product_id: str, quantity: str, cost: str | None, notes: str) -> None:
    """Record incoming stock."""
    _report(_record(product_id, TransactionType.ENTRY, quantity, cost, notes))


@click.command("exit")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Quantity taken out.")
@click.option("--notes", default="", help="Free-text notes.")
@click.confirmation_option(prompt="Confirm stock exit?")
def stock_exit(product_id: str, quantity: str, notes: str) -> None:
    """Record outgoing stock (floors at zero)."""
    _report(_record(product_id, TransactionType.EXIT, quantity, None, notes))


@click.command("adjust")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Counted stock level.")
@click.option("--cost", default=None, help="Updated unit cost.")
@click.option("--notes", default="", help="Free-text notes.")
def stock_adjust(product_id: str, quantity: str, cost: str | None, notes: str) -> None:
    """Set stock to a physically counted level."""
    _report(_record(product_id, TransactionType.ADJUSTMENT, quantity, cost, notes))
