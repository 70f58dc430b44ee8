"""CLI commands for read-only views: ledger and summary."""

from __future__ import annotations

import click

from stockledger.application.show_ledger import ShowLedgerHandler
from stockledger.application.show_summary import ShowSummaryHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import inventory_repository, ledger_policy
from stockledger.infrastructure.cli.formatting import money, qty


@click.command("list")
@click.option("--product", "product_id", default=None, help="Only this product ID.")
@click.option("--limit", default=None, type=int, help="Show at most N entries.")
def ledger_list(product_id: str | None, limit: int | None) -> None:
    """Show ledger entries, newest first."""
    handler = ShowLedgerHandler(inventory_repo=inventory_repository())
    entries = handler.handle(product_id=product_id, limit=limit)

    if not entries:
        click.echo("No transactions recorded.")
        return

    click.echo(
        f"{'Date':<20} {'Type':<11} {'Product':<24} {'Qty':>10} {'Unit cost':>10}  Notes"
    )
    click.echo("-" * 100)
    for e in entries:
        click.echo(
            f"{e.date:<20} {e.type:<11} {e.product_name:<24} "
            f"{qty(e.quantity):>10} {money(e.unit_cost):>10}  {e.notes}"
        )


@click.command("summary")
def report_summary() -> None:
    """Show stock totals, valuation and critical items."""
    try:
        handler = ShowSummaryHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        summary = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:         {summary.unique_items}")
    click.echo(f"Units in stock:   {qty(summary.total_items)}")
    click.echo(f"Cost value:       {money(summary.total_cost_value)}")
    click.echo(f"Sale value:       {money(summary.total_sale_value)}")
    click.echo(f"Critical items:   {summary.critical_count}")
    for name in summary.critical_products:
        click.echo(f"  ! {name}")

    if summary.category_values:
        click.echo()
        click.echo(f"{'Category':<24} {'Cost value':>14}")
        click.echo("-" * 39)
        for category, value in summary.category_values.items():
            click.echo(f"{category:<24} {money(value):>14}")
