"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from stockledger.application.add_product import AddProductHandler
from stockledger.application.remove_product import RemoveProductHandler
from stockledger.application.show_inventory import SORTABLE_FIELDS, ShowInventoryHandler
from stockledger.application.update_product import UpdateProductHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import inventory_repository, ledger_policy
from stockledger.infrastructure.cli.formatting import autonomy, money, qty


def _catalog_options(required: bool):
    """Options shared by ``add`` and ``update``."""

    def decorator(func):
        options = [
            click.option("--code", default=None, help="Business code."),
            click.option("--unit", default=None, help="Unit of measure (KG, SC, L, ...)."),
            click.option("--stock", "current_stock", default=None, help="Current stock."),
            click.option("--min-stock", default=None, help="Minimum stock."),
            click.option("--safety-stock", default=None, help="Safety stock."),
            click.option(
                "--consumption", "monthly_consumption", default=None,
                help="Monthly consumption.",
            ),
            click.option("--cost", "cost_price", default=None, help="Unit cost."),
            click.option("--sale-price", default=None, help="Unit sale price."),
            click.option("--category", required=required, default=None, help="Category."),
            click.option("--name", required=required, default=None, help="Product name."),
        ]
        for option in options:
            func = option(func)
        return func

    return decorator


@click.command("add")
@_catalog_options(required=True)
def product_add(name: str, category: str, **fields: str | None) -> None:
    """Add a new product to the catalog."""
    try:
        handler = AddProductHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        product = handler.handle(
            name=name,
            category=category,
            **{k: v for k, v in fields.items() if v is not None},
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' added (id={product.id}, code={product.code})")


@click.command("list")
@click.option("--search", default="", help="Filter by name or code.")
@click.option("--category", default=None, help="Only this category.")
@click.option(
    "--sort", "sort_by", default="name", type=click.Choice(SORTABLE_FIELDS),
    help="Sort field.",
)
@click.option("--desc", is_flag=True, default=False, help="Sort descending.")
def product_list(search: str, category: str | None, sort_by: str, desc: bool) -> None:
    """List products with stock status and autonomy."""
    try:
        handler = ShowInventoryHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        lines = handler.handle(
            search=search, category=category, sort_by=sort_by, descending=desc
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products found.")
        return

    click.echo(
        f"{'Code':<8} {'Name':<24} {'Stock':>10} {'Cost':>10} "
        f"{'Status':<10} {'Autonomy':<14} ID"
    )
    click.echo("-" * 100)
    for line in lines:
        cost = money(line.cost_price) + (" ^" if line.cost_alarm else "")
        click.echo(
            f"{line.code:<8} {line.name:<24} "
            f"{qty(line.current_stock) + ' ' + line.unit:>10} {cost:>10} "
            f"{line.status:<10} {autonomy(line.autonomy_days):<14} {line.id}"
        )


@click.command("categories")
def product_categories() -> None:
    """List the categories in use."""
    handler = ShowInventoryHandler(inventory_repo=inventory_repository())
    names = handler.categories()
    if not names:
        click.echo("No categories yet.")
        return
    for name in names:
        click.echo(name)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@_catalog_options(required=False)
def product_update(product_id: str, **changes: str | None) -> None:
    """Edit a product's catalog fields."""
    try:
        handler = UpdateProductHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        product = handler.handle(product_id, **changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.name}' updated")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Delete this product? Its ledger history is kept.")
def product_remove(product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = RemoveProductHandler(inventory_repo=inventory_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} removed")
