"""CLI commands for catalog import."""

from __future__ import annotations

from pathlib import Path

import click

from stockledger.application.import_catalog import ImportCatalogHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import (
    inventory_repository,
    ledger_policy,
    row_adapter,
)
from stockledger.infrastructure.importing.readers import read_rows


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--delimiter", default=None, help="CSV field separator (sniffed when omitted)."
)
@click.option("--sheet", default=None, help="Workbook sheet name (active sheet when omitted).")
def catalog_import(file: Path, delimiter: str | None, sheet: str | None) -> None:
    """Upsert products from a CSV or XLSX sheet, matching on code."""
    try:
        rows = read_rows(file, delimiter=delimiter, sheet=sheet)
        batch = row_adapter().adapt_rows(rows)
        handler = ImportCatalogHandler(
            inventory_repo=inventory_repository(), policy=ledger_policy()
        )
        summary = handler.handle(batch.rows, rejected=batch.rejected)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Import finished: {summary.added} added, {summary.updated} updated, "
        f"{summary.unchanged} unchanged, {summary.skipped} skipped"
    )
