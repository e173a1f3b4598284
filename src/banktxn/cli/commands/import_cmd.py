"""CSV import command."""

from typing import Optional

import click

from banktxn.cli.error_handling import handle_domain_error
from banktxn.domain.csv_import import CSVImportService
from banktxn.domain.errors import DomainError


@click.command("import")
@click.argument("csv_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "format_key", required=True, help="CSV format key (see 'format list')")
@click.option("--account-id", help="Account tag applied to every imported transaction")
@click.pass_context
def import_csv(ctx, csv_files: tuple[str, ...], format_key: str, account_id: Optional[str]):
    """Import transactions from one or more CSV files.

    All files are imported together: if any row in any file is invalid,
    nothing is imported.

    Examples:
        banktxn import statement.csv --format capital-one
        banktxn import oct.csv nov.csv --format bangkok-bank --account-id savings
    """
    db = ctx.obj["db"]
    service = CSVImportService(db, ctx.obj["format_service"])

    try:
        saved = service.import_csv_paths(
            format_key, account_id, csv_files, created_by=ctx.obj.get("user")
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Imported {len(saved)} transaction(s) from {len(csv_files)} file(s)")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
