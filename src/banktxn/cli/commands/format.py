"""CSV format inspection commands."""

import click

from banktxn.cli.error_handling import handle_domain_error
from banktxn.domain.errors import CSVFormatNotSupportedError


def _layout(config) -> str:
    return "type column" if config.type_header else "debit/credit columns"


@click.group()
def format_group():
    """Inspect supported CSV formats."""
    pass


@format_group.command("list")
@click.pass_context
def list_formats(ctx):
    """List supported CSV formats."""
    formats = ctx.obj["format_service"].list_formats()

    if not formats:
        click.echo("No CSV formats configured.")
        return

    click.echo(f"{'Key':<28} {'Bank':<20} {'Currency':<9} {'Date format':<20} {'Layout':<20}")
    click.echo("-" * 100)
    for key, config in formats:
        click.echo(
            f"{key:<28} {config.bank_name:<20} {config.default_currency_iso_code:<9} "
            f"{config.date_format:<20} {_layout(config):<20}"
        )


@format_group.command("show")
@click.argument("format_key")
@click.pass_context
def show_format(ctx, format_key: str):
    """Show the column layout of a CSV format."""
    try:
        config = ctx.obj["format_service"].lookup(format_key)
    except CSVFormatNotSupportedError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Format: {format_key}")
    click.echo(f"  Bank: {config.bank_name}")
    click.echo(f"  Currency: {config.default_currency_iso_code}")
    click.echo(f"  Date column: {config.date_header} ({config.date_format})")
    click.echo(f"  Description column: {config.description_header}")
    if config.debit_header == config.credit_header:
        click.echo(f"  Amount column: {config.debit_header}")
    else:
        click.echo(f"  Debit column: {config.debit_header}")
        click.echo(f"  Credit column: {config.credit_header}")
    click.echo(f"  Type column: {config.type_header or '(implied by debit/credit columns)'}")


def register_commands(cli):
    """Register format commands with main CLI."""
    cli.add_command(format_group, name="format")
