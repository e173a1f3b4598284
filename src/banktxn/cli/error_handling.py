"""CLI error handling helpers."""

import click

from banktxn.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error with its code and exit with failure."""
    click.echo(f"Error [{error.code.value}]: {error}", err=True)
    ctx.exit(1)
