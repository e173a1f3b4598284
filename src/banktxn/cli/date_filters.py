"""CLI helpers for date range resolution."""

from datetime import date, datetime, time, UTC
from typing import Optional

import click

from banktxn.utils.date_parser import get_date_range, parse_date


def _parse_cli_date(ctx: click.Context, value: str, label: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: Optional[str],
    end_date: Optional[str],
    period: Optional[str],
) -> tuple[Optional[date], Optional[date]]:
    """Resolve a transaction date range from a named period or explicit dates."""
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period)

    start = _parse_cli_date(ctx, start_date, "start date") if start_date else None
    end = _parse_cli_date(ctx, end_date, "end date") if end_date else None
    return start, end


def resolve_cli_timestamp(
    ctx: click.Context, value: Optional[str], label: str, *, end_of_day: bool = False
) -> Optional[datetime]:
    """Turn a CLI date into a UTC timestamp bound for audit-column filters.

    Lower bounds start at midnight; upper bounds (``end_of_day``) include the
    whole day.
    """
    if not value:
        return None
    day = _parse_cli_date(ctx, value, label)
    return datetime.combine(day, time.max if end_of_day else time.min, tzinfo=UTC)
