"""Transaction management commands."""

from decimal import Decimal, InvalidOperation
from typing import Optional

import click

from banktxn.cli.date_filters import resolve_cli_date_range, resolve_cli_timestamp
from banktxn.cli.error_handling import handle_domain_error
from banktxn.domain.entities import TransactionFilter, TransactionType
from banktxn.domain.errors import DomainError
from banktxn.domain.transaction import TransactionService
from banktxn.utils.date_parser import PERIODS


def _parse_cli_amount(ctx, value: Optional[str], label: str) -> Optional[Decimal]:
    """Parse a search bound. Stored amounts are magnitudes, so bounds must be too."""
    if value is None:
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite() or amount < 0:
        click.echo(
            f"Error: Invalid {label}: '{value}' is not a non-negative number",
            err=True,
        )
        ctx.exit(1)
    return amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--account-id", help="Account tag (case-insensitive substring)")
@click.option("--bank", help="Bank name (case-insensitive substring)")
@click.option("--currency", help="ISO currency code, e.g. USD")
@click.option("--type", "txn_type", type=click.Choice(["credit", "debit"], case_sensitive=False))
@click.option("--description", help="Description text (case-insensitive substring)")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--period", type=click.Choice(PERIODS, case_sensitive=False), help="Named date period")
@click.option("--min-amount", help="Minimum amount")
@click.option("--max-amount", help="Maximum amount")
@click.option("--created-after", help="Imported on or after this date")
@click.option("--created-before", help="Imported on or before this date")
@click.option("--updated-after", help="Last updated on or after this date")
@click.option("--updated-before", help="Last updated on or before this date")
@click.pass_context
def list_transactions(
    ctx,
    account_id: Optional[str],
    bank: Optional[str],
    currency: Optional[str],
    txn_type: Optional[str],
    description: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    period: Optional[str],
    min_amount: Optional[str],
    max_amount: Optional[str],
    created_after: Optional[str],
    created_before: Optional[str],
    updated_after: Optional[str],
    updated_before: Optional[str],
):
    """Search transactions, newest first.

    Examples:
        banktxn transaction list --period last-month --type debit
        banktxn transaction list --bank "bangkok" --min-amount 1000
    """
    service = TransactionService(ctx.obj["db"])

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    transaction_filter = TransactionFilter(
        account_id=account_id,
        bank_name=bank,
        currency_iso_code=currency,
        type=TransactionType(txn_type.upper()) if txn_type else None,
        description=description,
        date_from=start,
        date_to=end,
        min_amount=_parse_cli_amount(ctx, min_amount, "minimum amount"),
        max_amount=_parse_cli_amount(ctx, max_amount, "maximum amount"),
        created_after=resolve_cli_timestamp(ctx, created_after, "created-after date"),
        created_before=resolve_cli_timestamp(
            ctx, created_before, "created-before date", end_of_day=True
        ),
        updated_after=resolve_cli_timestamp(ctx, updated_after, "updated-after date"),
        updated_before=resolve_cli_timestamp(
            ctx, updated_before, "updated-before date", end_of_day=True
        ),
    )

    try:
        transactions = service.search(transaction_filter)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<7} {'Amount':>14} {'Cur':<4} "
        f"{'Bank':<18} {'Account':<14} {'Description':<30}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.type.value:<7} {txn.amount:>14,.2f} "
            f"{txn.currency_iso_code:<4} {txn.bank_name[:18]:<18} {(txn.account_id or '')[:14]:<14} "
            f"{txn.description[:30]:<30}"
        )

    credits = [txn for txn in transactions if txn.type == TransactionType.CREDIT]
    debits = [txn for txn in transactions if txn.type == TransactionType.DEBIT]
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<6} Credits: {len(credits)} | Debits: {len(debits)} | "
        f"Count: {len(transactions)}"
    )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show all fields of a transaction."""
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Amount: {txn.amount:,.2f} {txn.currency_iso_code}")
    click.echo(f"  Bank: {txn.bank_name}")
    click.echo(f"  Account: {txn.account_id or '-'}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Created: {txn.created_at} by {txn.created_by or '-'}")
    if txn.updated_at is not None:
        click.echo(f"  Updated: {txn.updated_at} by {txn.updated_by or '-'}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--description", help="New description")
@click.option("--account-id", help="New account tag")
@click.pass_context
def update_transaction(
    ctx, transaction_id: int, description: Optional[str], account_id: Optional[str]
) -> None:
    """Update the description or account tag of a transaction.

    Date, amount, type, bank and currency come from the bank export and
    cannot be changed.

    Examples:
        banktxn transaction update 1 --description "Groceries"
        banktxn transaction update 1 --account-id checking
    """
    service = TransactionService(ctx.obj["db"])
    try:
        service.update_transaction(
            transaction_id,
            description=description,
            account_id=account_id,
            updated_by=ctx.obj.get("user"),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        banktxn transaction delete 1
    """
    service = TransactionService(ctx.obj["db"])

    try:
        service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id, deleted_by=ctx.obj.get("user"))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("bulk-delete")
@click.argument("transaction_ids", nargs=-1, required=True, type=int)
@click.pass_context
def bulk_delete_transactions(ctx, transaction_ids: tuple[int, ...]) -> None:
    """Delete several transactions at once.

    Unknown or already deleted IDs are reported, not treated as errors.

    Examples:
        banktxn transaction bulk-delete 3 4 5
    """
    service = TransactionService(ctx.obj["db"])
    result = service.bulk_delete_transactions(
        list(transaction_ids), deleted_by=ctx.obj.get("user")
    )

    click.echo(f"Deleted {result.deleted_count} transaction(s)")
    if result.not_found_ids:
        click.echo(f"Not found: {', '.join(str(i) for i in result.not_found_ids)}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
