"""Main CLI entry point."""

from typing import Optional

import click

from banktxn.cli.error_handling import handle_domain_error
from banktxn.database.factories import create_sqlite_database
from banktxn.domain.csv_format import CSVFormatService
from banktxn.domain.errors import ValidationError
from banktxn.logging_config import configure_logging

# Import and register all commands at module level
from banktxn.cli.commands import format, import_cmd, transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKTXN_DB_PATH environment variable)",
    envvar="BANKTXN_DB_PATH",
)
@click.option(
    "--formats",
    "formats_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to CSV format configuration (overrides BANKTXN_FORMATS_PATH environment variable)",
    envvar="BANKTXN_FORMATS_PATH",
)
@click.option(
    "--user",
    help="User recorded on created, updated and deleted transactions",
    envvar="BANKTXN_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for messages on stderr (default: WARNING)",
    envvar="BANKTXN_LOG_LEVEL",
)
@click.pass_context
def cli(
    ctx,
    db_path: Optional[str],
    formats_path: Optional[str],
    user: Optional[str],
    log_level: Optional[str],
):
    """Banktxn - Bank transaction import and management.

    Import CSV exports from supported banks into one normalized transaction
    store, then search, correct and delete the imported transactions.
    """
    ctx.ensure_object(dict)

    # Initialize configuration and database only when actually running a
    # command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    configure_logging(log_level)
    try:
        ctx.obj["format_service"] = CSVFormatService.from_file(formats_path)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()
    ctx.obj["db"] = db
    ctx.obj["user"] = user
    ctx.call_on_close(db.disconnect)


# Register all commands
format.register_commands(cli)
import_cmd.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
