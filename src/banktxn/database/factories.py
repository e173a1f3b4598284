"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from banktxn.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BANKTXN_DB_PATH
            environment variable, then defaults to ~/.banktxn/banktxn.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("BANKTXN_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".banktxn"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "banktxn.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
