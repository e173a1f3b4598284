"""Database layer for banktxn application."""

from banktxn.database.base import Database
from banktxn.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
