"""Database layer for ledgerimport application."""

from ledgerimport.database.base import Database
from ledgerimport.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
