"""Database layer for ledgerkit application."""

from ledgerkit.database.base import Database
from ledgerkit.database.memory import MemoryDatabase
from ledgerkit.database.sqlalchemy_db import SQLAlchemyDatabase
from ledgerkit.database.factories import (
    create_database,
    create_memory_database,
    create_sqlite_database,
)

__all__ = [
    "Database",
    "MemoryDatabase",
    "SQLAlchemyDatabase",
    "create_database",
    "create_memory_database",
    "create_sqlite_database",
]
