"""Database layer — SQLite access wrapper and schema DDL."""

from gamestore.db.database import (
    Database,
    DatabaseError,
    ExecResult,
    PreparedStatement,
    Row,
    Value,
    open_database,
)

__all__ = [
    "Database",
    "DatabaseError",
    "ExecResult",
    "PreparedStatement",
    "Row",
    "Value",
    "open_database",
]
