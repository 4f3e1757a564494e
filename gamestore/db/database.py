"""Core database connection: execute/query/prepare helpers over SQLite."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generator, Optional, Sequence, Union

logger = logging.getLogger(__name__)

Value = Union[int, float, str, None]
Row = dict[str, Value]
Params = Sequence[Any]


class DatabaseError(Exception):
    """An error reported by the SQLite engine for a single statement."""

    def __init__(self, code: Optional[int], name: Optional[str], message: str, sql: str):
        super().__init__(f"SQLite {code}: {message}\nSQL → {sql.strip()}")
        self.code = code
        self.name = name
        self.message = message
        self.sql = sql

    @classmethod
    def from_sqlite(cls, exc: sqlite3.Error, sql: str) -> "DatabaseError":
        return cls(
            code=getattr(exc, "sqlite_errorcode", None),
            name=getattr(exc, "sqlite_errorname", None),
            message=str(exc) or "unknown error",
            sql=sql,
        )


@dataclass(frozen=True)
class ExecResult:
    """Outcome of ``Database.execute``: either a rowcount or a ``DatabaseError``."""

    sql: str
    rowcount: int = -1
    error: Optional[DatabaseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> Optional[int]:
        return self.error.code if self.error else None

    def check(self) -> "ExecResult":
        """Raise the engine error, if any; otherwise return self."""
        if self.error is not None:
            raise self.error
        return self


def _coerce(value: Any) -> Value:
    # Only the integer, real and text storage classes are surfaced.
    if isinstance(value, (int, float, str)) or value is None:
        return value
    return None


def _row_factory(cursor: sqlite3.Cursor, row: tuple) -> Row:
    return {col[0]: _coerce(value) for col, value in zip(cursor.description, row)}


class PreparedStatement:
    """A statement compiled once and run many times with different bindings."""

    def __init__(self, conn: sqlite3.Connection, sql: str):
        self.sql = sql
        self.executions = 0
        self._compile(conn, sql)
        self._cursor: Optional[sqlite3.Cursor] = conn.cursor()

    @staticmethod
    def _compile(conn: sqlite3.Connection, sql: str) -> None:
        """Reject bad SQL before any row is bound.

        EXPLAIN compiles the statement without running it. sqlite3 checks the
        binding count only after a successful compile, so ProgrammingError
        here means the text itself is valid.
        """
        try:
            conn.execute(f"EXPLAIN {sql}").close()
        except sqlite3.ProgrammingError:
            return
        except sqlite3.Error as exc:
            raise DatabaseError.from_sqlite(exc, sql) from exc

    def run(self, params: Params = ()) -> int:
        """Bind ``params``, step the statement and reset it. Returns the rowcount."""
        if self._cursor is None:
            raise RuntimeError("Prepared statement already finalized")
        try:
            self._cursor.execute(self.sql, tuple(params))
        except sqlite3.Error as exc:
            raise DatabaseError.from_sqlite(exc, self.sql) from exc
        self.executions += 1
        return self._cursor.rowcount

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


class Database:
    """
    SQLite database wrapper with explicit transaction control.

    The connection runs in autocommit mode: nothing is grouped into a
    transaction unless the caller issues ``begin()`` (or uses
    ``transaction()``). Foreign-key enforcement is switched on at open.
    """

    def __init__(self, path: Optional[Path | str] = None):
        from gamestore.config import get_db_path
        if path is None:
            self.path: Path = get_db_path()
        elif isinstance(path, str):
            self.path = Path(path)
        else:
            self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    # -- connection lifecycle --------------------------------------------------

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._ensure_dir()
            try:
                conn = sqlite3.connect(str(self.path), isolation_level=None)
            except sqlite3.Error as exc:
                raise DatabaseError.from_sqlite(exc, f"open {self.path}") from exc
            conn.row_factory = _row_factory
            conn.execute("PRAGMA foreign_keys = ON")
            self._conn = conn
            logger.info(f"Opened database at {self.path}")
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    # -- statements --------------------------------------------------------------

    def execute(self, sql: str, params: Params = ()) -> ExecResult:
        """Run a statement that returns no rows.

        Engine errors are never raised here: they come back on the result.
        Call ``.check()`` to treat a failure as fatal, or inspect ``.ok`` to
        tolerate it.
        """
        try:
            cursor = self.connection().execute(sql, tuple(params))
        except sqlite3.Error as exc:
            error = DatabaseError.from_sqlite(exc, sql)
            logger.debug(f"SQLite error ({error.code} {error.name}): {error.message}")
            return ExecResult(sql=sql, error=error)
        return ExecResult(sql=sql, rowcount=cursor.rowcount)

    def query(self, sql: str, params: Params = ()) -> list[Row]:
        """Run a SELECT (or row-returning PRAGMA) and materialize every row."""
        try:
            return self.connection().execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError.from_sqlite(exc, sql) from exc

    def scalar_int(self, sql: str, params: Params = ()) -> int:
        """First column of the first row as an int; 0 when there is nothing."""
        rows = self.query(sql, params)
        if not rows:
            return 0
        value = next(iter(rows[0].values()), None)
        if isinstance(value, (int, float)):
            return int(value)
        return 0

    @contextmanager
    def prepared(self, sql: str) -> Generator[PreparedStatement, None, None]:
        statement = PreparedStatement(self.connection(), sql)
        try:
            yield statement
        finally:
            statement.close()

    def prepare(self, sql: str, body: Callable[[PreparedStatement], None]) -> int:
        """Prepare once, hand the statement to ``body``, finalize on every path.

        Bad SQL raises ``DatabaseError`` before ``body`` is called.
        Returns how many times ``body`` ran the statement.
        """
        with self.prepared(sql) as statement:
            body(statement)
            return statement.executions

    # -- schema introspection ----------------------------------------------------

    def column_exists(self, table: str, column: str) -> bool:
        return any(row["name"] == column for row in self.query(f"PRAGMA table_info({table});"))

    def table_exists(self, name: str) -> bool:
        return self.scalar_int(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?", (name,)
        ) == 1

    def index_exists(self, name: str) -> bool:
        return self.scalar_int(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'index' AND name = ?", (name,)
        ) == 1

    # -- referential integrity ---------------------------------------------------

    def set_foreign_keys(self, enabled: bool) -> None:
        self.execute(f"PRAGMA foreign_keys = {'ON' if enabled else 'OFF'};").check()

    def foreign_keys_enabled(self) -> bool:
        return self.scalar_int("PRAGMA foreign_keys") == 1

    @contextmanager
    def foreign_keys_suspended(self) -> Generator[None, None, None]:
        """Turn foreign-key checks off for the block, then back on."""
        self.set_foreign_keys(False)
        try:
            yield
        finally:
            self.set_foreign_keys(True)

    # -- transaction helpers -----------------------------------------------------

    def begin(self) -> None:
        self.execute("BEGIN;").check()

    def commit(self) -> None:
        self.execute("COMMIT;").check()

    def rollback(self) -> None:
        self.execute("ROLLBACK;").check()

    @property
    def in_transaction(self) -> bool:
        return self.connection().in_transaction

    @contextmanager
    def transaction(self) -> Generator["Database", None, None]:
        """BEGIN ... COMMIT on success, ROLLBACK and re-raise on exception."""
        self.begin()
        try:
            yield self
            self.commit()
        except Exception:
            # A failed COMMIT (e.g. a deferred foreign key) leaves the transaction open.
            if self.in_transaction:
                self.rollback()
            raise


@contextmanager
def open_database(path: Optional[Path | str] = None) -> Generator[Database, None, None]:
    """Open a ``Database`` for the duration of the block and close it after."""
    db = Database(path)
    try:
        db.connection()
        yield db
    finally:
        db.close()
