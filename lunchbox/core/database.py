"""
Database connection and schema management.
Single DuckDB connection guarded by a re-entrant lock; all access goes through it.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import duckdb

from .exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)

SCHEMA_SQL = r"""
CREATE SEQUENCE IF NOT EXISTS users_id_seq;
CREATE TABLE IF NOT EXISTS users (
  id INTEGER DEFAULT nextval('users_id_seq') PRIMARY KEY,
  username TEXT UNIQUE NOT NULL,
  password TEXT NOT NULL,  -- passlib scrypt hash ($scrypt$...)
  name TEXT NOT NULL,
  email TEXT NOT NULL,
  gender TEXT,
  profile_picture TEXT,
  is_admin BOOLEAN DEFAULT FALSE,
  created_at TIMESTAMP NOT NULL
);

CREATE SEQUENCE IF NOT EXISTS kids_id_seq;
CREATE TABLE IF NOT EXISTS kids (
  id INTEGER DEFAULT nextval('kids_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  grade TEXT NOT NULL,
  school TEXT NOT NULL,
  roll_number TEXT NOT NULL,
  gender TEXT,
  profile_picture TEXT,
  user_id INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_kids_user ON kids(user_id);

CREATE SEQUENCE IF NOT EXISTS menu_items_id_seq;
CREATE TABLE IF NOT EXISTS monthly_menu_items (
  id INTEGER DEFAULT nextval('menu_items_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  description TEXT NOT NULL,
  is_vegetarian BOOLEAN NOT NULL,
  price INTEGER NOT NULL,  -- minor currency unit
  month DATE NOT NULL,  -- first day of the month
  image_url TEXT NOT NULL,
  is_available BOOLEAN DEFAULT TRUE
);

CREATE INDEX IF NOT EXISTS idx_menu_items_month ON monthly_menu_items(month);

CREATE SEQUENCE IF NOT EXISTS lunch_selections_id_seq;
CREATE TABLE IF NOT EXISTS lunch_selections (
  id INTEGER DEFAULT nextval('lunch_selections_id_seq') PRIMARY KEY,
  kid_id INTEGER NOT NULL,
  menu_item_id INTEGER NOT NULL,
  date DATE NOT NULL,
  created_at TIMESTAMP NOT NULL,
  modified_at TIMESTAMP NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS uniq_selection_kid_date ON lunch_selections(kid_id, date);

CREATE SEQUENCE IF NOT EXISTS selection_history_id_seq;
CREATE TABLE IF NOT EXISTS selection_history (
  id INTEGER DEFAULT nextval('selection_history_id_seq') PRIMARY KEY,
  selection_id INTEGER NOT NULL,
  old_menu_item_id INTEGER,
  new_menu_item_id INTEGER NOT NULL,
  changed_at TIMESTAMP NOT NULL,
  changed_by INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_history_selection ON selection_history(selection_id);

CREATE SEQUENCE IF NOT EXISTS holidays_id_seq;
CREATE TABLE IF NOT EXISTS holidays (
  id INTEGER DEFAULT nextval('holidays_id_seq') PRIMARY KEY,
  date DATE UNIQUE NOT NULL,
  description TEXT NOT NULL,
  created_at TIMESTAMP NOT NULL
);
"""


def db_path_from_url(database_url: str) -> str:
    """Turn a ``duckdb://`` URL into a path DuckDB accepts"""
    path = database_url
    if path.startswith("duckdb://"):
        path = path[len("duckdb://"):]
    if path in ("", "/:memory:"):
        path = ":memory:"
    return path


class DatabaseManager:
    """Owns the DuckDB connection and serializes access to it"""

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.RLock()
        self._tx_depth = 0

    @classmethod
    def from_settings(cls, settings) -> "DatabaseManager":
        return cls(db_path_from_url(settings.database_url))

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        if self._connection is None:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            try:
                self._connection = duckdb.connect(self.db_path)
            except duckdb.Error as e:
                raise RepositoryError(f"Failed to open database: {e}")
            self._init_schema()
        return self._connection

    def _init_schema(self):
        try:
            self._connection.execute(SCHEMA_SQL)
        except duckdb.Error as e:
            raise RepositoryError(f"Failed to initialize schema: {e}")

    def init_database(self):
        with self._lock:
            self.connection.execute(SCHEMA_SQL)
        logger.info("Database ready at %s", self.db_path)

    def close(self):
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    @contextmanager
    def transaction(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """
        Transaction context manager.

        Holds the connection lock for the whole block. Nested blocks join the
        outer transaction; only the outermost one commits or rolls back.
        Application errors raised inside the block roll back and propagate
        unchanged, driver errors are wrapped in RepositoryError.
        """
        with self._lock:
            conn = self.connection
            if self._tx_depth > 0:
                self._tx_depth += 1
                try:
                    yield conn
                finally:
                    self._tx_depth -= 1
                return

            conn.execute("BEGIN")
            self._tx_depth = 1
            try:
                yield conn
                conn.execute("COMMIT")
            except BaseException as e:
                try:
                    conn.execute("ROLLBACK")
                except duckdb.Error:
                    logger.warning("Rollback failed", exc_info=True)
                if isinstance(e, duckdb.ConstraintException):
                    raise ConflictError(f"Constraint violated: {e}") from e
                if isinstance(e, duckdb.Error):
                    raise RepositoryError(f"Database operation failed: {e}") from e
                raise
            finally:
                self._tx_depth = 0

    def execute(self, query: str, params: list = None) -> None:
        with self._lock:
            try:
                self.connection.execute(query, params or [])
            except duckdb.ConstraintException as e:
                raise ConflictError(f"Constraint violated: {e}") from e
            except duckdb.Error as e:
                raise RepositoryError(f"Query execution failed: {e}") from e

    def fetch_all(self, query: str, params: list = None) -> List[Dict[str, Any]]:
        """Run a query and return rows as dicts keyed by column name"""
        with self._lock:
            try:
                cursor = self.connection.execute(query, params or [])
                columns = [col[0] for col in cursor.description]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            except duckdb.ConstraintException as e:
                raise ConflictError(f"Constraint violated: {e}") from e
            except duckdb.Error as e:
                raise RepositoryError(f"Query execution failed: {e}") from e

    def fetch_one(self, query: str, params: list = None) -> Optional[Dict[str, Any]]:
        rows = self.fetch_all(query, params)
        return rows[0] if rows else None
