"""
Database connection and management
Owns the single DuckDB connection, the schema and the transaction helper.

Tables:
- users: local accounts (email + password hash)
- user_roles: one role row per user (admin / staff / customer)
- menu_items: purchasable products
- payment_methods: selectable payment options
- transactions: completed orders
- transaction_items: order lines, price frozen at sale time
- daily_statistics: one running aggregate row per calendar day
- logs: business operation audit trail
"""

import duckdb
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

from fastapi import Request

from .exceptions import BaseApplicationError, DatabaseError
from .logger import get_logger
from ..config.settings import settings

logger = get_logger("database")

MEMORY_DB = ":memory:"

SCHEMA_SQL = r"""
CREATE SEQUENCE IF NOT EXISTS users_id_seq;
CREATE TABLE IF NOT EXISTS users (
  id INTEGER DEFAULT nextval('users_id_seq') PRIMARY KEY,
  email TEXT UNIQUE NOT NULL,
  password_hash TEXT NOT NULL,
  full_name TEXT,
  created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE TABLE IF NOT EXISTS user_roles (
  user_id INTEGER PRIMARY KEY,
  email TEXT,
  role TEXT CHECK(role IN ('admin','staff','customer')) NOT NULL,
  full_name TEXT,
  is_active BOOLEAN DEFAULT TRUE,
  created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE SEQUENCE IF NOT EXISTS menu_items_id_seq;
CREATE TABLE IF NOT EXISTS menu_items (
  id INTEGER DEFAULT nextval('menu_items_id_seq') PRIMARY KEY,
  name TEXT NOT NULL,
  emoji TEXT DEFAULT '☕',
  price DECIMAL(12,2) NOT NULL CHECK(price >= 0),
  description TEXT,
  image_url TEXT,
  is_active BOOLEAN DEFAULT TRUE,
  created_at TIMESTAMP DEFAULT current_timestamp,
  updated_at TIMESTAMP DEFAULT current_timestamp
);

CREATE SEQUENCE IF NOT EXISTS payment_methods_id_seq;
CREATE TABLE IF NOT EXISTS payment_methods (
  id INTEGER DEFAULT nextval('payment_methods_id_seq') PRIMARY KEY,
  name TEXT UNIQUE NOT NULL,
  description TEXT,
  icon TEXT,
  is_active BOOLEAN DEFAULT TRUE
);

CREATE SEQUENCE IF NOT EXISTS transactions_id_seq;
CREATE TABLE IF NOT EXISTS transactions (
  id INTEGER DEFAULT nextval('transactions_id_seq') PRIMARY KEY,
  user_id INTEGER,
  transaction_date DATE NOT NULL,
  transaction_time TIME NOT NULL,
  total_amount DECIMAL(12,2) NOT NULL,
  payment_method TEXT CHECK(payment_method IN ('cash','e-wallet')) NOT NULL DEFAULT 'cash',
  status TEXT CHECK(status IN ('pending','completed')) NOT NULL,
  client_token TEXT UNIQUE,  -- idempotency token supplied by the caller
  created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE INDEX IF NOT EXISTS idx_transactions_user ON transactions(user_id);
CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(transaction_date);

CREATE SEQUENCE IF NOT EXISTS transaction_items_id_seq;
CREATE TABLE IF NOT EXISTS transaction_items (
  id INTEGER DEFAULT nextval('transaction_items_id_seq') PRIMARY KEY,
  transaction_id INTEGER NOT NULL,
  menu_item_id INTEGER NOT NULL,
  quantity INTEGER NOT NULL CHECK(quantity > 0),
  price_per_unit DECIMAL(12,2) NOT NULL,
  subtotal DECIMAL(12,2) NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_transaction_items_tx ON transaction_items(transaction_id);

CREATE TABLE IF NOT EXISTS daily_statistics (
  stat_date DATE PRIMARY KEY,
  total_revenue DECIMAL(12,2) NOT NULL DEFAULT 0,
  total_orders INTEGER NOT NULL DEFAULT 0,
  total_customers INTEGER NOT NULL DEFAULT 0,
  total_smiles INTEGER NOT NULL DEFAULT 0,
  updated_at TIMESTAMP DEFAULT current_timestamp
);

CREATE SEQUENCE IF NOT EXISTS logs_id_seq;
CREATE TABLE IF NOT EXISTS logs (
  log_id INTEGER DEFAULT nextval('logs_id_seq') PRIMARY KEY,
  user_id INTEGER,  -- user the action concerns
  actor_id INTEGER,  -- user who performed it
  action TEXT,
  detail_json TEXT,
  created_at TIMESTAMP DEFAULT current_timestamp
);

CREATE INDEX IF NOT EXISTS idx_logs_action ON logs(action);
"""

DEFAULT_PAYMENT_METHODS = [
    ("Cash", "Pay with cash", "💵"),
    ("E-Wallet", "Digital payment (GCash, PayMaya, etc.)", "📱"),
]


def resolve_db_path(database_url: str) -> str:
    """duckdb://./data/x.duckdb -> ./data/x.duckdb, duckdb:///:memory: -> :memory:"""
    path = database_url
    if path.startswith("duckdb://"):
        path = path[len("duckdb://"):]
    if path.lstrip("/") == MEMORY_DB:
        return MEMORY_DB
    return path


class DatabaseManager:
    """Wraps every database access behind one connection and one lock."""

    def __init__(self, db_path: Optional[str] = None):
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.RLock()
        self.db_path = db_path or resolve_db_path(settings.database_url)

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        """Lazily opened connection"""
        if self._connection is None:
            with self._lock:
                if self._connection is None:
                    if self.db_path != MEMORY_DB:
                        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
                    conn = duckdb.connect(self.db_path)
                    try:
                        self._init_schema(conn)
                    except DatabaseError:
                        # Not kept, so the next access retries the bootstrap
                        conn.close()
                        raise
                    self._connection = conn
        return self._connection

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        return self.connection

    def _init_schema(self, conn: duckdb.DuckDBPyConnection):
        try:
            conn.execute(SCHEMA_SQL)
            for name, description, icon in DEFAULT_PAYMENT_METHODS:
                conn.execute(
                    "INSERT INTO payment_methods(name, description, icon) "
                    "SELECT ?, ?, ? WHERE NOT EXISTS (SELECT 1 FROM payment_methods WHERE name = ?)",
                    [name, description, icon, name]
                )
        except duckdb.Error as e:
            raise DatabaseError(f"Failed to initialize schema: {e}") from e

    def init_database(self):
        """Open the connection and make sure the schema exists"""
        with self._lock:
            self.get_connection()
        logger.info("Database ready at %s", self.db_path)

    @contextmanager
    def transaction(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """
        Run a block of statements atomically.

        The lock serializes writers across request threads; any failure inside
        the block rolls back and is re-raised as DatabaseError, except
        application errors which propagate unchanged after the rollback.
        """
        with self._lock:
            conn = self.connection
            conn.execute("BEGIN TRANSACTION")
            try:
                yield conn
                conn.execute("COMMIT")
            except Exception as e:
                try:
                    conn.execute("ROLLBACK")
                except duckdb.Error as rollback_error:
                    logger.warning("Rollback failed: %s", rollback_error)

                if isinstance(e, BaseApplicationError):
                    raise
                raise DatabaseError(f"Database operation failed: {e}") from e

    def execute_query(self, query: str, params: Optional[list] = None) -> list:
        """Execute and return all rows as tuples"""
        with self._lock:
            try:
                return self.connection.execute(query, params or []).fetchall()
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}") from e

    def execute_one(self, query: str, params: Optional[list] = None) -> Optional[tuple]:
        """Execute and return the first row, or None"""
        with self._lock:
            try:
                return self.connection.execute(query, params or []).fetchone()
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}") from e

    def fetch_dicts(self, query: str, params: Optional[list] = None,
                    conn: Optional[duckdb.DuckDBPyConnection] = None) -> List[Dict[str, Any]]:
        """Execute and return all rows as column-name dicts"""
        with self._lock:
            try:
                cursor = (conn or self.connection).execute(query, params or [])
                columns = [col[0] for col in cursor.description]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}") from e

    def fetch_dict(self, query: str, params: Optional[list] = None,
                   conn: Optional[duckdb.DuckDBPyConnection] = None) -> Optional[Dict[str, Any]]:
        rows = self.fetch_dicts(query, params, conn)
        return rows[0] if rows else None

    def close(self):
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None


# Global database manager
db_manager = DatabaseManager()


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency: the manager attached to the app, else the global one"""
    return getattr(request.app.state, "db", None) or db_manager
