"""
Connection handling for the church data store.

``ConnectionManager`` is an explicitly constructed handle over one Django
database alias. Pool sizing comes from the alias settings (see
``DB_POOL_MAX_SIZE``); callers wait for a free connection rather than
failing when the pool is exhausted.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.apps import apps
from django.core.management.color import no_style
from django.db import (
    DEFAULT_DB_ALIAS,
    DatabaseError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    connections,
    transaction,
)

from core.exceptions import ConstraintError, DatabaseConnectionError, DataLayerError
from core.logging.structured import get_contextual_logger


@dataclass
class QueryResult:
    """Outcome of a single statement."""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0
    lastrowid: Optional[Any] = None


class ConnectionManager:
    """
    Owns access to a pooled database connection.

    Every statement borrows the connection for its own duration only. When
    the alias is pooled and no transaction is open, the connection goes back
    to the pool as soon as the statement finishes, whether it succeeded or not.
    """

    def __init__(self, alias: str = DEFAULT_DB_ALIAS):
        self.alias = alias
        self.logger = get_contextual_logger('datastore.connection', db_alias=alias)

    @property
    def connection(self):
        return connections[self.alias]

    @property
    def pooled(self) -> bool:
        options = self.connection.settings_dict.get('OPTIONS') or {}
        return bool(options.get('pool'))

    def acquire(self):
        """Return a live connection, opening one if needed."""
        conn = self.connection
        try:
            conn.ensure_connection()
        except (OperationalError, InterfaceError) as exc:
            self.logger.error(
                "Could not acquire database connection",
                extra={'operation': 'acquire', 'error': str(exc)},
            )
            raise DatabaseConnectionError(
                f"Could not connect to database '{self.alias}': {exc}",
                operation='acquire',
            ) from exc
        return conn

    def release(self, conn):
        """Hand the connection back to the pool unless a transaction holds it."""
        if self.pooled and not conn.in_atomic_block:
            conn.close()

    def execute(self, sql: str, params: Optional[Iterable[Any]] = None,
                table: Optional[str] = None, operation: str = 'query') -> QueryResult:
        """
        Run one parameterized statement.

        Integrity violations surface as ``ConstraintError``; every other
        database error is logged and re-raised untouched.
        """
        conn = self.acquire()
        try:
            with conn.cursor() as cursor:
                cursor.execute(sql, list(params or ()))
                rows = []
                if cursor.description:
                    columns = [col[0] for col in cursor.description]
                    rows = [dict(zip(columns, row)) for row in cursor.fetchall()]
                return QueryResult(
                    rows=rows,
                    rowcount=cursor.rowcount,
                    lastrowid=getattr(cursor, 'lastrowid', None),
                )
        except IntegrityError as exc:
            self.logger.error(
                f"Constraint violation during {operation}",
                extra={'table': table, 'operation': operation, 'error': str(exc)},
            )
            raise ConstraintError(str(exc), table=table, operation=operation) from exc
        except DatabaseError as exc:
            self.logger.error(
                f"Query execution failed during {operation}",
                extra={'table': table, 'operation': operation, 'error': str(exc)},
            )
            raise
        finally:
            self.release(conn)

    def query(self, sql: str, params: Optional[Iterable[Any]] = None, **context) -> List[Dict[str, Any]]:
        """Run a statement and return its rows as dictionaries."""
        return self.execute(sql, params, **context).rows

    def test_connection(self) -> bool:
        """Liveness probe. Never raises."""
        try:
            self.execute('SELECT 1', operation='test_connection')
        except (DataLayerError, DatabaseError) as exc:
            self.logger.warning(
                "Database connection test failed",
                extra={'operation': 'test_connection', 'error': str(exc)},
            )
            return False
        return True

    @contextmanager
    def atomic(self):
        """
        Hold one connection for a whole transaction.

        Commits when the block exits cleanly, rolls everything back otherwise.
        """
        conn = self.acquire()
        try:
            with transaction.atomic(using=self.alias):
                yield self
        finally:
            self.release(conn)

    def quote(self, name: str) -> str:
        return self.connection.ops.quote_name(name)

    def table_names(self) -> List[str]:
        conn = self.acquire()
        try:
            with conn.cursor() as cursor:
                return conn.introspection.table_names(cursor)
        finally:
            self.release(conn)

    def columns(self, table: str) -> List[str]:
        """Column names of ``table`` as the store reports them."""
        conn = self.acquire()
        try:
            with conn.cursor() as cursor:
                description = conn.introspection.get_table_description(cursor, table)
                return [column.name for column in description]
        finally:
            self.release(conn)

    def primary_key(self, table: str) -> Optional[str]:
        conn = self.acquire()
        try:
            with conn.cursor() as cursor:
                return conn.introspection.get_primary_key_column(cursor, table)
        finally:
            self.release(conn)

    def reset_sequences(self, tables: Iterable[str]) -> int:
        """
        Move auto-increment sequences past ids that were inserted explicitly.

        Only tables backed by an installed model produce statements, and
        backends without sequences produce none. Returns how many ran.
        """
        tables = set(tables)
        models = [model for model in apps.get_models() if model._meta.db_table in tables]
        if not models:
            return 0

        statements = self.connection.ops.sequence_reset_sql(no_style(), models)
        for sql in statements:
            self.execute(sql, operation='reset_sequences')
        return len(statements)

    def close(self):
        """Tear down the alias connection (returns it to the pool when pooled)."""
        self.connection.close()
        self.logger.info("Database connections closed", extra={'operation': 'close'})
