"""
Generic insert/update/delete helpers over named tables.

Statements are built from a record's keys. Identifiers are quoted by the
database backend and every value is bound as a parameter. Nothing here
retries: callers decide what a failure means.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .connection import ConnectionManager
from .tables import DEMO_FLAG_COLUMN, DEMO_TABLES


@dataclass
class InsertResult:
    insert_id: Optional[Any]
    affected_rows: int


class TableGateway:
    """Write access to the business tables through a ``ConnectionManager``."""

    def __init__(self, connection_manager: Optional[ConnectionManager] = None):
        self.db = connection_manager or ConnectionManager()

    def insert(self, table: str, record: Dict[str, Any], is_demo: bool = False) -> InsertResult:
        """
        Insert one record.

        For demo-eligible tables the record's ``is_demo_data`` is forced to
        ``is_demo``. Duplicate keys raise ``ConstraintError``.
        """
        data = dict(record)
        if table in DEMO_TABLES:
            data[DEMO_FLAG_COLUMN] = is_demo
        return self.insert_record(table, data)

    def insert_record(self, table: str, record: Dict[str, Any]) -> InsertResult:
        """Insert ``record`` exactly as given, column list taken from its keys."""
        if not record:
            raise ValueError(f"Cannot insert an empty record into {table}")

        columns = ', '.join(self.db.quote(column) for column in record)
        placeholders = ', '.join(['%s'] * len(record))
        sql = f"INSERT INTO {self.db.quote(table)} ({columns}) VALUES ({placeholders})"

        result = self.db.execute(sql, list(record.values()), table=table, operation='insert')
        return InsertResult(
            insert_id=record.get('id', result.lastrowid),
            affected_rows=result.rowcount,
        )

    def exists(self, table: str, column: str, value: Any) -> bool:
        sql = f"SELECT 1 FROM {self.db.quote(table)} WHERE {self.db.quote(column)} = %s"
        return bool(self.db.query(sql, [value], table=table, operation='exists'))

    def update(self, table: str, record: Dict[str, Any], where_clause: str,
               where_params: Iterable[Any] = ()) -> int:
        """
        Update rows matching ``where_clause``.

        SET values are bound before the WHERE parameters. Returns the number
        of affected rows; zero is not an error.
        """
        if not record:
            raise ValueError(f"Cannot update {table} with an empty record")

        set_clause = ', '.join(f"{self.db.quote(column)} = %s" for column in record)
        sql = f"UPDATE {self.db.quote(table)} SET {set_clause} WHERE {where_clause}"
        params = list(record.values()) + list(where_params)

        return self.db.execute(sql, params, table=table, operation='update').rowcount

    def delete(self, table: str, where_clause: str, where_params: Iterable[Any] = ()) -> int:
        """Delete rows matching ``where_clause`` and return how many went."""
        sql = f"DELETE FROM {self.db.quote(table)} WHERE {where_clause}"
        return self.db.execute(sql, list(where_params), table=table, operation='delete').rowcount

    def count(self, table: str, where_clause: Optional[str] = None,
              where_params: Iterable[Any] = ()) -> int:
        sql = f"SELECT COUNT(*) AS total FROM {self.db.quote(table)}"
        if where_clause:
            sql += f" WHERE {where_clause}"
        rows = self.db.query(sql, list(where_params), table=table, operation='count')
        return int(rows[0]['total'])

    def demo_filter(self, is_demo: bool = True, include_null: bool = False):
        """
        WHERE clause and params on the demo flag.

        With ``include_null`` rows whose flag is NULL match as well, which is
        how unflagged rows are treated as production data by backups.
        """
        column = self.db.quote(DEMO_FLAG_COLUMN)
        clause = f"{column} = %s"
        if include_null:
            clause = f"({clause} OR {column} IS NULL)"
        return clause, [is_demo]
