"""
Transactional restore of a snapshot document.

The whole restore runs in one transaction: either every delete and insert
lands, or the store is left exactly as it was.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from django.db import DatabaseError

from core.exceptions import DataLayerError, SchemaMismatchError
from core.logging.structured import get_contextual_logger, log_business_event

from .connection import ConnectionManager
from .gateway import TableGateway
from .locks import lifecycle_lock
from .snapshot import Snapshot
from .tables import BACKUP_TABLES, RESTORE_KEYS, SETTINGS_TABLE, has_demo_flag


@dataclass
class TableRestoreResult:
    deleted: int = 0
    inserted: int = 0
    skipped: int = 0


@dataclass
class RestoreResult:
    tables: Dict[str, TableRestoreResult] = field(default_factory=dict)

    def for_table(self, table) -> TableRestoreResult:
        return self.tables.setdefault(table, TableRestoreResult())

    @property
    def inserted(self) -> int:
        return sum(t.inserted for t in self.tables.values())

    @property
    def deleted(self) -> int:
        return sum(t.deleted for t in self.tables.values())

    @property
    def skipped(self) -> int:
        return sum(t.skipped for t in self.tables.values())


class RestoreEngine:
    """
    Loads a ``Snapshot`` back into the store.

    Existing rows flagged as demo data (or unflagged) are replaced; rows
    explicitly marked as production are kept, and snapshot records whose
    primary key is already present are skipped.
    """

    def __init__(self, connection_manager=None):
        self.db = connection_manager or ConnectionManager()
        self.gateway = TableGateway(self.db)
        self.logger = get_contextual_logger('datastore.restore', operation='restore')

    def validate(self, snapshot: Snapshot) -> Dict[str, Optional[str]]:
        """
        Check every snapshot table and record against the live schema.

        Runs before anything is deleted. Returns, per table, the column used
        to recognise rows that already exist.

        Raises:
            SchemaMismatchError: unknown table, or a record with columns the
                table does not have.
        """
        existing_tables = set(self.db.table_names())
        primary_keys = {}

        for table, records in snapshot.data.items():
            if table not in BACKUP_TABLES or table not in existing_tables:
                raise SchemaMismatchError(
                    f"Backup contains unknown table '{table}'",
                    table=table, operation='restore',
                )

            columns = set(self.db.columns(table))
            for index, record in enumerate(records):
                unknown = set(record) - columns
                if unknown:
                    raise SchemaMismatchError(
                        f"Record {index} of '{table}' has columns the table does not accept: "
                        f"{', '.join(sorted(unknown))}",
                        table=table, operation='restore',
                    )
                if not record:
                    raise SchemaMismatchError(
                        f"Record {index} of '{table}' is empty",
                        table=table, operation='restore',
                    )

            primary_keys[table] = RESTORE_KEYS.get(table) or self.db.primary_key(table)

        return primary_keys

    def restore_data(self, snapshot: Snapshot) -> RestoreResult:
        """
        Replace non-production data with the snapshot's contents.

        An empty snapshot is a successful no-op.
        """
        with lifecycle_lock('restore'):
            primary_keys = self.validate(snapshot)
            result = RestoreResult()

            try:
                with self.db.atomic():
                    for table in snapshot.data:
                        if table == SETTINGS_TABLE or not has_demo_flag(table):
                            continue
                        clause, params = self.gateway.demo_filter(is_demo=True, include_null=True)
                        result.for_table(table).deleted = self.gateway.delete(table, clause, params)

                    for table, records in snapshot.data.items():
                        table_result = result.for_table(table)
                        primary_key = primary_keys.get(table)
                        for record in records:
                            if (primary_key and primary_key in record
                                    and self.gateway.exists(table, primary_key, record[primary_key])):
                                table_result.skipped += 1
                                continue
                            self.gateway.insert_record(table, record)
                            table_result.inserted += 1

                    # Restored rows keep their ids; sequences must not hand them out again
                    self.db.reset_sequences([
                        table for table, table_result in result.tables.items() if table_result.inserted
                    ])
            except (DataLayerError, DatabaseError) as exc:
                self.logger.error(
                    "Restore failed, all changes rolled back",
                    extra={'table': getattr(exc, 'table', None), 'error': str(exc)},
                )
                raise

        if SETTINGS_TABLE in snapshot.data:
            from core.services import SettingsStore
            SettingsStore(self.gateway).clear_cache()

        log_business_event('data_restored', details={
            'backup_timestamp': snapshot.timestamp,
            'inserted': result.inserted,
            'deleted': result.deleted,
            'skipped': result.skipped,
        })
        return result
