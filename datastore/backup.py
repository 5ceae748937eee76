"""
Full-database backup to a snapshot document.
"""

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from core.exceptions import DataLayerError
from core.logging.structured import get_contextual_logger, log_business_event

from .connection import ConnectionManager
from .gateway import TableGateway
from .locks import lifecycle_lock
from .snapshot import BACKUP_VERSION, Snapshot
from .tables import BACKUP_TABLES, has_demo_flag


class BackupEngine:
    """
    Captures every backup table into a ``Snapshot``.

    Rows come back in the store's natural order; no ORDER BY is applied.
    """

    def __init__(self, connection_manager=None, church_name=None):
        self.db = connection_manager or ConnectionManager()
        self.gateway = TableGateway(self.db)
        self.church_name = church_name or getattr(settings, 'CHURCH_NAME', 'TSOAM CHURCH INTERNATIONAL')
        self.logger = get_contextual_logger('datastore.backup', operation='backup')

    def backup_data(self, include_demo=False) -> Snapshot:
        """
        Snapshot all backup tables.

        Demo rows are left out unless ``include_demo``; rows whose flag is
        NULL count as production and are always kept. ``system_settings`` is
        captured unfiltered. A failing table aborts the whole backup.
        """
        with lifecycle_lock('backup'):
            data = {}
            for table in BACKUP_TABLES:
                data[table] = self._read_table(table, include_demo)

        snapshot = Snapshot(
            timestamp=timezone.now().isoformat(),
            version=BACKUP_VERSION,
            church=self.church_name,
            include_demo=include_demo,
            data=data,
        )
        log_business_event('backup_created', details={
            'include_demo': include_demo,
            'total_records': snapshot.total_records,
        })
        return snapshot

    def _read_table(self, table, include_demo):
        sql = f"SELECT * FROM {self.db.quote(table)}"
        params = []
        if not include_demo and has_demo_flag(table):
            clause, params = self.gateway.demo_filter(is_demo=False, include_null=True)
            sql += f" WHERE {clause}"

        try:
            return self.db.query(sql, params, table=table, operation='backup')
        except (DataLayerError, DatabaseError) as exc:
            self.logger.error(
                f"Backup failed on table {table}",
                extra={'table': table, 'error': str(exc)},
            )
            raise
