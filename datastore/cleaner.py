"""
Bulk removal of demo data.
"""

from typing import Dict

from django.db import DatabaseError

from core.exceptions import DataLayerError
from core.logging.structured import get_contextual_logger, log_business_event

from .connection import ConnectionManager
from .gateway import TableGateway
from .locks import lifecycle_lock
from .tables import DEMO_TABLES


class DemoDataCleaner:
    """
    Deletes rows flagged ``is_demo_data = true`` from the demo tables.

    Rows whose flag is NULL are kept. All tables are cleaned in one
    transaction, so a failure leaves every table untouched.
    """

    def __init__(self, connection_manager=None):
        self.db = connection_manager or ConnectionManager()
        self.gateway = TableGateway(self.db)
        self.logger = get_contextual_logger('datastore.cleaner', operation='clean_demo_data')

    def demo_counts(self) -> Dict[str, int]:
        """Number of demo rows currently in each demo table."""
        clause, params = self.gateway.demo_filter(is_demo=True)
        return {table: self.gateway.count(table, clause, params) for table in DEMO_TABLES}

    def clean_demo_data(self) -> Dict[str, int]:
        """Delete all demo rows and return how many went per table."""
        clause, params = self.gateway.demo_filter(is_demo=True)
        deleted = {}

        with lifecycle_lock('clean_demo_data'):
            try:
                with self.db.atomic():
                    for table in DEMO_TABLES:
                        deleted[table] = self.gateway.delete(table, clause, params)
            except (DataLayerError, DatabaseError) as exc:
                self.logger.error(
                    "Demo data cleanup failed, no table was changed",
                    extra={'table': getattr(exc, 'table', None), 'error': str(exc)},
                )
                raise

        log_business_event('demo_data_cleaned', details={
            'deleted_total': sum(deleted.values()),
        })
        return deleted
