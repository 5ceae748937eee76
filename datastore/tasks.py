"""
Celery tasks for the data store.

Background tasks for:
- The nightly scheduled backup
"""

from celery import shared_task
from django.conf import settings
import logging

from core.exceptions import DataLayerError, OperationInProgressError

logger = logging.getLogger(__name__)


@shared_task
def run_scheduled_backup(include_demo=False):
    """
    Write a backup file to BACKUP_DIR.

    Runs daily at 2am via Celery Beat. Does nothing when the ``auto_backup``
    setting is off. Failures are logged and re-raised; the task is never
    retried, the next scheduled run is the retry.

    Returns:
        dict: Outcome with the written file and per-table counts
    """
    from core.services import SettingsStore
    from .backup import BackupEngine
    from .storage import BackupStorage

    if not SettingsStore().get_bool('auto_backup', default=True):
        logger.info("Scheduled backup skipped: auto_backup is disabled")
        return {'status': 'skipped', 'reason': 'auto_backup disabled'}

    try:
        snapshot = BackupEngine().backup_data(include_demo=include_demo)
        path = BackupStorage(settings.BACKUP_DIR).save(snapshot)
    except OperationInProgressError as exc:
        logger.warning(f"Scheduled backup skipped: {exc}")
        return {'status': 'skipped', 'reason': str(exc)}
    except DataLayerError as exc:
        logger.error(f"Scheduled backup failed: {exc}", exc_info=True)
        raise

    logger.info(
        f"Scheduled backup completed: {snapshot.total_records} records written to {path}"
    )
    return {
        'status': 'success',
        'file': path.name,
        'total_records': snapshot.total_records,
        'tables': snapshot.record_counts(),
    }
