"""
Celery configuration for TSOAM Church.

This module configures Celery for background task processing including
the scheduled database backup.
"""

import os
from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tsoam_church.settings')

# Create Celery app
app = Celery('tsoam_church')

# Load config from Django settings with CELERY namespace
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()


# Celery Beat schedule for periodic tasks
app.conf.beat_schedule = {
    # Daily backup (2am, matches the backup_time default setting).
    # The task itself checks the auto_backup setting.
    'scheduled-database-backup': {
        'task': 'datastore.tasks.run_scheduled_backup',
        'schedule': crontab(hour=2, minute=0),
        'options': {'expires': 3600},
    },
}

# Celery configuration
app.conf.update(
    # Task settings
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='Africa/Nairobi',
    enable_utc=True,

    # Task execution settings
    task_track_started=True,
    task_time_limit=30 * 60,  # 30 minutes hard limit
    task_soft_time_limit=25 * 60,  # 25 minutes soft limit

    # Result backend settings
    result_expires=3600,  # Results expire after 1 hour

    # Worker settings
    worker_prefetch_multiplier=1,
    task_acks_late=True,  # Acknowledge tasks after completion
)
