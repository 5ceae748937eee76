"""
Django management command to back up the church database to a JSON file.

Usage:
    python manage.py backup_data
    python manage.py backup_data --include-demo --output before-upgrade.json

Relative output names are written into BACKUP_DIR.
"""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import DataLayerError
from datastore.backup import BackupEngine
from datastore.connection import ConnectionManager
from datastore.storage import BackupStorage


class Command(BaseCommand):
    help = 'Back up all church data tables to a JSON snapshot file'

    def add_arguments(self, parser):
        parser.add_argument(
            '--include-demo',
            action='store_true',
            help='Include rows flagged as demo data',
        )
        parser.add_argument(
            '--output',
            type=str,
            help='Backup file name or path (default: timestamped file in BACKUP_DIR)',
        )

    def handle(self, *args, **options):
        include_demo = options['include_demo']
        db = ConnectionManager()

        self.stdout.write('🔄 Connecting to database...')
        if not db.test_connection():
            raise CommandError('Database connection failed')

        self.stdout.write(
            f"🔄 Creating backup ({'including' if include_demo else 'excluding'} demo data)...")
        try:
            snapshot = BackupEngine(db).backup_data(include_demo=include_demo)
            path = BackupStorage().save(snapshot, options.get('output'))
        except DataLayerError as exc:
            raise CommandError(f'Backup failed: {exc}') from exc

        self.stdout.write(self.style.SUCCESS('✅ Backup completed successfully!'))
        self.stdout.write(f'📁 File: {path}')
        self.stdout.write(f'📏 Size: {path.stat().st_size / 1024:.2f} KB')
        self.stdout.write('')
        self.stdout.write('📊 Backup Summary:')
        for table, count in snapshot.record_counts().items():
            self.stdout.write(f'   📋 {table}: {count} records')
        self.stdout.write(f'   📊 Total: {snapshot.total_records} records')
