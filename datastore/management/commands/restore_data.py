"""
Django management command to restore church data from a backup file.

Usage:
    python manage.py restore_data --file tsoam-backup-2025-01-15T02-00-00-000000.json

Relative names are looked up in BACKUP_DIR; absolute paths are used as given.
The restore runs in a single transaction.
"""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import DataLayerError, InvalidBackupFormatError
from datastore.connection import ConnectionManager
from datastore.restore import RestoreEngine
from datastore.storage import BackupStorage


class Command(BaseCommand):
    help = 'Restore church data from a JSON backup file'

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            required=True,
            help='Backup file name (in BACKUP_DIR) or absolute path',
        )

    def handle(self, *args, **options):
        storage = BackupStorage()
        path = storage.resolve(options['file'])

        self.stdout.write(f'📁 Backup file: {path.name}')
        self.stdout.write(f'📍 Location: {path}')

        try:
            snapshot = storage.load(path)
        except InvalidBackupFormatError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS('✅ Backup file validated!'))
        self.stdout.write('')
        self.stdout.write('📊 Backup Information:')
        self.stdout.write(f'   🏢 Church: {snapshot.church}')
        self.stdout.write(f'   📅 Created: {snapshot.timestamp}')
        self.stdout.write(f'   🔖 Version: {snapshot.version}')
        self.stdout.write(
            f"   🧪 Demo Data: {'Included' if snapshot.include_demo else 'Excluded'}")
        self.stdout.write(f'   📋 Total Records: {snapshot.total_records}')
        for table, count in snapshot.record_counts().items():
            self.stdout.write(f'   📋 {table}: {count} records')

        db = ConnectionManager()
        if not db.test_connection():
            raise CommandError('Database connection failed')

        self.stdout.write('')
        self.stdout.write(self.style.WARNING('⚠️  Demo and unflagged rows will be replaced'))
        self.stdout.write('🔄 Starting data restoration...')
        try:
            result = RestoreEngine(db).restore_data(snapshot)
        except DataLayerError as exc:
            raise CommandError(f'Restore failed, no changes were made: {exc}') from exc

        self.stdout.write(self.style.SUCCESS(
            f'✅ Restore completed: {result.inserted} inserted, '
            f'{result.deleted} deleted, {result.skipped} already present'
        ))
