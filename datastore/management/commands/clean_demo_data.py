"""
Django management command to remove demo data from all demo tables.
"""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import DataLayerError
from datastore.cleaner import DemoDataCleaner
from datastore.connection import ConnectionManager


class Command(BaseCommand):
    help = 'Delete every row flagged as demo data'

    def handle(self, *args, **options):
        db = ConnectionManager()
        if not db.test_connection():
            raise CommandError('Database connection failed')

        cleaner = DemoDataCleaner(db)
        before = cleaner.demo_counts()
        total = sum(before.values())

        if total == 0:
            self.stdout.write('ℹ️  No demo data found to clean')
            return

        self.stdout.write('📊 Demo Data Summary:')
        for table, count in before.items():
            if count:
                self.stdout.write(f'   📋 {table}: {count} demo records')
        self.stdout.write(f'   📊 Total: {total} demo records')

        self.stdout.write('🔄 Cleaning demo data...')
        try:
            cleaner.clean_demo_data()
        except DataLayerError as exc:
            raise CommandError(f'Cleanup failed, no data was removed: {exc}') from exc

        remaining = sum(cleaner.demo_counts().values())
        if remaining:
            raise CommandError(f'{remaining} demo records remain after cleanup')

        self.stdout.write(self.style.SUCCESS(f'✅ Removed {total} demo records'))
