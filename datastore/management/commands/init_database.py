"""
Django management command to prepare a fresh church database.

Seeds the default settings, creates the default administrator account and
loads a small set of demo records.

Usage:
    python manage.py init_database
    python manage.py init_database --skip-sample-data

The administrator password comes from DEFAULT_ADMIN_PASSWORD.
"""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import DataLayerError
from core.services import SettingsStore
from datastore.connection import ConnectionManager
from datastore.gateway import TableGateway
from datastore.seed import DEFAULT_ADMIN_EMAIL, create_default_admin, insert_sample_data


class Command(BaseCommand):
    help = 'Seed default settings, the default admin account and sample demo data'

    def add_arguments(self, parser):
        parser.add_argument(
            '--skip-sample-data',
            action='store_true',
            help='Do not insert the demo records',
        )

    def handle(self, *args, **options):
        db = ConnectionManager()
        self.stdout.write('🔄 Testing database connection...')
        if not db.test_connection():
            raise CommandError('Database connection failed, check the DB_* settings')

        gateway = TableGateway(db)
        try:
            count = SettingsStore(gateway).seed_defaults()
            self.stdout.write(self.style.SUCCESS(f'✅ {count} default settings seeded'))

            if create_default_admin(gateway):
                self.stdout.write(self.style.SUCCESS('✅ Default admin user created!'))
                self.stdout.write(f'📧 Email: {DEFAULT_ADMIN_EMAIL}')
                self.stdout.write(self.style.WARNING('⚠️  Please change the password after first login!'))
            else:
                self.stdout.write('ℹ️  Default admin user already exists')

            if not options['skip_sample_data']:
                inserted = insert_sample_data(gateway)
                self.stdout.write(self.style.SUCCESS(
                    f'✅ Sample demo data inserted: {sum(inserted.values())} records'))
        except DataLayerError as exc:
            raise CommandError(f'Database initialization failed: {exc}') from exc

        self.stdout.write(self.style.SUCCESS('🎉 Database initialization completed successfully!'))
