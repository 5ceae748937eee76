from django.core.management.base import BaseCommand

from core.services import DEFAULT_SETTINGS, SettingsStore


class Command(BaseCommand):
    help = 'Seed the default system settings (existing values are overwritten, editability is kept)'

    def handle(self, *args, **options):
        """Upsert default settings."""
        store = SettingsStore()
        count = store.seed_defaults()

        for item in DEFAULT_SETTINGS:
            marker = '' if item['is_editable'] else ' (locked)'
            self.stdout.write(f"   {item['setting_key']} = {item['setting_value']}{marker}")

        self.stdout.write(
            self.style.SUCCESS(f'\nSetup complete: {count} settings seeded')
        )
        self.stdout.write('')
        self.stdout.write('📋 Quick Start Guide:')
        self.stdout.write('1. Go to Django admin: /admin/')
        self.stdout.write('2. Navigate to "System Settings"')
        self.stdout.write('3. Locked settings (church name, email domain) change only by re-seeding')
