"""
Tests for the settings store.
"""

from django.core.cache import cache
from django.test import TestCase

from core.exceptions import SettingNotEditableError
from core.models import SystemSetting
from core.services import DEFAULT_SETTINGS, SettingsStore
from records.tests.factories import SystemSettingFactory


class SettingsStoreTest(TestCase):
    """Test reads, guarded updates and seeding."""

    def setUp(self):
        self.store = SettingsStore()
        SystemSettingFactory(setting_key='currency', setting_value='KSH', is_editable=True)
        SystemSettingFactory(setting_key='church_name', setting_value='TSOAM CHURCH INTERNATIONAL',
                             is_editable=False)
        self.store.clear_cache()

    def test_get_settings_returns_value_and_editability(self):
        settings_map = self.store.get_settings()

        self.assertEqual(settings_map['currency'], {'value': 'KSH', 'editable': True})
        self.assertEqual(settings_map['church_name'],
                         {'value': 'TSOAM CHURCH INTERNATIONAL', 'editable': False})

    def test_get_settings_is_cached(self):
        self.store.get_settings()
        SystemSetting.objects.filter(setting_key='currency').update(setting_value='USD')

        self.assertEqual(self.store.get_setting('currency'), 'KSH')

    def test_update_editable_setting(self):
        self.assertTrue(self.store.update_setting('currency', 'KES'))

        self.assertEqual(SystemSetting.objects.get(setting_key='currency').setting_value, 'KES')
        self.assertEqual(self.store.get_setting('currency'), 'KES')

    def test_update_stores_text(self):
        self.store.update_setting('currency', 42)

        self.assertEqual(self.store.get_setting('currency'), '42')

    def test_locked_setting_is_unchanged(self):
        with self.assertRaises(SettingNotEditableError) as ctx:
            self.store.update_setting('church_name', 'Another Church')

        self.assertEqual(ctx.exception.key, 'church_name')
        self.assertEqual(SystemSetting.objects.get(setting_key='church_name').setting_value,
                         'TSOAM CHURCH INTERNATIONAL')

    def test_missing_setting_cannot_be_updated(self):
        with self.assertRaises(SettingNotEditableError):
            self.store.update_setting('does_not_exist', 'x')

        self.assertFalse(SystemSetting.objects.filter(setting_key='does_not_exist').exists())

    def test_update_invalidates_cache(self):
        self.store.get_settings()

        self.store.update_setting('currency', 'KES')

        self.assertIsNone(cache.get(SettingsStore.CACHE_KEY))

    def test_get_setting_default(self):
        self.assertEqual(self.store.get_setting('missing', 'fallback'), 'fallback')

    def test_get_bool(self):
        SystemSettingFactory(setting_key='auto_backup', setting_value='true')
        SystemSettingFactory(setting_key='network_sharing', setting_value='false')

        self.assertTrue(self.store.get_bool('auto_backup'))
        self.assertFalse(self.store.get_bool('network_sharing', default=True))
        self.assertTrue(self.store.get_bool('missing', default=True))


class SeedDefaultsTest(TestCase):
    """Test the settings upsert."""

    def setUp(self):
        self.store = SettingsStore()

    def test_seeds_every_default(self):
        count = self.store.seed_defaults()

        self.assertEqual(count, len(DEFAULT_SETTINGS))
        self.assertEqual(SystemSetting.objects.count(), len(DEFAULT_SETTINGS))
        self.assertFalse(SystemSetting.objects.get(setting_key='church_name').is_editable)
        self.assertFalse(SystemSetting.objects.get(setting_key='email_domain').is_editable)
        self.assertTrue(SystemSetting.objects.get(setting_key='smtp_port').is_editable)

    def test_reseeding_overwrites_value_but_keeps_editable_flag(self):
        SystemSettingFactory(setting_key='currency', setting_value='USD', is_editable=False)

        self.store.seed_defaults()

        setting = SystemSetting.objects.get(setting_key='currency')
        self.assertEqual(setting.setting_value, 'KSH')
        self.assertFalse(setting.is_editable)
        self.assertEqual(SystemSetting.objects.filter(setting_key='currency').count(), 1)

    def test_seeding_is_repeatable(self):
        self.store.seed_defaults()
        self.store.seed_defaults()

        self.assertEqual(SystemSetting.objects.count(), len(DEFAULT_SETTINGS))

    def test_custom_defaults(self):
        self.store.seed_defaults([
            {'setting_key': 'theme', 'setting_value': 'dark', 'is_editable': True},
        ])

        self.assertEqual(self.store.get_setting('theme'), 'dark')
