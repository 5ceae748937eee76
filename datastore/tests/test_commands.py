"""
Tests for the data store management commands.
"""

import json
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import patch

from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings

from core.models import SystemSetting
from core.services import DEFAULT_SETTINGS
from datastore.connection import ConnectionManager
from datastore.seed import DEFAULT_ADMIN_ID
from records.models import ChurchUser, FinancialTransaction, InventoryItem, Member
from records.tests.factories import DemoMemberFactory, MemberFactory


class CommandTestCase(TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.backup_dir = Path(self.tmpdir.name)
        settings_override = override_settings(BACKUP_DIR=self.backup_dir)
        settings_override.enable()
        self.addCleanup(settings_override.disable)
        self.addCleanup(self.tmpdir.cleanup)

    def call(self, *args, **kwargs):
        out = StringIO()
        call_command(*args, stdout=out, **kwargs)
        return out.getvalue()


class BackupDataCommandTest(CommandTestCase):

    def test_backup_written_to_backup_dir(self):
        MemberFactory(id='MEM_PROD')
        DemoMemberFactory(id='MEM_DEMO')

        output = self.call('backup_data', '--output', 'manual.json')

        document = json.loads((self.backup_dir / 'manual.json').read_text(encoding='utf-8'))
        self.assertEqual([m['id'] for m in document['data']['members']], ['MEM_PROD'])
        self.assertIn('Backup completed successfully', output)
        self.assertIn('members: 1 records', output)

    def test_include_demo(self):
        DemoMemberFactory(id='MEM_DEMO')

        self.call('backup_data', '--include-demo', '--output', 'demo.json')

        document = json.loads((self.backup_dir / 'demo.json').read_text(encoding='utf-8'))
        self.assertTrue(document['include_demo'])
        self.assertEqual(len(document['data']['members']), 1)


class RestoreDataCommandTest(CommandTestCase):

    def test_restore_from_backup_file(self):
        DemoMemberFactory(id='MEM_DEMO')
        self.call('backup_data', '--include-demo', '--output', 'full.json')
        Member.objects.all().delete()

        output = self.call('restore_data', '--file', 'full.json')

        self.assertTrue(Member.objects.filter(pk='MEM_DEMO').exists())
        self.assertIn('Restore completed', output)

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            self.call('restore_data', '--file', 'missing.json')

    def test_invalid_format(self):
        (self.backup_dir / 'bad.json').write_text('{"data": {}}', encoding='utf-8')

        with self.assertRaises(CommandError) as ctx:
            self.call('restore_data', '--file', 'bad.json')

        self.assertIn('missing timestamp', str(ctx.exception))

    def test_unreadable_file(self):
        (self.backup_dir / 'folder.json').mkdir()

        with self.assertRaises(CommandError) as ctx:
            self.call('restore_data', '--file', 'folder.json')

        self.assertIn('cannot be read', str(ctx.exception))

    def test_schema_mismatch_changes_nothing(self):
        DemoMemberFactory(id='MEM_DEMO')
        (self.backup_dir / 'old.json').write_text(json.dumps({
            'timestamp': '2025-01-15T02:00:00',
            'data': {'members': [{'id': 'MEM_X', 'legacy_column': 1}]},
        }), encoding='utf-8')

        with self.assertRaises(CommandError):
            self.call('restore_data', '--file', 'old.json')

        self.assertTrue(Member.objects.filter(pk='MEM_DEMO').exists())


class CleanDemoDataCommandTest(CommandTestCase):

    def test_cleans_demo_rows(self):
        DemoMemberFactory.create_batch(2)
        MemberFactory(id='MEM_PROD')

        output = self.call('clean_demo_data')

        self.assertIn('Removed 2 demo records', output)
        self.assertEqual(list(Member.objects.values_list('pk', flat=True)), ['MEM_PROD'])

    def test_nothing_to_clean(self):
        output = self.call('clean_demo_data')

        self.assertIn('No demo data found', output)


class InitDatabaseCommandTest(CommandTestCase):

    def test_initializes_empty_database(self):
        output = self.call('init_database')

        self.assertEqual(SystemSetting.objects.count(), len(DEFAULT_SETTINGS))
        admin = ChurchUser.objects.get(pk=DEFAULT_ADMIN_ID)
        self.assertFalse(admin.is_demo_data)
        self.assertTrue(admin.password_hash.startswith('md5$'))
        self.assertEqual(Member.objects.filter(is_demo_data=True).count(), 2)
        self.assertEqual(FinancialTransaction.objects.filter(is_demo_data=True).count(), 2)
        self.assertEqual(InventoryItem.objects.filter(is_demo_data=True).count(), 2)
        self.assertIn('Default admin user created', output)

    def test_second_run_reports_existing_admin(self):
        self.call('init_database')

        output = self.call('init_database')

        self.assertIn('Default admin user already exists', output)
        self.assertEqual(ChurchUser.objects.count(), 1)
        self.assertEqual(Member.objects.count(), 2)

    def test_skip_sample_data(self):
        self.call('init_database', '--skip-sample-data')

        self.assertFalse(Member.objects.exists())


class TestConnectionCommandTest(CommandTestCase):

    def test_reports_uninitialized_database(self):
        output = self.call('test_connection')

        self.assertIn('Database connection successful', output)
        self.assertIn('not initialized', output)

    def test_reports_initialized_database(self):
        self.call('setup_default_settings')

        output = self.call('test_connection')

        self.assertIn('Database is properly initialized', output)

    def test_missing_schema_suggests_creating_tables(self):
        with patch.object(ConnectionManager, 'table_names', return_value=[]):
            output = self.call('test_connection')

        self.assertIn('Database schema is not initialized', output)
        self.assertIn('makemigrations core records', output)
