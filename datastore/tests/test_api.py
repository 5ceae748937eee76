"""
Tests for the backup and data administration API.
"""

import json
import tempfile
from pathlib import Path

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase
from rest_framework_simplejwt.tokens import RefreshToken

from datastore.backup import BackupEngine
from datastore.locks import lifecycle_lock
from datastore.storage import BackupStorage
from records.models import Member
from records.tests.factories import (
    DemoMemberFactory,
    MemberFactory,
    RegularUserFactory,
    StaffUserFactory,
)


class DataAdminAPITestCase(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.staff = StaffUserFactory()
        self.tmpdir = tempfile.TemporaryDirectory()
        self.backup_dir = Path(self.tmpdir.name)
        settings_override = override_settings(BACKUP_DIR=self.backup_dir)
        settings_override.enable()
        self.addCleanup(settings_override.disable)
        self.addCleanup(self.tmpdir.cleanup)

    def authenticate(self, user=None):
        """Helper to authenticate requests with a JWT access token."""
        refresh = RefreshToken.for_user(user or self.staff)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')


class PermissionTest(DataAdminAPITestCase):

    def test_unauthenticated_requests_rejected(self):
        response = self.client.get(reverse('datastore:backup-files'))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response['Content-Type'], 'application/problem+json')

    def test_non_staff_rejected(self):
        self.authenticate(RegularUserFactory())

        response = self.client.post(reverse('datastore:clean-demo-data'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class CleanDemoDataAPITest(DataAdminAPITestCase):

    def test_clean_demo_data(self):
        self.authenticate()
        DemoMemberFactory.create_batch(2)
        MemberFactory(id='MEM_PROD')

        response = self.client.post(reverse('datastore:clean-demo-data'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 2)
        self.assertEqual(response.data['deleted']['members'], 2)
        self.assertEqual(list(Member.objects.values_list('pk', flat=True)), ['MEM_PROD'])

    def test_conflict_while_lock_held(self):
        self.authenticate()

        with lifecycle_lock('restore'):
            response = self.client.post(reverse('datastore:clean-demo-data'))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['title'], 'Operation In Progress')


class ExportDataAPITest(DataAdminAPITestCase):

    def test_export_excludes_demo_by_default(self):
        self.authenticate()
        MemberFactory(id='MEM_PROD')
        DemoMemberFactory(id='MEM_DEMO')

        response = self.client.get(reverse('datastore:export-data'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('attachment', response['Content-Disposition'])
        document = json.loads(response.content)
        self.assertEqual([m['id'] for m in document['data']['members']], ['MEM_PROD'])

    def test_export_with_demo(self):
        self.authenticate()
        DemoMemberFactory(id='MEM_DEMO')

        response = self.client.get(reverse('datastore:export-data'), {'include_demo': 'true'})

        document = json.loads(response.content)
        self.assertTrue(document['include_demo'])
        self.assertEqual(len(document['data']['members']), 1)


class BackupFilesAPITest(DataAdminAPITestCase):

    def test_create_list_download_delete(self):
        self.authenticate()
        MemberFactory(id='MEM_PROD')

        created = self.client.post(reverse('datastore:backup-create'), {'include_demo': False}, format='json')
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        name = created.data['file']
        self.assertEqual(created.data['tables']['members'], 1)

        listed = self.client.get(reverse('datastore:backup-files'))
        self.assertEqual([item['name'] for item in listed.data], [name])

        downloaded = self.client.get(reverse('datastore:backup-download', args=[name]))
        self.assertEqual(downloaded.status_code, status.HTTP_200_OK)
        document = json.loads(b''.join(downloaded.streaming_content))
        self.assertEqual(document['data']['members'][0]['id'], 'MEM_PROD')

        deleted = self.client.delete(reverse('datastore:backup-delete', args=[name]))
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertFalse((self.backup_dir / name).exists())

    def test_create_with_filename(self):
        self.authenticate()

        response = self.client.post(reverse('datastore:backup-create'),
                                    {'filename': 'before-upgrade.json'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue((self.backup_dir / 'before-upgrade.json').is_file())

    def test_create_rejects_path_in_filename(self):
        self.authenticate()

        response = self.client.post(reverse('datastore:backup-create'),
                                    {'filename': '../escape.json'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_download_missing_file(self):
        self.authenticate()

        response = self.client.get(reverse('datastore:backup-download', args=['missing.json']))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_missing_file(self):
        self.authenticate()

        response = self.client.delete(reverse('datastore:backup-delete', args=['missing.json']))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class RestoreAPITest(DataAdminAPITestCase):

    def test_restore_from_stored_file(self):
        self.authenticate()
        DemoMemberFactory(id='MEM_DEMO')
        BackupStorage().save(BackupEngine().backup_data(include_demo=True), 'full.json')
        Member.objects.all().delete()

        response = self.client.post(reverse('datastore:backup-restore'), {'filename': 'full.json'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tables']['members']['inserted'], 1)
        self.assertTrue(Member.objects.filter(pk='MEM_DEMO').exists())

    def test_restore_inline_document(self):
        self.authenticate()

        response = self.client.post(reverse('datastore:backup-restore'), {'backup': {
            'timestamp': '2025-01-15T02:00:00+00:00',
            'data': {'members': [{'id': 'MEM_NEW', 'member_number': 'TM900', 'name': 'New'}]},
        }}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['inserted'], 1)
        self.assertTrue(Member.objects.filter(pk='MEM_NEW').exists())

    def test_restore_invalid_document(self):
        self.authenticate()

        response = self.client.post(reverse('datastore:backup-restore'),
                                    {'backup': {'data': {}}}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['title'], 'Invalid Backup Format')

    def test_restore_schema_mismatch(self):
        self.authenticate()
        DemoMemberFactory(id='MEM_DEMO')

        response = self.client.post(reverse('datastore:backup-restore'), {'backup': {
            'timestamp': '2025-01-15T02:00:00+00:00',
            'data': {'members': [{'id': 'MEM_NEW', 'favourite_hymn': 'Amazing Grace'}]},
        }}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['table'], 'members')
        self.assertTrue(Member.objects.filter(pk='MEM_DEMO').exists())

    def test_restore_requires_exactly_one_source(self):
        self.authenticate()

        response = self.client.post(reverse('datastore:backup-restore'), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_restore_missing_file(self):
        self.authenticate()

        response = self.client.post(reverse('datastore:backup-restore'),
                                    {'filename': 'missing.json'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
