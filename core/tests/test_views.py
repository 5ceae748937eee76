"""
Tests for the health and settings API.
"""

from unittest.mock import patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase
from rest_framework_simplejwt.tokens import RefreshToken

from core.models import SystemSetting
from records.tests.factories import RegularUserFactory, StaffUserFactory, SystemSettingFactory


class HealthCheckTest(APITestCase):

    def test_healthy(self):
        response = self.client.get(reverse('health-check'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'healthy')
        self.assertEqual(response.data['database'], 'connected')

    def test_unhealthy_when_database_unreachable(self):
        with patch('datastore.connection.ConnectionManager.test_connection', return_value=False):
            response = self.client.get(reverse('health-check'))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['database'], 'disconnected')


class SettingsAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.staff = StaffUserFactory()
        SystemSettingFactory(setting_key='currency', setting_value='KSH', is_editable=True)
        SystemSettingFactory(setting_key='church_name', setting_value='TSOAM CHURCH INTERNATIONAL',
                             is_editable=False)

    def authenticate(self, user=None):
        """Helper to authenticate requests."""
        refresh = RefreshToken.for_user(user or self.staff)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

    def test_list_settings(self):
        self.authenticate(RegularUserFactory())

        response = self.client.get(reverse('settings-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['settings']['currency'], {'value': 'KSH', 'editable': True})
        self.assertFalse(response.data['settings']['church_name']['editable'])

    def test_list_requires_authentication(self):
        response = self.client.get(reverse('settings-list'))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_setting(self):
        self.authenticate()

        response = self.client.put(reverse('setting-update', args=['currency']),
                                   {'value': 'KES'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'key': 'currency', 'value': 'KES'})
        self.assertEqual(SystemSetting.objects.get(setting_key='currency').setting_value, 'KES')

    def test_boolean_values_stored_as_text(self):
        SystemSettingFactory(setting_key='auto_backup', setting_value='true')
        self.authenticate()

        self.client.put(reverse('setting-update', args=['auto_backup']), {'value': False}, format='json')

        self.assertEqual(SystemSetting.objects.get(setting_key='auto_backup').setting_value, 'false')

    def test_locked_setting_forbidden(self):
        self.authenticate()

        response = self.client.put(reverse('setting-update', args=['church_name']),
                                   {'value': 'Renamed'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['title'], 'Setting Not Editable')
        self.assertEqual(SystemSetting.objects.get(setting_key='church_name').setting_value,
                         'TSOAM CHURCH INTERNATIONAL')

    def test_missing_setting_not_found(self):
        self.authenticate()

        response = self.client.put(reverse('setting-update', args=['nope']), {'value': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_staff_cannot_update(self):
        self.authenticate(RegularUserFactory())

        response = self.client.put(reverse('setting-update', args=['currency']),
                                   {'value': 'KES'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_value_required(self):
        self.authenticate()

        response = self.client.put(reverse('setting-update', args=['currency']), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['invalid_params'][0]['name'], 'value')
