"""
System settings service.

Settings are read as a flat ``{key: {"value", "editable"}}`` map and changed
one key at a time. Locked settings (``is_editable = false``) are only ever
written by seeding.
"""

from typing import Any, Dict, List, Optional

from django.core.cache import cache
from django.utils import timezone

from core.exceptions import SettingNotEditableError
from core.logging.structured import get_contextual_logger
from core.models import SystemSetting


DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {'setting_key': 'church_name', 'setting_value': 'TSOAM CHURCH INTERNATIONAL',
     'is_editable': False, 'description': 'Official church name printed on reports and backups.'},
    {'setting_key': 'timezone', 'setting_value': 'Africa/Nairobi', 'is_editable': True,
     'description': 'Local timezone used for dates.'},
    {'setting_key': 'currency', 'setting_value': 'KSH', 'is_editable': True,
     'description': 'Currency for financial records.'},
    {'setting_key': 'date_format', 'setting_value': 'DD/MM/YYYY', 'is_editable': True,
     'description': 'Display format for dates.'},
    {'setting_key': 'email_domain', 'setting_value': 'tsoam.com', 'is_editable': False,
     'description': 'Domain used for staff email accounts.'},
    {'setting_key': 'auto_backup', 'setting_value': 'true', 'is_editable': True,
     'description': 'Run the scheduled backup.'},
    {'setting_key': 'backup_frequency', 'setting_value': 'daily', 'is_editable': True,
     'description': 'How often the scheduled backup runs.'},
    {'setting_key': 'backup_time', 'setting_value': '02:00', 'is_editable': True,
     'description': 'Time of day for the scheduled backup.'},
    {'setting_key': 'session_timeout', 'setting_value': '30', 'is_editable': True,
     'description': 'Minutes of inactivity before a session expires.'},
    {'setting_key': 'network_sharing', 'setting_value': 'true', 'is_editable': True,
     'description': 'Allow access from other machines on the local network.'},
    {'setting_key': 'email_notifications', 'setting_value': 'true', 'is_editable': True,
     'description': 'Send email notifications.'},
    {'setting_key': 'smtp_server', 'setting_value': 'smtp.gmail.com', 'is_editable': True,
     'description': 'Outgoing mail server.'},
    {'setting_key': 'smtp_port', 'setting_value': '587', 'is_editable': True,
     'description': 'Outgoing mail server port.'},
]

TRUE_VALUES = ('true', '1', 'yes', 'on')


class SettingsStore:
    """Key/value configuration with per-key editability and upsert seeding."""

    CACHE_KEY = 'all_system_settings'
    CACHE_TIMEOUT = 300  # 5 minutes

    def __init__(self, gateway=None):
        if gateway is None:
            from datastore.gateway import TableGateway
            gateway = TableGateway()
        self.gateway = gateway
        self.logger = get_contextual_logger('datastore.settings', table='system_settings')

    def get_settings(self) -> Dict[str, Dict[str, Any]]:
        """Fold every settings row into ``{key: {"value": ..., "editable": ...}}``."""
        cached = cache.get(self.CACHE_KEY)
        if cached is not None:
            return cached

        rows = self.gateway.db.query(
            "SELECT setting_key, setting_value, is_editable FROM system_settings",
            table='system_settings',
            operation='get_settings',
        )
        settings_map = {
            row['setting_key']: {
                'value': row['setting_value'],
                'editable': bool(row['is_editable']),
            }
            for row in rows
        }
        cache.set(self.CACHE_KEY, settings_map, self.CACHE_TIMEOUT)
        return settings_map

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        setting = self.get_settings().get(key)
        if setting is None:
            return default
        return setting['value']

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get_setting(key)
        if value is None:
            return default
        return str(value).strip().lower() in TRUE_VALUES

    def update_setting(self, key: str, value: Any) -> bool:
        """
        Change one editable setting.

        Raises:
            SettingNotEditableError: no row matched, the key is either
                missing or locked.
        """
        affected = self.gateway.update(
            'system_settings',
            {'setting_value': str(value), 'updated_at': timezone.now()},
            'setting_key = %s AND is_editable = %s',
            [key, True],
        )
        if affected == 0:
            self.logger.warning(
                f"Refused update of setting {key}",
                extra={'operation': 'update_setting', 'setting_key': key},
            )
            raise SettingNotEditableError(key)

        self.clear_cache()
        self.logger.info(
            f"Setting {key} updated",
            extra={'operation': 'update_setting', 'setting_key': key},
        )
        return True

    def seed_defaults(self, defaults: Optional[List[Dict[str, Any]]] = None) -> int:
        """
        Upsert default settings.

        New keys are inserted with their editable flag. Existing keys only get
        their value overwritten; the editable flag is never re-seeded.
        """
        defaults = DEFAULT_SETTINGS if defaults is None else defaults
        objs = [SystemSetting(**item) for item in defaults]
        SystemSetting.objects.bulk_create(
            objs,
            update_conflicts=True,
            unique_fields=['setting_key'],
            update_fields=['setting_value'],
        )
        self.clear_cache()
        self.logger.info(
            f"Seeded {len(objs)} default settings",
            extra={'operation': 'seed_defaults', 'count': len(objs)},
        )
        return len(objs)

    def clear_cache(self):
        cache.delete(self.CACHE_KEY)
