"""
Records application configuration.

Holds the church's business tables: staff accounts, members, finance,
HR, inventory, welfare, messaging, events and appointments.
"""

from django.apps import AppConfig


class RecordsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'records'
    verbose_name = 'Church Records'
