"""
Data store application configuration.

Owns database access for the back office: pooled connections, the table
gateway, backups, restores and demo data cleaning.
"""

from django.apps import AppConfig


class DatastoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'datastore'
    verbose_name = 'Data Store'
