"""
Core application configuration for the TSOAM Church back office.

This app contains system settings, exception handlers and logging
utilities used across the entire project.
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Core'
