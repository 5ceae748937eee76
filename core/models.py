from django.db import models
from django.core.cache import cache


class SystemSetting(models.Model):
    """
    Church-wide configuration value.

    Settings seeded as non-editable (church name, email domain) can only be
    changed by re-seeding, never through the update path.
    """

    setting_key = models.CharField(
        max_length=100,
        unique=True,
        help_text="Unique identifier for this setting"
    )
    setting_value = models.TextField(
        blank=True,
        default='',
        help_text="Setting value, stored as text"
    )
    is_editable = models.BooleanField(
        default=True,
        help_text="Whether administrators may change this setting"
    )
    description = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'system_settings'
        verbose_name = "System Setting"
        verbose_name_plural = "System Settings"
        ordering = ['setting_key']

    def __str__(self):
        return self.setting_key

    def save(self, *args, **kwargs):
        """Clear cache when settings change."""
        super().save(*args, **kwargs)
        cache.delete('all_system_settings')
