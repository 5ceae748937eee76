from django.contrib import admin
from django.contrib import messages
from django.utils.html import format_html
from .models import SystemSetting


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    """Admin interface for system settings."""

    list_display = [
        'setting_key',
        'value_preview',
        'editable_status',
        'updated_at'
    ]
    list_filter = ['is_editable']
    search_fields = ['setting_key', 'setting_value', 'description']
    readonly_fields = ['created_at', 'updated_at']

    actions = ['clear_settings_cache']

    def get_readonly_fields(self, request, obj=None):
        """Locked settings cannot be edited here either."""
        readonly = list(super().get_readonly_fields(request, obj))
        if obj is not None and not obj.is_editable:
            readonly += ['setting_key', 'setting_value', 'is_editable']
        return readonly

    def value_preview(self, obj):
        """Show a preview of the value."""
        value = str(obj.setting_value)
        if len(value) > 50:
            return value[:47] + "..."
        return value
    value_preview.short_description = "Value"

    def editable_status(self, obj):
        """Show editability with color coding."""
        if obj.is_editable:
            return format_html(
                '<span style="color: green; font-weight: bold;">Editable</span>'
            )
        return format_html(
            '<span style="color: red; font-weight: bold;">Locked</span>'
        )
    editable_status.short_description = "Status"

    def clear_settings_cache(self, request, queryset):
        """Clear the cached settings map."""
        from core.services import SettingsStore
        SettingsStore().clear_cache()

        self.message_user(request, 'Settings cache cleared.', messages.SUCCESS)
    clear_settings_cache.short_description = "Clear settings cache"
