"""
Core serializers for settings and common response types.
"""

from rest_framework import serializers


class ProblemDetailSerializer(serializers.Serializer):
    """Serializer for Problem+JSON (RFC 7807) error responses."""
    type = serializers.CharField(help_text="Problem type URI")
    title = serializers.CharField(help_text="Short summary of the problem")
    status = serializers.IntegerField(help_text="HTTP status code")
    detail = serializers.CharField(help_text="Human readable explanation")
    table = serializers.CharField(required=False, help_text="Table involved, for data layer errors")
    operation = serializers.CharField(required=False, help_text="Operation that failed")


class MessageResponseSerializer(serializers.Serializer):
    """Serializer for simple message responses."""
    message = serializers.CharField(help_text="Response message")
    status = serializers.CharField(default="success", help_text="Status indicator")


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['healthy', 'unhealthy'])
    database = serializers.ChoiceField(choices=['connected', 'disconnected'])
    timestamp = serializers.DateTimeField()
    version = serializers.CharField()


class SettingValueSerializer(serializers.Serializer):
    """One entry of the settings map."""
    value = serializers.CharField(allow_blank=True)
    editable = serializers.BooleanField()


class SettingUpdateSerializer(serializers.Serializer):
    """
    Request body for changing a setting.

    Values are stored as text; booleans and numbers are converted the way
    the settings table stores them (``true``/``false``, decimal strings).
    """
    value = serializers.JSONField()

    def validate_value(self, value):
        if isinstance(value, (dict, list)) or value is None:
            raise serializers.ValidationError("Setting values must be a string, number or boolean.")
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)
