"""
Serializers for the backup and data administration API.
"""

from rest_framework import serializers

from .snapshot import Snapshot


class BackupFileSerializer(serializers.Serializer):
    name = serializers.CharField()
    size = serializers.IntegerField(help_text="Size in bytes")
    modified = serializers.DateTimeField()


class BackupCreateSerializer(serializers.Serializer):
    include_demo = serializers.BooleanField(default=False)
    filename = serializers.CharField(required=False, allow_blank=False)


class BackupCreatedSerializer(serializers.Serializer):
    file = serializers.CharField()
    size = serializers.IntegerField()
    timestamp = serializers.CharField()
    include_demo = serializers.BooleanField()
    total_records = serializers.IntegerField()
    tables = serializers.DictField(child=serializers.IntegerField())


class RestoreRequestSerializer(serializers.Serializer):
    """
    Restore from a stored backup file or from an inline backup document.

    Exactly one of ``filename`` and ``backup`` must be given.
    """
    filename = serializers.CharField(required=False)
    backup = serializers.JSONField(required=False)

    def validate(self, attrs):
        if bool(attrs.get('filename')) == bool(attrs.get('backup')):
            raise serializers.ValidationError("Provide either 'filename' or 'backup', not both.")
        return attrs

    def validate_backup(self, value):
        # Raises InvalidBackupFormatError, rendered as a 400 problem response
        return Snapshot.from_dict(value)


class TableRestoreSerializer(serializers.Serializer):
    deleted = serializers.IntegerField()
    inserted = serializers.IntegerField()
    skipped = serializers.IntegerField()


class RestoreResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    backup_timestamp = serializers.CharField()
    inserted = serializers.IntegerField()
    deleted = serializers.IntegerField()
    skipped = serializers.IntegerField()
    tables = serializers.DictField(child=TableRestoreSerializer())


class CleanDemoDataResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    total = serializers.IntegerField()
    deleted = serializers.DictField(child=serializers.IntegerField())
