"""
Unified API Documentation Tags for the TSOAM Church back office.

This module provides a single source of truth for all API documentation tags
to prevent duplicate sections in the OpenAPI/Swagger documentation.
"""

from drf_spectacular.utils import extend_schema, OpenApiExample


class APITags:
    """
    Unified API tags for consistent documentation organization.

    Usage:
        @extend_schema(tags=[APITags.BACKUPS])
        def my_view(request):
            pass
    """

    # === CORE FUNCTIONALITY ===
    AUTHENTICATION = "Authentication"  # JWT token obtain/refresh
    SETTINGS = "System Settings"  # Church-wide configuration

    # === DATA LIFECYCLE ===
    BACKUPS = "Backups"  # Backup files, create, restore, download
    ADMINISTRATIVE = "Administrative"  # Demo data cleanup, data export

    # === SYSTEM & MONITORING ===
    SYSTEM_HEALTH = "System Health"  # Health checks, status endpoints


# Tag descriptions for OpenAPI documentation
TAG_DESCRIPTIONS = {
    APITags.AUTHENTICATION: "JWT access and refresh tokens",
    APITags.SETTINGS: "Read and change editable church settings",
    APITags.BACKUPS: "Create, list, download, restore and delete database backups",
    APITags.ADMINISTRATIVE: "Administrative endpoints for demo data and data export",
    APITags.SYSTEM_HEALTH: "Health checks and system status for load balancers",
}


def get_api_tags_metadata():
    """
    Returns OpenAPI tags metadata for Spectacular configuration.

    Add this to your SPECTACULAR_SETTINGS:
    TAGS = get_api_tags_metadata()
    """
    return [
        {"name": tag, "description": description}
        for tag, description in TAG_DESCRIPTIONS.items()
    ]


# Common examples used across multiple endpoints
COMMON_EXAMPLES = {
    'permission_error': OpenApiExample(
        name="Permission Error",
        description="User lacks required permissions",
        value={
            "type": "about:blank",
            "title": "Forbidden",
            "status": 403,
            "detail": "You do not have permission to perform this action."
        },
        response_only=True,
        status_codes=['403'],
    ),
    'operation_in_progress': OpenApiExample(
        name="Operation In Progress",
        description="Another backup, restore or cleanup is running",
        value={
            "type": "about:blank",
            "title": "Operation In Progress",
            "status": 409,
            "detail": "Cannot start restore: backup is already running",
            "operation": "restore"
        },
        response_only=True,
        status_codes=['409'],
    ),
    'invalid_backup': OpenApiExample(
        name="Invalid Backup",
        description="Backup document is malformed",
        value={
            "type": "about:blank",
            "title": "Invalid Backup Format",
            "status": 400,
            "detail": "Invalid backup file format: missing data"
        },
        response_only=True,
        status_codes=['400'],
    ),
    'server_error': OpenApiExample(
        name="Database Unavailable",
        description="The database could not be reached",
        value={
            "type": "about:blank",
            "title": "Database Unavailable",
            "status": 503,
            "detail": "Could not connect to database 'default'"
        },
        response_only=True,
        status_codes=['503'],
    ),
}


# Common schema decorators for consistent API documentation
def settings_schema(**kwargs):
    """Schema decorator for system settings endpoints."""
    defaults = {
        'tags': [APITags.SETTINGS],
        'examples': [
            COMMON_EXAMPLES['permission_error']
        ]
    }
    defaults.update(kwargs)
    return extend_schema(**defaults)


def backup_schema(**kwargs):
    """Schema decorator for backup endpoints."""
    defaults = {
        'tags': [APITags.BACKUPS],
        'examples': [
            COMMON_EXAMPLES['permission_error'],
            COMMON_EXAMPLES['operation_in_progress'],
            COMMON_EXAMPLES['invalid_backup']
        ]
    }
    defaults.update(kwargs)
    return extend_schema(**defaults)


def admin_schema(**kwargs):
    """Schema decorator for administrative endpoints."""
    defaults = {
        'tags': [APITags.ADMINISTRATIVE],
        'examples': [
            COMMON_EXAMPLES['permission_error'],
            COMMON_EXAMPLES['operation_in_progress']
        ]
    }
    defaults.update(kwargs)
    return extend_schema(**defaults)


def system_health_schema(**kwargs):
    """Schema decorator for system health endpoints."""
    defaults = {
        'tags': [APITags.SYSTEM_HEALTH],
        'examples': [
            COMMON_EXAMPLES['server_error']
        ]
    }
    defaults.update(kwargs)
    return extend_schema(**defaults)
