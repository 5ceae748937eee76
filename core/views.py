"""
Health and settings API views.
"""

from django.conf import settings
from django.utils import timezone
from django.views.decorators.cache import never_cache
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiResponse, inline_serializer
import structlog

from core.api_tags import settings_schema, system_health_schema
from core.exceptions import ProblemDetailException
from core.permissions import IsStaffOrReadOnly
from core.serializers import (
    HealthCheckSerializer,
    ProblemDetailSerializer,
    SettingUpdateSerializer,
    SettingValueSerializer,
)
from core.services import SettingsStore

logger = structlog.get_logger(__name__)


@never_cache
@system_health_schema(
    operation_id='health_check',
    summary='Health check',
    description='Liveness of the API and its database. Returns 503 when the database is unreachable.',
    responses={200: HealthCheckSerializer, 503: HealthCheckSerializer},
)
@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Report whether the API can reach its database."""
    from datastore.connection import ConnectionManager

    connected = ConnectionManager().test_connection()
    payload = {
        'status': 'healthy' if connected else 'unhealthy',
        'database': 'connected' if connected else 'disconnected',
        'timestamp': timezone.now().isoformat(),
        'version': settings.SPECTACULAR_SETTINGS.get('VERSION', 'unknown'),
    }
    if not connected:
        logger.warning("health_check_failed", database='disconnected')
        return Response(payload, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(payload)


@settings_schema(
    operation_id='list_settings',
    summary='List system settings',
    description='All settings as a map of key to value and editability.',
    responses={200: inline_serializer(
        name='SettingsMap',
        fields={'settings': serializers.DictField(child=SettingValueSerializer())},
    )},
)
@api_view(['GET'])
@permission_classes([IsStaffOrReadOnly])
def settings_list(request):
    return Response({'settings': SettingsStore().get_settings()})


@settings_schema(
    operation_id='update_setting',
    summary='Update a system setting',
    description='Change the value of one editable setting. Locked settings are refused with 403.',
    request=SettingUpdateSerializer,
    responses={
        200: inline_serializer(
            name='SettingUpdated',
            fields={'key': serializers.CharField(), 'value': serializers.CharField()},
        ),
        403: OpenApiResponse(ProblemDetailSerializer, description='Setting is locked'),
        404: OpenApiResponse(ProblemDetailSerializer, description='Setting does not exist'),
    },
)
@api_view(['PUT'])
@permission_classes([IsStaffOrReadOnly])
def setting_update(request, key):
    serializer = SettingUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    store = SettingsStore()
    # Checked up front so a missing key is a 404 rather than the 403 of a locked one
    if key not in store.get_settings():
        raise ProblemDetailException(
            title='Setting Not Found',
            detail=f"Setting '{key}' does not exist",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    value = serializer.validated_data['value']
    store.update_setting(key, value)

    logger.info("setting_updated", setting_key=key, user_id=request.user.id)
    return Response({'key': key, 'value': value})
