"""
Backup and data administration API views.

Every endpoint here is restricted to staff accounts. Data layer errors are
rendered by the project exception handler (Problem+JSON).
"""

from dataclasses import asdict

from django.http import FileResponse, HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse
from drf_spectacular.openapi import OpenApiTypes
import structlog

from core.api_tags import admin_schema, backup_schema
from core.exceptions import ProblemDetailException
from core.logging.structured import log_business_event
from core.permissions import IsStaffUser
from core.serializers import MessageResponseSerializer, ProblemDetailSerializer

from .backup import BackupEngine
from .cleaner import DemoDataCleaner
from .restore import RestoreEngine
from .serializers import (
    BackupCreatedSerializer,
    BackupCreateSerializer,
    BackupFileSerializer,
    CleanDemoDataResultSerializer,
    RestoreRequestSerializer,
    RestoreResultSerializer,
)
from .storage import BackupStorage

logger = structlog.get_logger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on')


def backup_not_found(name):
    return ProblemDetailException(
        title='Backup Not Found',
        detail=f"Backup file '{name}' does not exist",
        status_code=status.HTTP_404_NOT_FOUND,
    )


@admin_schema(
    operation_id='clean_demo_data',
    summary='Remove demo data',
    description='Delete every row flagged as demo data from the demo tables, in one transaction.',
    request=None,
    responses={200: CleanDemoDataResultSerializer},
)
@api_view(['POST'])
@permission_classes([IsStaffUser])
def clean_demo_data(request):
    deleted = DemoDataCleaner().clean_demo_data()
    total = sum(deleted.values())

    logger.info("demo_data_cleaned", user_id=request.user.id, total=total)
    return Response({
        'message': 'Demo data cleaned successfully',
        'total': total,
        'deleted': deleted,
    })


@admin_schema(
    operation_id='export_data',
    summary='Export all data',
    description='Download a backup document of the current data without storing it on the server.',
    parameters=[
        OpenApiParameter('include_demo', OpenApiTypes.BOOL, OpenApiParameter.QUERY,
                         description='Include rows flagged as demo data'),
    ],
    responses={200: OpenApiTypes.OBJECT},
)
@api_view(['GET'])
@permission_classes([IsStaffUser])
def export_data(request):
    include_demo = request.query_params.get('include_demo', '').lower() in TRUE_VALUES
    snapshot = BackupEngine().backup_data(include_demo=include_demo)

    response = HttpResponse(snapshot.to_json(), content_type='application/json')
    response['Content-Disposition'] = f'attachment; filename="{BackupStorage.default_filename()}"'
    return response


@backup_schema(
    operation_id='list_backup_files',
    summary='List backup files',
    responses={200: BackupFileSerializer(many=True)},
)
@api_view(['GET'])
@permission_classes([IsStaffUser])
def backup_files(request):
    files = BackupStorage().list()
    return Response(BackupFileSerializer(files, many=True).data)


@backup_schema(
    operation_id='create_backup',
    summary='Create a backup',
    description='Snapshot the database and store it in the backups directory.',
    request=BackupCreateSerializer,
    responses={201: BackupCreatedSerializer},
)
@api_view(['POST'])
@permission_classes([IsStaffUser])
def create_backup(request):
    serializer = BackupCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    storage = BackupStorage()
    filename = serializer.validated_data.get('filename')
    if filename:
        filename = storage.resolve_safe(filename)

    snapshot = BackupEngine().backup_data(include_demo=serializer.validated_data['include_demo'])
    path = storage.save(snapshot, filename)

    logger.info("backup_created", user_id=request.user.id, file=path.name,
                total_records=snapshot.total_records)
    return Response({
        'file': path.name,
        'size': path.stat().st_size,
        'timestamp': snapshot.timestamp,
        'include_demo': snapshot.include_demo,
        'total_records': snapshot.total_records,
        'tables': snapshot.record_counts(),
    }, status=status.HTTP_201_CREATED)


@backup_schema(
    operation_id='restore_backup',
    summary='Restore a backup',
    description=(
        'Replace demo and unflagged rows with the contents of a stored backup file or an '
        'inline backup document. Runs in one transaction; nothing changes on failure.'
    ),
    request=RestoreRequestSerializer,
    responses={
        200: RestoreResultSerializer,
        404: OpenApiResponse(ProblemDetailSerializer, description='Backup file not found'),
    },
)
@api_view(['POST'])
@permission_classes([IsStaffUser])
def restore_backup(request):
    serializer = RestoreRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    snapshot = serializer.validated_data.get('backup')
    source = 'upload'
    if snapshot is None:
        storage = BackupStorage()
        source = serializer.validated_data['filename']
        path = storage.resolve_safe(source)
        if not path.is_file():
            raise backup_not_found(source)
        snapshot = storage.load(path)

    result = RestoreEngine().restore_data(snapshot)

    log_business_event('data_restored_via_api', user=request.user, details={'source': source})
    return Response({
        'message': 'Data restored successfully',
        'backup_timestamp': snapshot.timestamp,
        'inserted': result.inserted,
        'deleted': result.deleted,
        'skipped': result.skipped,
        'tables': {table: asdict(counts) for table, counts in result.tables.items()},
    })


@backup_schema(
    operation_id='download_backup',
    summary='Download a backup file',
    responses={
        (200, 'application/json'): OpenApiTypes.BINARY,
        404: OpenApiResponse(ProblemDetailSerializer, description='Backup file not found'),
    },
)
@api_view(['GET'])
@permission_classes([IsStaffUser])
def download_backup(request, name):
    path = BackupStorage().resolve_safe(name)
    if not path.is_file():
        raise backup_not_found(name)
    return FileResponse(path.open('rb'), as_attachment=True, filename=path.name,
                        content_type='application/json')


@backup_schema(
    operation_id='delete_backup',
    summary='Delete a backup file',
    responses={
        200: MessageResponseSerializer,
        404: OpenApiResponse(ProblemDetailSerializer, description='Backup file not found'),
    },
)
@api_view(['DELETE'])
@permission_classes([IsStaffUser])
def delete_backup(request, name):
    if not BackupStorage().delete(name):
        raise backup_not_found(name)

    logger.info("backup_deleted", user_id=request.user.id, file=name)
    return Response({'message': f'Backup {name} deleted', 'status': 'success'})
