"""
Exceptions and API error handling for the TSOAM Church back office.

Defines the data layer error taxonomy and a DRF exception handler that
renders every error as Problem+JSON (RFC 7807).
"""

import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler
from rest_framework.exceptions import APIException


logger = logging.getLogger(__name__)


class DataLayerError(Exception):
    """
    Base class for failures raised by the data access layer.

    Carries the table and operation that failed so callers and logs can
    identify what went wrong without parsing the message.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = 'Data Layer Error'

    def __init__(self, message, table=None, operation=None):
        super().__init__(message)
        self.message = message
        self.table = table
        self.operation = operation


class DatabaseConnectionError(DataLayerError):
    """The pool could not be created or the store is unreachable."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    title = 'Database Unavailable'


class ConstraintError(DataLayerError):
    """A uniqueness or foreign key constraint rejected a write."""
    status_code = status.HTTP_409_CONFLICT
    title = 'Constraint Violation'


class SettingNotEditableError(DataLayerError):
    """
    A settings update matched no rows.

    The key may be missing or locked; the conditional update cannot tell
    the two apart.
    """
    status_code = status.HTTP_403_FORBIDDEN
    title = 'Setting Not Editable'

    def __init__(self, key):
        super().__init__(
            f"Setting '{key}' not found or not editable",
            table='system_settings',
            operation='update_setting',
        )
        self.key = key


class InvalidBackupFormatError(DataLayerError):
    """A backup document is malformed or misses required fields."""
    status_code = status.HTTP_400_BAD_REQUEST
    title = 'Invalid Backup Format'


class SchemaMismatchError(DataLayerError):
    """Backup records reference a table or columns the store does not have."""
    status_code = status.HTTP_400_BAD_REQUEST
    title = 'Schema Mismatch'


class OperationInProgressError(DataLayerError):
    """Another backup, restore or demo clean currently holds the lifecycle lock."""
    status_code = status.HTTP_409_CONFLICT
    title = 'Operation In Progress'


class ProblemDetailException(APIException):
    """
    Custom exception for Problem+JSON (RFC 7807) responses.

    Allows raising exceptions with standardized error details.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'A problem occurred'
    default_code = 'error'

    def __init__(self, title=None, detail=None, status_code=None, type_uri='about:blank', instance=None):
        self.title = title or 'Error'
        self.type_uri = type_uri
        self.instance = instance

        if status_code:
            self.status_code = status_code

        super().__init__(detail or self.default_detail)


def problem_exception_handler(exc, context):
    """
    Custom exception handler that returns Problem+JSON responses (RFC 7807).

    Data layer errors are translated to their HTTP status; everything else
    goes through REST framework's default handler first.
    """
    if isinstance(exc, DataLayerError):
        return data_layer_error_response(exc, context)

    response = exception_handler(exc, context)

    if response is not None:
        problem_data = {
            'type': getattr(exc, 'type_uri', 'about:blank'),
            'title': getattr(exc, 'title', None) or get_error_title(response.status_code),
            'status': response.status_code,
            'detail': get_error_detail(response.data),
        }

        request = context.get('request')
        if request:
            problem_data['instance'] = request.build_absolute_uri()

        # Add validation errors for 400 Bad Request
        if response.status_code == status.HTTP_400_BAD_REQUEST:
            problem_data['invalid_params'] = format_validation_errors(
                response.data)

        log_error(exc, context, response.status_code)

        response.data = problem_data
        response.content_type = 'application/problem+json'

    return response


def data_layer_error_response(exc, context):
    """Build a Problem+JSON response for a data layer error."""
    problem_data = {
        'type': 'about:blank',
        'title': exc.title,
        'status': exc.status_code,
        'detail': exc.message,
    }
    if exc.table:
        problem_data['table'] = exc.table
    if exc.operation:
        problem_data['operation'] = exc.operation

    request = context.get('request')
    if request:
        problem_data['instance'] = request.build_absolute_uri()

    log_error(exc, context, exc.status_code)

    return Response(problem_data, status=exc.status_code, content_type='application/problem+json')


def get_error_title(status_code):
    """Get human-readable title for HTTP status code."""
    titles = {
        400: 'Bad Request',
        401: 'Unauthorized',
        403: 'Forbidden',
        404: 'Not Found',
        405: 'Method Not Allowed',
        409: 'Conflict',
        429: 'Too Many Requests',
        500: 'Internal Server Error',
        503: 'Service Unavailable',
    }
    return titles.get(status_code, 'Error')


def get_error_detail(data):
    """Extract human-readable detail from response data."""
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        elif 'non_field_errors' in data:
            return '; '.join(data['non_field_errors'])
        else:
            for key, value in data.items():
                if isinstance(value, list) and value:
                    return f"{key}: {value[0]}"
                elif isinstance(value, str):
                    return f"{key}: {value}"
    elif isinstance(data, list) and data:
        return str(data[0])

    return str(data)


def format_validation_errors(data):
    """Format validation errors for Problem+JSON invalid_params."""
    if not isinstance(data, dict):
        return []

    invalid_params = []
    for field, errors in data.items():
        if isinstance(errors, list):
            for error in errors:
                invalid_params.append({
                    'name': field,
                    'reason': str(error)
                })
        else:
            invalid_params.append({
                'name': field,
                'reason': str(errors)
            })

    return invalid_params


def log_error(exc, context, status_code):
    """Log error for monitoring and debugging."""
    request = context.get('request')
    user = getattr(request, 'user', None)

    logger.error(
        f"API Error {status_code}: {exc}",
        extra={
            'status_code': status_code,
            'exception_type': type(exc).__name__,
            'user_id': getattr(user, 'id', None) if user and user.is_authenticated else None,
            'request_path': request.path if request else None,
            'request_method': request.method if request else None,
            'ip_address': get_client_ip(request) if request else None,
        },
        exc_info=status_code >= 500  # Include stack trace for 5xx errors
    )


def get_client_ip(request):
    """Get client IP address from request."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip
