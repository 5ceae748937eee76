"""
Structured logging utilities with JSON formatting and sensitive data filtering.

Provides:
- PII and credential filtering (member phone numbers, emails, password hashes)
- Structured JSON output for log aggregation
- Context-aware loggers for data layer operations
"""

import json
import logging
import re
import traceback
from typing import Dict, Any
from datetime import datetime


# LogRecord attributes that are never treated as extra context
RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelno', 'levelname', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName',
])


class SensitiveDataFilter(logging.Filter):
    """
    Filter to remove sensitive data from log records.

    Member and staff records carry emails, phone numbers and password
    hashes; none of them should reach the logs.
    """

    SENSITIVE_PATTERNS = [
        # Email patterns
        (re.compile(
            r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b'), '[EMAIL]'),
        # International phone numbers such as +254700000001
        (re.compile(r'\+\d{7,15}\b'), '[PHONE]'),
        # Passwords and tokens
        (re.compile(
            r'(password|password_hash|token|secret)\s*[:=]\s*[\'"][^\'"\s]+[\'"]', re.IGNORECASE), r'\1=[FILTERED]'),
        # JWT tokens
        (re.compile(
            r'eyJ[A-Za-z0-9-_=]+\.[A-Za-z0-9-_=]+\.?[A-Za-z0-9-_.+/=]*'), '[JWT_TOKEN]'),
    ]

    # Fields that should be completely removed from logs
    SENSITIVE_FIELDS = {
        'password', 'password_hash', 'token', 'secret', 'authorization',
        'access_token', 'refresh_token', 'smtp_password',
    }

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter sensitive data from log record.

        Returns True to allow the record to be logged.
        """
        if isinstance(record.msg, str):
            record.msg = self._filter_string(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._filter_string(arg) if isinstance(arg, str)
                else self._filter_dict(arg) if isinstance(arg, dict)
                else arg
                for arg in record.args
            )

        for attr_name, attr_value in list(record.__dict__.items()):
            if attr_name in RESERVED_ATTRS or attr_name.startswith('_'):
                continue
            if isinstance(attr_value, str):
                setattr(record, attr_name, self._filter_string(attr_value))
            elif isinstance(attr_value, dict):
                setattr(record, attr_name, self._filter_dict(attr_value))

        return True

    def _filter_string(self, text: str) -> str:
        """Filter sensitive patterns from string."""
        if not text:
            return text

        filtered_text = text
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            filtered_text = pattern.sub(replacement, filtered_text)

        return filtered_text

    def _filter_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Filter sensitive fields from dictionary."""
        filtered_data = {}
        for key, value in data.items():
            if str(key).lower() in self.SENSITIVE_FIELDS:
                filtered_data[key] = '[FILTERED]'
            elif isinstance(value, str):
                filtered_data[key] = self._filter_string(value)
            elif isinstance(value, dict):
                filtered_data[key] = self._filter_dict(value)
            else:
                filtered_data[key] = value

        return filtered_data


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for better parsing by log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': traceback.format_exception(*record.exc_info)
            }

        # Extra context such as table, operation, record counts
        for key, value in record.__dict__.items():
            if key in RESERVED_ATTRS or key.startswith('_') or key in log_entry:
                continue
            log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ContextualLogger:
    """
    Logger that attaches a fixed context to every message.

    The data layer binds the table and operation it works on so every line
    it emits can be traced back to them.
    """

    def __init__(self, name: str, **context):
        self.logger = logging.getLogger(name)
        self._local_context = dict(context)

    def bind(self, **context) -> 'ContextualLogger':
        """Return a new logger with additional context."""
        merged = dict(self._local_context)
        merged.update(context)
        return ContextualLogger(self.logger.name, **merged)

    def set_context(self, **context):
        """Set context that will be added to all log messages."""
        self._local_context.update(context)

    def clear_context(self):
        """Clear the local context."""
        self._local_context.clear()

    def _log_with_context(self, level: int, message: str, *args, **kwargs):
        extra = dict(self._local_context)
        extra.update(kwargs.pop('extra', None) or {})
        kwargs['extra'] = extra

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log_with_context(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log_with_context(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log_with_context(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log_with_context(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        """Log exception with context and traceback."""
        kwargs['exc_info'] = True
        self._log_with_context(logging.ERROR, message, *args, **kwargs)


def get_contextual_logger(name: str, **context) -> ContextualLogger:
    """Get a contextual logger instance."""
    return ContextualLogger(name, **context)


def log_business_event(event_type: str, user=None, details: Dict[str, Any] = None):
    """
    Log important business events such as backups, restores and demo cleanups.

    Args:
        event_type: Type of business event (backup_created, data_restored, ...)
        user: User associated with the event
        details: Additional details about the event
    """
    logger = get_contextual_logger('business')

    log_data = {
        'event_type': event_type,
        'business_event': True,
    }

    if user is not None and getattr(user, 'is_authenticated', False):
        log_data['user_id'] = user.id

    if details:
        log_data.update(details)

    logger.info(f"Business event: {event_type}", extra=log_data)
