"""
Production settings for TSOAM Church project.

This file contains settings specific to production deployment.
Security and performance optimized.
"""

from .base import *
import logging
import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.celery import CeleryIntegration

# ============================================================================
# SECRET KEY VALIDATION
# ============================================================================

if SECRET_KEY.startswith('django-insecure-'):
    raise ValueError(
        "Production SECRET_KEY must not use the default insecure key. "
        "Please set a proper SECRET_KEY environment variable."
    )

if len(SECRET_KEY) < 32:
    raise ValueError(
        "Production SECRET_KEY must be at least 32 characters long for security. "
        f"Current length: {len(SECRET_KEY)}"
    )

SIMPLE_JWT['SIGNING_KEY'] = SECRET_KEY

# ============================================================================
# DEBUG & HOSTS
# ============================================================================

DEBUG = False
ALLOWED_HOSTS = [host.strip() for host in ALLOWED_HOSTS if host.strip()]

# ============================================================================
# DATABASE - Production (PostgreSQL)
# ============================================================================

db_host = config('DB_HOST', default='')
db_name = config('DB_NAME', default='')

if not db_host or not db_name:
    raise ValueError(
        "Database configuration is incomplete. Please set DB_HOST, DB_NAME, "
        "DB_USER and DB_PASSWORD environment variables.\n"
        f"Current values: HOST={db_host}, NAME={db_name}"
    )

DATABASES['default'].update({
    'NAME': db_name,
    'HOST': db_host,
})
DATABASES['default']['OPTIONS']['sslmode'] = config('DB_SSLMODE', default='require')

# ============================================================================
# SECURITY HEADERS - Production
# ============================================================================

SECURE_SSL_REDIRECT = config('SECURE_SSL_REDIRECT', default=True, cast=bool)
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_CONTENT_TYPE_NOSNIFF = True

# ============================================================================
# LOGGING - Production
# ============================================================================

LOGGING['handlers']['file'] = {
    'level': 'INFO',
    'class': 'logging.handlers.RotatingFileHandler',
    'filename': config('LOG_FILE', default='/tmp/tsoam-church.log'),
    'maxBytes': 1024*1024*10,  # 10 MB
    'backupCount': 5,
    'formatter': 'structured',
    'filters': ['sensitive_data_filter'],
}

LOGGING['loggers']['datastore']['handlers'].append('file')
LOGGING['loggers']['business']['handlers'].append('file')

# ============================================================================
# MONITORING - Sentry
# ============================================================================

SENTRY_DSN = config('SENTRY_DSN', default=None)

if SENTRY_DSN:
    sentry_logging = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR
    )

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[
            DjangoIntegration(transaction_style='url'),
            CeleryIntegration(),
            sentry_logging,
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
        environment=config('SENTRY_ENVIRONMENT', default='production'),
    )

# ============================================================================
# API THROTTLING - Production (Strict)
# ============================================================================

REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '60/hour',
    'user': '1000/hour',
}
