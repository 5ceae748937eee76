"""
Development settings for TSOAM Church project.

This file contains settings specific to local development.
"""

from .base import *

# ============================================================================
# DEBUG & DEVELOPMENT
# ============================================================================

DEBUG = True
ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# ============================================================================
# CORS & CSRF - Development
# ============================================================================

CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
]

CSRF_TRUSTED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'http://localhost:8080',
    'http://127.0.0.1:8080',
]

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False

# ============================================================================
# LOGGING - Development
# ============================================================================

# Verbose SQL-layer logging while developing
LOGGING['loggers']['datastore']['level'] = 'DEBUG'
