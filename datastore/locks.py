"""
Mutual exclusion for backup, restore and demo data cleaning.

The lock lives in the shared cache so it also holds across worker
processes and the Celery worker. A second operation started while the lock
is held fails immediately instead of queueing.

With the Redis cache the lock is django-redis' ``cache.lock()``, whose
release only deletes the key while it still carries this holder's token.
Other cache backends (locmem in tests) fall back to ``cache.add``.
"""

import uuid
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache
from redis.exceptions import LockError

from core.exceptions import OperationInProgressError
from core.logging.structured import get_contextual_logger

LOCK_KEY = 'datastore:lifecycle-lock'
HOLDER_KEY = 'datastore:lifecycle-lock:holder'

logger = get_contextual_logger('datastore.locks')


def _busy(operation):
    holder = cache.get(HOLDER_KEY) or 'unknown'
    return OperationInProgressError(
        f"Cannot start {operation}: {holder} is already running",
        operation=operation,
    )


@contextmanager
def _redis_lock(operation, timeout):
    lock = cache.lock(LOCK_KEY, timeout=timeout)
    if not lock.acquire(blocking=False):
        raise _busy(operation)

    cache.set(HOLDER_KEY, operation, timeout)
    try:
        yield lock
    finally:
        try:
            lock.release()
        except LockError:
            logger.warning(
                f"Lifecycle lock for {operation} expired before release",
                extra={'operation': operation},
            )


@contextmanager
def _cache_lock(operation, timeout):
    token = f"{operation}:{uuid.uuid4().hex}"
    if not cache.add(LOCK_KEY, token, timeout):
        raise _busy(operation)

    cache.set(HOLDER_KEY, operation, timeout)
    try:
        yield token
    finally:
        # Only release a lock we still own; it may have expired and been retaken
        if cache.get(LOCK_KEY) == token:
            cache.delete(LOCK_KEY)


@contextmanager
def lifecycle_lock(operation):
    """Hold the data lifecycle lock for the duration of ``operation``."""
    timeout = getattr(settings, 'DATA_LIFECYCLE_LOCK_TIMEOUT', 1800)
    acquire = _redis_lock if hasattr(cache, 'lock') else _cache_lock

    with acquire(operation, timeout) as held:
        yield held
