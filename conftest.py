import shutil

import pytest
from django.conf import settings
from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Settings map and lifecycle lock live in the cache; start every test without them."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def clean_backup_dir():
    yield
    shutil.rmtree(settings.BACKUP_DIR, ignore_errors=True)
