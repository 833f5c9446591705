"""
Global pytest configuration for FoodHub.

Celery runs in eager mode during tests, and uploaded files go to a
temporary MEDIA_ROOT per test.
"""
import pytest
from django.conf import settings
from django.core.cache import cache


@pytest.fixture(scope='session', autouse=True)
def configure_celery_for_tests():
    """
    Configure Celery to run tasks eagerly (synchronously) during tests.
    This prevents connection errors to the broker.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'
    return settings.MEDIA_ROOT


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()
