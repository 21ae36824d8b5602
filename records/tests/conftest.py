import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from records.cache import get_response_cache
from records.models import User


@pytest.fixture(autouse=True)
def clean_caches():
    # throttling counters and cached responses must not leak between tests
    cache.clear()
    rc = get_response_cache()
    if rc is not None:
        rc.clear()
    yield


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username='staff', email='staff@sjmc.com', password='S3cure-pass!')


@pytest.fixture
def api(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client
