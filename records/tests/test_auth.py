import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from records.models import User

pytestmark = pytest.mark.django_db

PASSWORD = 'S3cure-pass!'


def login(client, email, password=PASSWORD):
    return client.post(reverse('login'), {'email': email, 'password': password}, format='json')


def test_login_returns_jwt_pair(staff_user):
    r = login(APIClient(), 'staff@sjmc.com')
    assert r.status_code == 200
    assert r.data['success'] is True
    assert r.data['token'] and r.data['refresh']
    assert r.data['user']['email'] == 'staff@sjmc.com'


def test_login_email_is_case_insensitive(staff_user):
    assert login(APIClient(), 'Staff@SJMC.com').status_code == 200


def test_bad_credentials_are_rejected(staff_user):
    client = APIClient()
    r = login(client, 'staff@sjmc.com', 'wrong-password')
    assert r.status_code == 401
    assert r.data['success'] is False
    assert login(client, 'nobody@sjmc.com').status_code == 401


def test_inactive_user_cannot_login(staff_user):
    staff_user.is_active = False
    staff_user.save()
    assert login(APIClient(), 'staff@sjmc.com').status_code == 401


def test_password_is_stored_hashed(staff_user):
    assert staff_user.password != PASSWORD
    assert staff_user.check_password(PASSWORD)


def test_bearer_token_grants_access(staff_user):
    client = APIClient()
    token = login(client, 'staff@sjmc.com').data['token']
    assert client.get(reverse('verify-token')).status_code == 401
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    r = client.get(reverse('verify-token'))
    assert r.status_code == 200
    assert r.data['user']['email'] == 'staff@sjmc.com'
    assert client.get('/api/personal').status_code == 200


def test_garbage_token_is_rejected():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    assert client.get('/api/stats').status_code == 401


def test_refresh_and_logout(staff_user):
    client = APIClient()
    tokens = login(client, 'staff@sjmc.com').data
    r = client.post(reverse('token-refresh'), {'refresh': tokens['refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['token']

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['token']}")
    r = client.post(reverse('logout'), {'refresh': tokens['refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['blacklisted'] == 1

    r = client.post(reverse('token-refresh'), {'refresh': tokens['refresh']}, format='json')
    assert r.status_code == 401


def test_logout_without_token_blacklists_all(staff_user):
    client = APIClient()
    login(client, 'staff@sjmc.com')
    tokens = login(client, 'staff@sjmc.com').data
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['token']}")
    r = client.post(reverse('logout'), {}, format='json')
    assert r.status_code == 200
    assert r.data['blacklisted'] == 2
    assert User.objects.count() == 1
