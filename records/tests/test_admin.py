import pytest
from django.contrib import admin
from django.test import RequestFactory

from records.models import FamilyFile, PersonalFile

pytestmark = pytest.mark.django_db


@pytest.fixture
def admin_request(staff_user):
    request = RequestFactory().post('/admin/')
    request.user = staff_user
    return request


def family_admin():
    return admin.site._registry[FamilyFile]


def test_admin_change_drops_cached_lists_and_stats(api, admin_request):
    created = api.post('/api/family', {'headName': 'Jane Smith', 'memberCount': 4}, format='json').data
    assert api.get('/api/family').data[0]['memberCount'] == 4
    assert api.get('/api/stats').data['family']['total'] == 1

    obj = FamilyFile.objects.get(pk=created['id'])
    obj.member_count = 9
    family_admin().save_model(admin_request, obj, form=None, change=True)

    assert api.get('/api/family').data[0]['memberCount'] == 9


def test_admin_add_assigns_an_id_and_drops_cached_lists(api, admin_request):
    assert api.get('/api/personal').data == []
    created = api.post('/api/personal', {'name': 'John Doe', 'age': 30, 'gender': 'Male'}, format='json').data
    template = PersonalFile.objects.get(pk=created['id'])
    assert len(api.get('/api/personal').data) == 1

    obj = PersonalFile(name='Added In Admin', age=20, gender='Female',
                       registration_date=template.registration_date, expiry_date=template.expiry_date)
    admin.site._registry[PersonalFile].save_model(admin_request, obj, form=None, change=False)

    assert obj.pk.startswith('SJMC-')
    names = {f['name'] for f in api.get('/api/personal').data}
    assert names == {'John Doe', 'Added In Admin'}


def test_admin_deletes_drop_cached_lists_and_stats(api, admin_request):
    ids = [
        api.post('/api/family', {'headName': f'Head {i}', 'memberCount': i}, format='json').data['id']
        for i in range(3)
    ]
    assert len(api.get('/api/family').data) == 3

    family_admin().delete_model(admin_request, FamilyFile.objects.get(pk=ids[0]))
    assert len(api.get('/api/family').data) == 2
    assert api.get('/api/stats').data['family']['total'] == 2

    family_admin().delete_queryset(admin_request, FamilyFile.objects.filter(pk__in=ids[1:]))
    assert api.get('/api/family').data == []
    assert api.get('/api/stats').data['family']['total'] == 0
