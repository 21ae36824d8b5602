from datetime import timedelta
from unittest import mock

import pytest
from dateutil.relativedelta import relativedelta
from django.db import OperationalError
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from records.exceptions import StorageError, ValidationError
from records.kinds import KINDS
from records.models import PersonalFile, FamilyFile, FileStatus, file_status
from records.services.store import RecordStore

pytestmark = pytest.mark.django_db

VALID_INPUT = {
    'personal': {'name': 'John Doe', 'age': 30, 'gender': 'Male'},
    'emergency': {'name': 'Emergency Patient', 'age': 45, 'gender': 'Female'},
    'family': {'headName': 'Jane Smith', 'memberCount': 4},
    'referral': {'referralName': 'Dr. Johnson', 'patientCount': 10},
}
HORIZON_YEARS = {'personal': 1, 'emergency': 1, 'family': 2, 'referral': 5}


@pytest.mark.parametrize('kind', sorted(KINDS))
def test_create_applies_default_horizon(kind):
    record = RecordStore(kind).create(VALID_INPUT[kind])
    assert record['id'].startswith(KINDS[kind].prefix + '-')
    registered = parse_datetime(record['registrationDate'])
    expires = parse_datetime(record['expiryDate'])
    assert abs(timezone.now() - registered) < timedelta(minutes=1)
    assert expires == registered + relativedelta(years=HORIZON_YEARS[kind])
    assert record['status'] == 'Active'
    assert KINDS[kind].model.objects.filter(pk=record['id']).exists()


@pytest.mark.parametrize('kind', sorted(KINDS))
def test_create_rejects_each_missing_field_before_insert(kind):
    store = RecordStore(kind)
    for field in VALID_INPUT[kind]:
        data = {k: v for k, v in VALID_INPUT[kind].items() if k != field}
        with pytest.raises(ValidationError) as exc:
            store.create(data)
        assert field in exc.value.detail
    assert KINDS[kind].model.objects.count() == 0


def test_null_counts_as_missing():
    with pytest.raises(ValidationError) as exc:
        RecordStore('family').create({'headName': None, 'memberCount': 3})
    assert 'headName' in exc.value.detail


@pytest.mark.parametrize('kind,field', [
    ('personal', 'name'), ('emergency', 'name'), ('family', 'headName'), ('referral', 'referralName'),
])
def test_blank_names_are_rejected(kind, field):
    for blank in ('', '   '):
        with pytest.raises(ValidationError) as exc:
            RecordStore(kind).create({**VALID_INPUT[kind], field: blank})
        assert field in exc.value.detail


def test_zero_values_are_valid():
    record = RecordStore('personal').create({'name': 'Baby Doe', 'age': 0, 'gender': 'Other'})
    assert record['age'] == 0
    family = RecordStore('family').create({'headName': 'Empty House', 'memberCount': 0})
    assert family['memberCount'] == 0


def test_invalid_gender_and_negative_age_are_rejected():
    with pytest.raises(ValidationError) as exc:
        RecordStore('personal').create({'name': 'X Y', 'age': -1, 'gender': 'Unknown'})
    assert set(exc.value.detail) == {'age', 'gender'}


def test_names_are_sanitized():
    record = RecordStore('personal').create({'name': '  <b>Ada</b> Lovelace ', 'age': 36, 'gender': 'Female'})
    assert record['name'] == 'Ada Lovelace'


def test_names_keep_ampersands_and_drop_all_tags():
    store = RecordStore('referral')
    record = store.create({'referralName': 'St. Mary & Joseph', 'patientCount': 3})
    assert record['referralName'] == 'St. Mary & Joseph'
    assert store.get(record['id'])['referralName'] == 'St. Mary & Joseph'
    record = store.create({'referralName': '<a href="x">Dr.</a> <i>O\'Neil</i>', 'patientCount': 1})
    assert record['referralName'] == "Dr. O'Neil"


@pytest.mark.parametrize('kind,field', [('family', 'memberCount'), ('referral', 'patientCount')])
def test_oversized_counts_are_rejected(kind, field):
    store = RecordStore(kind)
    with pytest.raises(ValidationError) as exc:
        store.create({**VALID_INPUT[kind], field: 10 ** 20})
    assert field in exc.value.detail
    assert KINDS[kind].model.objects.count() == 0
    record = store.create({**VALID_INPUT[kind], field: 2147483647})
    assert record[field] == 2147483647


def test_explicit_dates_are_kept():
    record = RecordStore('personal').create({
        **VALID_INPUT['personal'],
        'registrationDate': '2024-01-15T08:00:00Z',
        'expiryDate': '2024-06-15T08:00:00Z',
    })
    assert record['registrationDate'] == '2024-01-15T08:00:00Z'
    assert record['expiryDate'] == '2024-06-15T08:00:00Z'
    assert record['status'] == 'Expired'


def test_registration_date_alone_gets_horizon_added():
    record = RecordStore('personal').create({**VALID_INPUT['personal'], 'registrationDate': '2024-02-29T10:00:00Z'})
    assert record['expiryDate'] == '2025-02-28T10:00:00Z'


def test_plain_dates_are_accepted():
    record = RecordStore('referral').create({**VALID_INPUT['referral'], 'registrationDate': '2024-01-15'})
    assert record['registrationDate'] == '2024-01-15T00:00:00Z'
    assert record['expiryDate'] == '2029-01-15T00:00:00Z'


def test_expiry_before_registration_is_rejected():
    with pytest.raises(ValidationError) as exc:
        RecordStore('family').create({
            **VALID_INPUT['family'],
            'registrationDate': '2024-05-01T00:00:00Z',
            'expiryDate': '2024-04-01T00:00:00Z',
        })
    assert 'expiryDate' in exc.value.detail
    assert FamilyFile.objects.count() == 0


def test_client_cannot_choose_the_id():
    record = RecordStore('personal').create({**VALID_INPUT['personal'], 'id': 'SJMC-MINE'})
    assert record['id'] != 'SJMC-MINE'


def test_update_touches_only_given_fields():
    store = RecordStore('personal')
    created = store.create(VALID_INPUT['personal'])
    updated = store.update(created['id'], {'age': 31})
    assert updated['age'] == 31
    assert updated['name'] == 'John Doe'
    assert updated['gender'] == 'Male'
    assert updated['registrationDate'] == created['registrationDate']
    assert updated['expiryDate'] == created['expiryDate']
    assert PersonalFile.objects.get(pk=created['id']).age == 31


def test_update_with_no_fields_is_a_noop():
    store = RecordStore('family')
    created = store.create(VALID_INPUT['family'])
    assert store.update(created['id'], {}) == created
    assert store.update(created['id'], {'unknown': 'x', 'status': 'Expired'}) == created


def test_update_never_changes_the_id():
    store = RecordStore('referral')
    created = store.create(VALID_INPUT['referral'])
    updated = store.update(created['id'], {'id': 'REF-OTHER', 'patientCount': 11})
    assert updated['id'] == created['id']
    assert updated['patientCount'] == 11
    assert store.get('REF-OTHER') is None


def test_update_unknown_id_returns_none():
    assert RecordStore('emergency').update('EMG-NOPE', {'age': 3}) is None
    assert RecordStore('emergency').update('EMG-NOPE', {}) is None


def test_update_validates_partial_input():
    store = RecordStore('personal')
    created = store.create(VALID_INPUT['personal'])
    with pytest.raises(ValidationError):
        store.update(created['id'], {'name': ''})
    with pytest.raises(ValidationError):
        store.update(created['id'], {'gender': 'Robot'})
    assert store.get(created['id'])['name'] == 'John Doe'


def test_update_checks_dates_against_stored_values():
    store = RecordStore('personal')
    created = store.create({
        **VALID_INPUT['personal'],
        'registrationDate': '2024-01-01T00:00:00Z',
        'expiryDate': '2025-01-01T00:00:00Z',
    })
    with pytest.raises(ValidationError):
        store.update(created['id'], {'expiryDate': '2023-12-31T00:00:00Z'})
    updated = store.update(created['id'], {'expiryDate': '2030-01-01T00:00:00Z'})
    assert updated['expiryDate'] == '2030-01-01T00:00:00Z'
    assert updated['status'] == 'Active'


def test_delete_reports_whether_a_row_was_removed():
    store = RecordStore('personal')
    created = store.create(VALID_INPUT['personal'])
    assert store.delete(created['id']) is True
    assert store.delete(created['id']) is False
    assert store.delete('SJMC-NEVER') is False
    assert created['id'] not in [r['id'] for r in store.list()]


def test_list_is_newest_first():
    store = RecordStore('family')
    for i, day in enumerate(['2024-03-01', '2024-05-01', '2024-04-01']):
        store.create({'headName': f'Head {i}', 'memberCount': i, 'registrationDate': day})
    names = [r['headName'] for r in store.list()]
    assert names == ['Head 1', 'Head 2', 'Head 0']


def test_id_collision_draws_a_new_id():
    PersonalFile.objects.create(
        id='SJMC-TAKEN0001', name='Existing', age=50, gender='Male',
        registration_date=timezone.now(), expiry_date=timezone.now() + timedelta(days=1),
    )
    ids = iter(['SJMC-TAKEN0001', 'SJMC-FRESH0001'])
    with mock.patch('records.services.store.new_record_id', side_effect=lambda prefix: next(ids)):
        record = RecordStore('personal').create(VALID_INPUT['personal'])
    assert record['id'] == 'SJMC-FRESH0001'
    assert PersonalFile.objects.count() == 2


def test_database_failure_becomes_storage_error():
    with mock.patch.object(PersonalFile.objects, 'order_by', side_effect=OperationalError('db down')):
        with pytest.raises(StorageError):
            RecordStore('personal').list()


def test_status_is_derived_from_expiry():
    now = timezone.now()
    assert file_status(now + timedelta(seconds=1), now) == FileStatus.ACTIVE
    assert file_status(now, now) == FileStatus.EXPIRED
    assert file_status(now - timedelta(days=1), now) == FileStatus.EXPIRED
