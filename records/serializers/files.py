"""
Input validation and JSON representation for the four record kinds.

The API speaks camelCase (``headName``, ``registrationDate``) while the
models use snake_case; each serializer maps one to the other through
``source``.  Text fields are stripped and sanitized; an empty string is
rejected the same way as a missing value.  ``id`` and ``status`` are
read-only, so clients can neither choose nor change them.
"""
import html

import bleach
from rest_framework import serializers

from records.models import PersonalFile, EmergencyFile, FamilyFile, ReferralFile


# Upper bound of the PositiveIntegerField columns
MAX_COUNT = 2147483647


def clean_text(v: str) -> str:
    # plain text: drop every tag, keep "&" and friends as typed
    v = html.unescape(bleach.clean((v or '').strip(), tags=set(), attributes={}, strip=True)).strip()
    if not v:
        raise serializers.ValidationError('This field may not be blank.')
    return v


DATE_FIELDS = ['registrationDate', 'expiryDate', 'status']


class RecordFileSerializer(serializers.ModelSerializer):
    registrationDate = serializers.DateTimeField(source='registration_date', required=False)
    expiryDate = serializers.DateTimeField(source='expiry_date', required=False)
    status = serializers.CharField(read_only=True)


class PatientRecordFileSerializer(RecordFileSerializer):
    name = serializers.CharField(max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150)

    def validate_name(self, v):
        return clean_text(v)


class PersonalFileSerializer(PatientRecordFileSerializer):
    class Meta:
        model = PersonalFile
        fields = ['id', 'name', 'age', 'gender'] + DATE_FIELDS
        read_only_fields = ['id']


class EmergencyFileSerializer(PatientRecordFileSerializer):
    class Meta:
        model = EmergencyFile
        fields = ['id', 'name', 'age', 'gender'] + DATE_FIELDS
        read_only_fields = ['id']


class FamilyFileSerializer(RecordFileSerializer):
    headName = serializers.CharField(source='head_name', max_length=255)
    memberCount = serializers.IntegerField(source='member_count', min_value=0, max_value=MAX_COUNT)

    class Meta:
        model = FamilyFile
        fields = ['id', 'headName', 'memberCount'] + DATE_FIELDS
        read_only_fields = ['id']

    def validate_headName(self, v):
        return clean_text(v)


class ReferralFileSerializer(RecordFileSerializer):
    referralName = serializers.CharField(source='referral_name', max_length=255)
    patientCount = serializers.IntegerField(source='patient_count', min_value=0, max_value=MAX_COUNT)

    class Meta:
        model = ReferralFile
        fields = ['id', 'referralName', 'patientCount'] + DATE_FIELDS
        read_only_fields = ['id']

    def validate_referralName(self, v):
        return clean_text(v)
