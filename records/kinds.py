"""
Schema descriptors for the record kinds.

Every kind is served by the same store, views and stats code; a
:class:`RecordKind` carries what differs between them: the model, the
serializer, the id prefix and the default expiry horizon.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from dateutil.relativedelta import relativedelta

from records.exceptions import NotFoundError
from records.models import PersonalFile, FamilyFile, ReferralFile, EmergencyFile
from records.serializers.files import (
    PersonalFileSerializer,
    FamilyFileSerializer,
    ReferralFileSerializer,
    EmergencyFileSerializer,
)


@dataclass(frozen=True)
class RecordKind:
    name: str
    label: str
    model: type
    serializer_class: type
    prefix: str
    horizon: relativedelta

    def expiry_for(self, registration_date: datetime) -> datetime:
        # relativedelta clamps Feb 29 to Feb 28 in non-leap years
        return registration_date + self.horizon


PERSONAL = RecordKind('personal', 'Personal file', PersonalFile, PersonalFileSerializer, 'SJMC', relativedelta(years=1))
FAMILY = RecordKind('family', 'Family file', FamilyFile, FamilyFileSerializer, 'FAM', relativedelta(years=2))
REFERRAL = RecordKind('referral', 'Referral file', ReferralFile, ReferralFileSerializer, 'REF', relativedelta(years=5))
EMERGENCY = RecordKind('emergency', 'Emergency file', EmergencyFile, EmergencyFileSerializer, 'EMG', relativedelta(years=1))

KINDS: dict[str, RecordKind] = {k.name: k for k in (PERSONAL, FAMILY, REFERRAL, EMERGENCY)}


def get_kind(name: str) -> RecordKind:
    try:
        return KINDS[name]
    except KeyError:
        raise NotFoundError(f'unknown record kind: {name}') from None
