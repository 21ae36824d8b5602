"""
Database models for the SJMC records backend.

Four record kinds share one shape: a prefixed string primary key, a
registration date and an expiry date, plus a few category fields.  Each
kind lives in its own table; the column names follow the existing
PostgreSQL schema (all lower case, no underscores).  A record's status
is derived from its expiry date and is never stored.
"""
from __future__ import annotations

from datetime import datetime

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import F, Q
from django.utils import timezone


class User(AbstractUser):
    """Staff account.  The email address is the login identifier."""
    email = models.EmailField(unique=True)

    def __str__(self) -> str:
        return self.email or self.username


class Gender(models.TextChoices):
    MALE = 'Male', 'Male'
    FEMALE = 'Female', 'Female'
    OTHER = 'Other', 'Other'


class FileStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    EXPIRED = 'Expired', 'Expired'


def file_status(expiry_date: datetime, now: datetime | None = None) -> str:
    """``Active`` while ``now`` is before the expiry date, else ``Expired``."""
    now = now or timezone.now()
    return FileStatus.ACTIVE if now < expiry_date else FileStatus.EXPIRED


class RecordFile(models.Model):
    """Columns shared by every record kind."""
    id = models.CharField(max_length=255, primary_key=True)
    # Stats filter on both dates, so both columns are indexed
    registration_date = models.DateTimeField(db_column='registrationdate', db_index=True)
    expiry_date = models.DateTimeField(db_column='expirydate', db_index=True)

    class Meta:
        abstract = True
        ordering = ['-registration_date', 'id']
        constraints = [
            models.CheckConstraint(
                condition=Q(registration_date__lte=F('expiry_date')),
                name='%(app_label)s_%(class)s_dates_ordered',
            ),
        ]

    @property
    def status(self) -> str:
        return file_status(self.expiry_date)


class PatientRecordFile(RecordFile):
    """Record kinds describing a single patient."""
    name = models.CharField(max_length=255)
    age = models.PositiveIntegerField()
    gender = models.CharField(max_length=10, choices=Gender.choices)

    class Meta(RecordFile.Meta):
        abstract = True
        constraints = RecordFile.Meta.constraints + [
            models.CheckConstraint(
                condition=Q(gender__in=Gender.values),
                name='%(app_label)s_%(class)s_gender_valid',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class PersonalFile(PatientRecordFile):
    class Meta(PatientRecordFile.Meta):
        db_table = 'personal_files'


class EmergencyFile(PatientRecordFile):
    class Meta(PatientRecordFile.Meta):
        db_table = 'emergency_files'


class FamilyFile(RecordFile):
    """A household registered under its head."""
    head_name = models.CharField(max_length=255, db_column='headname')
    member_count = models.PositiveIntegerField(db_column='membercount')

    class Meta(RecordFile.Meta):
        db_table = 'family_files'

    def __str__(self) -> str:
        return f"{self.head_name} ({self.id})"


class ReferralFile(RecordFile):
    """A referring party and the number of patients it sends."""
    referral_name = models.CharField(max_length=255, db_column='referralname')
    patient_count = models.PositiveIntegerField(db_column='patientcount')

    class Meta(RecordFile.Meta):
        db_table = 'referral_files'

    def __str__(self) -> str:
        return f"{self.referral_name} ({self.id})"
