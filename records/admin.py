"""
Django admin registrations for the records models.

Lets staff inspect and correct record files via ``/admin/``; the
derived status is shown alongside the dates.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .cache import invalidate_kind
from .kinds import KINDS
from .models import User, PersonalFile, EmergencyFile, FamilyFile, ReferralFile
from .services.identifiers import new_record_id


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'email', 'is_staff', 'is_superuser')
    search_fields = ('username', 'email', 'first_name', 'last_name')


class RecordFileAdmin(admin.ModelAdmin):
    readonly_fields = ('id', 'status')
    list_filter = ('registration_date', 'expiry_date')
    date_hierarchy = 'registration_date'

    @admin.display(description='Status')
    def status(self, obj):
        return obj.status

    @property
    def kind(self):
        return next(k for k in KINDS.values() if k.model is self.model)

    # admin writes skip the API views and must drop cached responses too
    def save_model(self, request, obj, form, change):
        if not change and not obj.pk:
            obj.pk = new_record_id(self.kind.prefix)
        super().save_model(request, obj, form, change)
        invalidate_kind(self.kind.name)

    def delete_model(self, request, obj):
        super().delete_model(request, obj)
        invalidate_kind(self.kind.name)

    def delete_queryset(self, request, queryset):
        super().delete_queryset(request, queryset)
        invalidate_kind(self.kind.name)


@admin.register(PersonalFile, EmergencyFile)
class PatientFileAdmin(RecordFileAdmin):
    list_display = ('id', 'name', 'age', 'gender', 'registration_date', 'expiry_date', 'status')
    list_filter = ('gender',) + RecordFileAdmin.list_filter
    search_fields = ('id', 'name')


@admin.register(FamilyFile)
class FamilyFileAdmin(RecordFileAdmin):
    list_display = ('id', 'head_name', 'member_count', 'registration_date', 'expiry_date', 'status')
    search_fields = ('id', 'head_name')


@admin.register(ReferralFile)
class ReferralFileAdmin(RecordFileAdmin):
    list_display = ('id', 'referral_name', 'patient_count', 'registration_date', 'expiry_date', 'status')
    search_fields = ('id', 'referral_name')
