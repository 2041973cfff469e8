"""
Django admin registrations for the care models.

Lets superusers inspect and correct residents, staff and records through
``/admin/`` during development and support.
"""

from django.contrib import admin

from .models import (
    AuditEvent,
    BathingRecord,
    CareRecord,
    CleaningLinenRecord,
    Communication,
    ExcretionRecord,
    FacilitySettings,
    JournalCheckbox,
    JournalEntry,
    MealRecord,
    MedicationRecord,
    NursingRecord,
    Resident,
    RoundRecord,
    Staff,
    StaffNotice,
    StaffNoticeReadStatus,
    User,
    VitalSign,
    WeightRecord,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'first_name', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'first_name', 'last_name', 'email')


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ('staff_id', 'staff_name', 'floor', 'job_role', 'status', 'sort_order')
    list_filter = ('floor', 'status')
    search_fields = ('staff_id', 'staff_name', 'staff_name_kana')


@admin.register(Resident)
class ResidentAdmin(admin.ModelAdmin):
    list_display = ('room_number', 'name', 'floor', 'care_level', 'is_active')
    list_filter = ('floor', 'is_active')
    search_fields = ('name', 'room_number')


@admin.register(MedicationRecord)
class MedicationRecordAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'timing', 'type', 'resident', 'confirmer1', 'confirmer2', 'result')
    list_filter = ('type', 'timing', 'record_date')
    search_fields = ('resident__name',)


@admin.register(NursingRecord)
class NursingRecordAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'category', 'resident', 'nurse_id')
    list_filter = ('category',)
    search_fields = ('resident__name', 'description')


@admin.register(ExcretionRecord)
class ExcretionRecordAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'type', 'resident', 'consistency', 'amount', 'urine_volume_cc')
    list_filter = ('type',)


@admin.register(CleaningLinenRecord)
class CleaningLinenRecordAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'resident', 'cleaning_value', 'linen_value')


@admin.register(Communication)
class CommunicationAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'category', 'priority', 'subject', 'resident', 'is_read')
    list_filter = ('category', 'priority', 'is_read')
    search_fields = ('subject', 'message')


class StaffNoticeReadStatusInline(admin.TabularInline):
    model = StaffNoticeReadStatus
    extra = 0


@admin.register(StaffNotice)
class StaffNoticeAdmin(admin.ModelAdmin):
    list_display = ('title', 'start_date', 'end_date', 'target_floor', 'target_job_role', 'is_active')
    list_filter = ('is_active', 'target_floor', 'target_job_role')
    inlines = [StaffNoticeReadStatusInline]


@admin.register(RoundRecord)
class RoundRecordAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'hour', 'record_type', 'resident', 'staff_name', 'position_value')
    list_filter = ('record_type', 'record_date')


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'record_type', 'floor', 'entered_by', 'resident_count', 'hospitalized_count')
    list_filter = ('record_type', 'floor')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'user', 'object_type', 'object_id')
    list_filter = ('action',)
    search_fields = ('object_id',)


for model in (CareRecord, VitalSign, MealRecord, BathingRecord, WeightRecord, FacilitySettings, JournalCheckbox):
    admin.site.register(model)
