"""
URL mappings for the care facility API.

Paths have no trailing slashes; the frontend calls them exactly as
listed here.
"""
from django.urls import path, include

from .auth_views import login_view, jwt_refresh_view
from .views import health
from .views.daily_records import daily_records
from .views.facility_settings import facility_settings
from .views.medication import medication_records, medication_records_range, medication_record_detail
from .views.residents import residents, resident_detail
from .views.staff import staff_list, staff_detail
from .views import records
from .views.communications import communications, communication_mark_read
from .views import journal, notices

urlpatterns = [
    # Auth
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh'),

    # Daily timeline
    path('api/daily-records', daily_records, name='daily_records'),

    # Medication
    path('api/medication-records', medication_records, name='medication_records'),
    path('api/medication-records/range', medication_records_range, name='medication_records_range'),
    path('api/medication-records/<uuid:record_id>', medication_record_detail, name='medication_record_detail'),

    # Residents & staff
    path('api/residents', residents, name='residents'),
    path('api/residents/<uuid:resident_id>', resident_detail, name='resident_detail'),
    path('api/staff', staff_list, name='staff_list'),
    path('api/staff/<uuid:staff_pk>', staff_detail, name='staff_detail'),

    # Care records
    path('api/care-records', records.care_records, name='care_records'),
    path('api/care-records/<uuid:record_id>', records.care_record_detail, name='care_record_detail'),
    path('api/nursing-records', records.nursing_records, name='nursing_records'),
    path('api/nursing-records/<uuid:record_id>', records.nursing_record_detail, name='nursing_record_detail'),
    path('api/vital-signs', records.vital_signs, name='vital_signs'),
    path('api/vital-signs/<uuid:record_id>', records.vital_sign_detail, name='vital_sign_detail'),
    path('api/meal-records', records.meal_records, name='meal_records'),
    path('api/meal-records/<uuid:record_id>', records.meal_record_detail, name='meal_record_detail'),
    path('api/bathing-records', records.bathing_records, name='bathing_records'),
    path('api/bathing-records/<uuid:record_id>', records.bathing_record_detail, name='bathing_record_detail'),
    path('api/excretion-records', records.excretion_records, name='excretion_records'),
    path('api/excretion-records/<uuid:record_id>', records.excretion_record_detail, name='excretion_record_detail'),
    path('api/weight-records', records.weight_records, name='weight_records'),
    path('api/weight-records/<uuid:record_id>', records.weight_record_detail, name='weight_record_detail'),
    path('api/cleaning-linen-records', records.cleaning_linen_records, name='cleaning_linen_records'),
    path('api/cleaning-linen-records/<uuid:record_id>', records.cleaning_linen_record_detail,
         name='cleaning_linen_record_detail'),
    path('api/round-records', records.round_records, name='round_records'),
    path('api/round-records/<uuid:record_id>', records.round_record_detail, name='round_record_detail'),

    # Communications & staff notices
    path('api/communications', communications, name='communications'),
    path('api/communications/<uuid:communication_id>/read', communication_mark_read, name='communication_mark_read'),
    path('api/staff-notices', notices.staff_notices, name='staff_notices'),
    path('api/staff-notices/unread-count', notices.staff_notices_unread_count, name='staff_notices_unread_count'),
    path('api/staff-notices/<uuid:notice_id>', notices.staff_notice_detail, name='staff_notice_detail'),
    path('api/staff-notices/<uuid:notice_id>/read-status', notices.staff_notice_read_status,
         name='staff_notice_read_status'),
    path('api/staff-notices/<uuid:notice_id>/mark-read', notices.staff_notice_mark_read,
         name='staff_notice_mark_read'),
    path('api/staff-notices/<uuid:notice_id>/mark-unread', notices.staff_notice_mark_unread,
         name='staff_notice_mark_unread'),

    # Journals
    path('api/journal-entries', journal.journal_entries, name='journal_entries'),
    path('api/journal-entries/<uuid:record_id>', journal.journal_entry_detail, name='journal_entry_detail'),
    path('api/journal-checkboxes', journal.journal_checkboxes, name='journal_checkboxes'),
    path('api/journal-checkboxes/<str:day>', journal.journal_checkboxes_for_day, name='journal_checkboxes_for_day'),

    # Facility settings
    path('api/facility-settings', facility_settings, name='facility_settings'),

    # Ops
    path('healthz', health.healthz, name='healthz'),
    path('', include('django_prometheus.urls')),
]
