"""
Database models for the care facility backend.

Residents, the staff roster and every kind of daily care record live
here.  Staff references on records are plain strings because historical
rows point either at :class:`Staff` or at :class:`User`; the daily
timeline resolves them through both registries.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator
from django.db import models

from . import constants as c

HOUR_VALIDATORS = [MaxValueValidator(23)]
MINUTE_VALIDATORS = [MaxValueValidator(59)]


class User(AbstractUser):
    """Login account.  Also the fallback registry for staff references."""
    ROLE_CHOICES = [
        ('staff', 'Staff'),
        ('nurse', 'Nurse'),
        ('admin', 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='staff')

    def display_name(self) -> str:
        return self.first_name or self.email or str(self.id)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Staff(models.Model):
    """Staff roster entry, the primary registry for staff references."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    staff_id = models.CharField(max_length=50, unique=True, help_text="職員ID（ログインID）")
    staff_name = models.CharField(max_length=100)
    staff_name_kana = models.CharField(max_length=100, blank=True)
    floor = models.CharField(max_length=20, blank=True)
    job_role = models.CharField(max_length=50, blank=True)
    authority = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=20, default='ロック')
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'staff_name']

    def __str__(self) -> str:
        return f"{self.staff_name} ({self.staff_id})"


class Resident(models.Model):
    """A resident of the facility with their weekly medication schedule.

    The nine ``medication_*`` flags enable a timing slot for oral
    medication, the nine ``eye_drops_*`` flags do the same for eye drops,
    and the seven ``medication_week_*`` flags say on which weekdays any
    medication applies at all.
    """
    MEDICATION_SLOT_FIELDS = {
        c.TIMING_WAKE: 'medication_wakeup',
        c.TIMING_PRE_BREAKFAST: 'medication_morning_before',
        c.TIMING_POST_BREAKFAST: 'medication_morning',
        c.TIMING_PRE_LUNCH: 'medication_noon_before',
        c.TIMING_POST_LUNCH: 'medication_noon',
        c.TIMING_PRE_DINNER: 'medication_evening_before',
        c.TIMING_POST_DINNER: 'medication_evening',
        c.TIMING_PRE_SLEEP: 'medication_sleep',
        c.TIMING_AS_NEEDED: 'medication_as_needed',
    }
    EYE_DROP_SLOT_FIELDS = {
        c.TIMING_WAKE: 'eye_drops_wakeup',
        c.TIMING_PRE_BREAKFAST: 'eye_drops_morning_before',
        c.TIMING_POST_BREAKFAST: 'eye_drops_morning',
        c.TIMING_PRE_LUNCH: 'eye_drops_noon_before',
        c.TIMING_POST_LUNCH: 'eye_drops_noon',
        c.TIMING_PRE_DINNER: 'eye_drops_evening_before',
        c.TIMING_POST_DINNER: 'eye_drops_evening',
        c.TIMING_PRE_SLEEP: 'eye_drops_sleep',
        c.TIMING_AS_NEEDED: 'eye_drops_as_needed',
    }
    # Indexed by date.weekday(): Monday is 0
    WEEKDAY_FIELDS = (
        'medication_week_monday',
        'medication_week_tuesday',
        'medication_week_wednesday',
        'medication_week_thursday',
        'medication_week_friday',
        'medication_week_saturday',
        'medication_week_sunday',
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room_number = models.CharField(max_length=20, blank=True)
    floor = models.CharField(max_length=20, blank=True, db_index=True)
    name = models.CharField(max_length=100)
    gender = models.CharField(max_length=10, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    admission_date = models.DateField(null=True, blank=True)
    retirement_date = models.DateField(null=True, blank=True)
    care_level = models.CharField(max_length=20, blank=True)
    attending_physician = models.CharField(max_length=100, blank=True)

    medication_wakeup = models.BooleanField(default=False)
    medication_morning_before = models.BooleanField(default=False)
    medication_morning = models.BooleanField(default=False)
    medication_noon_before = models.BooleanField(default=False)
    medication_noon = models.BooleanField(default=False)
    medication_evening_before = models.BooleanField(default=False)
    medication_evening = models.BooleanField(default=False)
    medication_sleep = models.BooleanField(default=False)
    medication_as_needed = models.BooleanField(default=False)

    eye_drops_wakeup = models.BooleanField(default=False)
    eye_drops_morning_before = models.BooleanField(default=False)
    eye_drops_morning = models.BooleanField(default=False)
    eye_drops_noon_before = models.BooleanField(default=False)
    eye_drops_noon = models.BooleanField(default=False)
    eye_drops_evening_before = models.BooleanField(default=False)
    eye_drops_evening = models.BooleanField(default=False)
    eye_drops_sleep = models.BooleanField(default=False)
    eye_drops_as_needed = models.BooleanField(default=False)

    medication_week_monday = models.BooleanField(default=False)
    medication_week_tuesday = models.BooleanField(default=False)
    medication_week_wednesday = models.BooleanField(default=False)
    medication_week_thursday = models.BooleanField(default=False)
    medication_week_friday = models.BooleanField(default=False)
    medication_week_saturday = models.BooleanField(default=False)
    medication_week_sunday = models.BooleanField(default=False)

    notes = models.TextField(blank=True)
    # 退居者は一覧・集計から除外するため索引を付与
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['room_number', 'name']

    def __str__(self) -> str:
        return f"{self.room_number} {self.name}"


class CareRecord(models.Model):
    """A free-text care observation (様子)."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='care_records')
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    category = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='care_record_date_idx')]


class NursingRecord(models.Model):
    """Nursing, medical or treatment note.

    ``resident`` is empty for facility-wide notes.  ``category`` may hold
    either the current localized label or a legacy English one.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(
        Resident, null=True, blank=True, on_delete=models.CASCADE, related_name='nursing_records'
    )
    nurse_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    category = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    interventions = models.TextField(blank=True)
    outcomes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='nursing_record_date_idx')]


class VitalSign(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='vital_signs')
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    timing = models.CharField(max_length=10, blank=True, help_text="午前, 午後, 臨時, 前日")
    hour = models.PositiveSmallIntegerField(null=True, blank=True, validators=HOUR_VALIDATORS)
    minute = models.PositiveSmallIntegerField(null=True, blank=True, validators=MINUTE_VALIDATORS)
    staff_name = models.CharField(max_length=100, blank=True, help_text="記入者")
    temperature = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    blood_pressure_systolic = models.PositiveSmallIntegerField(null=True, blank=True)
    blood_pressure_diastolic = models.PositiveSmallIntegerField(null=True, blank=True)
    pulse_rate = models.PositiveSmallIntegerField(null=True, blank=True)
    respiration_rate = models.PositiveSmallIntegerField(null=True, blank=True)
    oxygen_saturation = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    blood_sugar = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='vital_record_date_idx')]


class MealRecord(models.Model):
    """Meal and water intake for one meal label (朝, 10時, 昼, 15時, 夕)."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='meal_records')
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    meal_type = models.CharField(max_length=10, blank=True)
    main_amount = models.CharField(max_length=20, blank=True)
    side_amount = models.CharField(max_length=20, blank=True)
    water_intake = models.CharField(max_length=20, blank=True)
    supplement = models.CharField(max_length=100, blank=True)
    # 記入者スタンプ。空の記録は日誌に載せない
    staff_name = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='meal_record_date_idx')]


class BathingRecord(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='bathing_records')
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    timing = models.CharField(max_length=10, blank=True)
    hour = models.PositiveSmallIntegerField(null=True, blank=True, validators=HOUR_VALIDATORS)
    minute = models.PositiveSmallIntegerField(null=True, blank=True, validators=MINUTE_VALIDATORS)
    staff_name = models.CharField(max_length=100, blank=True)
    bath_type = models.CharField(max_length=20, blank=True, help_text="入浴, シャワー浴, 清拭, ×")
    temperature = models.CharField(max_length=10, blank=True)
    weight = models.CharField(max_length=10, blank=True)
    blood_pressure_systolic = models.CharField(max_length=10, blank=True)
    blood_pressure_diastolic = models.CharField(max_length=10, blank=True)
    pulse_rate = models.CharField(max_length=10, blank=True)
    oxygen_saturation = models.CharField(max_length=10, blank=True)
    notes = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)
    nursing_check = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='bathing_record_date_idx')]


class ExcretionRecord(models.Model):
    TYPE_CHOICES = [
        (c.EXCRETION_URINATION, 'urination'),
        (c.EXCRETION_BOWEL, 'bowel movement'),
        (c.EXCRETION_NOTE, 'general note'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='excretion_records')
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    consistency = models.CharField(max_length=20, blank=True)
    amount = models.CharField(max_length=20, blank=True)
    urine_volume_cc = models.PositiveIntegerField(null=True, blank=True)
    assistance = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['record_date', 'type'], name='excretion_date_type_idx')]


class WeightRecord(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='weight_records')
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField(null=True, blank=True)
    staff_name = models.CharField(max_length=100, blank=True)
    weight = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='weight_record_date_idx')]


class CleaningLinenRecord(models.Model):
    """Room cleaning and linen change for one resident and day."""
    VALUE_CHOICES = [('○', '○'), ('2', '2'), ('3', '3'), ('', '')]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='cleaning_linen_records')
    record_date = models.DateField()
    record_time = models.DateTimeField(null=True, blank=True)
    day_of_week = models.PositiveSmallIntegerField(help_text="0=日曜 ... 6=土曜")
    cleaning_value = models.CharField(max_length=2, choices=VALUE_CHOICES, blank=True)
    linen_value = models.CharField(max_length=2, choices=VALUE_CHOICES, blank=True)
    record_note = models.TextField(blank=True)
    staff_id = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = [('resident', 'record_date')]


class MedicationRecord(models.Model):
    """Administration of one timing slot on one date.

    A record counts as done only once both confirmers have signed.
    """
    TIMING_CHOICES = [(t, t) for t in c.TIMING_SLOTS]
    TYPE_CHOICES = [(t, t) for t in c.MEDICATION_TYPES]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='medication_records')
    record_date = models.DateField()
    timing = models.CharField(max_length=10, choices=TIMING_CHOICES)
    confirmer1 = models.CharField(max_length=100, null=True, blank=True)
    confirmer2 = models.CharField(max_length=100, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=c.MEDICATION_TYPE_ORAL)
    result = models.CharField(max_length=10, blank=True, help_text="○, −, 拒否, 外出")
    created_by = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['resident', 'record_date', 'timing', 'type'], name='unique_medication_record'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.record_date} {self.timing} {self.resident_id}"


class Communication(models.Model):
    """Handover or incident message, optionally about one resident."""
    CATEGORY_CHOICES = [('handover', 'handover'), ('incident', 'incident'), ('general', 'general')]
    PRIORITY_CHOICES = [('low', 'low'), ('normal', 'normal'), ('high', 'high'), ('urgent', 'urgent')]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(
        Resident, null=True, blank=True, on_delete=models.CASCADE, related_name='communications'
    )
    staff_id = models.CharField(max_length=64, blank=True)
    record_date = models.DateTimeField()
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='normal')
    subject = models.CharField(max_length=200)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['record_date'], name='communication_date_idx')]


class StaffNotice(models.Model):
    """Announcement shown to staff between ``start_date`` and ``end_date``.

    Deleting a notice only deactivates it so read receipts survive.
    """
    FLOOR_ALL = '全階'
    JOB_ROLE_ALL = '全体'
    JOB_ROLE_CHOICES = [(r, r) for r in (JOB_ROLE_ALL, '介護', '施設看護', '訪問看護')]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_by = models.CharField(max_length=64, blank=True)
    title = models.CharField(max_length=200, blank=True)
    content = models.TextField()
    start_date = models.DateField()
    end_date = models.DateField()
    target_floor = models.CharField(max_length=20, default=FLOOR_ALL, help_text="全階, 1階, 2階 ...")
    target_job_role = models.CharField(max_length=20, choices=JOB_ROLE_CHOICES, default=JOB_ROLE_ALL)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return self.title or self.content[:20]


class StaffNoticeReadStatus(models.Model):
    notice = models.ForeignKey(StaffNotice, on_delete=models.CASCADE, related_name='read_statuses')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notice_reads')
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [models.UniqueConstraint(fields=['notice', 'user'], name='unique_notice_read')]


class RoundRecord(models.Model):
    """Hourly night round: a patrol stamp, a position change or a note."""
    TYPE_CHOICES = [('patrol', 'patrol'), ('position_change', 'position change'), ('notes', 'notes')]
    POSITION_CHOICES = [('右', '右'), ('左', '左'), ('仰', '仰')]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    resident = models.ForeignKey(Resident, on_delete=models.CASCADE, related_name='round_records')
    record_date = models.DateField()
    hour = models.PositiveSmallIntegerField(validators=HOUR_VALIDATORS)
    record_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    staff_name = models.CharField(max_length=100)
    position_value = models.CharField(max_length=2, choices=POSITION_CHOICES, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['record_date', 'hour'], name='round_date_hour_idx')]


JOURNAL_TYPE_CHOICES = [(t, t) for t in c.JOURNAL_TYPES]


class JournalEntry(models.Model):
    """Header of a daily journal: who wrote it and the head counts."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    record_date = models.DateField()
    record_type = models.CharField(max_length=10, choices=JOURNAL_TYPE_CHOICES)
    entered_by = models.CharField(max_length=100, null=True, blank=True)
    resident_count = models.PositiveIntegerField(default=0)
    hospitalized_count = models.PositiveIntegerField(default=0)
    floor = models.CharField(max_length=20, blank=True)
    created_by = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['record_date', 'record_type', 'floor'], name='unique_journal_entry'),
        ]


class JournalCheckbox(models.Model):
    """Marks a timeline entry for inclusion in one of the journals."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    record_date = models.DateField()
    # id of the timeline entry, e.g. a care record or ``excretion-<resident>``
    record_id = models.CharField(max_length=100)
    record_type = models.CharField(max_length=20)
    checkbox_type = models.CharField(max_length=10, choices=JOURNAL_TYPE_CHOICES)
    is_checked = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['record_id', 'record_type', 'checkbox_type'],
                                    name='unique_journal_checkbox'),
        ]
        indexes = [models.Index(fields=['record_date'], name='journal_checkbox_date_idx')]


class FacilitySettings(models.Model):
    CARE_TYPE_CHOICES = [('訪問介護', '訪問介護'), ('デイケア', 'デイケア'), ('デイサービス', 'デイサービス')]
    VITAL_SETTING_CHOICES = [('前日', '前日'), ('午前/午後', '午前/午後')]
    DIARY_SETTING_CHOICES = [('フロア', 'フロア'), ('全体', '全体')]
    DETAIL_SETTING_CHOICES = [('シンプル', 'シンプル'), ('アドバンス', 'アドバンス')]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    care_type = models.CharField(max_length=20, choices=CARE_TYPE_CHOICES, blank=True)
    facility_name = models.CharField(max_length=200, blank=True)
    facility_address = models.CharField(max_length=300, blank=True)
    day_shift_from = models.CharField(max_length=5, blank=True, help_text="HH:MM")
    day_shift_to = models.CharField(max_length=5, blank=True, help_text="HH:MM")
    weight_baseline = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    excretion_baseline = models.PositiveSmallIntegerField(null=True, blank=True)
    vital_setting = models.CharField(max_length=10, choices=VITAL_SETTING_CHOICES, blank=True)
    diary_settings = models.CharField(max_length=10, choices=DIARY_SETTING_CHOICES, blank=True)
    detail_settings = models.CharField(max_length=10, choices=DETAIL_SETTING_CHOICES, blank=True)
    survey_url = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.facility_name or str(self.id)


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
