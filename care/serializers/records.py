"""
Model serializers for residents, staff and care records.

The frontend speaks camelCase, so every serializer here renames fields
on the way in and out.  Free-text input is passed through ``bleach`` to
strip markup before it reaches the database.
"""
from __future__ import annotations

import re

import bleach
from django.core.exceptions import FieldDoesNotExist
from django.db import models as dj_models
from rest_framework import serializers

from care.models import (
    BathingRecord, CareRecord, CleaningLinenRecord, Communication, ExcretionRecord, FacilitySettings,
    JournalCheckbox, JournalEntry, MealRecord, MedicationRecord, NursingRecord, Resident, RoundRecord,
    Staff, StaffNotice, StaffNoticeReadStatus, VitalSign, WeightRecord,
)

_CAMEL_RE = re.compile(r'_([a-z0-9])')
_SNAKE_RE = re.compile(r'([A-Z])')


def to_camel(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def to_snake(name: str) -> str:
    return _SNAKE_RE.sub(lambda m: '_' + m.group(1).lower(), name)


def clean_text(value):
    if isinstance(value, str):
        return bleach.clean(value.strip(), tags=[], attributes={}, strip=True)
    return value


class CamelModelSerializer(serializers.ModelSerializer):
    """ModelSerializer with camelCase keys and sanitized text fields.

    The ``resident`` foreign key travels as ``residentId``.
    """
    FIELD_ALIASES = {'resident': 'residentId'}

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {self.FIELD_ALIASES.get(k) or to_camel(k): v for k, v in data.items()}

    def to_internal_value(self, data):
        if hasattr(data, 'dict'):
            data = data.dict()
        reverse = {v: k for k, v in self.FIELD_ALIASES.items()}
        data = {reverse.get(k) or to_snake(k): v for k, v in data.items()}
        return super().to_internal_value(data)

    def validate(self, attrs):
        model = self.Meta.model
        for name, value in list(attrs.items()):
            try:
                f = model._meta.get_field(name)
            except FieldDoesNotExist:
                continue
            if isinstance(f, (dj_models.CharField, dj_models.TextField)) and not f.choices:
                attrs[name] = clean_text(value)
        return attrs


class ResidentSerializer(CamelModelSerializer):
    class Meta:
        model = Resident
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')

    def validate_name(self, v):
        v = clean_text(v or '')
        if not v:
            raise serializers.ValidationError('名前を入力してください')
        return v


class StaffSerializer(CamelModelSerializer):
    class Meta:
        model = Staff
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')


class CareRecordSerializer(CamelModelSerializer):
    class Meta:
        model = CareRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at')


class NursingRecordSerializer(CamelModelSerializer):
    class Meta:
        model = NursingRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')


class VitalSignSerializer(CamelModelSerializer):
    hour = serializers.IntegerField(min_value=0, max_value=23, required=False, allow_null=True)
    minute = serializers.IntegerField(min_value=0, max_value=59, required=False, allow_null=True)

    class Meta:
        model = VitalSign
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')


class MealRecordSerializer(CamelModelSerializer):
    class Meta:
        model = MealRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at')


class BathingRecordSerializer(CamelModelSerializer):
    hour = serializers.IntegerField(min_value=0, max_value=23, required=False, allow_null=True)
    minute = serializers.IntegerField(min_value=0, max_value=59, required=False, allow_null=True)

    class Meta:
        model = BathingRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')


class ExcretionRecordSerializer(CamelModelSerializer):
    class Meta:
        model = ExcretionRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at')


class WeightRecordSerializer(CamelModelSerializer):
    class Meta:
        model = WeightRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')


class CleaningLinenRecordSerializer(CamelModelSerializer):
    day_of_week = serializers.IntegerField(min_value=0, max_value=6, required=False)

    class Meta:
        model = CleaningLinenRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')
        # upsert per resident/day is handled by the view
        validators = []

    def validate(self, attrs):
        attrs = super().validate(attrs)
        record_date = attrs.get('record_date')
        if record_date is not None and 'day_of_week' not in attrs:
            # 0=日曜 ... 6=土曜
            attrs['day_of_week'] = (record_date.weekday() + 1) % 7
        return attrs


class MedicationRecordSerializer(CamelModelSerializer):
    class Meta:
        model = MedicationRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_by', 'created_at', 'updated_at')
        # upsert on resident/date/timing/type is handled by the view
        validators = []


class FacilitySettingsSerializer(CamelModelSerializer):
    class Meta:
        model = FacilitySettings
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')

    def _validate_hhmm(self, v):
        if v and not re.fullmatch(r'([01]\d|2[0-3]):[0-5]\d', v):
            raise serializers.ValidationError('HH:MM 形式で入力してください')
        return v

    def validate_day_shift_from(self, v):
        return self._validate_hhmm(v)

    def validate_day_shift_to(self, v):
        return self._validate_hhmm(v)


class CommunicationSerializer(CamelModelSerializer):
    class Meta:
        model = Communication
        fields = '__all__'
        read_only_fields = ('id', 'staff_id', 'is_read', 'created_at', 'updated_at')


class StaffNoticeSerializer(CamelModelSerializer):
    """Notice with the requesting user's read flag when the view supplies ``read_ids``."""
    is_read = serializers.SerializerMethodField()

    class Meta:
        model = StaffNotice
        fields = '__all__'
        read_only_fields = ('id', 'created_by', 'is_active', 'created_at', 'updated_at')

    def get_is_read(self, obj):
        read_ids = self.context.get('read_ids')
        if read_ids is None:
            return None
        return obj.id in read_ids

    def validate(self, attrs):
        attrs = super().validate(attrs)
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': '閲覧期間の終了日は開始日以降にしてください'})
        return attrs


class StaffNoticeReadStatusSerializer(CamelModelSerializer):
    FIELD_ALIASES = {'notice': 'noticeId', 'user': 'staffId'}
    staff_name = serializers.SerializerMethodField()

    class Meta:
        model = StaffNoticeReadStatus
        fields = ('id', 'notice', 'user', 'staff_name', 'read_at')
        read_only_fields = fields

    def get_staff_name(self, obj):
        return obj.user.display_name()


class RoundRecordSerializer(CamelModelSerializer):
    hour = serializers.IntegerField(min_value=0, max_value=23)

    class Meta:
        model = RoundRecord
        fields = '__all__'
        read_only_fields = ('id', 'created_by', 'created_at', 'updated_at')


class JournalEntrySerializer(CamelModelSerializer):
    class Meta:
        model = JournalEntry
        fields = '__all__'
        read_only_fields = ('id', 'created_by', 'created_at', 'updated_at')
        # upsert on date/type/floor is handled by the view
        validators = []

    def validate_entered_by(self, v):
        return v or None


class JournalCheckboxSerializer(CamelModelSerializer):
    class Meta:
        model = JournalCheckbox
        fields = '__all__'
        read_only_fields = ('id', 'created_at', 'updated_at')
        validators = []
