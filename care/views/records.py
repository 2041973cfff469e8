"""
CRUD endpoints for the individual care record tables.

All record types share the same shape of endpoints: a collection path
accepting GET (filtered by ``date`` and ``residentId``) and POST, and a
detail path accepting GET, PUT and DELETE.  Writes are audited and
announced on the ``updates`` WebSocket group.
"""
from __future__ import annotations

from datetime import datetime

from django.db import models as dj_models
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care import constants as c
from care.models import (
    BathingRecord, CareRecord, CleaningLinenRecord, ExcretionRecord, MealRecord,
    NursingRecord, RoundRecord, VitalSign, WeightRecord,
)
from care.serializers.queries import RecordListQuerySerializer, RoundRecordQuerySerializer
from care.serializers.records import (
    BathingRecordSerializer, CareRecordSerializer, CleaningLinenRecordSerializer,
    ExcretionRecordSerializer, MealRecordSerializer, NursingRecordSerializer,
    RoundRecordSerializer, VitalSignSerializer, WeightRecordSerializer,
)
from care.services.audit import log_record_change
from care.services.categories import normalize_category
from care.services.realtime import broadcast_records_changed

ROUND = 'round'


def record_day(obj):
    value = getattr(obj, 'record_date', None)
    if value is None:
        return None
    return timezone.localdate(value) if isinstance(value, datetime) else value


def _type_of(record_type, obj):
    # nursing rows announce their normalized category
    return record_type(obj) if callable(record_type) else record_type


def list_or_create(request, model, serializer_class, record_type, object_type, creator_field=None):
    if request.method == 'POST':
        s = serializer_class(data=request.data)
        s.is_valid(raise_exception=True)
        extra = {creator_field: str(request.user.id)} if creator_field else {}
        obj = s.save(**extra)
        log_record_change(request, object_type, 'create', obj.id, record_day(obj))
        broadcast_records_changed(_type_of(record_type, obj), 'created', obj.id, record_day(obj))
        return Response(serializer_class(obj).data, status=status.HTTP_201_CREATED)

    q = RecordListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = model.objects.all()
    day = q.validated_data.get('date')
    if day:
        if isinstance(model._meta.get_field('record_date'), dj_models.DateTimeField):
            qs = qs.filter(record_date__date=day)
        else:
            qs = qs.filter(record_date=day)
    resident_id = q.validated_data.get('residentId')
    if resident_id:
        qs = qs.filter(resident_id=resident_id)
    qs = qs.order_by('-record_date')
    return Response(serializer_class(qs, many=True).data)


def record_detail(request, record_id, model, serializer_class, record_type, object_type):
    obj = model.objects.filter(id=record_id).first()
    if not obj:
        raise NotFound(f'{object_type} not found')
    if request.method == 'GET':
        return Response(serializer_class(obj).data)
    if request.method == 'DELETE':
        day = record_day(obj)
        kind = _type_of(record_type, obj)
        obj.delete()
        log_record_change(request, object_type, 'delete', record_id, day)
        broadcast_records_changed(kind, 'deleted', record_id, day)
        return Response({'ok': True})
    s = serializer_class(obj, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    obj = s.save()
    log_record_change(request, object_type, 'update', obj.id, record_day(obj))
    broadcast_records_changed(_type_of(record_type, obj), 'updated', obj.id, record_day(obj))
    return Response(serializer_class(obj).data)


def nursing_record_type(obj) -> str:
    return normalize_category(obj.category, bool(obj.interventions), bool(obj.notes))


# ---------------------------------------------------------------------
# 様子
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def care_records(request):
    return list_or_create(request, CareRecord, CareRecordSerializer, c.CARE_NOTE, 'care_record')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def care_record_detail(request, record_id):
    return record_detail(request, record_id, CareRecord, CareRecordSerializer, c.CARE_NOTE, 'care_record')


# ---------------------------------------------------------------------
# 看護記録 / 医療記録 / 処置
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def nursing_records(request):
    return list_or_create(request, NursingRecord, NursingRecordSerializer, nursing_record_type, 'nursing_record')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def nursing_record_detail(request, record_id):
    return record_detail(request, record_id, NursingRecord, NursingRecordSerializer, nursing_record_type, 'nursing_record')


# ---------------------------------------------------------------------
# バイタル
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def vital_signs(request):
    return list_or_create(request, VitalSign, VitalSignSerializer, c.VITAL, 'vital_sign')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def vital_sign_detail(request, record_id):
    return record_detail(request, record_id, VitalSign, VitalSignSerializer, c.VITAL, 'vital_sign')


# ---------------------------------------------------------------------
# 食事
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def meal_records(request):
    return list_or_create(request, MealRecord, MealRecordSerializer, c.MEAL, 'meal_record')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def meal_record_detail(request, record_id):
    return record_detail(request, record_id, MealRecord, MealRecordSerializer, c.MEAL, 'meal_record')


# ---------------------------------------------------------------------
# 入浴 (not part of the daily timeline)
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def bathing_records(request):
    return list_or_create(request, BathingRecord, BathingRecordSerializer, 'bathing', 'bathing_record')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def bathing_record_detail(request, record_id):
    return record_detail(request, record_id, BathingRecord, BathingRecordSerializer, 'bathing', 'bathing_record')


# ---------------------------------------------------------------------
# 排泄
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def excretion_records(request):
    return list_or_create(request, ExcretionRecord, ExcretionRecordSerializer, c.EXCRETION, 'excretion_record')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def excretion_record_detail(request, record_id):
    return record_detail(request, record_id, ExcretionRecord, ExcretionRecordSerializer, c.EXCRETION, 'excretion_record')


# ---------------------------------------------------------------------
# 体重
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def weight_records(request):
    return list_or_create(request, WeightRecord, WeightRecordSerializer, c.WEIGHT, 'weight_record')


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def weight_record_detail(request, record_id):
    return record_detail(request, record_id, WeightRecord, WeightRecordSerializer, c.WEIGHT, 'weight_record')


# ---------------------------------------------------------------------
# 清掃リネン: one row per resident and day, POST overwrites it
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def cleaning_linen_records(request):
    if request.method != 'POST':
        return list_or_create(request, CleaningLinenRecord, CleaningLinenRecordSerializer, c.CLEANING, 'cleaning_linen_record')
    s = CleaningLinenRecordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = dict(s.validated_data)
    resident = vd.pop('resident')
    record_date = vd.pop('record_date')
    obj, created = CleaningLinenRecord.objects.update_or_create(
        resident=resident, record_date=record_date, defaults=vd,
    )
    verb = 'create' if created else 'update'
    log_record_change(request, 'cleaning_linen_record', verb, obj.id, obj.record_date)
    broadcast_records_changed(c.CLEANING, f'{verb}d', obj.id, obj.record_date)
    return Response(CleaningLinenRecordSerializer(obj).data,
                    status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def cleaning_linen_record_detail(request, record_id):
    return record_detail(request, record_id, CleaningLinenRecord, CleaningLinenRecordSerializer, c.CLEANING,
                   'cleaning_linen_record')


# ---------------------------------------------------------------------
# 巡視 (night rounds), listed per day in hour order
# ---------------------------------------------------------------------
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def round_records(request):
    if request.method == 'POST':
        return list_or_create(request, RoundRecord, RoundRecordSerializer, ROUND, 'round_record',
                            creator_field='created_by')
    q = RoundRecordQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    day = q.validated_data.get('recordDate') or timezone.localdate()
    qs = RoundRecord.objects.filter(record_date=day).order_by('hour', 'created_at')
    return Response(RoundRecordSerializer(qs, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def round_record_detail(request, record_id):
    return record_detail(request, record_id, RoundRecord, RoundRecordSerializer, ROUND, 'round_record')
