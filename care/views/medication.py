"""
Medication list and administration records.

GET returns real records merged with placeholders for scheduled slots
that have not been recorded yet.  POST is an upsert keyed on
resident, date, timing and type so that signing the second confirmer
updates the row created by the first.
"""
from __future__ import annotations

from django.db import transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care import constants as c
from care.models import MedicationRecord
from care.serializers.queries import MedicationQuerySerializer, MedicationRangeQuerySerializer
from care.serializers.records import MedicationRecordSerializer
from care.services.audit import log_action
from care.services.medication_schedule import (
    resolve_medication_schedule, resolve_medication_schedule_range,
)
from care.services.realtime import broadcast_records_changed


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def medication_records(request):
    if request.method == 'POST':
        return _upsert_medication_record(request)
    q = MedicationQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    record_date = vd.get('recordDate') or timezone.localdate()
    data = resolve_medication_schedule(
        record_date, timing=vd['timing'], floor=vd['floor'], medication_type=vd['type'],
    )
    return Response(data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def medication_records_range(request):
    q = MedicationRangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    data = resolve_medication_schedule_range(
        vd['dateFrom'], vd['dateTo'], timing=vd['timing'], floor=vd['floor'], medication_type=vd['type'],
    )
    return Response(data)


def _upsert_medication_record(request):
    s = MedicationRecordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = dict(s.validated_data)
    key = {
        'resident': vd.pop('resident'),
        'record_date': vd.pop('record_date'),
        'timing': vd.pop('timing'),
        'type': vd.pop('type', c.MEDICATION_TYPE_ORAL),
    }
    vd['created_by'] = str(request.user.id)
    with transaction.atomic():
        record, created = MedicationRecord.objects.update_or_create(defaults=vd, **key)
    log_action(user=request.user, action='medication.create' if created else 'medication.update',
               object_type='medication_record', object_id=record.id,
               detail={'timing': record.timing, 'recordDate': record.record_date.isoformat()})
    broadcast_records_changed(c.MEDICATION, 'created' if created else 'updated', record.id, record.record_date)
    return Response(MedicationRecordSerializer(record).data,
                    status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def medication_record_detail(request, record_id):
    record = MedicationRecord.objects.filter(id=record_id).first()
    if not record:
        raise NotFound('medication record not found')
    if request.method == 'DELETE':
        record_date = record.record_date
        record.delete()
        log_action(user=request.user, action='medication.delete', object_type='medication_record',
                   object_id=record_id)
        broadcast_records_changed(c.MEDICATION, 'deleted', record_id, record_date)
        return Response({'ok': True})
    s = MedicationRecordSerializer(record, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    record = s.save()
    log_action(user=request.user, action='medication.update', object_type='medication_record',
               object_id=record.id)
    broadcast_records_changed(c.MEDICATION, 'updated', record.id, record.record_date)
    return Response(MedicationRecordSerializer(record).data)
