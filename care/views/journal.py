"""
Daily journals (日誌).

A journal entry holds the header of one journal (date, type, floor,
writer and head counts); POST overwrites the entry for the same date,
type and floor.  Journal checkboxes pick which timeline entries of a
day appear in which journal.
"""
from __future__ import annotations

from django.db import transaction
from django.db.models import Case, IntegerField, Value, When
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care import constants as c
from care.models import JournalCheckbox, JournalEntry
from care.serializers.queries import JournalEntryQuerySerializer
from care.serializers.records import JournalCheckboxSerializer, JournalEntrySerializer
from care.services.audit import log_record_change
from care.services.realtime import broadcast_records_changed
from care.views.records import record_detail

JOURNAL = 'journal'

# 日中 → 夜間 → 看護 within a day
_TYPE_RANK = Case(
    *[When(record_type=t, then=Value(i)) for i, t in enumerate(c.JOURNAL_TYPES)],
    output_field=IntegerField(),
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def journal_entries(request):
    if request.method == 'POST':
        s = JournalEntrySerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = dict(s.validated_data)
        key = {
            'record_date': vd.pop('record_date'),
            'record_type': vd.pop('record_type'),
            'floor': vd.pop('floor', ''),
        }
        vd['created_by'] = str(request.user.id)
        with transaction.atomic():
            entry, created = JournalEntry.objects.update_or_create(defaults=vd, **key)
        verb = 'create' if created else 'update'
        log_record_change(request, 'journal_entry', verb, entry.id, entry.record_date)
        broadcast_records_changed(JOURNAL, f'{verb}d', entry.id, entry.record_date)
        return Response(JournalEntrySerializer(entry).data,
                        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)

    q = JournalEntryQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    qs = JournalEntry.objects.all()
    if vd.get('dateFrom'):
        qs = qs.filter(record_date__gte=vd['dateFrom'])
    if vd.get('dateTo'):
        qs = qs.filter(record_date__lte=vd['dateTo'])
    if vd.get('recordType'):
        qs = qs.filter(record_type=vd['recordType'])
    if vd.get('floor'):
        qs = qs.filter(floor=vd['floor'])
    qs = qs.annotate(type_rank=_TYPE_RANK).order_by('-record_date', 'type_rank', 'floor')
    return Response(JournalEntrySerializer(qs, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def journal_entry_detail(request, record_id):
    return record_detail(request, record_id, JournalEntry, JournalEntrySerializer, JOURNAL, 'journal_entry')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def journal_checkboxes_for_day(request, day):
    day = serializers.DateField().to_internal_value(day)
    qs = JournalCheckbox.objects.filter(record_date=day).order_by('created_at')
    return Response(JournalCheckboxSerializer(qs, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def journal_checkboxes(request):
    """Set one checkbox; the same entry and journal type always maps to one row."""
    s = JournalCheckboxSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = dict(s.validated_data)
    key = {
        'record_id': vd.pop('record_id'),
        'record_type': vd.pop('record_type'),
        'checkbox_type': vd.pop('checkbox_type'),
    }
    with transaction.atomic():
        box, created = JournalCheckbox.objects.update_or_create(defaults=vd, **key)
    broadcast_records_changed(JOURNAL, 'created' if created else 'updated', box.id, box.record_date)
    return Response(JournalCheckboxSerializer(box).data,
                    status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
