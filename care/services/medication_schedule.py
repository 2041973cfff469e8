"""
Medication list with "not yet recorded" placeholders.

For every active resident the weekly medication schedule says on which
weekdays medication applies, and per-slot flags say which timing slots
apply.  A slot that is scheduled but has no confirmed record yet is
returned as a placeholder so staff can see what is still outstanding.
"""
from __future__ import annotations

from datetime import date as date_cls, timedelta
from typing import Iterable, Optional

from care import constants as c
from care.models import MedicationRecord, Resident
from care.services.residents import floor_q, load_roster, room_sort_key

TIMING_ORDER = {t: i for i, t in enumerate(c.TIMING_SLOTS)}


def is_present(record) -> bool:
    """A record counts only once both confirmers have signed."""
    return bool(record.confirmer1) and bool(record.confirmer2)


def weekday_flag(resident, day: date_cls) -> bool:
    return bool(getattr(resident, Resident.WEEKDAY_FIELDS[day.weekday()], False))


def slot_flag(resident, timing: str, medication_type: str = c.MEDICATION_TYPE_ORAL) -> bool:
    fields = Resident.EYE_DROP_SLOT_FIELDS if medication_type == c.MEDICATION_TYPE_EYE_DROPS else Resident.MEDICATION_SLOT_FIELDS
    name = fields.get(timing)
    return bool(name and getattr(resident, name, False))


def record_to_dict(record, resident=None) -> dict:
    resident = resident or record.resident
    return {
        'id': str(record.id),
        'residentId': str(record.resident_id),
        'residentName': resident.name if resident else '',
        'roomNumber': resident.room_number if resident else '',
        'floor': resident.floor if resident else '',
        'recordDate': record.record_date.isoformat(),
        'timing': record.timing,
        'type': record.type,
        'confirmer1': record.confirmer1,
        'confirmer2': record.confirmer2,
        'notes': record.notes,
        'result': record.result,
        'createdBy': record.created_by,
        'createdAt': record.created_at.isoformat() if record.created_at else None,
        'updatedAt': record.updated_at.isoformat() if record.updated_at else None,
        'isPlaceholder': False,
    }


def placeholder_dict(resident, day: date_cls, timing: str, medication_type: str, with_date: bool) -> dict:
    rid = str(resident.id)
    pid = f"placeholder-{rid}-{day.isoformat()}-{timing}" if with_date else f"placeholder-{rid}-{timing}"
    return {
        'id': pid,
        'residentId': rid,
        'residentName': resident.name,
        'roomNumber': resident.room_number,
        'floor': resident.floor,
        'recordDate': day.isoformat(),
        'timing': timing,
        'type': medication_type,
        'confirmer1': None,
        'confirmer2': None,
        'notes': None,
        'result': None,
        'createdBy': None,
        'createdAt': None,
        'updatedAt': None,
        'isPlaceholder': True,
    }


def merge_schedule(
    dates: list[date_cls],
    timing: str,
    roster: Iterable,
    records: Iterable,
    medication_type: str = c.MEDICATION_TYPE_ORAL,
) -> list[dict]:
    """Merge confirmed records with placeholders for scheduled, unrecorded slots."""
    slots = list(c.TIMING_SLOTS) if timing == c.TIMING_ALL else [timing]
    with_date = timing == c.TIMING_ALL or len(dates) > 1

    entries = []
    done = set()
    for record in records:
        if not is_present(record):
            continue
        entries.append(record_to_dict(record))
        done.add(f"{record.resident_id}|{record.record_date.isoformat()}|{record.timing}")

    for day in dates:
        for resident in roster:
            if not weekday_flag(resident, day):
                continue
            for slot in slots:
                if f"{resident.id}|{day.isoformat()}|{slot}" in done:
                    continue
                if slot_flag(resident, slot, medication_type):
                    entries.append(placeholder_dict(resident, day, slot, medication_type, with_date))

    entries.sort(key=lambda e: (
        e['recordDate'],
        room_sort_key(e['roomNumber']),
        e['roomNumber'] or '',
        TIMING_ORDER.get(e['timing'], len(TIMING_ORDER)),
        e['residentName'] or '',
    ))
    return entries


def _fetch_records(dates: list[date_cls], timing: str, floor: Optional[str], medication_type: str):
    qs = MedicationRecord.objects.select_related('resident').filter(
        record_date__in=dates, type=medication_type,
    )
    if timing and timing != c.TIMING_ALL:
        qs = qs.filter(timing=timing)
    return list(qs.filter(floor_q(floor, 'resident__')))


def resolve_medication_schedule_range(
    date_from: date_cls,
    date_to: date_cls,
    timing: str = c.TIMING_ALL,
    floor: Optional[str] = 'all',
    medication_type: str = c.MEDICATION_TYPE_ORAL,
) -> list[dict]:
    if date_to < date_from:
        date_from, date_to = date_to, date_from
    dates = [date_from + timedelta(days=i) for i in range((date_to - date_from).days + 1)]
    records = _fetch_records(dates, timing, floor, medication_type)
    roster = load_roster(floor)
    return merge_schedule(dates, timing or c.TIMING_ALL, roster, records, medication_type)


def resolve_medication_schedule(
    record_date: date_cls,
    timing: str = c.TIMING_ALL,
    floor: Optional[str] = 'all',
    medication_type: str = c.MEDICATION_TYPE_ORAL,
) -> list[dict]:
    return resolve_medication_schedule_range(record_date, record_date, timing, floor, medication_type)
