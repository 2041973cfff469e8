"""
Daily record timeline.

``build_daily_records`` merges care notes, meals, medication, vitals,
excretion, cleaning/linen, weight and nursing notes of one day into a
single list ordered newest first.  Each source is fetched and converted
on its own; a failing source is logged and simply contributes nothing,
so the shift handover screen always gets whatever could be read.

Fetchers, the resident roster and the staff name resolver can be
injected, which is how the unit tests drive the converters without a
database.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as date_cls, datetime, time, timedelta
from typing import Any, Callable, Iterable, Optional

from django.db.models import Q

from care import constants as c
from care.models import (
    CareRecord, CleaningLinenRecord, ExcretionRecord, MealRecord, MedicationRecord,
    NursingRecord, VitalSign, WeightRecord,
)
from care.services.categories import normalize_category
from care.services.residents import load_roster
from care.services.shifts import classify_shift, to_jst
from care.services.staff_names import StaffNameResolver, load_staff_resolver

logger = logging.getLogger(__name__)

SOURCE_CARE = 'care'
SOURCE_MEAL = 'meal'
SOURCE_MEDICATION = 'medication'
SOURCE_VITAL = 'vital'
SOURCE_EXCRETION = 'excretion'
SOURCE_CLEANING = 'cleaning'
SOURCE_WEIGHT = 'weight'
SOURCE_NURSING = 'nursing'

# Insertion order, which also breaks ties between equal record times
SOURCE_ORDER = (
    SOURCE_CARE, SOURCE_MEAL, SOURCE_MEDICATION, SOURCE_VITAL,
    SOURCE_EXCRETION, SOURCE_CLEANING, SOURCE_WEIGHT, SOURCE_NURSING,
)
SOURCE_RECORD_TYPE = {
    SOURCE_CARE: c.CARE_NOTE,
    SOURCE_MEAL: c.MEAL,
    SOURCE_MEDICATION: c.MEDICATION,
    SOURCE_VITAL: c.VITAL,
    SOURCE_EXCRETION: c.EXCRETION,
    SOURCE_CLEANING: c.CLEANING,
    SOURCE_WEIGHT: c.WEIGHT,
}
SHIFT_FILTERED_TYPES = frozenset({c.EXCRETION, c.CLEANING, c.WEIGHT})

CLEANING_DEFAULT_TIME = time(12, 0)


@dataclass
class AggregatedEntry:
    id: str
    record_type: str
    resident_id: Optional[str]
    room_number: str
    resident_name: str
    record_time: datetime
    content: str
    staff_name: str
    created_at: Optional[datetime] = None
    time_category: Optional[str] = None
    extras: dict = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'id': self.id,
            'recordType': self.record_type,
            'residentId': self.resident_id,
            'roomNumber': self.room_number,
            'residentName': self.resident_name,
            'recordTime': to_jst(self.record_time).isoformat(),
            'content': self.content,
            'staffName': self.staff_name,
            'createdAt': to_jst(self.created_at).isoformat() if self.created_at else None,
        }
        if self.time_category:
            data['timeCategory'] = self.time_category
        data.update(self.extras)
        return data


@dataclass(frozen=True)
class DayWindow:
    """Half-open interval ``[start, end)`` in JST covering the requested day."""
    day: date_cls
    start: datetime
    end: datetime

    @classmethod
    def for_date(cls, day: date_cls, include_next_morning: bool = False) -> 'DayWindow':
        start = datetime.combine(day, time.min, tzinfo=c.JST)
        if include_next_morning:
            end = datetime.combine(day + timedelta(days=1), c.NEXT_MORNING_CUTOFF, tzinfo=c.JST) + timedelta(seconds=1)
        else:
            end = start + timedelta(days=1)
        return cls(day=day, start=start, end=end)

    def dates(self) -> list[date_cls]:
        last = (self.end - timedelta(microseconds=1)).date()
        out = [self.day]
        while out[-1] < last:
            out.append(out[-1] + timedelta(days=1))
        return out

    def contains(self, ts: Optional[datetime]) -> bool:
        if ts is None:
            return False
        return self.start <= to_jst(ts) < self.end


@dataclass
class _Context:
    window: DayWindow
    residents: dict
    resolver: StaffNameResolver
    type_filter: frozenset
    shift_filter: frozenset

    def resident(self, resident_id) -> Any:
        if resident_id is None:
            return None
        return self.residents.get(str(resident_id))


def parse_record_types(record_types: Optional[Iterable[str]]) -> tuple[frozenset, frozenset]:
    """Split a filter list into record types and shift buckets."""
    values = {v.strip() for v in (record_types or []) if v and v.strip()}
    shifts = frozenset(values & set(c.SHIFT_BUCKETS))
    return frozenset(values - shifts), shifts


def _wants_source(source: str, type_filter: frozenset) -> bool:
    if not type_filter:
        return True
    if source == SOURCE_NURSING:
        if type_filter & set(c.NURSING_GROUP):
            return True
        # custom nursing categories are not built-in record types
        return any(t not in c.RECORD_TYPES for t in type_filter)
    return SOURCE_RECORD_TYPE[source] in type_filter


# ---------------------------------------------------------------------
# Default fetchers (Django ORM)
# ---------------------------------------------------------------------
def _in_window(model, window: DayWindow):
    return model.objects.filter(record_date__gte=window.start, record_date__lt=window.end)


def fetch_care_records(window: DayWindow) -> list:
    return list(_in_window(CareRecord, window))


def fetch_meal_records(window: DayWindow) -> list:
    return list(_in_window(MealRecord, window).exclude(staff_name=''))


def fetch_medication_records(window: DayWindow) -> list:
    qs = MedicationRecord.objects.filter(record_date__in=window.dates())
    qs = qs.exclude(confirmer1__isnull=True).exclude(confirmer1='')
    qs = qs.exclude(confirmer2__isnull=True).exclude(confirmer2='')
    return list(qs)


def fetch_vital_signs(window: DayWindow) -> list:
    return list(_in_window(VitalSign, window))


def fetch_excretion_records(window: DayWindow) -> list:
    # a general note written the evening before still describes the day
    note_from = window.start - timedelta(days=1)
    in_window = Q(record_date__gte=window.start, record_date__lt=window.end)
    earlier_note = Q(type=c.EXCRETION_NOTE, record_date__gte=note_from, record_date__lt=window.start)
    return list(ExcretionRecord.objects.filter(in_window | earlier_note).order_by('record_date'))


def fetch_cleaning_records(window: DayWindow) -> list:
    return list(CleaningLinenRecord.objects.filter(record_date__in=window.dates()))


def fetch_weight_records(window: DayWindow) -> list:
    return list(_in_window(WeightRecord, window))


def fetch_nursing_records(window: DayWindow) -> list:
    return list(_in_window(NursingRecord, window))


DEFAULT_FETCHERS: dict[str, Callable[[DayWindow], Iterable]] = {
    SOURCE_CARE: fetch_care_records,
    SOURCE_MEAL: fetch_meal_records,
    SOURCE_MEDICATION: fetch_medication_records,
    SOURCE_VITAL: fetch_vital_signs,
    SOURCE_EXCRETION: fetch_excretion_records,
    SOURCE_CLEANING: fetch_cleaning_records,
    SOURCE_WEIGHT: fetch_weight_records,
    SOURCE_NURSING: fetch_nursing_records,
}


# ---------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------
def _at(day: date_cls, clock: time) -> datetime:
    return datetime.combine(day, clock, tzinfo=c.JST)


def _entry(row, ctx: _Context, resident, record_type: str, record_time: datetime,
           content: str, staff_ref, **extras) -> AggregatedEntry:
    return AggregatedEntry(
        id=str(row.id),
        record_type=record_type,
        resident_id=str(resident.id),
        room_number=resident.room_number or '',
        resident_name=resident.name,
        record_time=record_time,
        content=(content or '').strip(),
        staff_name=ctx.resolver.resolve(staff_ref),
        created_at=getattr(row, 'created_at', None),
        extras=extras,
    )


def convert_care_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        resident = ctx.resident(row.resident_id)
        if resident is None:
            continue
        out.append(_entry(row, ctx, resident, c.CARE_NOTE, row.record_date, row.description, row.staff_id))
    return out


def convert_meal_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        if not row.staff_name:
            continue
        resident = ctx.resident(row.resident_id)
        if resident is None:
            continue
        clock = c.MEAL_CLOCK.get(row.meal_type)
        shown = _at(to_jst(row.record_date).date(), clock) if clock else row.record_date
        out.append(_entry(
            row, ctx, resident, c.MEAL, shown, row.notes, row.staff_id or row.staff_name,
            mealType=row.meal_type,
        ))
    return out


def medication_display_time(row) -> datetime:
    clock = c.TIMING_CLOCK.get(row.timing, c.TIMING_CLOCK[c.TIMING_AS_NEEDED])
    if row.timing in c.TIMING_USES_ACTUAL_TIME and getattr(row, 'created_at', None):
        created = to_jst(row.created_at)
        clock = time(created.hour, created.minute)
    return _at(row.record_date, clock)


def convert_medication_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        if not (row.confirmer1 and row.confirmer2):
            continue
        resident = ctx.resident(row.resident_id)
        if resident is None:
            continue
        out.append(_entry(
            row, ctx, resident, c.MEDICATION, medication_display_time(row),
            f"{row.timing}: {row.notes or ''}", row.confirmer1 or row.confirmer2,
            timing=row.timing, medicationType=row.type,
        ))
    return out


def format_vital_values(row) -> str:
    parts = []
    if row.temperature:
        parts.append(f"体温:{row.temperature}℃")
    if row.blood_pressure_systolic and row.blood_pressure_diastolic:
        parts.append(f"血圧:{row.blood_pressure_systolic}/{row.blood_pressure_diastolic}")
    if row.pulse_rate:
        parts.append(f"脈拍:{row.pulse_rate}")
    if row.oxygen_saturation:
        parts.append(f"SpO2:{row.oxygen_saturation}%")
    if row.blood_sugar:
        parts.append(f"血糖:{row.blood_sugar}")
    if row.respiration_rate:
        parts.append(f"呼吸:{row.respiration_rate}")
    return ' '.join(parts)


def vital_display_time(row) -> datetime:
    """``hour:minute`` on the record's date when a timing is set, else the record time.

    Out-of-range clock values (rows written before validation existed)
    fall back to the record time.
    """
    if row.timing and row.hour is not None and row.minute is not None:
        if 0 <= row.hour <= 23 and 0 <= row.minute <= 59:
            return _at(to_jst(row.record_date).date(), time(row.hour, row.minute))
        logger.warning("vital %s has invalid clock %s:%s, using record time", row.id, row.hour, row.minute)
    return row.record_date


def convert_vital_signs(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        resident = ctx.resident(row.resident_id)
        if resident is None:
            continue
        shown = vital_display_time(row)
        values = format_vital_values(row)
        notes = (row.notes or '').strip()
        content = f"{values} {notes}" if values and notes else (values or notes)
        out.append(_entry(
            row, ctx, resident, c.VITAL, shown, content, row.staff_name or row.staff_id,
            vitalValues=values, notes=notes, timing=row.timing, hour=row.hour, minute=row.minute,
        ))
    return out


def format_excretion_lines(rows) -> list[str]:
    """One ``HH:MM 便: .. / 尿: ..`` line per clock minute, oldest first."""
    slots: dict[str, dict] = {}
    for row in rows:
        key = to_jst(row.record_date).strftime('%H:%M')
        slot = slots.setdefault(key, {})
        if row.type == c.EXCRETION_BOWEL:
            slot['stool'] = row
        elif row.type == c.EXCRETION_URINATION:
            slot['urine'] = row
    lines = []
    for key in sorted(slots):
        parts = []
        stool = slots[key].get('stool')
        if stool is not None and (stool.consistency or stool.amount):
            text = f"便: {stool.consistency or ''}"
            if stool.amount:
                text += f" ({stool.amount})"
            parts.append(text)
        urine = slots[key].get('urine')
        if urine is not None and (urine.amount or urine.urine_volume_cc):
            text = f"尿: {urine.amount or ''}"
            if urine.urine_volume_cc:
                text += f" ({urine.urine_volume_cc}CC)"
            parts.append(text)
        if parts:
            lines.append(f"{key} " + ' / '.join(parts))
    return lines


def convert_excretion_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    """One entry per resident: the general note plus the day's bowel/urine lines.

    The latest note inside the window wins; without one, the latest note
    of the previous day supplies the content.  The entry sits at the
    in-window note's time, else at the earliest detail row.  A previous-day
    note with nothing recorded today produces no entry.
    """
    groups: dict[str, dict] = {}
    for row in rows:
        group = groups.setdefault(str(row.resident_id), {'note': None, 'earlier': None, 'details': []})
        if row.type == c.EXCRETION_NOTE:
            slot = 'note' if ctx.window.contains(row.record_date) else 'earlier'
            if group[slot] is None or row.record_date >= group[slot].record_date:
                group[slot] = row
        else:
            group['details'].append(row)

    out = []
    for resident_id, group in groups.items():
        resident = ctx.resident(resident_id)
        if resident is None:
            continue
        details = sorted(group['details'], key=lambda r: r.record_date)
        if group['note'] is None and not details:
            continue
        note = group['note'] or group['earlier']
        anchor = group['note'] or details[0]
        out.append(AggregatedEntry(
            id=str(note.id) if note else f"excretion-{resident_id}",
            record_type=c.EXCRETION,
            resident_id=str(resident.id),
            room_number=resident.room_number or '',
            resident_name=resident.name,
            record_time=anchor.record_date,
            content=((note.notes if note else '') or '').strip(),
            staff_name=ctx.resolver.resolve((note or anchor).staff_id),
            created_at=anchor.created_at,
            extras={'excretionDetails': {'formattedEntries': format_excretion_lines(details)}},
        ))
    return out


def convert_cleaning_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        resident = ctx.resident(row.resident_id)
        if resident is None:
            continue
        shown = row.record_time or _at(row.record_date, CLEANING_DEFAULT_TIME)
        out.append(_entry(
            row, ctx, resident, c.CLEANING, shown, row.record_note, row.staff_id,
            cleaningValue=row.cleaning_value, linenValue=row.linen_value,
        ))
    return out


def convert_weight_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        if row.record_date is None:
            continue
        resident = ctx.resident(row.resident_id)
        if resident is None:
            continue
        weight = str(row.weight) if row.weight is not None else None
        out.append(_entry(
            row, ctx, resident, c.WEIGHT, row.record_date, row.notes, row.staff_name or row.staff_id,
            weight=weight,
        ))
    return out


def convert_nursing_records(rows, ctx: _Context) -> list[AggregatedEntry]:
    out = []
    for row in rows:
        record_type = normalize_category(row.category, bool(row.interventions), bool(row.notes))
        if ctx.type_filter and record_type not in ctx.type_filter:
            continue
        if record_type == c.TREATMENT:
            content = row.description or row.interventions or ''
        else:
            content = row.description or ''
        if row.resident_id is None:
            resident_id, room, name = None, '', c.FACILITY_WIDE_RESIDENT_NAME
        else:
            resident = ctx.resident(row.resident_id)
            if resident is None:
                continue
            resident_id, room, name = str(resident.id), resident.room_number or '', resident.name
        out.append(AggregatedEntry(
            id=str(row.id),
            record_type=record_type,
            resident_id=resident_id,
            room_number=room,
            resident_name=name,
            record_time=row.record_date,
            content=content.strip(),
            staff_name=ctx.resolver.resolve(row.nurse_id),
            created_at=row.created_at,
        ))
    return out


CONVERTERS = {
    SOURCE_CARE: convert_care_records,
    SOURCE_MEAL: convert_meal_records,
    SOURCE_MEDICATION: convert_medication_records,
    SOURCE_VITAL: convert_vital_signs,
    SOURCE_EXCRETION: convert_excretion_records,
    SOURCE_CLEANING: convert_cleaning_records,
    SOURCE_WEIGHT: convert_weight_records,
    SOURCE_NURSING: convert_nursing_records,
}


def _keep(entry: AggregatedEntry, ctx: _Context) -> bool:
    if not ctx.window.contains(entry.record_time):
        return False
    if entry.record_type in SHIFT_FILTERED_TYPES:
        entry.time_category = classify_shift(entry.record_time)
        if ctx.shift_filter and entry.time_category not in ctx.shift_filter:
            return False
    return True


def build_daily_records(
    date: date_cls,
    record_types: Optional[Iterable[str]] = None,
    include_next_morning: bool = False,
    *,
    fetchers: Optional[dict] = None,
    roster: Optional[Iterable] = None,
    resolver: Optional[StaffNameResolver] = None,
) -> list[AggregatedEntry]:
    """Aggregate one day of records into a timeline sorted newest first.

    ``record_types`` may mix record types and shift buckets (日中/夜間).
    A list holding only shift buckets keeps every record type.
    """
    window = DayWindow.for_date(date, include_next_morning)
    type_filter, shift_filter = parse_record_types(record_types)
    if roster is None:
        roster = load_roster()
    ctx = _Context(
        window=window,
        residents={str(r.id): r for r in roster},
        resolver=resolver if resolver is not None else load_staff_resolver(),
        type_filter=type_filter,
        shift_filter=shift_filter,
    )
    sources = dict(DEFAULT_FETCHERS)
    if fetchers:
        sources.update(fetchers)

    entries: list[AggregatedEntry] = []
    for source in SOURCE_ORDER:
        if not _wants_source(source, type_filter):
            continue
        try:
            rows = sources[source](window)
            kept = [e for e in CONVERTERS[source](rows, ctx) if _keep(e, ctx)]
        except Exception:
            logger.exception("daily records: %s source failed for %s", source, date)
            continue
        entries.extend(kept)

    entries.sort(key=lambda e: to_jst(e.record_time), reverse=True)
    logger.debug("daily records for %s: %d entries", date, len(entries))
    return entries
