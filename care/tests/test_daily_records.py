import logging
from datetime import date, datetime, time, timedelta
from types import SimpleNamespace

import pytest

from care import constants as c
from care.models import (
    CareRecord, CleaningLinenRecord, ExcretionRecord, MealRecord, MedicationRecord,
    NursingRecord, Resident, Staff, User, VitalSign, WeightRecord,
)
from care.services.daily_records import DayWindow, build_daily_records, format_excretion_lines
from care.services.staff_names import StaffNameResolver

pytestmark = pytest.mark.django_db

DAY = date(2025, 3, 10)


def at(h, m=0, day=DAY):
    return datetime.combine(day, time(h, m), tzinfo=c.JST)


@pytest.fixture
def resident():
    return Resident.objects.create(name='山田 一郎', room_number='101', floor='1')


@pytest.fixture
def carer():
    return Staff.objects.create(staff_id='s001', staff_name='介護 太郎')


def by_type(entries, record_type):
    return [e for e in entries if e.record_type == record_type]


def test_entries_are_sorted_newest_first(resident, carer):
    CareRecord.objects.create(resident=resident, staff_id=str(carer.id), record_date=at(9), description='朝')
    CareRecord.objects.create(resident=resident, staff_id=str(carer.id), record_date=at(15), description='午後')
    VitalSign.objects.create(resident=resident, staff_name='手書き', record_date=at(11), pulse_rate=70)

    entries = build_daily_records(DAY)

    times = [e.record_time for e in entries]
    assert times == sorted(times, reverse=True)
    assert [e.content for e in entries] == ['午後', '脈拍:70', '朝']


def test_staff_names_resolve_through_both_registries(resident, carer):
    user = User.objects.create_user(username='n1', password='P@ssw0rd1', first_name='看護 花子')
    CareRecord.objects.create(resident=resident, staff_id=str(carer.id), record_date=at(9))
    CareRecord.objects.create(resident=resident, staff_id=str(user.id), record_date=at(10))
    CareRecord.objects.create(resident=resident, staff_id='unknown-ref', record_date=at(11))

    names = [e.staff_name for e in build_daily_records(DAY, [c.CARE_NOTE])]

    assert names == ['unknown-ref', '看護 花子', '介護 太郎']


def test_meal_requires_staff_stamp_and_uses_meal_clock(resident, carer):
    MealRecord.objects.create(resident=resident, staff_id=str(carer.id), staff_name='介護 太郎',
                              record_date=at(9), meal_type='昼', notes='完食')
    MealRecord.objects.create(resident=resident, staff_name='', record_date=at(9), meal_type='朝')

    meals = by_type(build_daily_records(DAY), c.MEAL)

    assert len(meals) == 1
    assert meals[0].record_time.astimezone(c.JST).time() == time(12, 0)
    assert meals[0].content == '完食'


def test_medication_needs_both_confirmers(resident, carer):
    MedicationRecord.objects.create(resident=resident, record_date=DAY, timing=c.TIMING_POST_BREAKFAST,
                                    confirmer1=str(carer.id), confirmer2='看護師B', notes='')
    MedicationRecord.objects.create(resident=resident, record_date=DAY, timing=c.TIMING_POST_DINNER,
                                    confirmer1=str(carer.id), confirmer2='')

    meds = by_type(build_daily_records(DAY), c.MEDICATION)

    assert len(meds) == 1
    assert meds[0].content == '朝後:'
    assert meds[0].staff_name == '介護 太郎'
    assert meds[0].record_time == at(8, 30)


def test_medication_pre_lunch_uses_actual_time(resident):
    rec = MedicationRecord.objects.create(resident=resident, record_date=DAY, timing=c.TIMING_PRE_LUNCH,
                                          confirmer1='a', confirmer2='b', notes='食前薬')
    MedicationRecord.objects.filter(id=rec.id).update(created_at=at(11, 50))

    meds = by_type(build_daily_records(DAY), c.MEDICATION)

    assert meds[0].record_time == at(11, 50)
    assert meds[0].content == '昼前: 食前薬'


def test_vital_uses_hour_and_minute_and_formats_values(resident):
    VitalSign.objects.create(resident=resident, staff_name='手書き', record_date=at(0), timing='午前',
                             hour=9, minute=45, temperature='36.5', blood_pressure_systolic=120,
                             blood_pressure_diastolic=80, notes='食欲良好')

    vital = by_type(build_daily_records(DAY), c.VITAL)[0]
    data = vital.to_dict()

    assert vital.record_time == at(9, 45)
    assert data['vitalValues'] == '体温:36.5℃ 血圧:120/80'
    assert data['content'] == '体温:36.5℃ 血圧:120/80 食欲良好'
    assert data['notes'] == '食欲良好'
    assert data['hour'] == 9 and data['minute'] == 45


def test_vital_with_impossible_clock_keeps_the_rest_of_the_source(resident):
    VitalSign.objects.create(resident=resident, staff_name='手書き', record_date=at(8), timing='午前',
                             hour=9, minute=0, pulse_rate=70)
    bad = VitalSign.objects.create(resident=resident, staff_name='手書き', record_date=at(14, 30), timing='午後',
                                   hour=24, minute=0, pulse_rate=88)

    vitals = by_type(build_daily_records(DAY), c.VITAL)

    assert [v.content for v in vitals] == ['脈拍:88', '脈拍:70']
    assert vitals[0].id == str(bad.id)
    assert vitals[0].record_time == at(14, 30)
    assert vitals[1].record_time == at(9, 0)


def test_equal_times_keep_source_order(resident, carer):
    CareRecord.objects.create(resident=resident, staff_id=str(carer.id), record_date=at(9), description='朝')
    VitalSign.objects.create(resident=resident, staff_name='手書き', record_date=at(9), pulse_rate=72)

    entries = build_daily_records(DAY)

    assert [e.record_type for e in entries] == [c.CARE_NOTE, c.VITAL]


def test_excretion_is_grouped_per_resident(resident, carer):
    note = ExcretionRecord.objects.create(resident=resident, staff_id=str(carer.id), record_date=at(10),
                                          type=c.EXCRETION_NOTE, notes='便秘気味')
    ExcretionRecord.objects.create(resident=resident, record_date=at(7, 10), type=c.EXCRETION_BOWEL,
                                   consistency='普通', amount='中')
    ExcretionRecord.objects.create(resident=resident, record_date=at(7, 10), type=c.EXCRETION_URINATION,
                                   amount='多', urine_volume_cc=200)
    ExcretionRecord.objects.create(resident=resident, record_date=at(13, 5), type=c.EXCRETION_URINATION,
                                   amount='少')

    entries = by_type(build_daily_records(DAY), c.EXCRETION)

    assert len(entries) == 1
    data = entries[0].to_dict()
    assert data['id'] == str(note.id)
    assert data['content'] == '便秘気味'
    assert data['staffName'] == '介護 太郎'
    assert data['timeCategory'] == c.DAYTIME
    assert data['excretionDetails']['formattedEntries'] == [
        '07:10 便: 普通 (中) / 尿: 多 (200CC)',
        '13:05 尿: 少',
    ]


def test_excretion_without_note_gets_synthetic_id(resident):
    ExcretionRecord.objects.create(resident=resident, record_date=at(6, 0), type=c.EXCRETION_URINATION, amount='中')

    entry = by_type(build_daily_records(DAY), c.EXCRETION)[0]

    assert entry.id == f'excretion-{resident.id}'
    assert entry.record_time == at(6, 0)
    assert entry.time_category == c.NIGHT


def test_excretion_note_from_previous_evening_describes_today(resident, carer):
    note = ExcretionRecord.objects.create(resident=resident, staff_id=str(carer.id),
                                          record_date=at(21, day=DAY - timedelta(days=1)),
                                          type=c.EXCRETION_NOTE, notes='夜間おむつ交換')
    ExcretionRecord.objects.create(resident=resident, record_date=at(6, 0), type=c.EXCRETION_URINATION, amount='中')

    entry = by_type(build_daily_records(DAY), c.EXCRETION)[0]

    assert entry.id == str(note.id)
    assert entry.content == '夜間おむつ交換'
    assert entry.staff_name == '介護 太郎'
    assert entry.record_time == at(6, 0)


def test_previous_day_note_alone_gives_no_excretion_entry(resident):
    ExcretionRecord.objects.create(resident=resident, record_date=at(21, day=DAY - timedelta(days=1)),
                                   type=c.EXCRETION_NOTE, notes='前日')

    assert by_type(build_daily_records(DAY), c.EXCRETION) == []


def test_shift_only_filter_keeps_all_types_but_drops_other_bucket(resident):
    CareRecord.objects.create(resident=resident, record_date=at(22), description='夜間巡視')
    WeightRecord.objects.create(resident=resident, record_date=at(7), weight='50.1', staff_name='a')
    CleaningLinenRecord.objects.create(resident=resident, record_date=DAY, day_of_week=1, cleaning_value='○')

    entries = build_daily_records(DAY, [c.DAYTIME])
    types = {e.record_type for e in entries}

    assert types == {c.CARE_NOTE, c.CLEANING}
    cleaning = by_type(entries, c.CLEANING)[0]
    assert cleaning.record_time == at(12)
    assert cleaning.time_category == c.DAYTIME


def test_record_type_filter(resident):
    CareRecord.objects.create(resident=resident, record_date=at(9))
    MealRecord.objects.create(resident=resident, staff_name='a', record_date=at(9), meal_type='朝')

    entries = build_daily_records(DAY, [c.MEAL])

    assert [e.record_type for e in entries] == [c.MEAL]


def test_nursing_categories_and_facility_wide_notes(resident):
    NursingRecord.objects.create(resident=resident, record_date=at(9), category='intervention', description='医師指示')
    NursingRecord.objects.create(resident=resident, record_date=at(10), category='assessment',
                                 notes='発赤', interventions='軟膏塗布', description='')
    NursingRecord.objects.create(resident=None, record_date=at(11), category='', description='全体連絡')

    entries = build_daily_records(DAY)
    by_id = {e.record_type: e for e in entries}

    assert by_id[c.MEDICAL_NOTE].content == '医師指示'
    assert by_id[c.TREATMENT].content == '軟膏塗布'
    facility = by_id[c.NURSING_NOTE].to_dict()
    assert facility['residentName'] == c.FACILITY_WIDE_RESIDENT_NAME
    assert facility['roomNumber'] == ''
    assert facility['residentId'] is None

    only_treatment = build_daily_records(DAY, [c.TREATMENT])
    assert [e.record_type for e in only_treatment] == [c.TREATMENT]


def test_custom_nursing_category_filter_pulls_nursing_group(resident):
    NursingRecord.objects.create(resident=resident, record_date=at(9), category='リハビリ', description='歩行訓練')
    NursingRecord.objects.create(resident=resident, record_date=at(10), category=c.NURSING_NOTE)

    entries = build_daily_records(DAY, ['リハビリ'])

    assert [(e.record_type, e.content) for e in entries] == [('リハビリ', '歩行訓練')]


def test_rows_of_inactive_or_unknown_residents_are_dropped(resident):
    gone = Resident.objects.create(name='退居 者', room_number='109', is_active=False)
    CareRecord.objects.create(resident=gone, record_date=at(9), description='x')
    CareRecord.objects.create(resident=resident, record_date=at(9), description='y')

    assert [e.content for e in build_daily_records(DAY)] == ['y']


def test_next_morning_window(resident):
    next_day = DAY + timedelta(days=1)
    CareRecord.objects.create(resident=resident, record_date=at(8, 30, day=next_day), description='翌朝')
    CareRecord.objects.create(resident=resident, record_date=at(8, 31, day=next_day), description='日勤')
    CareRecord.objects.create(resident=resident, record_date=at(23, 59), description='深夜')

    assert [e.content for e in build_daily_records(DAY)] == ['深夜']
    assert [e.content for e in build_daily_records(DAY, include_next_morning=True)] == ['翌朝', '深夜']


def test_failing_source_is_logged_and_skipped(resident, caplog, monkeypatch):
    # the app logger does not propagate to root, where caplog listens
    monkeypatch.setattr(logging.getLogger('care'), 'propagate', True)
    CareRecord.objects.create(resident=resident, record_date=at(9), description='ok')

    def broken(window):
        raise RuntimeError('db down')

    with caplog.at_level(logging.ERROR, logger='care.services.daily_records'):
        entries = build_daily_records(DAY, fetchers={'vital': broken})

    assert [e.content for e in entries] == ['ok']
    assert any('vital' in r.getMessage() for r in caplog.records)


def test_injected_roster_and_fetchers_need_no_database():
    res = SimpleNamespace(id='r1', name='テスト', room_number='201')
    row = SimpleNamespace(id='c1', resident_id='r1', staff_id='x', record_date=at(10),
                          description='注入', created_at=None)
    empty = {name: (lambda w: []) for name in
             ('meal', 'medication', 'vital', 'excretion', 'cleaning', 'weight', 'nursing')}

    entries = build_daily_records(
        DAY, fetchers={'care': lambda w: [row], **empty}, roster=[res],
        resolver=StaffNameResolver([{'x': '職員X'}]),
    )

    data = entries[0].to_dict()
    assert data['recordTime'] == '2025-03-10T10:00:00+09:00'
    assert data['staffName'] == '職員X'
    assert 'timeCategory' not in data


def test_day_window_dates():
    assert DayWindow.for_date(DAY).dates() == [DAY]
    assert DayWindow.for_date(DAY, include_next_morning=True).dates() == [DAY, DAY + timedelta(days=1)]


def test_format_excretion_lines_skips_empty_slots():
    rows = [
        SimpleNamespace(record_date=at(5, 0), type=c.EXCRETION_URINATION, amount='', urine_volume_cc=None),
        SimpleNamespace(record_date=at(6, 0), type=c.EXCRETION_BOWEL, consistency='軟', amount=''),
    ]
    assert format_excretion_lines(rows) == ['06:00 便: 軟']
