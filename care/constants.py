"""
Facility-wide vocabulary shared by models, services and views.

Labels are stored in their localized form; these names are the only place
the raw strings appear.
"""
from __future__ import annotations

from datetime import time, timedelta, timezone

# Display record types of the daily timeline
CARE_NOTE = '様子'
MEAL = '食事'
MEDICATION = '服薬'
VITAL = 'バイタル'
EXCRETION = '排泄'
CLEANING = '清掃リネン'
WEIGHT = '体重'
NURSING_NOTE = '看護記録'
MEDICAL_NOTE = '医療記録'
TREATMENT = '処置'

RECORD_TYPES = (
    CARE_NOTE, MEAL, MEDICATION, VITAL, EXCRETION,
    CLEANING, WEIGHT, NURSING_NOTE, MEDICAL_NOTE, TREATMENT,
)
NURSING_GROUP = (NURSING_NOTE, MEDICAL_NOTE, TREATMENT)

# Shift buckets
DAYTIME = '日中'
NIGHT = '夜間'
SHIFT_BUCKETS = (DAYTIME, NIGHT)

# Journals: the two shift journals plus the nursing one
JOURNAL_NURSING = '看護'
JOURNAL_TYPES = (DAYTIME, NIGHT, JOURNAL_NURSING)

# Medication timing slots in canonical order
TIMING_WAKE = '起床後'
TIMING_PRE_BREAKFAST = '朝前'
TIMING_POST_BREAKFAST = '朝後'
TIMING_PRE_LUNCH = '昼前'
TIMING_POST_LUNCH = '昼後'
TIMING_PRE_DINNER = '夕前'
TIMING_POST_DINNER = '夕後'
TIMING_PRE_SLEEP = '眠前'
TIMING_AS_NEEDED = '頓服'

TIMING_SLOTS = (
    TIMING_WAKE, TIMING_PRE_BREAKFAST, TIMING_POST_BREAKFAST,
    TIMING_PRE_LUNCH, TIMING_POST_LUNCH, TIMING_PRE_DINNER,
    TIMING_POST_DINNER, TIMING_PRE_SLEEP, TIMING_AS_NEEDED,
)
TIMING_ALL = 'all'

# Clock time shown for a medication slot on the daily timeline
TIMING_CLOCK = {
    TIMING_WAKE: time(7, 0),
    TIMING_PRE_BREAKFAST: time(7, 30),
    TIMING_POST_BREAKFAST: time(8, 30),
    TIMING_PRE_LUNCH: time(11, 30),
    TIMING_POST_LUNCH: time(12, 30),
    TIMING_PRE_DINNER: time(17, 30),
    TIMING_POST_DINNER: time(18, 30),
    TIMING_PRE_SLEEP: time(20, 30),
    TIMING_AS_NEEDED: time(12, 0),
}
# Slots whose actual administration time replaces the slot convention
TIMING_USES_ACTUAL_TIME = frozenset({TIMING_PRE_LUNCH, TIMING_PRE_DINNER, TIMING_AS_NEEDED})

# Medication record kinds
MEDICATION_TYPE_ORAL = '服薬'
MEDICATION_TYPE_EYE_DROPS = '点眼'
MEDICATION_TYPES = (MEDICATION_TYPE_ORAL, MEDICATION_TYPE_EYE_DROPS)

# Meal labels and the clock time each is shown at
MEAL_CLOCK = {
    '朝': time(8, 0),
    '10時': time(10, 0),
    '昼': time(12, 0),
    '15時': time(15, 0),
    '夕': time(18, 0),
}

# Excretion record kinds
EXCRETION_URINATION = 'urination'
EXCRETION_BOWEL = 'bowel_movement'
EXCRETION_NOTE = 'general_note'

# Every timestamp on the timeline is rendered with this offset
JST = timezone(timedelta(hours=9), 'JST')

# Overnight extension: the next morning up to and including 08:30:59
NEXT_MORNING_CUTOFF = time(8, 30, 59)

FACILITY_WIDE_RESIDENT_NAME = '全体'
