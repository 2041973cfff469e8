"""
Mapping of stored nursing-note categories to timeline record types.

Older rows carry an English taxonomy (``intervention``, ``assessment``,
...), newer rows the localized labels.  Both are folded into the same
display record types here.
"""
from __future__ import annotations

from typing import Optional

from care import constants as c

CURRENT_CATEGORIES = frozenset(c.NURSING_GROUP)

LEGACY_CATEGORY_MAP = {
    'intervention': c.MEDICAL_NOTE,
    'evaluation': c.NURSING_NOTE,
    'observation': c.NURSING_NOTE,
}

# Legacy 'assessment' rows were written both for plain observations and for
# treatments.  A row that recorded interventions and notes is taken to be a
# treatment.  This is a heuristic and may misclassify edge cases.
LEGACY_ASSESSMENT = 'assessment'


def normalize_category(raw: Optional[str], has_interventions: bool = False, has_notes: bool = False) -> str:
    if not raw:
        return c.NURSING_NOTE
    if raw in CURRENT_CATEGORIES:
        return raw
    if raw in LEGACY_CATEGORY_MAP:
        return LEGACY_CATEGORY_MAP[raw]
    if raw == LEGACY_ASSESSMENT:
        return c.TREATMENT if (has_interventions and has_notes) else c.NURSING_NOTE
    # custom facility categories are shown as-is
    return raw
