from __future__ import annotations

from typing import Optional

from django.db.models import Q

from care.models import Resident

ALL = 'all'


def floor_q(floor: Optional[str], prefix: str = '') -> Q:
    """Match a floor given either as ``3`` or as ``3階``."""
    if not floor or floor == ALL:
        return Q()
    f = str(floor)
    if f.endswith('階'):
        f = f[:-1]
    return Q(**{f'{prefix}floor': f}) | Q(**{f'{prefix}floor': f'{f}階'})


def load_roster(floor: Optional[str] = None, include_inactive: bool = False) -> list[Resident]:
    qs = Resident.objects.filter(floor_q(floor))
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return list(qs.order_by('room_number', 'name'))


def room_sort_key(room_number: Optional[str]) -> int:
    """Numeric value of the leading digits of a room number, 0 when none."""
    digits = ''
    for ch in (room_number or '').strip():
        if not ch.isdigit():
            break
        digits += ch
    return int(digits) if digits else 0
