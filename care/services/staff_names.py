"""
Resolution of staff references to display names.

Records point at staff either through the staff roster or through a
login account, and some only hold a free-text name.  The resolver tries
each registry in order and falls back to the raw reference.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Optional

from care.models import Staff, User


class StaffNameResolver:
    def __init__(self, registries: Iterable[Mapping[str, str]]):
        self.registries = list(registries)

    def resolve(self, ref: Optional[object]) -> str:
        if ref is None or ref == '':
            return ''
        key = str(ref)
        for registry in self.registries:
            name = registry.get(key)
            if name:
                return name
        return key


def load_staff_resolver() -> StaffNameResolver:
    """Load the staff roster and the user registry, in that order of precedence."""
    staff_map = {
        str(pk): name for pk, name in Staff.objects.values_list('id', 'staff_name')
    }
    user_map = {}
    for pk, first_name, email in User.objects.values_list('id', 'first_name', 'email'):
        user_map[str(pk)] = first_name or email or str(pk)
    return StaffNameResolver([staff_map, user_map])
