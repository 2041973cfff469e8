"""
Audit trail for logins and every write to resident and record tables.
"""
from typing import Any, Dict, Optional

from care.models import AuditEvent


def _actor(user):
    # AnonymousUser and failed logins are stored without a user
    if getattr(user, 'is_authenticated', False) and getattr(user, 'pk', None):
        return user
    return None


def log_action(*, user, action: str, object_type: Optional[str] = None, object_id: Any = None,
               detail: Optional[Dict[str, Any]] = None) -> AuditEvent:
    return AuditEvent.objects.create(
        user=_actor(user),
        action=action,
        object_type=object_type,
        object_id=str(object_id) if object_id is not None else None,
        detail=detail or {},
    )


def log_record_change(request, object_type: str, verb: str, object_id: Any, record_day=None) -> AuditEvent:
    """Audit a create/update/delete of one record, e.g. ``care_record.update``."""
    detail = {'recordDate': record_day.isoformat()} if record_day else None
    return log_action(user=request.user, action=f'{object_type}.{verb}', object_type=object_type,
                      object_id=object_id, detail=detail)
