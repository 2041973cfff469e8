import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

logger = logging.getLogger(__name__)

UPDATES_GROUP = "updates"


def broadcast_records_changed(record_type: str, action: str, object_id=None, record_date=None) -> None:
    """Tell connected clients that a record changed so they can refetch."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    now = timezone.now()
    event = {
        "type": "records.changed",
        "recordType": record_type,
        "action": action,
        "id": str(object_id) if object_id is not None else None,
        "recordDate": str(record_date) if record_date is not None else None,
        "ts": now.isoformat(),
    }
    try:
        async_to_sync(channel_layer.group_send)(UPDATES_GROUP, event)
    except Exception:
        # a dead channel layer must not fail the write that triggered it
        logger.warning("records.changed broadcast failed", exc_info=True)
