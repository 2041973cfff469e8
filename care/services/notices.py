"""
Staff notice visibility and per-user read receipts.

A notice counts as unread for a user while it is active, today falls
inside its viewing period, and the user has no read receipt for it.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from django.utils import timezone

from care.models import StaffNotice, StaffNoticeReadStatus

logger = logging.getLogger(__name__)


def active_notices():
    return StaffNotice.objects.filter(is_active=True).order_by('-created_at')


def notices_visible_on(day: date):
    return active_notices().filter(start_date__lte=day, end_date__gte=day)


def unread_notice_count(user, day: Optional[date] = None) -> int:
    day = day or timezone.localdate()
    return notices_visible_on(day).exclude(read_statuses__user=user).count()


def read_notice_ids(user, notices: Iterable[StaffNotice]) -> set:
    ids = [n.id for n in notices]
    return set(
        StaffNoticeReadStatus.objects.filter(user=user, notice_id__in=ids).values_list('notice_id', flat=True)
    )


def mark_notice_read(notice: StaffNotice, user):
    """Returns ``(receipt, created)``; reading twice keeps the first receipt."""
    return StaffNoticeReadStatus.objects.get_or_create(notice=notice, user=user)


def mark_notice_unread(notice: StaffNotice, user) -> bool:
    deleted, _ = StaffNoticeReadStatus.objects.filter(notice=notice, user=user).delete()
    if not deleted:
        logger.debug("notice %s was not read by %s", notice.id, user.pk)
    return bool(deleted)
