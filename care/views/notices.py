"""
Staff notices (連絡事項) and their read receipts.

Everyone may read notices and mark them read or unread; only
administrators post or withdraw them.  Withdrawing a notice deactivates
it rather than deleting it.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.models import StaffNotice
from care.permissions import is_admin
from care.serializers.records import StaffNoticeReadStatusSerializer, StaffNoticeSerializer
from care.services import notices
from care.services.audit import log_action
from care.services.realtime import broadcast_records_changed

NOTICE = 'staff_notice'


def _get_notice(notice_id) -> StaffNotice:
    notice = notices.active_notices().filter(id=notice_id).first()
    if not notice:
        raise NotFound('staff notice not found')
    return notice


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def staff_notices(request):
    if request.method == 'POST':
        if not is_admin(request.user):
            raise PermissionDenied('administrator role required')
        s = StaffNoticeSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        notice = s.save(created_by=str(request.user.id))
        log_action(user=request.user, action='staff_notice.create', object_type=NOTICE, object_id=notice.id)
        broadcast_records_changed(NOTICE, 'created', notice.id, notice.start_date)
        return Response(StaffNoticeSerializer(notice).data, status=status.HTTP_201_CREATED)
    qs = list(notices.active_notices())
    ctx = {'read_ids': notices.read_notice_ids(request.user, qs)}
    return Response(StaffNoticeSerializer(qs, many=True, context=ctx).data)


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def staff_notice_detail(request, notice_id):
    notice = _get_notice(notice_id)
    if request.method == 'GET':
        ctx = {'read_ids': notices.read_notice_ids(request.user, [notice])}
        return Response(StaffNoticeSerializer(notice, context=ctx).data)
    if not is_admin(request.user):
        raise PermissionDenied('administrator role required')
    notice.is_active = False
    notice.save(update_fields=['is_active', 'updated_at'])
    log_action(user=request.user, action='staff_notice.delete', object_type=NOTICE, object_id=notice.id)
    broadcast_records_changed(NOTICE, 'deleted', notice.id, notice.start_date)
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def staff_notice_read_status(request, notice_id):
    notice = _get_notice(notice_id)
    receipts = notice.read_statuses.select_related('user').order_by('-read_at')
    return Response(StaffNoticeReadStatusSerializer(receipts, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def staff_notice_mark_read(request, notice_id):
    notice = _get_notice(notice_id)
    receipt, created = notices.mark_notice_read(notice, request.user)
    return Response(StaffNoticeReadStatusSerializer(receipt).data,
                    status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def staff_notice_mark_unread(request, notice_id):
    notice = _get_notice(notice_id)
    notices.mark_notice_unread(notice, request.user)
    return Response({'ok': True})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def staff_notices_unread_count(request):
    return Response({'count': notices.unread_notice_count(request.user)})
