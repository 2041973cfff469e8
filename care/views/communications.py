"""
Handover and incident messages between shifts.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.models import Communication
from care.serializers.queries import CommunicationQuerySerializer
from care.serializers.records import CommunicationSerializer
from care.services.audit import log_record_change
from care.services.realtime import broadcast_records_changed
from care.views.records import record_day

COMMUNICATION = 'communication'


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def communications(request):
    if request.method == 'POST':
        s = CommunicationSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = s.save(staff_id=str(request.user.id))
        log_record_change(request, COMMUNICATION, 'create', obj.id, record_day(obj))
        broadcast_records_changed(COMMUNICATION, 'created', obj.id, record_day(obj))
        return Response(CommunicationSerializer(obj).data, status=status.HTTP_201_CREATED)

    q = CommunicationQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    qs = Communication.objects.all()
    if vd.get('residentId'):
        qs = qs.filter(resident_id=vd['residentId'])
    if vd.get('startDate'):
        qs = qs.filter(record_date__date__gte=vd['startDate'])
    if vd.get('endDate'):
        qs = qs.filter(record_date__date__lte=vd['endDate'])
    return Response(CommunicationSerializer(qs.order_by('-record_date'), many=True).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def communication_mark_read(request, communication_id):
    obj = Communication.objects.filter(id=communication_id).first()
    if not obj:
        raise NotFound('communication not found')
    if not obj.is_read:
        obj.is_read = True
        obj.save(update_fields=['is_read', 'updated_at'])
        log_record_change(request, COMMUNICATION, 'read', obj.id, record_day(obj))
        broadcast_records_changed(COMMUNICATION, 'updated', obj.id, record_day(obj))
    return Response(CommunicationSerializer(obj).data)
