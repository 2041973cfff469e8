"""
Staff roster.  Everyone may read it; only administrators may change it.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.models import Staff
from care.permissions import is_admin
from care.serializers.records import StaffSerializer
from care.services.audit import log_action


def _ensure_admin(request):
    if not is_admin(request.user):
        raise PermissionDenied('administrator role required')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def staff_list(request):
    if request.method == 'POST':
        _ensure_admin(request)
        s = StaffSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        staff = s.save()
        log_action(user=request.user, action='staff.create', object_type='staff', object_id=staff.id)
        return Response(StaffSerializer(staff).data, status=status.HTTP_201_CREATED)
    qs = Staff.objects.all()
    floor = request.query_params.get('floor')
    if floor:
        qs = qs.filter(floor=floor)
    return Response(StaffSerializer(qs, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def staff_detail(request, staff_pk):
    staff = Staff.objects.filter(id=staff_pk).first()
    if not staff:
        raise NotFound('staff not found')
    if request.method == 'GET':
        return Response(StaffSerializer(staff).data)
    _ensure_admin(request)
    if request.method == 'DELETE':
        staff.delete()
        log_action(user=request.user, action='staff.delete', object_type='staff', object_id=staff_pk)
        return Response({'ok': True})
    s = StaffSerializer(staff, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    staff = s.save()
    log_action(user=request.user, action='staff.update', object_type='staff', object_id=staff.id)
    return Response(StaffSerializer(staff).data)
