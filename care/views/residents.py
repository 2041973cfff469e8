from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.models import Resident
from care.serializers.queries import ResidentListQuerySerializer
from care.serializers.records import ResidentSerializer
from care.services.audit import log_action
from care.services.residents import load_roster


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def residents(request):
    if request.method == 'POST':
        s = ResidentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        resident = s.save()
        log_action(user=request.user, action='resident.create', object_type='resident', object_id=resident.id)
        return Response(ResidentSerializer(resident).data, status=status.HTTP_201_CREATED)
    q = ResidentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    roster = load_roster(q.validated_data.get('floor'), include_inactive=q.validated_data['includeInactive'])
    return Response(ResidentSerializer(roster, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def resident_detail(request, resident_id):
    resident = Resident.objects.filter(id=resident_id).first()
    if not resident:
        raise NotFound('resident not found')
    if request.method == 'GET':
        return Response(ResidentSerializer(resident).data)
    if request.method == 'DELETE':
        resident.delete()
        log_action(user=request.user, action='resident.delete', object_type='resident', object_id=resident_id)
        return Response({'ok': True})
    s = ResidentSerializer(resident, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    resident = s.save()
    log_action(user=request.user, action='resident.update', object_type='resident', object_id=resident.id)
    return Response(ResidentSerializer(resident).data)
