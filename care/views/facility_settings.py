"""
Facility settings.  The facility has a single settings row.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.models import FacilitySettings
from care.serializers.records import FacilitySettingsSerializer
from care.services.audit import log_action


@api_view(['GET', 'POST', 'PUT'])
@permission_classes([IsAuthenticated])
def facility_settings(request):
    current = FacilitySettings.objects.order_by('created_at').first()
    if request.method == 'GET':
        return Response(FacilitySettingsSerializer(current).data if current else None)

    # POST creates the row on first use; afterwards both verbs update it
    s = FacilitySettingsSerializer(current, data=request.data, partial=current is not None)
    s.is_valid(raise_exception=True)
    obj = s.save()
    log_action(user=request.user, action='facility_settings.update' if current else 'facility_settings.create',
               object_type='facility_settings', object_id=obj.id)
    return Response(FacilitySettingsSerializer(obj).data,
                    status=status.HTTP_200_OK if current else status.HTTP_201_CREATED)
