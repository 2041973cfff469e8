"""
Daily record timeline endpoint used by the shift handover screen.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from care.serializers.queries import DailyRecordsQuerySerializer
from care.services.daily_records import build_daily_records


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def daily_records(request):
    q = DailyRecordsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    entries = build_daily_records(
        vd['date'],
        record_types=vd.get('recordTypes') or None,
        include_next_morning=vd.get('includeNextMorning', False),
    )
    return Response([e.to_dict() for e in entries])
