"""
Login and token refresh endpoints.

Login hands out both a DRF token (``Authorization: Token ...``) and a
JWT pair; the refresh endpoint is simplejwt's own view.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from care.authentication import issue_token
from care.models import Staff
from care.serializers.auth import LoginSerializer
from care.services.audit import log_action


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Username/password login.  Any role sent by the client is ignored."""
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    password = s.validated_data['password']

    user = authenticate(request, username=username, password=password)
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'ok': False, 'detail': 'ユーザー名またはパスワードが違います'}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    token_obj = issue_token(user)
    refresh = RefreshToken.for_user(user)

    payload: dict[str, object] = {
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'user': {
            'id': user.id,
            'username': user.username,
            'name': user.display_name(),
            'role': user.role,
        },
    }
    staff = Staff.objects.filter(staff_id=user.username).first()
    if staff:
        payload['staff'] = {'id': str(staff.id), 'staffName': staff.staff_name, 'floor': staff.floor}
    return Response(payload, status=200)

# ScopedRateThrottle reads throttle_scope from the wrapped APIView class
login_view.cls.throttle_scope = 'login'


jwt_refresh_view = TokenRefreshView.as_view()
