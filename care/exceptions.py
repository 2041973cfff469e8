"""
DRF exception handler producing the ``{"ok": false, "error": {...}}`` envelope.

Validation errors keep their per-field structure, with field names in
camelCase to match the request bodies the frontend sends.
"""
import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from care.serializers.records import to_camel

logger = logging.getLogger(__name__)


def _camel_keys(detail):
    if isinstance(detail, dict):
        return {to_camel(k): _camel_keys(v) for k, v in detail.items()}
    if isinstance(detail, list):
        return [_camel_keys(v) for v in detail]
    return detail


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        if isinstance(exc, IntegrityError):
            logger.warning("integrity error on %s: %s", context.get('view'), exc)
            return Response({'ok': False, 'error': {'code': 'conflict', 'message': str(exc)}},
                            status=status.HTTP_409_CONFLICT)
        logger.error("unhandled API error: %s", exc, exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)

    if isinstance(exc, ValidationError):
        message = _camel_keys(resp.data)
    elif isinstance(resp.data, dict) and 'detail' in resp.data:
        message = resp.data['detail']
    else:
        message = resp.data
    code = getattr(exc, 'default_code', None) or 'api_error'
    return Response({'ok': False, 'error': {'code': code, 'message': message}},
                    status=resp.status_code, headers=_retry_headers(resp))


def _retry_headers(resp):
    # throttled responses carry Retry-After, authentication failures WWW-Authenticate
    return {k: resp[k] for k in ('Retry-After', 'WWW-Authenticate') if resp.has_header(k)}
