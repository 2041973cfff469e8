"""
Liveness check for the load balancer: database plus cache backend.
"""
import logging

from django.core.cache import cache
from django.db import connections
from django.db.utils import DatabaseError
from django.http import JsonResponse
from django.utils import timezone

logger = logging.getLogger(__name__)

HEALTH_KEY = 'carehome:healthz'


def _check_cache():
    # with REDIS_URL set this reaches Redis through django-redis
    try:
        cache.set(HEALTH_KEY, 1, timeout=10)
        return cache.get(HEALTH_KEY) == 1
    except Exception as e:
        logger.warning("cache check failed: %s", e)
        return False


def healthz(request):
    body = {'time': timezone.localtime().isoformat()}
    try:
        with connections['default'].cursor() as cur:
            cur.execute('SELECT 1')
            row = cur.fetchone()
    except DatabaseError as e:
        logger.error("health check failed: %s", e)
        return JsonResponse({'ok': False, 'db': False, 'error': str(e), **body}, status=500)
    body.update(db=bool(row and row[0] == 1), cache=_check_cache())
    return JsonResponse({'ok': body['db'], **body})
