import time

from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.utils import timezone

_STARTED = time.monotonic()


def health(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        db_ok = bool(row and row[0] == 1)
    except DatabaseError as e:
        return JsonResponse({'status': 'error', 'db': False, 'error': str(e)}, status=503)
    return JsonResponse({
        'status': 'ok',
        'message': 'SJMC backend is running',
        'timestamp': timezone.now().isoformat(),
        'uptime': round(time.monotonic() - _STARTED, 3),
        'db': db_ok,
    })
