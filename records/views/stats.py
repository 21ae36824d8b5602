from rest_framework.decorators import api_view
from rest_framework.response import Response

from records.cache import get_response_cache, stats_cache_key
from records.kinds import get_kind
from records.services.stats import get_stats


def _cached_stats(request, kinds=None):
    rc = get_response_cache()
    ck = stats_cache_key(request)
    if rc is not None:
        cached = rc.get(ck)
        if cached is not None:
            return Response(cached)
    payload = get_stats(kinds=kinds)
    if rc is not None:
        rc.set(ck, payload)
    return Response(payload)


@api_view(['GET'])
def stats(request):
    """Total, weekly, expired and active counts for every kind (cached)."""
    return _cached_stats(request)


@api_view(['GET'])
def kind_stats(request, kind: str):
    """The same counts for a single kind."""
    record_kind = get_kind(kind)
    return _cached_stats(request, kinds=[record_kind])
