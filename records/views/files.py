"""
Record file endpoints.

One pair of views serves all four record kinds; ``records.routers``
binds the ``kind`` keyword for each URL.  Lists are served from the
response cache when possible, and every successful mutation drops the
kind's cached lists and all cached stats so no stale read is served.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status

from records.cache import get_response_cache, invalidate_kind, list_cache_key
from records.exceptions import NotFoundError
from records.kinds import get_kind
from records.services.store import RecordStore


@api_view(['GET', 'POST'])
def file_collection(request, kind: str):
    """List the kind's files (newest first) or create a new one."""
    store = RecordStore(get_kind(kind))
    if request.method == 'POST':
        record = store.create(request.data)
        invalidate_kind(kind)
        return Response(record, status=status.HTTP_201_CREATED)

    rc = get_response_cache()
    ck = list_cache_key(kind, request)
    if rc is not None:
        cached = rc.get(ck)
        if cached is not None:
            return Response(cached)
    files = store.list()
    if rc is not None:
        rc.set(ck, files)
    return Response(files)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
def file_detail(request, kind: str, file_id: str):
    """Fetch, partially update or delete one file.

    PUT and PATCH behave the same: only the fields sent are changed.
    """
    record_kind = get_kind(kind)
    store = RecordStore(record_kind)
    if request.method == 'GET':
        record = store.get(file_id)
    elif request.method == 'DELETE':
        if not store.delete(file_id):
            raise NotFoundError(f'{record_kind.label} {file_id} not found')
        invalidate_kind(kind)
        return Response(status=status.HTTP_204_NO_CONTENT)
    else:
        record = store.update(file_id, request.data)
        if record is not None:
            invalidate_kind(kind)
    if record is None:
        raise NotFoundError(f'{record_kind.label} {file_id} not found')
    return Response(record)
