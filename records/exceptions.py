"""
Error types raised by the record store and the stats aggregator, and
the DRF exception handler that renders them (and every other API error)
in one envelope: ``{"ok": false, "error": {"code": ..., "message": ...}}``.
"""
from __future__ import annotations

import logging

from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class RecordError(Exception):
    status_code = 500
    code = 'record_error'

    def __init__(self, detail=None):
        self.detail = detail if detail is not None else self.code
        super().__init__(detail)


class ValidationError(RecordError):
    """Missing or malformed input.  ``detail`` maps field names to messages."""
    status_code = 400
    code = 'validation_error'


class NotFoundError(RecordError):
    status_code = 404
    code = 'not_found'


class StorageError(RecordError):
    """The database could not be reached or the query failed."""
    status_code = 503
    code = 'storage_error'


def api_exception_handler(exc, context):
    if isinstance(exc, RecordError):
        return Response({'ok': False, 'error': {'code': exc.code, 'message': exc.detail}}, status=exc.status_code)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view').__class__.__name__, exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': 'Internal server error'}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}},
                    status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp) -> dict:
    # keep WWW-Authenticate / Retry-After set by DRF
    return {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
