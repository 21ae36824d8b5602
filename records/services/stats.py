"""
Per-kind record statistics.

Each kind is counted with one aggregate query, so its four numbers come
from the same snapshot; all kinds share one ``now`` and one transaction.
``expired`` and ``active`` split on the expiry date and always add up to
``total``.  ``weekly`` counts registrations in the last seven days and
overlaps either of them.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from django.db import DatabaseError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from records.exceptions import StorageError
from records.kinds import KINDS, RecordKind

logger = logging.getLogger(__name__)

WEEKLY_WINDOW = timedelta(days=7)


def kind_stats(kind: RecordKind, now: datetime) -> dict[str, int]:
    week_ago = now - WEEKLY_WINDOW
    return kind.model.objects.aggregate(
        total=Count('pk'),
        weekly=Count('pk', filter=Q(registration_date__gte=week_ago, registration_date__lte=now)),
        # unlike FileStatus, a file expiring exactly at ``now`` counts as active here
        expired=Count('pk', filter=Q(expiry_date__lt=now)),
        active=Count('pk', filter=Q(expiry_date__gte=now)),
    )


def get_stats(now: Optional[datetime] = None, kinds: Optional[list[RecordKind]] = None) -> dict[str, dict[str, int]]:
    """Stats for every kind (or the given ones); all or nothing."""
    now = now or timezone.now()
    kinds = kinds if kinds is not None else list(KINDS.values())
    try:
        with transaction.atomic():
            return {kind.name: kind_stats(kind, now) for kind in kinds}
    except DatabaseError as exc:
        logger.exception('stats aggregation failed for %s', [k.name for k in kinds])
        raise StorageError('stats aggregation failed') from exc
