"""
Generic record store.

One :class:`RecordStore` serves every record kind; the kind descriptor
supplies the model, serializer, id prefix and expiry horizon.  The store
returns plain dicts in the API's camelCase shape and never leaks driver
exceptions: database failures surface as :class:`StorageError`, bad
input as :class:`ValidationError`, and a missing record as ``None`` (or
``False`` from :meth:`delete`).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Mapping, Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from records.exceptions import StorageError, ValidationError
from records.kinds import RecordKind, get_kind
from records.services.identifiers import new_record_id

logger = logging.getLogger(__name__)

# Attempts at drawing an unused id before giving up
ID_ATTEMPTS = 5


class RecordStore:
    def __init__(self, kind: RecordKind | str):
        self.kind = get_kind(kind) if isinstance(kind, str) else kind
        self.model = self.kind.model

    @contextmanager
    def _storage(self, op: str, record_id: Optional[str] = None):
        try:
            yield
        except DatabaseError as exc:
            logger.exception('%s %s failed (id=%s)', self.kind.name, op, record_id)
            raise StorageError(f'{self.kind.label} {op} failed') from exc

    def _to_dict(self, obj) -> dict:
        return dict(self.kind.serializer_class(obj).data)

    @staticmethod
    def _check_dates(registered: datetime, expires: datetime) -> None:
        if registered > expires:
            raise ValidationError({'expiryDate': ['Expiry date must not be before the registration date.']})

    def list(self) -> list[dict]:
        """All records of the kind, newest registration first."""
        with self._storage('list'):
            rows = self.kind.serializer_class(
                self.model.objects.order_by('-registration_date', 'id'), many=True
            ).data
        return [dict(row) for row in rows]

    def get(self, record_id: str) -> Optional[dict]:
        with self._storage('get', record_id):
            obj = self.model.objects.filter(pk=record_id).first()
        return self._to_dict(obj) if obj is not None else None

    def create(self, data: Mapping[str, Any]) -> dict:
        """Validate, assign an id and default dates, insert.

        Validation happens before any query.  Without explicit dates the
        record is registered now and expires after the kind's horizon; a
        given registration date without an expiry date gets the horizon
        added to it.
        """
        serializer = self.kind.serializer_class(data=data)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)
        values = dict(serializer.validated_data)
        registered = values.setdefault('registration_date', timezone.now())
        expires = values.setdefault('expiry_date', self.kind.expiry_for(registered))
        self._check_dates(registered, expires)

        with self._storage('create'):
            obj = self._insert(values)
        logger.info('created %s file %s', self.kind.name, obj.pk)
        return self._to_dict(obj)

    def _insert(self, values: dict):
        for _ in range(ID_ATTEMPTS):
            obj = self.model(id=new_record_id(self.kind.prefix), **values)
            try:
                with transaction.atomic():
                    obj.save(force_insert=True)
                return obj
            except IntegrityError:
                if not self.model.objects.filter(pk=obj.pk).exists():
                    raise
                logger.warning('id collision on %s, drawing a new id', obj.pk)
        raise IntegrityError(f'no unused {self.kind.prefix} id after {ID_ATTEMPTS} attempts')

    def update(self, record_id: str, data: Mapping[str, Any]) -> Optional[dict]:
        """Write only the fields present in ``data``.

        Returns the record re-read from the database, or ``None`` when no
        record has ``record_id``.  A payload without any recognised field
        leaves the record untouched and returns it as stored.  ``id`` and
        ``status`` in the payload are ignored.
        """
        with self._storage('update', record_id):
            with transaction.atomic():
                obj = self.model.objects.select_for_update().filter(pk=record_id).first()
                if obj is None:
                    return None
                serializer = self.kind.serializer_class(obj, data=data, partial=True)
                if not serializer.is_valid():
                    raise ValidationError(serializer.errors)
                changes = dict(serializer.validated_data)
                if changes:
                    self._check_dates(
                        changes.get('registration_date', obj.registration_date),
                        changes.get('expiry_date', obj.expiry_date),
                    )
                    self.model.objects.filter(pk=record_id).update(**changes)
                    obj = self.model.objects.get(pk=record_id)
        if changes:
            logger.info('updated %s file %s: %s', self.kind.name, record_id, sorted(changes))
        return self._to_dict(obj)

    def delete(self, record_id: str) -> bool:
        """Remove the record; False when there was nothing to remove."""
        with self._storage('delete', record_id):
            deleted, _ = self.model.objects.filter(pk=record_id).delete()
        if deleted:
            logger.info('deleted %s file %s', self.kind.name, record_id)
        return deleted > 0
