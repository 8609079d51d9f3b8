"""Generic store logic for record families that carry an active flag.

Two shapes are supported:

- ``SingletonStore``: rate quotes, display settings, banner. Every create
  retires the previous active row and inserts the new one as active inside a
  single transaction, so readers only ever see one active row.
- ``PlaylistStore``: media items, promo images. Many rows may be active;
  creates append to the end of the playlist (``order_index = max + 1``).

Writes of one family are serialized through a process-wide lock. Writers in
other processes are covered at the database level: the partial unique index on
``is_active`` backs the singleton invariant, and on SQLite a playlist append
takes the write lock (``BEGIN IMMEDIATE``) before reading ``max(order_index)``.
Other backends rely on the process lock alone for appends.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, ClassVar, Dict, Generic, Iterator, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rateboard.core.logging import log_event
from rateboard.domain.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
Payload = Union[BaseModel, Mapping[str, Any]]

_family_locks: Dict[str, threading.RLock] = {}
_family_locks_guard = threading.Lock()


def family_lock(family: str) -> threading.RLock:
    """Return the write lock shared by every store instance of `family`.

    Reentrant so a compound write (read current, then update or create) can hold it throughout.
    """
    with _family_locks_guard:
        lock = _family_locks.get(family)
        if lock is None:
            lock = threading.RLock()
            _family_locks[family] = lock
        return lock


class _VersionedStore(Generic[ModelT]):
    """Shared plumbing: payload validation, storage error mapping, lookups, partial updates."""

    model: ClassVar[Type[Any]]
    create_schema: ClassVar[Type[BaseModel]]
    update_schema: ClassVar[Type[BaseModel]]
    family: ClassVar[str]

    def __init__(self, db: Session) -> None:
        self.db = db

    # Validation
    def _validate(self, payload: Payload, *, partial: bool) -> Dict[str, Any]:
        schema = self.update_schema if partial else self.create_schema
        if isinstance(payload, BaseModel) and not isinstance(payload, schema):
            payload = payload.model_dump(exclude_unset=partial)
        try:
            obj = payload if isinstance(payload, schema) else schema.model_validate(payload)
        except PydanticValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            log_event("payload_rejected", log=logger, family=self.family, error_count=len(errors))
            raise ValidationError(f"Invalid {self.family} payload", errors=errors) from exc
        if partial:
            return obj.model_dump(mode="json", exclude_unset=True)
        return obj.model_dump(mode="json")

    @contextmanager
    def _storage(self, action: str) -> Iterator[None]:
        """Roll back and raise PersistenceError on any storage failure inside the block."""
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            log_event(
                "storage_failure",
                log=logger,
                level=logging.ERROR,
                family=self.family,
                action=action,
                error=exc.__class__.__name__,
            )
            raise PersistenceError(f"Failed to {action} {self.family}") from exc

    # Lookups
    def get(self, record_id: int) -> Optional[ModelT]:
        with self._storage("read"):
            return self.db.get(self.model, record_id)

    def get_or_raise(self, record_id: int) -> ModelT:
        record = self.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.family} {record_id} not found")
        return record

    # In-place update
    def update(self, record_id: int, patch: Payload) -> Optional[ModelT]:
        """Apply a partial update; returns None when `record_id` does not exist.

        The active designation is left alone.
        """
        fields = self._validate(patch, partial=True)
        fields = self._prepare_update(fields)
        with family_lock(self.family):
            with self._storage("update"):
                record = self.db.get(self.model, record_id)
                if record is None:
                    return None
                for key, value in fields.items():
                    setattr(record, key, value)
                self.db.commit()
                self.db.refresh(record)
        log_event("record_updated", log=logger, family=self.family, record_id=record_id, fields=sorted(fields))
        return record

    def _prepare_update(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return fields

    def count(self) -> int:
        with self._storage("count"):
            return self.db.query(self.model).count()


class SingletonStore(_VersionedStore[ModelT]):
    """At most one active row; "current" is the active row, else the newest one."""

    def _newest_first(self):
        return self.db.query(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())

    def get_current(self) -> Optional[ModelT]:
        with self._storage("read"):
            current = self._newest_first().filter(self.model.is_active.is_(True)).first()
            if current is None:
                # Rows written before any explicit activation
                current = self._newest_first().first()
            return current

    def create(self, payload: Payload) -> ModelT:
        """Insert a new version and make it the only active row, all-or-nothing."""
        fields = self._validate(payload, partial=False)
        with family_lock(self.family):
            with self._storage("create"):
                try:
                    record, retired = self._retire_and_insert(fields)
                except IntegrityError:
                    # A writer in another process committed between our retire and insert
                    self.db.rollback()
                    log_event("create_version_retry", log=logger, family=self.family)
                    record, retired = self._retire_and_insert(fields)
        log_event("version_created", log=logger, family=self.family, record_id=record.id, retired=retired)
        return record

    def _retire_and_insert(self, fields: Dict[str, Any]) -> tuple[ModelT, int]:
        retired = (
            self.db.query(self.model)
            .filter(self.model.is_active.is_(True))
            .update({self.model.is_active: False}, synchronize_session="fetch")
        )
        record = self.model(**fields, is_active=True)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record, retired

    def active_count(self) -> int:
        with self._storage("count"):
            return self.db.query(self.model).filter(self.model.is_active.is_(True)).count()


class PlaylistStore(_VersionedStore[ModelT]):
    """Ordered playlist; any number of rows may be active."""

    def list(self, active_only: bool = False) -> List[ModelT]:
        with self._storage("list"):
            q = self.db.query(self.model)
            if active_only:
                q = q.filter(self.model.is_active.is_(True))
            return list(q.order_by(self.model.order_index.asc(), self.model.id.asc()).all())

    def create(self, payload: Payload) -> ModelT:
        """Append a new item at the end of the playlist."""
        fields = self._prepare_create(self._validate(payload, partial=False))
        with family_lock(self.family):
            with self._storage("create"):
                self._begin_append()
                # Read max(order_index) and insert under the same lock and transaction
                highest = self.db.query(func.max(self.model.order_index)).scalar()
                record = self.model(**fields, order_index=(highest or 0) + 1)
                self.db.add(record)
                self.db.commit()
                self.db.refresh(record)
        log_event(
            "playlist_item_created",
            log=logger,
            family=self.family,
            record_id=record.id,
            order_index=record.order_index,
        )
        return record

    def _begin_append(self) -> None:
        conn = self.db.connection()
        if conn.dialect.name != "sqlite":
            return
        if not conn.connection.dbapi_connection.in_transaction:
            # Blocks until writers in other processes commit
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    def _prepare_create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return fields

    def delete(self, record_id: int) -> bool:
        with family_lock(self.family):
            with self._storage("delete"):
                record = self.db.get(self.model, record_id)
                if record is None:
                    return False
                self.db.delete(record)
                self.db.commit()
        log_event("playlist_item_deleted", log=logger, family=self.family, record_id=record_id)
        return True

    def reorder(self, ids: Sequence[int]) -> List[ModelT]:
        """Renumber the playlist 1..N with `ids` first, in the given order.

        Items not listed keep their relative order after the listed ones.
        """
        if len(set(ids)) != len(ids):
            raise ValidationError(f"Duplicate ids in {self.family} reorder")
        with family_lock(self.family):
            with self._storage("reorder"):
                items = (
                    self.db.query(self.model)
                    .order_by(self.model.order_index.asc(), self.model.id.asc())
                    .all()
                )
                by_id = {item.id: item for item in items}
                unknown = [i for i in ids if i not in by_id]
                if unknown:
                    raise ValidationError(
                        f"Unknown {self.family} ids in reorder",
                        errors=[{"loc": ["ids"], "msg": "unknown id", "ids": unknown}],
                    )
                listed = [by_id[i] for i in ids]
                listed_ids = set(ids)
                rest = [item for item in items if item.id not in listed_ids]
                for position, item in enumerate(listed + rest, start=1):
                    item.order_index = position
                self.db.commit()
                ordered = listed + rest
        log_event("playlist_reordered", log=logger, family=self.family, count=len(ordered))
        return ordered
