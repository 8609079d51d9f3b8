"""Error taxonomy shared by the store services and the HTTP layer."""

from __future__ import annotations

from typing import Any, List, Optional


class StoreError(Exception):
    """Base class for store failures; `status_code` maps it onto HTTP."""

    status_code = 500

    def __init__(self, message: str, *, errors: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(StoreError, ValueError):
    """Payload failed field constraints; nothing was written."""

    status_code = 422


class NotFoundError(StoreError, LookupError):
    status_code = 404


class PersistenceError(StoreError):
    """Storage layer failed; the write was rolled back as a whole."""

    status_code = 503
