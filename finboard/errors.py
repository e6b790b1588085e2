"""Exception types raised by finboard."""

from __future__ import annotations

from typing import Any, Optional


class FinboardError(Exception):
    """Base class for all finboard errors."""


class ValidationError(FinboardError, ValueError):
    """Malformed input: bad amount, missing field, invalid month key..."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(FinboardError, LookupError):
    """A referenced record does not exist in its store."""

    def __init__(self, entity: str, record_id: Any):
        super().__init__(f"{entity} {record_id!r} not found")
        self.entity = entity
        self.record_id = record_id
