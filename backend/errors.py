# backend/errors.py
"""
Error kinds raised by the service layer.

Every failure a service can report is a ServiceError carrying an ErrorKind,
so the HTTP layer maps kinds to status codes in exactly one place.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE = "PERSISTENCE"


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.PERSISTENCE
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ServiceError):
    """Malformed input, or a referenced vendor/product does not exist."""
    kind = ErrorKind.VALIDATION
    status_code = 400


class ConflictError(ServiceError):
    """A uniqueness or referential-integrity invariant would be violated."""
    kind = ErrorKind.CONFLICT
    status_code = 409


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class PersistenceError(ServiceError):
    """The storage layer failed; the attempted mutation was not applied."""
    kind = ErrorKind.PERSISTENCE
    status_code = 500
