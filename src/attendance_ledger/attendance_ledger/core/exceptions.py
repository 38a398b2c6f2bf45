from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class RecordNotFound(DomainError):
    """Raised by single-record lookups when the identifier does not exist."""

    def __init__(self, entity: str, identifier: Any, *, operation: str = "get_by_id"):
        self.entity = entity
        self.identifier = identifier
        self.operation = operation
        super().__init__(f"{operation}: {entity} {identifier!r} not found")


class UpstreamUnavailable(DomainError):
    """Raised when the record store or a directory cannot be reached.

    The engine never retries; retrying is up to the caller.
    """

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"{operation}: upstream unavailable"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
