"""Errors raised by the network membership engine.

The engine never speaks HTTP. Each failure is one of four kinds, and
``hwtube.main`` maps the kind to a status code at the boundary:

- ``ValidationError``: malformed or out-of-range input
- ``NotFoundError``: a referenced network, invitation, application or user is absent
- ``ForbiddenError``: the caller lacks the role the operation needs
- ``ConflictError``: a uniqueness rule would be broken
"""
from typing import Any


class ServiceError(Exception):
    """Base class for engine errors.

    Attributes:
        message: Human-readable description.
        context: Structured payload (ids, field names) for the caller.
    """

    kind = "service_error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "detail": self.message, "context": self.context}


class ValidationError(ServiceError):
    kind = "validation_error"


class NotFoundError(ServiceError):
    kind = "not_found"


class ForbiddenError(ServiceError):
    kind = "forbidden"


class ConflictError(ServiceError):
    kind = "conflict"
