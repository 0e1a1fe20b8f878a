"""Error types raised by the order lifecycle core.

Three kinds are distinguished because callers treat them differently:
malformed input (:class:`OrderValidationError`), a well-formed request that
does not apply to the current state (:class:`OrderStateError`) and a missing
entity (:class:`OrderNotFoundError`).
"""

from __future__ import annotations

from typing import Any, Dict


class OrderError(Exception):
    """Base class for all order lifecycle failures."""

    code = "ORDER_ERROR"

    def __init__(self, message: str, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return the error as a ``{"code", "message", "details"}`` mapping."""
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return error


class OrderValidationError(OrderError, ValueError):
    """Malformed or inconsistent creation input."""

    code = "VALIDATION_ERROR"


class OrderStateError(OrderError):
    """Request is valid but not applicable to the entity's current state."""

    code = "STATE_CONFLICT"


class ConcurrentUpdateError(OrderStateError):
    """Aggregate changed in the store since it was loaded."""

    code = "CONCURRENT_UPDATE"


class OrderNotFoundError(OrderError, LookupError):
    """Referenced order, table or menu does not exist."""

    code = "NOT_FOUND"


__all__ = [
    "OrderError",
    "OrderValidationError",
    "OrderStateError",
    "ConcurrentUpdateError",
    "OrderNotFoundError",
]
