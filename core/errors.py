# core/errors.py
"""
Caller-input errors raised while normalizing aggregate requests.

Every error is deterministic for a given input and schema, so none of them
are retried. Each carries a stable `code` and a `details` mapping matching the
failure envelope used by callers:

    {"error": {"code": ..., "message": ..., "details": {...}}}
"""

from typing import Any, Dict, Optional


class AggregatesError(ValueError):
    """Base class for all aggregate normalization errors."""

    code = "AGGREGATES_ERROR"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def to_envelope(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


# -----------------------------
# Invalid arguments
# -----------------------------
class InvalidArgumentError(AggregatesError):
    """An argument could not be interpreted (bad options, bad condition, ...)."""

    code = "INVALID_ARGUMENT"


class InvalidFieldError(InvalidArgumentError):
    """A value passed where a field token is expected is not one."""

    code = "INVALID_FIELD"


class UnknownPropertyError(InvalidArgumentError):
    """The schema catalog has no property with the given name."""

    code = "UNKNOWN_PROPERTY"


class OrderProjectionError(InvalidArgumentError):
    """An explicit order directive targets a property outside the projection."""

    code = "ORDER_NOT_IN_PROJECTION"


# -----------------------------
# Scalar aggregate preconditions
# -----------------------------
class MissingPropertyError(AggregatesError):
    """min/max/avg/sum called without a property."""

    code = "MISSING_PROPERTY"


class TypeMismatchError(AggregatesError):
    """Property storage type is not allowed for the requested aggregate."""

    code = "TYPE_MISMATCH"


class EmptyProjectionError(AggregatesError):
    """No fields left to project after merging positional and option fields."""

    code = "EMPTY_PROJECTION"
