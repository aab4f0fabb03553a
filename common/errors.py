"""Common error types for API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | None = None

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }
        return payload


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Error raised for invalid user input."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    """Error raised when a resource such as a calculator session is missing."""

    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class CapacityAppError(AppError):
    """Error raised when an in-memory limit (e.g. active sessions) is reached."""

    code: str = "capacity_exceeded"
    status_code: int = 429


@dataclass(slots=True)
class InternalAppError(AppError):
    """Generic internal error wrapper to avoid leaking implementation details."""

    code: str = "internal_error"
    status_code: int = 500


__all__ = [
    "AppError",
    "ValidationAppError",
    "NotFoundAppError",
    "CapacityAppError",
    "InternalAppError",
]
