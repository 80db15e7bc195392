"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask, HTTP or
SQLAlchemy. Persistence failures are not wrapped: they propagate unchanged
once the unit of work has rolled back.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable, machine-readable failure kinds."""

    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"


# Client-safe default messages per code
DEFAULT_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_TOKEN: "Refresh token is invalid.",
    ErrorCode.EXPIRED_TOKEN: "Refresh token has expired. Please sign in again.",
}


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    """

    pass


class TokenError(ServiceError):
    """
    Raised when a presented refresh token cannot be accepted.

    :param code: Failure kind.
    :type code: ErrorCode
    :param message: Optional override of the default client-safe message.
    :type message: str | None
    """

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = code
        self.message = message or DEFAULT_MESSAGES[code]
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"TokenError(code={self.code.value!r})"
