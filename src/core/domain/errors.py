"""Domain exceptions for the enrollment flow.

Every failure in this tool is fatal: adapters raise one of these, the
workflow lets it propagate, and the CLI turns it into a message on stderr
plus a non-zero exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.domain.models import ApiMessage


class EnrollmentError(Exception):
    """Base exception for all enrollment errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidKeyError(EnrollmentError):
    """Raised when a WireGuard private key cannot be parsed."""


class InputError(EnrollmentError):
    """Raised when reading operator input fails or yields nothing usable."""


class TransportError(EnrollmentError):
    """Raised when the request never produced an HTTP response."""


class ResponseFormatError(EnrollmentError):
    """Raised when the service answered with something we cannot parse."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)
        self.status_code = status_code


class ServiceError(EnrollmentError):
    """Raised when the service reports that the registration failed."""

    def __init__(
        self,
        message: str,
        errors: list[ApiMessage] | None = None,
        status_code: int | None = None,
    ) -> None:
        self.errors = list(errors or [])
        self.status_code = status_code
        details = "; ".join(str(e) for e in self.errors)
        if details:
            message = f"{message}: {details}"
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)


class ConfigError(EnrollmentError):
    """Raised when the settings (env vars / .env files) fail validation."""
