"""Domain exception hierarchy.

Every error raised by the terminator derives from ``DomainException`` so the
application layer can isolate failures per group or per instance without
catching unrelated exceptions.
"""

from typing import Any, Optional


class DomainException(Exception):
    """Base exception for all terminator errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainException):
    """Raised when input data fails domain validation."""


class InvalidVersionError(ValidationError):
    """Raised when a string cannot be parsed as a semantic version."""

    def __init__(self, value: str, reason: str = "not a semantic version") -> None:
        super().__init__(
            f"Invalid semantic version {value!r}: {reason}",
            details={"value": value, "reason": reason},
        )
        self.value = value


class ConfigurationError(DomainException):
    """Raised when the terminator configuration is invalid."""


class InfrastructureError(DomainException):
    """Raised when an external system misbehaves."""


class ProviderError(InfrastructureError):
    """Raised when a cloud provider call fails."""


class VersionProbeError(ProviderError):
    """Raised when an instance's version endpoint cannot be read."""

    def __init__(self, instance_id: str, message: str) -> None:
        super().__init__(
            f"Version probe failed for {instance_id}: {message}",
            details={"instance_id": instance_id},
        )
        self.instance_id = instance_id
