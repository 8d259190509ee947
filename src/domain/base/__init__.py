"""Shared domain building blocks."""

from .exceptions import (
    ConfigurationError,
    DomainException,
    InfrastructureError,
    InvalidVersionError,
    ProviderError,
    ValidationError,
    VersionProbeError,
)

__all__: list[str] = [
    "ConfigurationError",
    "DomainException",
    "InfrastructureError",
    "InvalidVersionError",
    "ProviderError",
    "ValidationError",
    "VersionProbeError",
]
