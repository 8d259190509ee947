"""Configuration package."""

from .manager import ConfigurationManager
from .schemas.app_schema import (
    AWSProviderConfig,
    LoggingConfig,
    TerminatorConfig,
    VersionProbeConfig,
)

__all__: list[str] = [
    "AWSProviderConfig",
    "ConfigurationManager",
    "LoggingConfig",
    "TerminatorConfig",
    "VersionProbeConfig",
]
