"""Domain ports."""

from .cloud_provider_port import CloudProviderPort, VersionProbeSettings
from .logging_port import LoggingPort

__all__: list[str] = ["CloudProviderPort", "LoggingPort", "VersionProbeSettings"]
