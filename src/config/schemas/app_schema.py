"""Terminator configuration schema."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from domain.base.exceptions import ConfigurationError, InvalidVersionError
from domain.base.ports.cloud_provider_port import VersionProbeSettings
from domain.group.value_objects import parse_optional_version
from domain.termination.policy import TerminationPolicy


class AWSProviderConfig(BaseModel):
    """AWS session and client settings."""

    region: str = Field("eu-west-1", description="AWS region holding the groups")
    profile: Optional[str] = Field(None, description="Named profile, default chain when unset")
    connect_timeout: int = Field(5, gt=0, description="Connect timeout in seconds")
    read_timeout: int = Field(10, gt=0, description="Read timeout in seconds")
    endpoint_url: Optional[str] = Field(None, description="Override endpoint, e.g. for local stacks")


class VersionProbeConfig(BaseModel):
    """Version endpoint served by each instance."""

    scheme: Literal["http", "https"] = Field("http", description="Probe scheme")
    port: int = Field(80, ge=1, le=65535, description="Probe TCP port")
    path: str = Field("/version/", description="Probe URL path")
    timeout: float = Field(5.0, gt=0, description="Probe timeout in seconds")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            return f"/{v}"
        return v

    def to_settings(self) -> VersionProbeSettings:
        return VersionProbeSettings(
            scheme=self.scheme, port=self.port, path=self.path, timeout=self.timeout
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    format: Literal["console", "json"] = Field("console", description="Log renderer")
    file_path: Optional[str] = Field(None, description="Also write logs to this file")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class TerminatorConfig(BaseModel):
    """Complete configuration for a terminator run."""

    aws: AWSProviderConfig = Field(default_factory=AWSProviderConfig)
    probe: VersionProbeConfig = Field(default_factory=VersionProbeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    dry_run: bool = Field(True, description="Compute and report only, terminate nothing")
    minimum_instance_count: int = Field(
        1, ge=0, description="Healthy instances to leave in each group"
    )
    terminate_old_versions: bool = Field(
        True, description="Converge groups to the canonical version when one is set"
    )
    canonical_version: Optional[str] = Field(None, description="Target semantic version")
    auto_scaling_groups: list[str] = Field(
        default_factory=list, description="Group names to process, empty for all"
    )

    @field_validator("auto_scaling_groups", mode="before")
    @classmethod
    def split_group_names(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [name.strip() for name in v if name and name.strip()]

    def to_policy(self) -> TerminationPolicy:
        """
        Build the termination policy for this configuration.

        Raises:
            ConfigurationError: If the canonical version cannot be parsed
        """
        try:
            canonical = parse_optional_version(self.canonical_version)
        except InvalidVersionError as e:
            raise ConfigurationError(
                f"Invalid canonical version: {e.message}", details=e.details
            ) from e

        return TerminationPolicy(
            minimum_instance_count=self.minimum_instance_count,
            canonical_version=canonical,
            only_terminate_old_versions=self.terminate_old_versions,
            is_dry_run=self.dry_run,
            group_names=tuple(self.auto_scaling_groups),
        )
