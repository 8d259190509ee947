"""Domain port for the cloud provider holding the autoscaling groups."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.group.aggregate import AutoScalingGroup, InstanceVersionDetail


class VersionProbeSettings(BaseModel):
    """Where each instance serves its version: ``{scheme}://{ip}:{port}{path}``."""

    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"] = "http"
    port: int = Field(80, ge=1, le=65535)
    path: str = "/version/"
    timeout: float = Field(5.0, gt=0)


class CloudProviderPort(ABC):
    """Operations the terminator needs from a cloud provider."""

    @abstractmethod
    def describe_auto_scaling_groups(
        self,
        names: Sequence[str] = (),
        probe: Optional[VersionProbeSettings] = None,
    ) -> list[AutoScalingGroup]:
        """
        Describe autoscaling groups.

        Args:
            names: Group names to restrict the lookup to, empty for all groups
            probe: When given, version details are collected for each instance

        Returns:
            Groups with instances and best-effort version details
        """

    @abstractmethod
    def get_instance_version_detail(
        self, instance_id: str, probe: VersionProbeSettings
    ) -> InstanceVersionDetail:
        """Read the version an instance serves, along with its launch time."""

    @abstractmethod
    def terminate_instances(self, instance_ids: Sequence[str]) -> None:
        """Terminate instances. Raises ProviderError on failure."""
