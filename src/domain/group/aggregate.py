"""Autoscaling group snapshot records.

These records are built fresh from the provider on every run and are never
mutated; a termination decision is derived from them, not applied to them.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .value_objects import HEALTHY_STATUS, IN_SERVICE_STATE, SemanticVersion


class Instance(BaseModel):
    """An instance as reported by the autoscaling group."""

    model_config = ConfigDict(frozen=True)

    instance_id: str
    health_status: str = ""
    lifecycle_state: str = ""

    @property
    def is_healthy(self) -> bool:
        """Healthy and in service, compared case-insensitively."""
        return (
            self.health_status.lower() == HEALTHY_STATUS
            and self.lifecycle_state.lower() == IN_SERVICE_STATE
        )

    @classmethod
    def from_aws(cls, data: dict[str, Any]) -> "Instance":
        """Build an instance from an entry of ``AutoScalingGroups[].Instances``."""
        return cls(
            instance_id=data["InstanceId"],
            health_status=data.get("HealthStatus", ""),
            lifecycle_state=data.get("LifecycleState", ""),
        )


class InstanceVersionDetail(BaseModel):
    """Version reported by an instance together with its launch time."""

    model_config = ConfigDict(frozen=True)

    instance_id: str
    version: SemanticVersion
    launch_time: datetime


class AutoScalingGroup(BaseModel):
    """
    Autoscaling group with its instances and best-effort version details.

    ``version_details`` may hold fewer entries than ``instances``: instances
    whose version probe failed simply have no detail.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    instances: tuple[Instance, ...] = Field(default_factory=tuple)
    version_details: tuple[InstanceVersionDetail, ...] = Field(default_factory=tuple)

    @property
    def instance_ids(self) -> list[str]:
        return [instance.instance_id for instance in self.instances]

    def version_detail_map(self) -> dict[str, InstanceVersionDetail]:
        """Version details keyed by instance id."""
        return {detail.instance_id: detail for detail in self.version_details}
