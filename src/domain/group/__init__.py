"""Autoscaling group domain - instances, version details and value objects."""

from .aggregate import AutoScalingGroup, Instance, InstanceVersionDetail
from .value_objects import DecisionReason, PolicyMode, SemanticVersion

__all__: list[str] = [
    "AutoScalingGroup",
    "DecisionReason",
    "Instance",
    "InstanceVersionDetail",
    "PolicyMode",
    "SemanticVersion",
]
