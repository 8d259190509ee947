"""
Terminator - main package namespace.

Users can import as: from terminator import select_terminations, TerminationPolicy
"""

from _package import __version__
from domain.group import AutoScalingGroup, Instance, InstanceVersionDetail, SemanticVersion
from domain.termination import (
    TerminationDecision,
    TerminationPolicy,
    classify,
    join_version_details,
    select_oldest,
    select_terminations,
)

__all__: list[str] = [
    "AutoScalingGroup",
    "Instance",
    "InstanceVersionDetail",
    "SemanticVersion",
    "TerminationDecision",
    "TerminationPolicy",
    "__version__",
    "classify",
    "join_version_details",
    "select_oldest",
    "select_terminations",
]
