"""Version detail joining and oldest-version selection."""

from collections.abc import Iterable
from typing import Callable, NamedTuple, Optional

from domain.base.exceptions import InvalidVersionError, VersionProbeError
from domain.group.aggregate import Instance, InstanceVersionDetail
from domain.group.value_objects import SemanticVersion

VersionDetailSource = Callable[[str], Optional[InstanceVersionDetail]]


class OldVersionSelection(NamedTuple):
    """Result of selecting the oldest instances."""

    lowest: SemanticVersion
    highest: SemanticVersion
    selected: list[InstanceVersionDetail]


def version_sort_key(detail: InstanceVersionDetail) -> tuple:
    """Order by version, then by launch time: oldest first."""
    return (detail.version.precedence_key(), detail.launch_time)


def sort_version_details(details: Iterable[InstanceVersionDetail]) -> list[InstanceVersionDetail]:
    return sorted(details, key=version_sort_key)


def join_version_details(
    instances: Iterable[Instance],
    source: VersionDetailSource,
) -> list[InstanceVersionDetail]:
    """
    Look up the version detail of each instance.

    Instances whose lookup returns ``None`` or fails with a probe or version
    error are left out rather than filled with a default, so a result shorter
    than the input means the version picture is incomplete.

    Args:
        instances: Instances to look up
        source: Callable returning the detail for an instance id

    Returns:
        Known version details sorted oldest first
    """
    details: list[InstanceVersionDetail] = []

    for instance in instances:
        try:
            detail = source(instance.instance_id)
        except (VersionProbeError, InvalidVersionError):
            continue
        if detail is not None:
            details.append(detail)

    return sort_version_details(details)


def take_at_most(details: list[InstanceVersionDetail], most: int) -> list[InstanceVersionDetail]:
    """Take up to ``most`` items; a negative count takes nothing."""
    return details[: max(most, 0)]


def select_oldest(details: Iterable[InstanceVersionDetail], cap: int) -> OldVersionSelection:
    """
    Select instances running a version below the highest one, oldest first.

    Args:
        details: Version details of the instances to consider
        cap: Maximum number of instances to select

    Returns:
        OldVersionSelection with the lowest and highest versions seen and the
        selected details
    """
    details = list(details)
    if not details:
        return OldVersionSelection(SemanticVersion.zero(), SemanticVersion.zero(), [])

    highest = max(detail.version for detail in details)
    lowest = min(detail.version for detail in details)

    old = sort_version_details(detail for detail in details if detail.version < highest)

    return OldVersionSelection(lowest, highest, take_at_most(old, cap))
