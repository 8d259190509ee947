"""Termination decision engine.

Decides which instances of a single autoscaling group to terminate. The result
never leaves fewer healthy instances than the policy minimum, never exceeds
``len(instances) - minimum_instance_count`` entries and never repeats an id.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, ConfigDict

from domain.group.aggregate import AutoScalingGroup, Instance
from domain.group.value_objects import DecisionReason, PolicyMode, SemanticVersion

from .health import classify
from .policy import TerminationPolicy
from .versions import select_oldest, version_sort_key


class TerminationDecision(BaseModel):
    """Outcome of running the selector against one group."""

    model_config = ConfigDict(frozen=True)

    group_name: str
    mode: PolicyMode
    reason: DecisionReason
    instance_ids: tuple[str, ...] = ()
    healthy_ids: tuple[str, ...] = ()
    unhealthy_ids: tuple[str, ...] = ()
    lowest_version: Optional[SemanticVersion] = None
    highest_version: Optional[SemanticVersion] = None

    @property
    def has_targets(self) -> bool:
        return bool(self.instance_ids)


def remove_duplicates(ids: Iterable[str]) -> list[str]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    result: list[str] = []
    for instance_id in ids:
        if instance_id not in seen:
            seen.add(instance_id)
            result.append(instance_id)
    return result


def _ids(instances: Iterable[Instance]) -> list[str]:
    return [instance.instance_id for instance in instances]


def _rolling_candidates(
    healthy: list[Instance], unhealthy: list[Instance], minimum: int
) -> list[str]:
    return _ids(healthy[minimum:]) + _ids(unhealthy)


def select_terminations(group: AutoScalingGroup, policy: TerminationPolicy) -> TerminationDecision:
    """
    Decide which instances of a group to terminate.

    Args:
        group: Group snapshot, with version details when the policy needs them
        policy: Termination policy

    Returns:
        TerminationDecision with the ordered instance ids to terminate
    """
    minimum = policy.minimum_instance_count
    mode = policy.mode
    healthy, unhealthy = classify(group.instances)

    def decision(reason: DecisionReason, ids: Iterable[str] = (), **versions) -> TerminationDecision:
        return TerminationDecision(
            group_name=group.name,
            mode=mode,
            reason=reason,
            instance_ids=tuple(ids),
            healthy_ids=tuple(_ids(healthy)),
            unhealthy_ids=tuple(_ids(unhealthy)),
            **versions,
        )

    if len(healthy) <= minimum:
        return decision(DecisionReason.BELOW_MINIMUM)

    versions: dict[str, SemanticVersion] = {}
    if mode is PolicyMode.ROLLING_REPLACE:
        candidates = _rolling_candidates(healthy, unhealthy, minimum)
    else:
        details = group.version_detail_map()
        known_healthy = [instance for instance in healthy if instance.instance_id in details]

        if unhealthy and len(known_healthy) != len(healthy):
            return decision(DecisionReason.INCOMPLETE_VERSION_DATA)

        # Only the version range is reported; canonical mode picks its own targets below.
        selection = select_oldest(details.values(), len(healthy) - minimum)
        versions = {"lowest_version": selection.lowest, "highest_version": selection.highest}

        canonical = policy.canonical_version
        mismatched = [
            detail
            for detail in details.values()
            if detail.version < canonical or detail.version > canonical
        ]
        if not mismatched:
            return decision(DecisionReason.VERSIONS_MATCH, **versions)

        healthy_ids = set(_ids(healthy))
        # Keep matching healthy instances; remove mismatched healthy ones oldest first.
        mismatched_healthy = [
            detail.instance_id
            for detail in sorted(mismatched, key=version_sort_key)
            if detail.instance_id in healthy_ids
        ]
        candidates = mismatched_healthy[: len(healthy) - minimum] + _ids(unhealthy)

    maximum = len(group.instances) - minimum
    targets = remove_duplicates(candidates)[: max(maximum, 0)]

    if not targets:
        return decision(DecisionReason.NOTHING_TO_DO, **versions)
    return decision(DecisionReason.SELECTED, targets, **versions)
