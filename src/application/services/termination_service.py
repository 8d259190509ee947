"""Termination run across autoscaling groups.

Groups are processed one at a time: classify, decide, gate on dry run,
terminate. A failure in one group is logged and does not stop the others.
"""

from typing import Optional

from application.dto.results import GroupOutcome, TerminationRunResult
from application.services.dry_run_gate import apply_dry_run_gate
from application.services.group_filter import filter_groups
from domain.base.exceptions import DomainException, ProviderError
from domain.base.ports import CloudProviderPort, LoggingPort, VersionProbeSettings
from domain.group.aggregate import AutoScalingGroup
from domain.group.value_objects import DecisionReason, PolicyMode
from domain.termination.policy import TerminationPolicy
from domain.termination.selector import TerminationDecision, select_terminations

_REASON_MESSAGES = {
    DecisionReason.BELOW_MINIMUM: "no action taken, not enough healthy instances",
    DecisionReason.INCOMPLETE_VERSION_DATA: (
        "no action taken, couldn't get all instance details, "
        "some instances may still be starting"
    ),
    DecisionReason.VERSIONS_MATCH: "no action taken, all instances match the canonical version",
    DecisionReason.NOTHING_TO_DO: "no action taken, no instances to terminate",
}


class TerminationService:
    """Runs the termination decision against every selected group."""

    def __init__(self, provider: CloudProviderPort, logger: LoggingPort) -> None:
        self._provider = provider
        self._logger = logger

    def run(
        self,
        policy: TerminationPolicy,
        probe: Optional[VersionProbeSettings] = None,
    ) -> TerminationRunResult:
        """
        Run the termination across all groups matching the policy.

        Args:
            policy: Termination policy for this run
            probe: Version endpoint settings; only used in canonical version mode

        Returns:
            TerminationRunResult with one outcome per processed group
        """
        prefix = "[DRY RUN] " if policy.is_dry_run else ""
        self._logger.info("%sTerminator activated", prefix, mode=policy.mode.value)

        needs_versions = policy.mode is PolicyMode.CANONICAL_VERSION_MATCH and probe is not None
        try:
            # Names match case-insensitively, so filter locally rather than in the API call.
            all_groups = self._provider.describe_auto_scaling_groups()
            groups = filter_groups(all_groups, policy.group_names)
            if policy.group_names:
                self._logger.info(
                    "Filtering groups %s by %s",
                    [group.name for group in all_groups],
                    list(policy.group_names),
                )
            if needs_versions and groups:
                groups = self._provider.describe_auto_scaling_groups(
                    [group.name for group in groups], probe
                )
        except ProviderError as e:
            self._logger.error("Failed to get auto scaling groups: %s", e.message, **e.details)
            return TerminationRunResult(dry_run=policy.is_dry_run, error=e.message)

        group_names = tuple(group.name for group in groups)
        self._logger.info("Working on groups %s", list(group_names))

        outcomes = [self.process_group(group, policy) for group in groups]

        result = TerminationRunResult(
            dry_run=policy.is_dry_run, group_names=group_names, outcomes=tuple(outcomes)
        )
        self._logger.info(
            "%sCompleted termination of all groups",
            prefix,
            groups=list(group_names),
            terminated=result.terminated_instance_ids,
            failed_groups=result.failed_groups,
        )
        return result

    def process_group(self, group: AutoScalingGroup, policy: TerminationPolicy) -> GroupOutcome:
        """Decide and act on a single group."""
        log = self._logger.bind(group=group.name)

        try:
            decision = select_terminations(group, policy)
        except DomainException as e:
            log.error("Failed to flag instances for removal: %s", e.message)
            return GroupOutcome(
                decision=TerminationDecision(
                    group_name=group.name, mode=policy.mode, reason=DecisionReason.NOTHING_TO_DO
                ),
                dry_run=policy.is_dry_run,
                error=e.message,
            )

        self._log_decision(log, group, decision)

        if not decision.has_targets:
            log.info(_REASON_MESSAGES[decision.reason])
            return GroupOutcome(decision=decision, dry_run=policy.is_dry_run)

        log.info(
            "terminating %d of %d instances",
            len(decision.instance_ids),
            len(group.instances),
            instance_ids=list(decision.instance_ids),
        )

        if policy.is_dry_run:
            log.info("no action taken, set --no-dry-run to execute")

        errors: list[str] = []

        def record_failure(error: ProviderError) -> None:
            errors.append(error.message)
            log.error("failed to terminate instances: %s", error.message)

        terminated = apply_dry_run_gate(
            decision.instance_ids,
            policy.is_dry_run,
            self._provider.terminate_instances,
            on_failure=record_failure,
        )
        if terminated:
            log.info("complete")

        return GroupOutcome(
            decision=decision,
            terminated_instance_ids=tuple(terminated),
            dry_run=policy.is_dry_run,
            error=errors[0] if errors else None,
        )

    def _log_decision(self, log, group: AutoScalingGroup, decision: TerminationDecision) -> None:
        log.info(
            "%d healthy instances, %d unhealthy instances",
            len(decision.healthy_ids),
            len(decision.unhealthy_ids),
            healthy=list(decision.healthy_ids),
            unhealthy=list(decision.unhealthy_ids),
        )
        if decision.mode is PolicyMode.CANONICAL_VERSION_MATCH:
            log.info(
                "%d of %d instances reported a version",
                len(group.version_details),
                len(group.instances),
            )
            if decision.lowest_version is not None:
                log.info(
                    "lowest version %s, highest version %s",
                    decision.lowest_version,
                    decision.highest_version,
                )
