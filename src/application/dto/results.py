"""Result DTOs for the termination run."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from domain.termination.selector import TerminationDecision


class GroupOutcome(BaseModel):
    """What happened to one group."""

    model_config = ConfigDict(frozen=True)

    decision: TerminationDecision
    terminated_instance_ids: tuple[str, ...] = ()
    dry_run: bool = False
    error: str | None = None

    @property
    def group_name(self) -> str:
        return self.decision.group_name


class TerminationRunResult(BaseModel):
    """Outcome of a full run across all groups."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool
    group_names: tuple[str, ...] = ()
    outcomes: tuple[GroupOutcome, ...] = ()
    error: str | None = None

    @property
    def decisions(self) -> list[TerminationDecision]:
        return [outcome.decision for outcome in self.outcomes]

    @property
    def terminated_instance_ids(self) -> list[str]:
        """Ids actually terminated, in group order."""
        return [
            instance_id
            for outcome in self.outcomes
            for instance_id in outcome.terminated_instance_ids
        ]

    @property
    def failed_groups(self) -> list[str]:
        return [outcome.group_name for outcome in self.outcomes if outcome.error]

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["terminated_instance_ids"] = self.terminated_instance_ids
        data["failed_groups"] = self.failed_groups
        return data
