"""Termination policy passed explicitly into the decision functions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.group.value_objects import PolicyMode, SemanticVersion


class TerminationPolicy(BaseModel):
    """Operator policy for a single run."""

    model_config = ConfigDict(frozen=True)

    minimum_instance_count: int = Field(1, ge=0)
    canonical_version: Optional[SemanticVersion] = None
    only_terminate_old_versions: bool = True
    is_dry_run: bool = True
    group_names: tuple[str, ...] = ()

    @property
    def mode(self) -> PolicyMode:
        """Canonical matching needs both the flag and a target version."""
        if self.only_terminate_old_versions and self.canonical_version is not None:
            return PolicyMode.CANONICAL_VERSION_MATCH
        return PolicyMode.ROLLING_REPLACE
