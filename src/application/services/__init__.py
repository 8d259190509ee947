"""Application services."""

from .dry_run_gate import apply_dry_run_gate
from .group_filter import filter_groups
from .termination_service import TerminationService

__all__: list[str] = ["TerminationService", "apply_dry_run_gate", "filter_groups"]
