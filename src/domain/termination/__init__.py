"""Termination decision logic."""

from .health import classify, is_healthy
from .policy import TerminationPolicy
from .selector import TerminationDecision, remove_duplicates, select_terminations
from .versions import (
    OldVersionSelection,
    join_version_details,
    select_oldest,
    sort_version_details,
    version_sort_key,
)

__all__: list[str] = [
    "OldVersionSelection",
    "TerminationDecision",
    "TerminationPolicy",
    "classify",
    "is_healthy",
    "join_version_details",
    "remove_duplicates",
    "select_oldest",
    "select_terminations",
    "sort_version_details",
    "version_sort_key",
]
