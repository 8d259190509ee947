"""Suppresses destructive calls during a dry run."""

from collections.abc import Sequence
from typing import Callable, Optional

from domain.base.exceptions import ProviderError

TerminateFn = Callable[[list[str]], None]
FailureFn = Callable[[ProviderError], None]


def apply_dry_run_gate(
    instance_ids: Sequence[str],
    is_dry_run: bool,
    terminate_fn: TerminateFn,
    on_failure: Optional[FailureFn] = None,
) -> list[str]:
    """
    Terminate the decided instances unless this is a dry run.

    A ``ProviderError`` from ``terminate_fn`` is handed to ``on_failure`` and
    yields an empty result, so one failing group does not stop the others.

    Args:
        instance_ids: Ids chosen by the termination selector
        is_dry_run: When True ``terminate_fn`` is never called
        terminate_fn: Provider call that terminates instances
        on_failure: Called with the error when termination fails

    Returns:
        Ids actually terminated; empty for a dry run, an empty decision or a
        failed termination
    """
    ids = list(instance_ids)
    if is_dry_run or not ids:
        return []

    try:
        terminate_fn(ids)
    except ProviderError as e:
        if on_failure is not None:
            on_failure(e)
        return []
    return ids
