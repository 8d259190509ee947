"""Restricts a run to named autoscaling groups."""

from collections.abc import Iterable, Sequence

from domain.group.aggregate import AutoScalingGroup


def filter_groups(
    groups: Iterable[AutoScalingGroup], names: Sequence[str]
) -> list[AutoScalingGroup]:
    """
    Keep the groups whose name matches one of ``names``, ignoring case.

    An empty ``names`` keeps every group. Group order is preserved and a name
    listed twice does not duplicate its group.
    """
    groups = list(groups)
    if not names:
        return groups

    wanted = {name.casefold() for name in names}
    return [group for group in groups if group.name.casefold() in wanted]
