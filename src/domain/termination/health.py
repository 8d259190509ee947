"""Health classification of group instances."""

from collections.abc import Iterable

from domain.group.aggregate import Instance


def is_healthy(instance: Instance) -> bool:
    """Check whether an instance is healthy and in service."""
    return instance.is_healthy


def classify(instances: Iterable[Instance]) -> tuple[list[Instance], list[Instance]]:
    """
    Partition instances into healthy and unhealthy lists.

    The partition is stable: each list keeps the relative order of the input.

    Args:
        instances: Instances in provider order

    Returns:
        Tuple of (healthy, unhealthy) instances
    """
    healthy: list[Instance] = []
    unhealthy: list[Instance] = []

    for instance in instances:
        if is_healthy(instance):
            healthy.append(instance)
        else:
            unhealthy.append(instance)

    return healthy, unhealthy
