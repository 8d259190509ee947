"""Domain layer - groups, instances, versions and the termination decision."""
