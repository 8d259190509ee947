"""Application layer - the termination run and its services."""
