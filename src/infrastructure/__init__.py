"""Infrastructure layer - logging and adapters."""
