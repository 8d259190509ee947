"""Shared Rich console for CLI output."""

import json
import os
from functools import wraps
from typing import Any

from rich.console import Console
from rich.table import Table

_console = Console()
_error_console = Console(stderr=True)


def _should_print() -> bool:
    """Check if console output is enabled."""
    return os.environ.get("TERMINATOR_CONSOLE_ENABLED", "true").lower() == "true"


def _console_output(func):
    """Decorator to check if console output is enabled."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


@_console_output
def print_error(message: str):
    """Print error message to stderr."""
    _error_console.print(f"[red]{message}[/red]")


def print_version(version: str):
    """Print the version (always outputs, ignores TERMINATOR_CONSOLE_ENABLED)."""
    print(version)


@_console_output
def print_run_summary(result: Any):
    """Print one row per group of a TerminationRunResult."""
    title = "Termination summary (dry run)" if result.dry_run else "Termination summary"
    table = Table(title=title)
    table.add_column("Group")
    table.add_column("Mode")
    table.add_column("Decision")
    table.add_column("Selected")
    table.add_column("Terminated")

    for outcome in result.outcomes:
        decision = outcome.decision
        status = decision.reason.value if not outcome.error else f"[red]{outcome.error}[/red]"
        table.add_row(
            decision.group_name,
            decision.mode.value,
            status,
            ", ".join(decision.instance_ids) or "-",
            ", ".join(outcome.terminated_instance_ids) or "-",
        )

    _console.print(table)


def print_json(data: dict):
    """Print JSON data (always outputs, ignores TERMINATOR_CONSOLE_ENABLED)."""
    print(json.dumps(data, indent=2))
