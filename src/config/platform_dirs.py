"""Settings file discovery."""

import os
import sys
from pathlib import Path
from typing import Optional

SETTINGS_FILENAMES = ("terminator.toml", "terminator.yaml", "terminator.yml", "terminator.json")


def in_virtualenv() -> bool:
    """Check if running in a virtual environment."""
    return sys.prefix != sys.base_prefix


def get_config_location() -> Path:
    """Get config location.

    Priority:
    1. TERMINATOR_CONFIG_DIR environment variable
    2. Development: ./config if pyproject.toml exists in parent chain
    3. Virtualenv: sibling to venv
    4. User config: ~/.config/terminator
    """
    if env_dir := os.environ.get("TERMINATOR_CONFIG_DIR"):
        return Path(env_dir)

    cwd = Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        if (parent / "pyproject.toml").exists():
            return parent / "config"

    if in_virtualenv():
        return Path(sys.prefix).parent / "config"

    return Path.home() / ".config" / "terminator"


def find_settings_file(config_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the first known settings file in the config location, if any."""
    directory = config_dir or get_config_location()
    for name in SETTINGS_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None
