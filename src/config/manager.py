"""Configuration loading.

Sources, lowest precedence first: schema defaults, an optional settings file,
``TERMINATOR_*`` environment variables, then explicit overrides (the CLI).
Nested keys use a double underscore in the environment, for example
``TERMINATOR_AWS__REGION=us-east-1``.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from dynaconf import Dynaconf
from pydantic import ValidationError as PydanticValidationError

from config.platform_dirs import find_settings_file
from config.schemas.app_schema import TerminatorConfig
from domain.base.exceptions import ConfigurationError

ENV_PREFIX = "TERMINATOR"


def _lower_keys(data: Any) -> Any:
    if isinstance(data, Mapping):
        return {str(key).lower(): _lower_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_lower_keys(item) for item in data]
    return data


def _deep_merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            merged[key] = _deep_merge(dict(merged.get(key) or {}), value)
        else:
            merged[key] = value
    return merged


class ConfigurationManager:
    """Loads and validates the terminator configuration."""

    def __init__(self, settings_file: Optional[Union[str, Path]] = None) -> None:
        self._settings_file = Path(settings_file) if settings_file else find_settings_file()
        if settings_file and not self._settings_file.exists():
            raise ConfigurationError(f"Settings file not found: {self._settings_file}")

    @property
    def settings_file(self) -> Optional[Path]:
        return self._settings_file

    def load_raw(self) -> dict[str, Any]:
        """Read the settings file and environment into a plain dictionary."""
        settings = Dynaconf(
            envvar_prefix=ENV_PREFIX,
            settings_files=[str(self._settings_file)] if self._settings_file else [],
            environments=False,
            load_dotenv=True,
        )
        return _lower_keys(settings.as_dict())

    def load(self, overrides: Optional[Mapping[str, Any]] = None) -> TerminatorConfig:
        """
        Load the configuration.

        Args:
            overrides: Values that win over the file and environment; ``None``
                values are ignored so unset CLI flags do not mask other sources

        Returns:
            Validated TerminatorConfig

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        raw = self.load_raw()
        known = {key: value for key, value in raw.items() if key in TerminatorConfig.model_fields}
        merged = _deep_merge(known, overrides or {})

        try:
            return TerminatorConfig(**merged)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
