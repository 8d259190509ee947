"""Value objects for autoscaling group state."""

from __future__ import annotations

import re
from enum import Enum
from functools import total_ordering
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from domain.base.exceptions import InvalidVersionError

# major.minor.patch[-prerelease][+build], numeric parts without leading zeros
_SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

HEALTHY_STATUS = "healthy"
IN_SERVICE_STATE = "inservice"


class PolicyMode(str, Enum):
    """How a group's termination candidates are chosen."""

    ROLLING_REPLACE = "rolling_replace"
    CANONICAL_VERSION_MATCH = "canonical_version_match"


class DecisionReason(str, Enum):
    """Why a termination decision came out the way it did."""

    SELECTED = "selected"
    BELOW_MINIMUM = "below_minimum"
    INCOMPLETE_VERSION_DATA = "incomplete_version_data"
    VERSIONS_MATCH = "versions_match"
    NOTHING_TO_DO = "nothing_to_do"


def _prerelease_key(identifier: str) -> tuple[int, Union[int, str]]:
    # Numeric identifiers sort below alphanumeric ones.
    if identifier.isdigit():
        return (0, int(identifier))
    return (1, identifier)


@total_ordering
class SemanticVersion(BaseModel):
    """
    Semantic version with pre-release support.

    Ordering follows semantic versioning precedence: the numeric triple first,
    then a pre-release sorts below the plain release. Build metadata is kept
    for display but ignored when comparing.
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(0, ge=0)
    minor: int = Field(0, ge=0)
    patch: int = Field(0, ge=0)
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str) -> SemanticVersion:
        """
        Parse a version string as reported by an instance or an operator.

        Surrounding whitespace, double quotes and a leading ``v`` are stripped,
        so ``"v1.2.3"`` and ``1.2.3`` are equivalent.

        Args:
            value: Raw version string

        Returns:
            Parsed SemanticVersion

        Raises:
            InvalidVersionError: If the value is not a semantic version
        """
        if not isinstance(value, str):
            raise InvalidVersionError(repr(value), "expected a string")

        cleaned = value.strip().strip('"').strip()
        if cleaned[:1] in ("v", "V"):
            cleaned = cleaned[1:]

        match = _SEMVER_PATTERN.match(cleaned)
        if not match:
            raise InvalidVersionError(value)

        prerelease = match.group("prerelease")
        if prerelease:
            for identifier in prerelease.split("."):
                if identifier.isdigit() and len(identifier) > 1 and identifier.startswith("0"):
                    raise InvalidVersionError(value, "numeric pre-release identifier has a leading zero")

        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )

    @classmethod
    def zero(cls) -> SemanticVersion:
        """Sentinel ``0.0.0`` used when no version has been observed."""
        return cls()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def precedence_key(self) -> tuple[Any, ...]:
        """Key implementing semantic version precedence."""
        if not self.prerelease:
            return (self.major, self.minor, self.patch, 1, ())
        return (
            self.major,
            self.minor,
            self.patch,
            0,
            tuple(_prerelease_key(identifier) for identifier in self.prerelease),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key() == other.precedence_key()

    def __lt__(self, other: SemanticVersion) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key() < other.precedence_key()

    def __hash__(self) -> int:
        return hash(self.precedence_key())

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += "-" + ".".join(self.prerelease)
        if self.build:
            version += "+" + ".".join(self.build)
        return version


def parse_optional_version(value: Optional[str]) -> Optional[SemanticVersion]:
    """Parse a version string, treating ``None`` and blank strings as absent."""
    if value is None or not value.strip():
        return None
    return SemanticVersion.parse(value)
