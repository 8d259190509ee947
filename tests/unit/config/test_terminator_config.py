"""Tests for the configuration schema."""

import pytest
from pydantic import ValidationError

from config.schemas.app_schema import LoggingConfig, TerminatorConfig, VersionProbeConfig
from domain.base.exceptions import ConfigurationError
from domain.group.value_objects import PolicyMode, SemanticVersion


@pytest.mark.unit
class TestTerminatorConfig:
    """Test schema defaults, validation and policy conversion."""

    def test_defaults(self):
        """Test the documented defaults."""
        config = TerminatorConfig()

        assert config.aws.region == "eu-west-1"
        assert config.dry_run is True
        assert config.minimum_instance_count == 1
        assert config.terminate_old_versions is True
        assert config.canonical_version is None
        assert config.auto_scaling_groups == []
        assert config.probe.to_settings().port == 80

    def test_group_names_from_comma_string(self):
        """Test that a comma-separated string is split and trimmed."""
        config = TerminatorConfig(auto_scaling_groups=" web, api ,,")

        assert config.auto_scaling_groups == ["web", "api"]

    def test_negative_minimum_rejected(self):
        """Test that minimum_instance_count must not be negative."""
        with pytest.raises(ValidationError):
            TerminatorConfig(minimum_instance_count=-1)

    def test_to_policy(self):
        """Test conversion to a termination policy."""
        config = TerminatorConfig(
            dry_run=False,
            minimum_instance_count=2,
            canonical_version="v1.4.0",
            auto_scaling_groups=["web"],
        )

        policy = config.to_policy()

        assert policy.is_dry_run is False
        assert policy.minimum_instance_count == 2
        assert policy.canonical_version == SemanticVersion.parse("1.4.0")
        assert policy.group_names == ("web",)
        assert policy.mode is PolicyMode.CANONICAL_VERSION_MATCH

    def test_to_policy_without_canonical_version(self):
        """Test that no canonical version means rolling replacement."""
        assert TerminatorConfig(canonical_version="").to_policy().mode is PolicyMode.ROLLING_REPLACE

    def test_to_policy_invalid_canonical_version(self):
        """Test that a malformed canonical version is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            TerminatorConfig(canonical_version="1.x").to_policy()

        assert "1.x" in exc_info.value.message


@pytest.mark.unit
class TestNestedConfig:
    """Test probe and logging sections."""

    def test_probe_path_gets_leading_slash(self):
        """Test that the probe path is normalised."""
        assert VersionProbeConfig(path="version").path == "/version"

    def test_probe_rejects_bad_scheme(self):
        """Test that only http and https are accepted."""
        with pytest.raises(ValidationError):
            VersionProbeConfig(scheme="ftp")

    def test_probe_rejects_bad_port(self):
        """Test port bounds."""
        with pytest.raises(ValidationError):
            VersionProbeConfig(port=70000)

    def test_log_level_normalised(self):
        """Test that the log level is upper-cased."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_log_level_rejected(self):
        """Test that unknown levels fail validation."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")
