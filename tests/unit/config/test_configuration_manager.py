"""Tests for configuration loading from files, environment and overrides."""

import pytest

from config.manager import ConfigurationManager
from config.platform_dirs import find_settings_file, get_config_location
from domain.base.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_config_dir(temp_dir, monkeypatch):
    """Point discovery at an empty directory and clear TERMINATOR_* variables."""
    monkeypatch.setenv("TERMINATOR_CONFIG_DIR", str(temp_dir))
    for name in ("TERMINATOR_MINIMUM_INSTANCE_COUNT", "TERMINATOR_AWS__REGION", "TERMINATOR_DRY_RUN"):
        monkeypatch.delenv(name, raising=False)
    return temp_dir


@pytest.fixture
def settings_file(temp_dir):
    path = temp_dir / "terminator.toml"
    path.write_text(
        """
minimum_instance_count = 2
canonical_version = "1.3.0"
auto_scaling_groups = ["web", "api"]

[aws]
region = "us-west-2"

[probe]
port = 8080
path = "/status/version"
"""
    )
    return path


@pytest.mark.unit
class TestConfigurationManager:
    """Test source precedence and validation."""

    def test_defaults_without_sources(self):
        """Test that no file and no environment give schema defaults."""
        manager = ConfigurationManager()

        config = manager.load()

        assert manager.settings_file is None
        assert config.minimum_instance_count == 1
        assert config.aws.region == "eu-west-1"

    def test_settings_file_discovered(self, settings_file):
        """Test that a settings file in the config directory is used."""
        config = ConfigurationManager().load()

        assert config.minimum_instance_count == 2
        assert config.canonical_version == "1.3.0"
        assert config.auto_scaling_groups == ["web", "api"]
        assert config.aws.region == "us-west-2"
        assert config.probe.port == 8080
        assert config.probe.path == "/status/version"

    def test_environment_overrides_file(self, settings_file, monkeypatch):
        """Test that TERMINATOR_* variables win over the file."""
        monkeypatch.setenv("TERMINATOR_MINIMUM_INSTANCE_COUNT", "3")

        config = ConfigurationManager(settings_file).load()

        assert config.minimum_instance_count == 3
        assert config.probe.port == 8080

    def test_nested_environment_variable(self, monkeypatch):
        """Test that a double underscore sets a nested key."""
        monkeypatch.setenv("TERMINATOR_AWS__REGION", "ap-south-1")

        config = ConfigurationManager().load()

        assert config.aws.region == "ap-south-1"
        assert config.aws.connect_timeout == 5

    def test_overrides_win_and_none_is_ignored(self, settings_file, monkeypatch):
        """Test that explicit overrides win and unset values do not mask others."""
        monkeypatch.setenv("TERMINATOR_MINIMUM_INSTANCE_COUNT", "3")

        config = ConfigurationManager(settings_file).load(
            {
                "minimum_instance_count": 4,
                "canonical_version": None,
                "aws": {"region": None, "profile": "ops"},
            }
        )

        assert config.minimum_instance_count == 4
        assert config.canonical_version == "1.3.0"
        assert config.aws.region == "us-west-2"
        assert config.aws.profile == "ops"

    def test_unset_nested_overrides_without_settings_file(self):
        """Test that sections of unset flags fall back to schema defaults."""
        config = ConfigurationManager().load(
            {
                "dry_run": None,
                "aws": {"region": None, "profile": None},
                "probe": {"scheme": None, "port": None, "path": None, "timeout": None},
                "logging": {"level": None},
            }
        )

        assert config.dry_run is True
        assert config.aws.region == "eu-west-1"
        assert config.probe.port == 80
        assert config.probe.path == "/version/"
        assert config.logging.level == "INFO"

    def test_nested_override_without_settings_file(self):
        """Test that a set nested flag applies when no file provides the section."""
        config = ConfigurationManager().load({"probe": {"port": 8080, "path": None}})

        assert config.probe.port == 8080
        assert config.probe.path == "/version/"

    def test_missing_explicit_file(self, temp_dir):
        """Test that a named but missing settings file is an error."""
        with pytest.raises(ConfigurationError):
            ConfigurationManager(temp_dir / "absent.toml")

    def test_invalid_values(self, temp_dir):
        """Test that schema violations become configuration errors."""
        path = temp_dir / "bad.toml"
        path.write_text("minimum_instance_count = -5\n")

        with pytest.raises(ConfigurationError):
            ConfigurationManager(path).load()


@pytest.mark.unit
class TestSettingsDiscovery:
    """Test config directory resolution."""

    def test_env_var_wins(self, temp_dir):
        """Test that TERMINATOR_CONFIG_DIR is used first."""
        assert get_config_location() == temp_dir

    def test_first_known_filename(self, temp_dir):
        """Test that toml is preferred over yaml."""
        (temp_dir / "terminator.yaml").write_text("dry_run: true\n")
        (temp_dir / "terminator.toml").write_text("dry_run = true\n")

        assert find_settings_file(temp_dir) == temp_dir / "terminator.toml"

    def test_no_settings_file(self, temp_dir):
        """Test an empty config directory."""
        assert find_settings_file(temp_dir) is None
