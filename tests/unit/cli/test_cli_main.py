"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

import pytest

from _package import __version__
from application.dto.results import TerminationRunResult
from cli.main import build_parser, main, overrides_from_args


@pytest.fixture(autouse=True)
def empty_config_dir(temp_dir, monkeypatch):
    monkeypatch.setenv("TERMINATOR_CONFIG_DIR", str(temp_dir))


@pytest.fixture
def run_mocks():
    """Replace the AWS wiring so main() never talks to AWS."""
    with (
        patch("cli.main.AWSClient") as aws_client,
        patch("cli.main.AWSCloudProvider") as provider,
        patch("cli.main.TerminationService") as service,
        patch("cli.main.VersionProbe") as version_probe,
    ):
        service.return_value.run.return_value = TerminationRunResult(dry_run=True)
        yield {
            "aws_client": aws_client,
            "provider": provider,
            "service": service,
            "version_probe": version_probe,
        }


@pytest.mark.unit
class TestParser:
    """Test argument parsing."""

    def test_defaults_leave_overrides_unset(self):
        """Test that unset flags produce None overrides."""
        overrides = overrides_from_args(build_parser().parse_args([]))

        assert overrides["dry_run"] is None
        assert overrides["minimum_instance_count"] is None
        assert overrides["aws"] == {"region": None, "profile": None}

    def test_flags_mapped_to_overrides(self):
        """Test mapping of every flag group onto the schema."""
        args = build_parser().parse_args(
            [
                "--no-dry-run",
                "--minimum-instance-count", "2",
                "--no-terminate-old-versions",
                "--canonical-version", "1.2.0",
                "--region", "us-east-1",
                "--port", "8080",
                "--scheme", "https",
                "--auto-scaling-groups", "web, api",
            ]
        )

        overrides = overrides_from_args(args)

        assert overrides["dry_run"] is False
        assert overrides["minimum_instance_count"] == 2
        assert overrides["terminate_old_versions"] is False
        assert overrides["canonical_version"] == "1.2.0"
        assert overrides["auto_scaling_groups"] == ["web", "api"]
        assert overrides["aws"]["region"] == "us-east-1"
        assert overrides["probe"]["port"] == 8080
        assert overrides["probe"]["scheme"] == "https"

    def test_group_flag_only_once(self):
        """Test that repeating --auto-scaling-groups is rejected."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--auto-scaling-groups", "a", "--auto-scaling-groups", "b"])

    def test_invalid_scheme_rejected(self):
        """Test that only http and https are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--scheme", "ftp"])


@pytest.mark.unit
class TestMain:
    """Test the entry point end to end with AWS mocked out."""

    def test_version(self, capsys, run_mocks):
        """Test that --version prints the version and exits cleanly."""
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out
        run_mocks["service"].assert_not_called()

    def test_version_printed_with_console_disabled(self, capsys, monkeypatch, run_mocks):
        """Test that --version prints even when console output is turned off."""
        monkeypatch.setenv("TERMINATOR_CONSOLE_ENABLED", "false")

        assert main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_invalid_canonical_version(self, capsys, run_mocks):
        """Test that a malformed canonical version fails before touching AWS."""
        assert main(["--canonical-version", "one.two"]) == 1
        assert "one.two" in capsys.readouterr().err
        run_mocks["aws_client"].assert_not_called()

    def test_invalid_minimum(self, run_mocks):
        """Test that a negative minimum is a configuration error."""
        assert main(["--minimum-instance-count", "-1"]) == 1
        run_mocks["service"].assert_not_called()

    def test_missing_config_file(self, temp_dir, run_mocks):
        """Test that a named but missing settings file fails."""
        assert main(["--config", str(temp_dir / "nope.toml")]) == 1

    def test_run_builds_policy_from_flags(self, run_mocks):
        """Test that the policy and probe reach the service."""
        assert main(["--no-dry-run", "--minimum-instance-count", "0", "--port", "9000"]) == 0

        policy, probe = run_mocks["service"].return_value.run.call_args.args
        assert policy.is_dry_run is False
        assert policy.minimum_instance_count == 0
        assert probe.port == 9000
        assert run_mocks["aws_client"].call_args.args[0].region == "eu-west-1"
        run_mocks["version_probe"].return_value.close.assert_called_once()

    def test_version_probe_closed_when_run_fails(self, run_mocks):
        """Test that the HTTP session is closed even if the run raises."""
        run_mocks["service"].return_value.run.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            main([])

        run_mocks["version_probe"].return_value.close.assert_called_once()

    def test_json_output(self, capsys, run_mocks):
        """Test that --json prints the run result."""
        assert main(["--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["dry_run"] is True
        assert data["terminated_instance_ids"] == []
