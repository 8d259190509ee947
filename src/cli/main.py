"""Command-line entry point for the terminator."""

import argparse
from collections.abc import Sequence
from typing import Any, Optional

from _package import DESCRIPTION, PACKAGE_NAME, __version__
from application.services.termination_service import TerminationService
from cli.console import print_error, print_json, print_run_summary, print_version
from config.manager import ConfigurationManager
from config.schemas.app_schema import TerminatorConfig
from domain.base.exceptions import ConfigurationError, ProviderError
from infrastructure.adapters.logging_adapter import LoggingAdapter
from infrastructure.logging.logger import setup_logging
from providers.aws.infrastructure.aws_client import AWSClient
from providers.aws.infrastructure.aws_provider import AWSCloudProvider
from providers.aws.infrastructure.version_probe import VersionProbe


class GroupNamesAction(argparse.Action):
    """Comma-separated group names; the flag may only be given once."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None):
            parser.error(f"{option_string} already set")
        names = [name.strip() for name in values.split(",") if name.strip()]
        setattr(namespace, self.dest, names)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PACKAGE_NAME, description=DESCRIPTION)
    parser.add_argument("--region", help="AWS region holding the groups (default: eu-west-1)")
    parser.add_argument("--profile", help="AWS named profile")
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report what would be terminated without terminating (default: on)",
    )
    parser.add_argument(
        "--minimum-instance-count",
        type=int,
        help="Healthy instances to leave in each group (default: 1)",
    )
    parser.add_argument(
        "--terminate-old-versions",
        dest="terminate_old_versions",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Converge groups to --canonical-version instead of rolling replacement (default: on)",
    )
    parser.add_argument("--canonical-version", help="Target semantic version, e.g. 1.2.0")
    parser.add_argument("--scheme", choices=["http", "https"], help="Version probe scheme (default: http)")
    parser.add_argument("--port", type=int, help="Version probe TCP port (default: 80)")
    parser.add_argument("--path", help="Version probe URL path (default: /version/)")
    parser.add_argument("--probe-timeout", type=float, help="Version probe timeout in seconds")
    parser.add_argument(
        "--auto-scaling-groups",
        action=GroupNamesAction,
        default=None,
        help="Comma-separated list of autoscaling group names",
    )
    parser.add_argument("--config", help="Settings file (toml, yaml or json)")
    parser.add_argument("--log-level", help="Log level (default: INFO)")
    parser.add_argument("--json", action="store_true", help="Print the run result as JSON")
    parser.add_argument("--version", action="store_true", help="Display the version and quit")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed arguments onto the configuration schema, skipping unset flags."""
    return {
        "dry_run": args.dry_run,
        "minimum_instance_count": args.minimum_instance_count,
        "terminate_old_versions": args.terminate_old_versions,
        "canonical_version": args.canonical_version,
        "auto_scaling_groups": args.auto_scaling_groups,
        "aws": {"region": args.region, "profile": args.profile},
        "probe": {
            "scheme": args.scheme,
            "port": args.port,
            "path": args.path,
            "timeout": args.probe_timeout,
        },
        "logging": {"level": args.log_level},
    }


def run(config: TerminatorConfig, as_json: bool = False) -> int:
    """Run the terminator with a loaded configuration."""
    try:
        policy = config.to_policy()
    except ConfigurationError as e:
        print_error(e.message)
        return 1

    logger = LoggingAdapter()
    try:
        aws_client = AWSClient(config.aws, logger)
    except ProviderError as e:
        print_error(f"Failed to create an AWS session: {e.message}")
        return 1

    version_probe = VersionProbe()
    try:
        provider = AWSCloudProvider(aws_client, logger, version_probe=version_probe)
        result = TerminationService(provider, logger).run(policy, config.probe.to_settings())
    finally:
        version_probe.close()

    if as_json:
        print_json(result.to_dict())
    else:
        print_run_summary(result)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print_version(__version__)
        return 0

    try:
        config = ConfigurationManager(args.config).load(overrides_from_args(args))
    except ConfigurationError as e:
        print_error(e.message)
        return 1

    setup_logging(config.logging)
    return run(config, as_json=args.json)


def cli_main() -> None:
    """Entry point function for console scripts."""
    raise SystemExit(main())


if __name__ == "__main__":
    cli_main()
