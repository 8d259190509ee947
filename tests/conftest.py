"""Global test configuration and fixtures."""

import logging
import os
import shutil
import sys
import tempfile
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

import boto3
import pytest
import structlog
from moto import mock_aws

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.base.ports import LoggingPort  # noqa: E402
from domain.group.aggregate import InstanceVersionDetail  # noqa: E402
from domain.group.value_objects import SemanticVersion  # noqa: E402

REGION = "us-east-1"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    os.environ.update(
        {
            "AWS_DEFAULT_REGION": REGION,
            "AWS_ACCESS_KEY_ID": "testing",
            "AWS_SECRET_ACCESS_KEY": "testing",
            "AWS_SECURITY_TOKEN": "testing",
            "AWS_SESSION_TOKEN": "testing",
            "TERMINATOR_CONSOLE_ENABLED": "true",
        }
    )
    for key in [key for key in os.environ if key.startswith("TERMINATOR_") and key != "TERMINATOR_CONSOLE_ENABLED"]:
        del os.environ[key]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def aws_mocks():
    """Set up AWS service mocks."""
    with mock_aws():
        yield


@pytest.fixture
def ec2_client(aws_mocks):
    """Create a mocked EC2 client."""
    return boto3.client("ec2", region_name=REGION)


@pytest.fixture
def autoscaling_client(aws_mocks):
    """Create a mocked Auto Scaling client."""
    return boto3.client("autoscaling", region_name=REGION)


@pytest.fixture
def mock_ec2_resources(ec2_client):
    """Create a VPC, subnet and launch template for autoscaling groups."""
    vpc = ec2_client.create_vpc(CidrBlock="10.0.0.0/16")
    vpc_id = vpc["Vpc"]["VpcId"]

    subnet = ec2_client.create_subnet(
        VpcId=vpc_id, CidrBlock="10.0.1.0/24", AvailabilityZone=f"{REGION}a"
    )
    subnet_id = subnet["Subnet"]["SubnetId"]

    template = ec2_client.create_launch_template(
        LaunchTemplateName="terminator-test",
        LaunchTemplateData={"ImageId": "ami-12c6146b", "InstanceType": "t2.micro"},
    )

    return {
        "vpc_id": vpc_id,
        "subnet_id": subnet_id,
        "launch_template_id": template["LaunchTemplate"]["LaunchTemplateId"],
    }


@pytest.fixture
def mock_logger() -> Mock:
    """Logger whose bind() returns itself so all calls land on one mock."""
    logger = Mock(spec=LoggingPort)
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_detail(now):
    """Build an InstanceVersionDetail from a version string and an hour offset."""

    def _make(instance_id: str, version: str, hours: float = 0) -> InstanceVersionDetail:
        return InstanceVersionDetail(
            instance_id=instance_id,
            version=SemanticVersion.parse(version),
            launch_time=now + timedelta(hours=hours),
        )

    return _make


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger and structlog changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
