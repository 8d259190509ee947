"""AWS infrastructure - clients, provider and version probe."""

from .aws_client import AWSClient
from .aws_provider import AWSCloudProvider
from .version_probe import VersionProbe

__all__: list[str] = ["AWSClient", "AWSCloudProvider", "VersionProbe"]
