"""AWS client wrapper with lazily created service clients."""

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from config.schemas.app_schema import AWSProviderConfig
from domain.base.ports import LoggingPort
from providers.aws.exceptions.aws_exceptions import AWSConfigurationError


class AWSClient:
    """Wrapper for AWS service clients sharing one session and client config."""

    def __init__(self, config: AWSProviderConfig, logger: LoggingPort) -> None:
        """
        Initialize the AWS session.

        Args:
            config: AWS provider configuration
            logger: Logger for logging messages

        Raises:
            AWSConfigurationError: If the session cannot be created
        """
        self.config = config
        self._logger = logger
        self.region_name = config.region

        # Every call carries a deadline; retries are left to the next run.
        self.boto_config = Config(
            region_name=self.region_name,
            retries={"max_attempts": 1, "mode": "standard"},
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
        )

        try:
            self.session = boto3.Session(region_name=self.region_name, profile_name=config.profile)
        except (BotoCoreError, ClientError) as e:
            raise AWSConfigurationError(f"AWS session creation failed: {e}") from e

        self._ec2_client = None
        self._autoscaling_client = None

        self._logger.info(
            "AWS client initialized with region: %s, profile: %s, timeouts: connect=%ds, read=%ds",
            self.region_name,
            config.profile or "default",
            config.connect_timeout,
            config.read_timeout,
        )

    def _create_client(self, service_name: str):
        kwargs = {"config": self.boto_config}
        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url
        return self.session.client(service_name, **kwargs)

    @property
    def ec2_client(self):
        """Lazy initialization of EC2 client."""
        if self._ec2_client is None:
            self._logger.debug("Initializing EC2 client on first use")
            self._ec2_client = self._create_client("ec2")
        return self._ec2_client

    @property
    def autoscaling_client(self):
        """Lazy initialization of Auto Scaling client."""
        if self._autoscaling_client is None:
            self._logger.debug("Initializing Auto Scaling client on first use")
            self._autoscaling_client = self._create_client("autoscaling")
        return self._autoscaling_client
