"""AWS implementation of the cloud provider port.

Groups come from the Auto Scaling API, addresses and launch times from EC2,
and versions from an HTTP endpoint served by each instance on its private
address.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, NamedTuple, Optional

from botocore.exceptions import BotoCoreError, ClientError

from domain.base.exceptions import ProviderError, VersionProbeError
from domain.base.ports import CloudProviderPort, LoggingPort, VersionProbeSettings
from domain.group.aggregate import AutoScalingGroup, Instance, InstanceVersionDetail
from domain.termination.versions import join_version_details
from providers.aws.exceptions.aws_exceptions import convert_aws_error
from providers.aws.infrastructure.aws_client import AWSClient
from providers.aws.infrastructure.version_probe import VersionProbe

TERMINATE_BATCH_SIZE = 1000
DESCRIBE_BATCH_SIZE = 100
INSTANCE_NOT_FOUND_CODE = "InvalidInstanceID.NotFound"


class InstanceAddress(NamedTuple):
    """Private address and launch time of an EC2 instance."""

    private_ip: Optional[str]
    launch_time: datetime


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _chunked(items: Sequence[str], size: int) -> Iterable[list[str]]:
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class AWSCloudProvider(CloudProviderPort):
    """Cloud provider backed by boto3."""

    def __init__(
        self,
        aws_client: AWSClient,
        logger: LoggingPort,
        version_probe: Optional[VersionProbe] = None,
    ) -> None:
        self.aws_client = aws_client
        self._logger = logger
        self._version_probe = version_probe or VersionProbe()

    def describe_auto_scaling_groups(
        self,
        names: Sequence[str] = (),
        probe: Optional[VersionProbeSettings] = None,
    ) -> list[AutoScalingGroup]:
        """
        Describe autoscaling groups, optionally with instance version details.

        Args:
            names: Group names to look up, all groups when empty
            probe: Version endpoint settings, no version details when None

        Returns:
            Groups in the order AWS returns them

        Raises:
            ProviderError: If the groups cannot be described
        """
        self._logger.info("Retrieving data on autoscaling groups")
        groups = []
        for group_data in self._describe_groups(names):
            instances = tuple(Instance.from_aws(item) for item in group_data.get("Instances", []))
            details: tuple[InstanceVersionDetail, ...] = ()
            if probe is not None and instances:
                details = tuple(self._collect_version_details(instances, probe))
            groups.append(
                AutoScalingGroup(
                    name=group_data["AutoScalingGroupName"],
                    instances=instances,
                    version_details=details,
                )
            )
        return groups

    def get_instance_version_detail(
        self, instance_id: str, probe: VersionProbeSettings
    ) -> InstanceVersionDetail:
        """
        Read the version an instance serves.

        Raises:
            VersionProbeError: If the instance has no private address or the
                endpoint does not return a version
            ProviderError: If the instance cannot be described
        """
        addresses = self._describe_instance_addresses([instance_id])
        if instance_id not in addresses:
            raise VersionProbeError(instance_id, "instance not found")
        return self._probe(instance_id, addresses[instance_id], probe)

    def terminate_instances(self, instance_ids: Sequence[str]) -> None:
        """
        Terminate instances in batches.

        Raises:
            ProviderError: If any batch fails
        """
        for chunk in _chunked(list(instance_ids), TERMINATE_BATCH_SIZE):
            try:
                self.aws_client.ec2_client.terminate_instances(InstanceIds=chunk)
            except (ClientError, BotoCoreError) as e:
                raise convert_aws_error(e, "TerminateInstances") from e
            self._logger.info("Termination started for %d instance(s)", len(chunk), instance_ids=chunk)

    def _describe_groups(self, names: Sequence[str]) -> list[dict[str, Any]]:
        paginator = self.aws_client.autoscaling_client.get_paginator("describe_auto_scaling_groups")
        kwargs: dict[str, Any] = {}
        if names:
            kwargs["AutoScalingGroupNames"] = list(names)

        groups: list[dict[str, Any]] = []
        try:
            for page in paginator.paginate(**kwargs):
                groups.extend(page.get("AutoScalingGroups", []))
        except (ClientError, BotoCoreError) as e:
            raise convert_aws_error(e, "DescribeAutoScalingGroups") from e
        return groups

    def _describe_instance_addresses(self, instance_ids: Sequence[str]) -> dict[str, InstanceAddress]:
        addresses: dict[str, InstanceAddress] = {}
        for chunk in _chunked(list(instance_ids), DESCRIBE_BATCH_SIZE):
            try:
                addresses.update(self._describe_batch(chunk))
            except ClientError as e:
                if _error_code(e) != INSTANCE_NOT_FOUND_CODE:
                    raise convert_aws_error(e, "DescribeInstances") from e
                # One unknown id fails the whole batch; look the rest up one by one.
                addresses.update(self._describe_individually(chunk))
            except BotoCoreError as e:
                raise convert_aws_error(e, "DescribeInstances") from e
        return addresses

    def _describe_individually(self, instance_ids: Sequence[str]) -> dict[str, InstanceAddress]:
        addresses: dict[str, InstanceAddress] = {}
        for instance_id in instance_ids:
            try:
                addresses.update(self._describe_batch([instance_id]))
            except ClientError as e:
                if _error_code(e) != INSTANCE_NOT_FOUND_CODE:
                    raise convert_aws_error(e, "DescribeInstances") from e
                self._logger.warning("Instance %s not found in EC2", instance_id)
            except BotoCoreError as e:
                raise convert_aws_error(e, "DescribeInstances") from e
        return addresses

    def _describe_batch(self, instance_ids: list[str]) -> dict[str, InstanceAddress]:
        addresses: dict[str, InstanceAddress] = {}
        paginator = self.aws_client.ec2_client.get_paginator("describe_instances")
        for page in paginator.paginate(InstanceIds=instance_ids):
            for reservation in page.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    addresses[instance["InstanceId"]] = InstanceAddress(
                        private_ip=instance.get("PrivateIpAddress"),
                        launch_time=instance["LaunchTime"],
                    )
        return addresses

    def _probe(
        self, instance_id: str, address: InstanceAddress, probe: VersionProbeSettings
    ) -> InstanceVersionDetail:
        if not address.private_ip:
            raise VersionProbeError(instance_id, "instance has no private IP address")
        version = self._version_probe.fetch(instance_id, address.private_ip, probe)
        return InstanceVersionDetail(
            instance_id=instance_id, version=version, launch_time=address.launch_time
        )

    def _collect_version_details(
        self, instances: Sequence[Instance], probe: VersionProbeSettings
    ) -> list[InstanceVersionDetail]:
        try:
            addresses = self._describe_instance_addresses([i.instance_id for i in instances])
        except ProviderError as e:
            self._logger.warning("Could not describe instances, no version details: %s", e.message)
            return []

        def source(instance_id: str) -> Optional[InstanceVersionDetail]:
            address = addresses.get(instance_id)
            if address is None:
                self._logger.warning("Instance %s not found in EC2", instance_id)
                return None
            try:
                return self._probe(instance_id, address, probe)
            except VersionProbeError as e:
                self._logger.warning("Skipping version detail: %s", e.message, instance_id=instance_id)
                return None

        return join_version_details(instances, source)
