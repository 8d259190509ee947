"""HTTP probe for the version an instance serves."""

from typing import Optional

import requests

from domain.base.exceptions import InvalidVersionError, VersionProbeError
from domain.base.ports.cloud_provider_port import VersionProbeSettings
from domain.group.value_objects import SemanticVersion


def build_version_url(private_ip: str, probe: VersionProbeSettings) -> str:
    """Build ``{scheme}://{ip}:{port}{path}``."""
    path = probe.path if probe.path.startswith("/") else f"/{probe.path}"
    return f"{probe.scheme}://{private_ip}:{probe.port}{path}"


class VersionProbe:
    """Reads a bare semantic version from an instance's HTTP endpoint."""

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session or requests.Session()

    def fetch(self, instance_id: str, private_ip: str, probe: VersionProbeSettings) -> SemanticVersion:
        """
        Fetch and parse the version served by an instance.

        Args:
            instance_id: Instance being probed, for error reporting
            private_ip: Address the endpoint is served on
            probe: Probe location and timeout

        Returns:
            Version reported by the instance

        Raises:
            VersionProbeError: If the request fails or the body is not a version
        """
        url = build_version_url(private_ip, probe)
        try:
            response = self._session.get(url, timeout=probe.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise VersionProbeError(instance_id, f"GET {url} failed: {e}") from e

        try:
            return SemanticVersion.parse(response.text)
        except InvalidVersionError as e:
            raise VersionProbeError(instance_id, f"GET {url} returned {e.message}") from e

    def close(self) -> None:
        self._session.close()
