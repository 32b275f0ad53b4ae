"""HTTP client for kontainer engine driver capability queries."""

import requests

from cluster_capabilities.exceptions import ConfigurationError
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.cluster import ClusterSpec
from cluster_capabilities.models.driver import K8sCapabilities
from cluster_capabilities.models.node import KontainerDriver

logger = get_logger(__name__)


class HttpEngineDriverService:
    """Asks a driver service for the k8s capabilities of a cluster spec.

    No timeout is applied; callers that need one configure it on the
    session they pass in.
    """

    def __init__(self, base_url: str, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def capabilities_url(self, driver: KontainerDriver) -> str:
        return f"{self.base_url}/v1/drivers/{driver.name}/capabilities"

    def get_k8s_capabilities(self, driver: KontainerDriver, spec: ClusterSpec) -> K8sCapabilities:
        """POST the driver descriptor and cluster spec, parse the answer.

        Raises:
            requests.RequestException: On transport errors or non-2xx replies
        """
        url = self.capabilities_url(driver)
        logger.debug(f"POST {url}")
        response = self.session.post(
            url, json={"driver": driver.to_resource(), "spec": spec.resource}
        )
        response.raise_for_status()
        return K8sCapabilities.model_validate(response.json())


class UnconfiguredEngineDriverService:
    """Stand-in used when no driver service URL is configured."""

    def get_k8s_capabilities(self, driver: KontainerDriver, spec: ClusterSpec) -> K8sCapabilities:
        raise ConfigurationError(
            f"Cannot query kontainer driver '{driver.name}': no driver service configured",
            "Set it with: cluster-caps config-set driver_service_url <url>",
        )
