"""Management API access through the Kubernetes client.

Clusters and kontainer drivers are cluster scoped ``management.cattle.io/v3``
resources. Nodes live in a namespace named after their cluster.
"""

from pathlib import Path

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from pydantic import ValidationError as PydanticValidationError

from cluster_capabilities.exceptions import (
    ConfigurationError,
    DriverNotFoundError,
    ValidationError,
)
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.cluster import Cluster
from cluster_capabilities.models.node import KontainerDriver, Node

logger = get_logger(__name__)

GROUP = "management.cattle.io"
VERSION = "v3"


def load_kube_client(kubeconfig: str | None = None) -> client.CustomObjectsApi:
    """Load cluster credentials and return a custom objects client.

    An explicit kubeconfig must exist. Otherwise the client's own lookup is
    used (``$KUBECONFIG``, which may list several files, or
    ``~/.kube/config``), then in-cluster service account credentials.

    Raises:
        ConfigurationError: If no credentials could be loaded
    """
    try:
        if kubeconfig:
            kubeconfig_path = Path(kubeconfig).expanduser()
            if not kubeconfig_path.exists():
                raise ConfigurationError(
                    f"Kubeconfig not found: {kubeconfig_path}",
                    "Check the --kubeconfig option or the 'kubeconfig' setting",
                )
            logger.debug(f"Loading kubeconfig from {kubeconfig_path}")
            config.load_kube_config(config_file=str(kubeconfig_path))
        else:
            try:
                config.load_kube_config()
            except config.ConfigException as e:
                logger.debug(f"No usable kubeconfig ({e}), using in-cluster configuration")
                config.load_incluster_config()
    except config.ConfigException as e:
        raise ConfigurationError(
            "Failed to load Kubernetes credentials",
            f"{e}\n\nSet KUBECONFIG or run inside the management cluster",
        ) from e

    return client.CustomObjectsApi()


class KubeNodeLister:
    """Lists management nodes of a cluster, in the order the API returns them."""

    def __init__(self, api: client.CustomObjectsApi):
        self.api = api

    def list(self, cluster_name: str) -> list[Node]:
        response = self.api.list_namespaced_custom_object(
            group=GROUP, version=VERSION, namespace=cluster_name, plural="nodes"
        )
        return [Node.from_resource(item) for item in response.get("items", [])]


class KubeKontainerDriverLister:
    """Looks up kontainer drivers by name."""

    def __init__(self, api: client.CustomObjectsApi):
        self.api = api

    def get(self, name: str) -> KontainerDriver:
        try:
            obj = self.api.get_cluster_custom_object(
                group=GROUP, version=VERSION, plural="kontainerdrivers", name=name
            )
        except ApiException as e:
            if e.status == 404:
                raise DriverNotFoundError(name) from e
            raise
        return KontainerDriver.from_resource(obj)


def parse_cluster(obj: dict) -> Cluster:
    """Parse a cluster object, reporting malformed resources as ValidationError."""
    name = (obj.get("metadata") or {}).get("name", "<unnamed>")
    try:
        return Cluster.from_resource(obj)
    except (PydanticValidationError, KeyError) as e:
        raise ValidationError(f"Invalid cluster resource: {name}", str(e)) from e


class KubeClusterClient:
    """Reads clusters and writes their capability status."""

    def __init__(self, api: client.CustomObjectsApi):
        self.api = api

    def get(self, name: str) -> Cluster:
        obj = self.api.get_cluster_custom_object(
            group=GROUP, version=VERSION, plural="clusters", name=name
        )
        return parse_cluster(obj)

    def update(self, cluster: Cluster) -> Cluster:
        """Merge-patch ``status.capabilities``.

        The resource version is sent along so a write based on a stale read
        fails with a 409 instead of overwriting newer state.
        """
        body = {"status": {"capabilities": cluster.status.capabilities.to_resource()}}
        if cluster.resource_version:
            body["metadata"] = {"resourceVersion": cluster.resource_version}
        obj = self.api.patch_cluster_custom_object(
            group=GROUP, version=VERSION, plural="clusters", name=cluster.name, body=body
        )
        return parse_cluster(obj)
