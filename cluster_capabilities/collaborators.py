"""Narrow interfaces to the stores and services the sync depends on."""

from typing import Protocol

from cluster_capabilities.models.cluster import Cluster, ClusterSpec
from cluster_capabilities.models.driver import K8sCapabilities
from cluster_capabilities.models.node import KontainerDriver, Node


class NodeLister(Protocol):
    """Read access to the nodes of a cluster."""

    def list(self, cluster_name: str) -> list[Node]: ...


class KontainerDriverLister(Protocol):
    """Lookup of kontainer drivers by name."""

    def get(self, name: str) -> KontainerDriver:
        """Return the driver, raising DriverNotFoundError if it does not exist."""
        ...


class EngineDriverService(Protocol):
    """Capability query against a kontainer engine driver."""

    def get_k8s_capabilities(
        self, driver: KontainerDriver, spec: ClusterSpec
    ) -> K8sCapabilities: ...


class ClusterClient(Protocol):
    """Write access to cluster resources."""

    def update(self, cluster: Cluster) -> Cluster: ...
