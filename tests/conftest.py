"""Pytest configuration and shared fixtures."""

import pytest
from hypothesis import Verbosity, settings

from cluster_capabilities.exceptions import DriverNotFoundError
from cluster_capabilities.handler import build_handler
from cluster_capabilities.models.capabilities import Capabilities
from cluster_capabilities.models.cluster import Cluster, ClusterSpec, ClusterStatus
from cluster_capabilities.models.driver import K8sCapabilities
from cluster_capabilities.models.node import KontainerDriver, Node

# Configure Hypothesis for property-based testing
settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=10, verbosity=Verbosity.verbose)

# Load the default profile
settings.load_profile("default")


class FakeNodeLister:
    """In-memory node store keyed by cluster name."""

    def __init__(self, nodes: dict[str, list[Node]] | None = None, error: Exception | None = None):
        self.nodes = nodes or {}
        self.error = error
        self.calls: list[str] = []

    def list(self, cluster_name: str) -> list[Node]:
        self.calls.append(cluster_name)
        if self.error:
            raise self.error
        return list(self.nodes.get(cluster_name, []))


class FakeDriverLister:
    """In-memory kontainer driver registry."""

    def __init__(self, drivers: list[KontainerDriver] | None = None, error: Exception | None = None):
        self.drivers = {d.name: d for d in drivers or []}
        self.error = error

    def get(self, name: str) -> KontainerDriver:
        if self.error:
            raise self.error
        if name not in self.drivers:
            raise DriverNotFoundError(name)
        return self.drivers[name]


class FakeEngineService:
    """Driver service returning a canned answer."""

    def __init__(self, response: K8sCapabilities | None = None, error: Exception | None = None):
        self.response = response or K8sCapabilities()
        self.error = error
        self.calls: list[tuple[KontainerDriver, ClusterSpec]] = []

    def get_k8s_capabilities(self, driver: KontainerDriver, spec: ClusterSpec) -> K8sCapabilities:
        self.calls.append((driver, spec))
        if self.error:
            raise self.error
        return self.response


class FakeClusterClient:
    """Cluster store that records every update."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.updates: list[Cluster] = []

    def update(self, cluster: Cluster) -> Cluster:
        if self.error:
            raise self.error
        self.updates.append(cluster)
        return cluster


@pytest.fixture
def node_lister():
    return FakeNodeLister()


@pytest.fixture
def driver_lister():
    return FakeDriverLister([KontainerDriver(name="customdriver", active=True)])


@pytest.fixture
def engine_service():
    return FakeEngineService()


@pytest.fixture
def cluster_client():
    return FakeClusterClient()


@pytest.fixture
def handler(cluster_client, node_lister, driver_lister, engine_service):
    return build_handler(cluster_client, node_lister, driver_lister, engine_service)


@pytest.fixture
def make_cluster():
    """Build a Cluster from a raw spec dict and optional stored capabilities."""

    def _make(
        spec: dict | None = None,
        capabilities: Capabilities | None = None,
        name: str = "c-test",
        deletion_timestamp: str | None = None,
    ) -> Cluster:
        return Cluster(
            name=name,
            resource_version="1",
            deletion_timestamp=deletion_timestamp,
            spec=ClusterSpec.from_resource(spec),
            status=ClusterStatus(capabilities=capabilities or Capabilities()),
        )

    return _make


@pytest.fixture
def sample_cluster_resource():
    """Raw clusters.management.cattle.io object for an RKE cluster on AWS."""
    return {
        "apiVersion": "management.cattle.io/v3",
        "kind": "Cluster",
        "metadata": {"name": "c-m-abc123", "resourceVersion": "4242"},
        "spec": {
            "displayName": "prod-east",
            "rancherKubernetesEngineConfig": {
                "cloudProvider": {"name": "aws"},
                "ingress": {"provider": "nginx"},
                "services": {
                    "kubeApi": {
                        "serviceNodePortRange": "",
                        "extraArgs": {"service-node-port-range": "30000-31000"},
                    }
                },
            },
            "genericEngineConfig": None,
            "importedConfig": None,
        },
        "status": {
            "capabilities": {
                "loadBalancerCapabilities": {
                    "enabled": None,
                    "provider": "",
                    "protocolsSupported": None,
                    "healthCheckSupported": False,
                },
                "ingressCapabilities": None,
                "nodePortRange": "30000-32767",
                "nodePoolScalingSupported": False,
                "taintSupport": True,
            }
        },
    }
