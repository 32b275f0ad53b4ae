"""Data models for cluster resources and capabilities."""

from cluster_capabilities.models.capabilities import (
    DEFAULT_NODE_PORT_RANGE,
    Capabilities,
    IngressCapabilities,
    LoadBalancerCapabilities,
    capabilities_equal,
)
from cluster_capabilities.models.cluster import (
    Cluster,
    ClusterSpec,
    ClusterStatus,
    GenericEngineConfig,
    ImportedConfig,
    NoEngineConfig,
    RKEConfig,
)
from cluster_capabilities.models.driver import IngressController, K8sCapabilities, L4LoadBalancer
from cluster_capabilities.models.node import KontainerDriver, Node

__all__ = [
    "DEFAULT_NODE_PORT_RANGE",
    "Capabilities",
    "IngressCapabilities",
    "LoadBalancerCapabilities",
    "capabilities_equal",
    "Cluster",
    "ClusterSpec",
    "ClusterStatus",
    "GenericEngineConfig",
    "ImportedConfig",
    "NoEngineConfig",
    "RKEConfig",
    "IngressController",
    "K8sCapabilities",
    "L4LoadBalancer",
    "KontainerDriver",
    "Node",
]
