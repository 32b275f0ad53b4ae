"""Capability detection for RKE provisioned clusters."""

from typing import Literal

from cluster_capabilities.collaborators import NodeLister
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.capabilities import (
    AZURE_L4_LB,
    ELASTIC_LOAD_BALANCER,
    NGINX_INGRESS_PROVIDER,
    Capabilities,
    IngressCapabilities,
    LoadBalancerCapabilities,
)
from cluster_capabilities.models.cluster import SERVICE_NODE_PORT_RANGE_ARG, RKEConfig
from cluster_capabilities.models.node import Node

logger = get_logger(__name__)

AWS_CLOUD_PROVIDER = "aws"
AZURE_CLOUD_PROVIDER = "azure"

# Cloud providers whose RKE integration ships an L4 load balancer
CLOUD_LOAD_BALANCERS = {
    AWS_CLOUD_PROVIDER: LoadBalancerCapabilities(
        enabled=True,
        provider=ELASTIC_LOAD_BALANCER,
        protocols_supported=["TCP"],
        health_check_supported=True,
    ),
    AZURE_CLOUD_PROVIDER: LoadBalancerCapabilities(
        enabled=True,
        provider=AZURE_L4_LB,
        protocols_supported=["TCP", "UDP"],
        health_check_supported=True,
    ),
}

NodePoolDetection = Literal["first", "any"]


def load_balancer_capability(cloud_provider_name: str) -> LoadBalancerCapabilities:
    """Look up the L4 load balancer for a cloud provider name (exact match)."""
    known = CLOUD_LOAD_BALANCERS.get(cloud_provider_name)
    if known is None:
        return LoadBalancerCapabilities()
    return known.model_copy(deep=True)


def ingress_capability(provider_name: str) -> IngressCapabilities:
    """Build the ingress entry for the configured ingress provider.

    Nginx is known to have no custom default backend. For any other
    provider the flag stays undeclared.
    """
    if provider_name.casefold() == NGINX_INGRESS_PROVIDER.casefold():
        return IngressCapabilities(provider=provider_name, custom_default_backend_disabled=False)
    return IngressCapabilities(provider=provider_name)


def node_port_range(rke_config: RKEConfig, default: str) -> str:
    """Pick the service node port range: explicit, then extra arg, then default."""
    kube_api = rke_config.services.kube_api
    if kube_api.service_node_port_range:
        return kube_api.service_node_port_range
    if kube_api.extra_args.get(SERVICE_NODE_PORT_RANGE_ARG):
        return kube_api.extra_args[SERVICE_NODE_PORT_RANGE_ARG]
    return default


def supports_node_pool_scaling(nodes: list[Node], detection: NodePoolDetection = "first") -> bool:
    """Decide whether the cluster's nodes come from node pools.

    Custom clusters have no pool names on their nodes. With ``first`` only
    the first node in store order is checked; ``any`` checks all nodes and
    does not depend on list order.
    """
    if not nodes:
        return False
    if detection == "any":
        return any(node.in_node_pool for node in nodes)
    return nodes[0].in_node_pool


class RKEIntrospector:
    """Derives capabilities from an RKE config and the cluster's nodes."""

    def __init__(self, node_lister: NodeLister, node_pool_detection: NodePoolDetection = "first"):
        """Initialize the introspector.

        Args:
            node_lister: Source of the cluster's nodes
            node_pool_detection: ``first`` (store order) or ``any``
        """
        self.node_lister = node_lister
        self.node_pool_detection = node_pool_detection

    def capabilities(
        self, seed: Capabilities, rke_config: RKEConfig, cluster_name: str
    ) -> Capabilities:
        """Complete ``seed`` from the RKE config.

        Raises:
            Whatever the node lister raises; listing failures are retryable.
        """
        load_balancer = load_balancer_capability(rke_config.cloud_provider.name)

        nodes = self.node_lister.list(cluster_name)
        pool_scaling = supports_node_pool_scaling(nodes, self.node_pool_detection)
        logger.debug(
            f"Cluster {cluster_name}: {len(nodes)} nodes, node pool scaling {pool_scaling}"
        )

        update = {
            "ingress_controllers": [ingress_capability(rke_config.ingress.provider)],
            "node_port_range": node_port_range(rke_config, seed.node_port_range),
        }
        if load_balancer.enabled:
            update["load_balancer"] = load_balancer
        if pool_scaling:
            update["node_pool_scaling_supported"] = True
        return seed.model_copy(update=update)
