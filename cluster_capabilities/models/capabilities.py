"""Capability value types stored in a cluster's status."""

from typing import Any

from pydantic import ConfigDict, Field

from cluster_capabilities.models.resource import ResourceModel

ELASTIC_LOAD_BALANCER = "ELB"
AZURE_L4_LB = "Azure L4 LB"
NGINX_INGRESS_PROVIDER = "Nginx"
DEFAULT_NODE_PORT_RANGE = "30000-32767"


class LoadBalancerCapabilities(ResourceModel):
    """L4 load balancer support. The zero value means no load balancer."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    provider: str = ""
    protocols_supported: list[str] = Field(default_factory=list, alias="protocolsSupported")
    health_check_supported: bool = Field(default=False, alias="healthCheckSupported")


class IngressCapabilities(ResourceModel):
    """A single ingress controller offered by the cluster."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="", alias="ingressProvider")
    # None means "not declared", which is not the same as False
    custom_default_backend_disabled: bool | None = Field(
        default=None, alias="customDefaultBackend"
    )


class Capabilities(ResourceModel):
    """Full capability set of a cluster.

    Always rebuilt from scratch on each reconcile pass; derivation steps
    return new instances via ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    load_balancer: LoadBalancerCapabilities = Field(
        default_factory=LoadBalancerCapabilities, alias="loadBalancerCapabilities"
    )
    ingress_controllers: list[IngressCapabilities] = Field(
        default_factory=list, alias="ingressCapabilities"
    )
    node_port_range: str = Field(default="", alias="nodePortRange")
    node_pool_scaling_supported: bool = Field(default=False, alias="nodePoolScalingSupported")
    taint_support: bool | None = Field(default=None, alias="taintSupport")

    def to_resource(self) -> dict[str, Any]:
        """Render in the camelCase form used by the cluster resource."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_resource(cls, data: dict | None) -> "Capabilities":
        """Parse ``status.capabilities`` from a cluster resource."""
        if not data:
            return cls()
        return cls.model_validate(data)


def load_balancer_equal(a: LoadBalancerCapabilities, b: LoadBalancerCapabilities) -> bool:
    """Compare two load balancer capability records field by field."""
    return (
        a.enabled == b.enabled
        and a.provider == b.provider
        and list(a.protocols_supported) == list(b.protocols_supported)
        and a.health_check_supported == b.health_check_supported
    )


def _optional_bool_equal(a: bool | None, b: bool | None) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return a == b


def ingress_equal(a: IngressCapabilities, b: IngressCapabilities) -> bool:
    """Compare two ingress capability entries field by field."""
    return a.provider == b.provider and _optional_bool_equal(
        a.custom_default_backend_disabled, b.custom_default_backend_disabled
    )


def capabilities_equal(a: Capabilities, b: Capabilities) -> bool:
    """Structural equality used to decide whether a status write is needed.

    Optional fields compare by presence first, so ``None`` never equals
    ``False``. Sequences compare in order.
    """
    if not load_balancer_equal(a.load_balancer, b.load_balancer):
        return False
    if len(a.ingress_controllers) != len(b.ingress_controllers):
        return False
    for left, right in zip(a.ingress_controllers, b.ingress_controllers):
        if not ingress_equal(left, right):
            return False
    return (
        a.node_port_range == b.node_port_range
        and a.node_pool_scaling_supported == b.node_pool_scaling_supported
        and _optional_bool_equal(a.taint_support, b.taint_support)
    )
