"""Response schema of a driver's k8s capability query."""

from pydantic import Field

from cluster_capabilities.models.resource import ResourceModel


class L4LoadBalancer(ResourceModel):
    enabled: bool = False
    provider: str = ""
    protocols_supported: list[str] = Field(default_factory=list, alias="protocolsSupported")
    health_check_supported: bool = Field(default=False, alias="healthCheckSupported")


class IngressController(ResourceModel):
    # Drivers always report a definite value here
    ingress_provider: str = Field(default="", alias="ingressProvider")
    custom_default_backend: bool = Field(default=False, alias="customDefaultBackend")


class K8sCapabilities(ResourceModel):
    """Capabilities as reported by a kontainer engine driver."""

    l4_load_balancer: L4LoadBalancer = Field(default_factory=L4LoadBalancer, alias="l4LoadBalancer")
    ingress_controllers: list[IngressController] = Field(
        default_factory=list, alias="ingressControllers"
    )
    node_pool_scaling_supported: bool = Field(default=False, alias="nodePoolScalingSupported")
    node_port_range: str = Field(default="", alias="nodePortRange")
