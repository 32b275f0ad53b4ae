"""Cluster resource models.

A cluster is provisioned in exactly one way: by RKE from a declared config,
through a kontainer engine driver, or imported from an existing install.
``ClusterSpec.engine`` carries that choice as a single tagged variant so the
dispatch in the resolver is exhaustive.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from cluster_capabilities.models.capabilities import Capabilities
from cluster_capabilities.models.resource import ResourceModel

SERVICE_NODE_PORT_RANGE_ARG = "service-node-port-range"


class CloudProvider(ResourceModel):
    """RKE cloud provider selection."""

    name: str = ""


class IngressConfig(ResourceModel):
    """RKE ingress controller selection."""

    provider: str = ""


class KubeAPIService(ResourceModel):
    """kube-apiserver options relevant to capability detection."""

    service_node_port_range: str = Field(default="", alias="serviceNodePortRange")
    extra_args: dict[str, str] = Field(default_factory=dict, alias="extraArgs")


class RKEServices(ResourceModel):
    """RKE service configuration."""

    kube_api: KubeAPIService = Field(default_factory=KubeAPIService, alias="kubeApi")


class RKEConfig(ResourceModel):
    """Cluster whose nodes are provisioned and managed by RKE."""

    kind: Literal["rke"] = "rke"
    cloud_provider: CloudProvider = Field(default_factory=CloudProvider, alias="cloudProvider")
    ingress: IngressConfig = Field(default_factory=IngressConfig)
    services: RKEServices = Field(default_factory=RKEServices)


class GenericEngineConfig(ResourceModel):
    """Cluster provisioned through a kontainer engine driver."""

    kind: Literal["generic"] = "generic"
    config: dict[str, Any] = Field(default_factory=dict)

    @property
    def driver_name(self) -> str | None:
        """Driver name, or None when the field is missing or not a string."""
        value = self.config.get("driverName")
        return value if isinstance(value, str) else None


class ImportedConfig(ResourceModel):
    """Cluster registered from an existing, externally managed install."""

    kind: Literal["imported"] = "imported"
    config: dict[str, Any] = Field(default_factory=dict)


class NoEngineConfig(ResourceModel):
    """No provisioning config has been set yet."""

    kind: Literal["none"] = "none"


EngineConfig = Annotated[
    Union[RKEConfig, GenericEngineConfig, ImportedConfig, NoEngineConfig],
    Field(discriminator="kind"),
]


class ClusterSpec(ResourceModel):
    """Cluster spec: the engine variant plus the raw spec as stored."""

    engine: EngineConfig = Field(default_factory=NoEngineConfig)
    resource: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_resource(cls, spec: dict | None) -> "ClusterSpec":
        """Select the engine variant from a raw cluster spec.

        When several configs are set, RKE wins over generic, generic over
        imported.
        """
        spec = spec or {}
        if spec.get("rancherKubernetesEngineConfig") is not None:
            engine = RKEConfig.model_validate(spec["rancherKubernetesEngineConfig"])
        elif spec.get("genericEngineConfig") is not None:
            engine = GenericEngineConfig(config=spec["genericEngineConfig"])
        elif spec.get("importedConfig") is not None:
            engine = ImportedConfig(config=spec["importedConfig"])
        else:
            engine = NoEngineConfig()
        return cls(engine=engine, resource=spec)


class ClusterStatus(ResourceModel):
    """The part of the cluster status this package reads and writes."""

    capabilities: Capabilities = Field(default_factory=Capabilities)


class Cluster(ResourceModel):
    """A management cluster resource."""

    name: str
    resource_version: str | None = None
    deletion_timestamp: str | None = None
    spec: ClusterSpec = Field(default_factory=ClusterSpec)
    status: ClusterStatus = Field(default_factory=ClusterStatus)

    @property
    def deleting(self) -> bool:
        """True once the cluster has been marked for deletion."""
        return self.deletion_timestamp is not None

    def with_capabilities(self, capabilities: Capabilities) -> "Cluster":
        """Return a deep copy of the cluster carrying new capabilities."""
        status = self.status.model_copy(update={"capabilities": capabilities}, deep=True)
        return self.model_copy(update={"status": status}, deep=True)

    @classmethod
    def from_resource(cls, obj: dict) -> "Cluster":
        """Parse a ``clusters.management.cattle.io`` object."""
        metadata = obj.get("metadata") or {}
        status = obj.get("status") or {}
        return cls(
            name=metadata["name"],
            resource_version=metadata.get("resourceVersion"),
            deletion_timestamp=metadata.get("deletionTimestamp"),
            spec=ClusterSpec.from_resource(obj.get("spec")),
            status=ClusterStatus(
                capabilities=Capabilities.from_resource(status.get("capabilities"))
            ),
        )
