"""Node and kontainer driver models."""

from typing import Any

from pydantic import Field

from cluster_capabilities.models.resource import ResourceModel


class Node(ResourceModel):
    """A management node belonging to a cluster.

    Only the pool name matters for capability detection: nodes created from
    a node pool can be scaled by the pool, custom nodes cannot.
    """

    name: str
    cluster_name: str = ""
    node_pool_name: str = Field(default="", alias="nodePoolName")

    @property
    def in_node_pool(self) -> bool:
        return bool(self.node_pool_name)

    @classmethod
    def from_resource(cls, obj: dict) -> "Node":
        """Parse a ``nodes.management.cattle.io`` object."""
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        return cls(
            name=metadata["name"],
            cluster_name=metadata.get("namespace", ""),
            node_pool_name=spec.get("nodePoolName") or "",
        )


class KontainerDriver(ResourceModel):
    """Descriptor of an installed kontainer engine driver."""

    name: str
    url: str = ""
    builtin: bool = Field(default=False, alias="builtIn")
    active: bool = False

    def to_resource(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "builtIn": self.builtin,
            "active": self.active,
        }

    @classmethod
    def from_resource(cls, obj: dict) -> "KontainerDriver":
        """Parse a ``kontainerdrivers.management.cattle.io`` object."""
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        return cls(
            name=metadata["name"],
            url=spec.get("url") or "",
            builtin=bool(spec.get("builtIn")),
            active=bool(spec.get("active")),
        )
