"""Entry point invoked once per cluster change."""

from dataclasses import dataclass

from cluster_capabilities.collaborators import (
    ClusterClient,
    EngineDriverService,
    KontainerDriverLister,
    NodeLister,
)
from cluster_capabilities.driver import DriverCapabilityClient
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.capabilities import Capabilities
from cluster_capabilities.models.cluster import Cluster, ImportedConfig
from cluster_capabilities.resolver import CapabilityResolver
from cluster_capabilities.rke import NodePoolDetection, RKEIntrospector
from cluster_capabilities.writer import ReconcilerWriter

logger = get_logger(__name__)

HANDLER_NAME = "clusterCreateUpdate"


@dataclass
class SyncResult:
    """Outcome of one reconcile pass.

    Attributes:
        capabilities: Resolved capabilities, None when the cluster was skipped
        updated: Whether a status update was submitted
    """

    capabilities: Capabilities | None = None
    updated: bool = False


class CapabilitySyncHandler:
    """Keeps a cluster's ``status.capabilities`` in line with its config.

    Holds no per-cluster state; the caller serializes events for the same
    cluster and may run distinct clusters concurrently.
    """

    def __init__(self, resolver: CapabilityResolver, writer: ReconcilerWriter):
        self.resolver = resolver
        self.writer = writer

    def reconcile(self, key: str, cluster: Cluster | None) -> SyncResult:
        """Resolve and persist capabilities, reporting what happened."""
        if cluster is None or cluster.deleting:
            logger.debug(f"Cluster {key} is gone or being deleted, skipping")
            return SyncResult()

        if isinstance(cluster.spec.engine, ImportedConfig):
            logger.debug(f"Cluster {key} is imported, skipping")
            return SyncResult()

        capabilities = self.resolver.resolve(key, cluster)
        updated = self.writer.write(cluster, capabilities)
        return SyncResult(capabilities=capabilities, updated=updated)

    def sync(self, key: str, cluster: Cluster | None) -> None:
        """Handler callback: returns no new object, raises on failure."""
        self.reconcile(key, cluster)
        return None


def build_handler(
    cluster_client: ClusterClient,
    node_lister: NodeLister,
    driver_lister: KontainerDriverLister,
    engine_service: EngineDriverService,
    node_pool_detection: NodePoolDetection = "first",
    dry_run: bool = False,
) -> CapabilitySyncHandler:
    """Wire a handler from its collaborators."""
    resolver = CapabilityResolver(
        RKEIntrospector(node_lister, node_pool_detection=node_pool_detection),
        DriverCapabilityClient(driver_lister, engine_service),
    )
    return CapabilitySyncHandler(resolver, ReconcilerWriter(cluster_client, dry_run=dry_run))
