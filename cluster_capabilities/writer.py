"""Writes resolved capabilities back to the cluster status."""

from cluster_capabilities.collaborators import ClusterClient
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.capabilities import Capabilities, capabilities_equal
from cluster_capabilities.models.cluster import Cluster

logger = get_logger(__name__)


class ReconcilerWriter:
    """Updates ``status.capabilities`` only when it actually changed."""

    def __init__(self, cluster_client: ClusterClient, dry_run: bool = False):
        """Initialize the writer.

        Args:
            cluster_client: Client used to submit cluster updates
            dry_run: If True, report what would be written without writing
        """
        self.cluster_client = cluster_client
        self.dry_run = dry_run

    def write(self, cluster: Cluster, capabilities: Capabilities) -> bool:
        """Persist ``capabilities`` if they differ from the stored ones.

        Returns:
            True if an update was submitted (or would be, in dry run)

        Raises:
            Any error from the cluster client, unmodified (conflicts included).
        """
        if capabilities_equal(capabilities, cluster.status.capabilities):
            logger.debug(f"Capabilities of cluster {cluster.name} unchanged")
            return False

        if self.dry_run:
            logger.info(f"Dry run: would update capabilities of cluster {cluster.name}")
            return True

        self.cluster_client.update(cluster.with_capabilities(capabilities))
        logger.info(f"Updated capabilities of cluster {cluster.name}")
        return True
