"""Selects how a cluster's capabilities are derived."""

from cluster_capabilities.driver import DriverCapabilityClient
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.capabilities import DEFAULT_NODE_PORT_RANGE, Capabilities
from cluster_capabilities.models.cluster import Cluster, GenericEngineConfig, RKEConfig
from cluster_capabilities.rke import RKEIntrospector

logger = get_logger(__name__)


def retain_taint_support(capabilities: Capabilities, prior: Capabilities) -> Capabilities:
    """Carry a previously granted taint support flag forward.

    The provisioner sets ``taint_support`` and updates the cluster itself;
    recomputing capabilities must not revoke it. Only a prior ``True`` is
    kept. A prior ``False`` or unset value is dropped.
    """
    if prior.taint_support is True:
        return capabilities.model_copy(update={"taint_support": True})
    return capabilities


def seed_capabilities(prior: Capabilities) -> Capabilities:
    """Starting point for every derivation."""
    seed = Capabilities(node_port_range=DEFAULT_NODE_PORT_RANGE)
    return retain_taint_support(seed, prior)


class CapabilityResolver:
    """Dispatches to the RKE or driver path based on the cluster's engine."""

    def __init__(self, rke: RKEIntrospector, driver: DriverCapabilityClient):
        self.rke = rke
        self.driver = driver

    def resolve(self, key: str, cluster: Cluster) -> Capabilities:
        """Return the cluster's capabilities.

        When there is nothing to derive, the stored capabilities are returned
        unchanged so no write follows.
        """
        prior = cluster.status.capabilities
        engine = cluster.spec.engine

        if isinstance(engine, RKEConfig):
            return self.rke.capabilities(seed_capabilities(prior), engine, cluster.name)

        if isinstance(engine, GenericEngineConfig):
            driver_name = engine.driver_name
            if driver_name is None:
                logger.warning(
                    f"cluster {key} had generic engine config but no driver name, k8s "
                    "capabilities will not be populated correctly"
                )
                return prior
            resolved = self.driver.capabilities(seed_capabilities(prior), driver_name, cluster.spec)
            return prior if resolved is None else resolved

        logger.debug(f"Cluster {key} engine '{engine.kind}' has no capability source")
        return prior
