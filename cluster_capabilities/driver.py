"""Capability detection for clusters provisioned by kontainer engine drivers."""

from cluster_capabilities.collaborators import EngineDriverService, KontainerDriverLister
from cluster_capabilities.exceptions import (
    CapabilitiesError,
    DriverCapabilitiesError,
    DriverLookupError,
    DriverNotFoundError,
)
from cluster_capabilities.logging_config import get_logger
from cluster_capabilities.models.capabilities import (
    Capabilities,
    IngressCapabilities,
    LoadBalancerCapabilities,
)
from cluster_capabilities.models.cluster import ClusterSpec
from cluster_capabilities.models.driver import K8sCapabilities

logger = get_logger(__name__)


def to_capabilities(seed: Capabilities, reported: K8sCapabilities) -> Capabilities:
    """Translate a driver response onto ``seed``.

    Everything the driver reports replaces the seeded values. A driver that
    reports no node port range keeps the seeded default, and fields the
    driver does not know about (taint support) are kept.
    """
    lb = reported.l4_load_balancer
    return seed.model_copy(
        update={
            "ingress_controllers": [
                IngressCapabilities(
                    provider=controller.ingress_provider,
                    custom_default_backend_disabled=controller.custom_default_backend,
                )
                for controller in reported.ingress_controllers
            ],
            "load_balancer": LoadBalancerCapabilities(
                enabled=lb.enabled,
                provider=lb.provider,
                protocols_supported=list(lb.protocols_supported),
                health_check_supported=lb.health_check_supported,
            ),
            "node_pool_scaling_supported": reported.node_pool_scaling_supported,
            "node_port_range": reported.node_port_range or seed.node_port_range,
        }
    )


class DriverCapabilityClient:
    """Asks a cluster's kontainer engine driver what the cluster supports."""

    def __init__(self, driver_lister: KontainerDriverLister, engine_service: EngineDriverService):
        self.driver_lister = driver_lister
        self.engine_service = engine_service

    def capabilities(
        self, seed: Capabilities, driver_name: str, spec: ClusterSpec
    ) -> Capabilities | None:
        """Query the named driver and complete ``seed`` from its answer.

        Returns:
            The completed capabilities, or None if the driver no longer exists

        Raises:
            DriverLookupError: If the driver lookup fails for another reason
            DriverCapabilitiesError: If the driver's capability query fails
        """
        try:
            driver = self.driver_lister.get(driver_name)
        except DriverNotFoundError:
            # The driver may have been deleted while the cluster still names it
            logger.debug(f"Kontainer driver {driver_name} not found, skipping capabilities")
            return None
        except Exception as e:
            raise DriverLookupError(f"error getting kontainer driver: {driver_name}", str(e)) from e

        logger.debug(f"Querying kontainer driver {driver.name} for k8s capabilities")
        try:
            reported = self.engine_service.get_k8s_capabilities(driver, spec)
        except CapabilitiesError:
            raise
        except Exception as e:
            raise DriverCapabilitiesError("error getting k8s capabilities", str(e)) from e

        return to_capabilities(seed, reported)
