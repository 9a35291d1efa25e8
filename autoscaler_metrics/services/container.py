"""Dependency injection container for the metrics service."""

from dependency_injector import containers, providers
from prometheus_client import REGISTRY

from autoscaler_metrics.metrics.registry import MetricsRegistry


class ServiceContainer(containers.DeclarativeContainer):
    """Process-wide services.

    The metrics registry is a singleton: its series are registered with the
    collector registry once, on first use, and live until the process exits.
    Tests override collector_registry with a private CollectorRegistry.
    """

    # Exposition sink scraped by /metrics
    collector_registry = providers.Object(REGISTRY)

    metrics_registry = providers.Singleton(
        MetricsRegistry,
        collector_registry=collector_registry,
    )
