"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from prometheus_client import REGISTRY, CollectorRegistry, enable_created_metrics

from autoscaler_metrics import create_app
from autoscaler_metrics.config import Settings
from autoscaler_metrics.metrics.registry import MetricsRegistry
from autoscaler_metrics.services.container import ServiceContainer
from tests.testing_utils import FakeClock


@pytest.fixture(autouse=True)
def clear_prometheus_registry():
    """Clear Prometheus registry before and after each test to ensure isolation."""
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass
    yield
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except (KeyError, ValueError):
            pass
    # create_app() may have switched *_created samples off globally
    enable_created_metrics()


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests."""
    return Settings(
        flask_env="testing",
        debug=False,
        log_level="DEBUG",
        metrics_host="127.0.0.1",
        metrics_port=8085,
        waitress_threads=1,
        metrics_disable_created_series=True,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return _build_test_settings()


@pytest.fixture
def collector_registry() -> CollectorRegistry:
    """Private exposition sink, isolated from the global REGISTRY."""
    return CollectorRegistry()


@pytest.fixture
def wall_clock() -> FakeClock:
    return FakeClock(1_700_000_000.75)


@pytest.fixture
def perf_counter() -> FakeClock:
    """Nanosecond monotonic clock."""
    return FakeClock(1_000_000_000_000)


@pytest.fixture
def metrics_registry(
    collector_registry: CollectorRegistry,
    wall_clock: FakeClock,
    perf_counter: FakeClock,
) -> MetricsRegistry:
    """Isolated MetricsRegistry driven by fake clocks."""
    return MetricsRegistry(
        collector_registry, wall_clock=wall_clock, perf_counter=perf_counter
    )


@pytest.fixture
def container(collector_registry: CollectorRegistry) -> ServiceContainer:
    """Service container exposing the private collector registry."""
    container = ServiceContainer()
    container.collector_registry.override(collector_registry)
    return container


@pytest.fixture
def app(test_settings: Settings, container: ServiceContainer) -> Generator[Flask, None, None]:
    """Create Flask app for testing."""
    app = create_app(test_settings, container=container)
    yield app
    container.unwire()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()
