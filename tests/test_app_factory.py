"""Tests for the Flask application factory."""

import pytest
from flask import Flask
from prometheus_client import REGISTRY, CollectorRegistry, Gauge

from autoscaler_metrics import create_app
from autoscaler_metrics.config import Settings
from autoscaler_metrics.exceptions import ConfigurationError, MetricsRegistrationError
from autoscaler_metrics.metrics import MetricsRegistry
from autoscaler_metrics.services.container import ServiceContainer


class TestAppFactory:
    """Test create_app() wiring."""

    def test_create_app_returns_flask_instance(self, app: Flask):
        assert isinstance(app, Flask)

    def test_create_app_has_container(self, app: Flask):
        assert isinstance(app.container, ServiceContainer)

    def test_container_providers(self):
        assert set(ServiceContainer.providers) == {"collector_registry", "metrics_registry"}

    def test_metrics_registry_is_singleton(self, app: Flask, collector_registry):
        first = app.container.metrics_registry()
        second = app.container.metrics_registry()

        assert isinstance(first, MetricsRegistry)
        assert first is second
        assert first.collector_registry is collector_registry

    def test_default_container_registers_with_global_registry(self, test_settings: Settings):
        """Test that the process-wide sink is the default REGISTRY."""
        container = ServiceContainer()
        try:
            app = create_app(test_settings, container=container)

            assert app.container.metrics_registry().collector_registry is REGISTRY
            assert REGISTRY.get_sample_value(
                "cluster_autoscaler_node_group_size", {"node_group": "pool-a"}
            ) is None
        finally:
            container.unwire()

    def test_series_collision_aborts_startup(self, test_settings: Settings):
        """Test that a duplicate series name is fatal at startup."""
        collector_registry = CollectorRegistry()
        Gauge(
            "cluster_autoscaler_last_time_seconds",
            "Already taken",
            registry=collector_registry,
        )
        container = ServiceContainer()
        container.collector_registry.override(collector_registry)

        try:
            with pytest.raises(MetricsRegistrationError):
                create_app(test_settings, container=container)
        finally:
            container.unwire()

    def test_invalid_settings_abort_startup(self):
        settings = Settings(flask_env="testing", metrics_port=0)

        with pytest.raises(ConfigurationError):
            create_app(settings)

    def test_health_blueprint_registered(self, client):
        """Test that health blueprint is registered."""
        response = client.get("/health/healthz")
        assert response.status_code == 200

    def test_metrics_blueprint_registered(self, client):
        """Test that metrics blueprint is registered."""
        response = client.get("/metrics")
        assert response.status_code == 200
