"""Flask application factory."""

import logging

from prometheus_client import disable_created_metrics

from autoscaler_metrics.app import App
from autoscaler_metrics.config import Settings
from autoscaler_metrics.services.container import ServiceContainer

logger = logging.getLogger(__name__)


def create_app(
    settings: "Settings | None" = None,
    container: "ServiceContainer | None" = None,
) -> App:
    """Create and configure the Flask application.

    The metrics registry is instantiated here, before the first request, so a
    series name collision aborts startup instead of failing a scrape.

    Args:
        settings: Optional settings instance (loaded from the environment if
            not provided)
        container: Optional pre-built container, e.g. with collector_registry
            overridden by tests

    Returns:
        Configured Flask application instance

    Raises:
        ConfigurationError: Settings are invalid or a series is already
            registered.
    """
    app = App(__name__)

    if settings is None:
        settings = Settings.load()

    settings.validate_config()

    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.is_testing

    if settings.metrics_disable_created_series:
        disable_created_metrics()

    if container is None:
        container = ServiceContainer()

    container.wire(packages=["autoscaler_metrics.api"])

    app.container = container

    # Eagerly build the process-wide registry
    container.metrics_registry()
    logger.info("Cluster autoscaler metrics registered")

    from autoscaler_metrics.api.health import health_bp
    from autoscaler_metrics.api.metrics import metrics_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_bp)

    return app
