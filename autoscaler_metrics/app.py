"""Custom Flask application class with container reference."""

from typing import TYPE_CHECKING

from flask import Flask

if TYPE_CHECKING:
    from autoscaler_metrics.services.container import ServiceContainer


class App(Flask):
    """Flask application with typed access to the service container."""

    container: "ServiceContainer"
