"""Metrics API endpoint for Prometheus scraping."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response
from prometheus_client import CollectorRegistry, generate_latest

metrics_bp = Blueprint("metrics", __name__, url_prefix="/metrics")


@metrics_bp.route("", methods=["GET"])
@inject
def get_metrics(
    collector_registry: CollectorRegistry = Provide["collector_registry"],
) -> Any:
    """Return metrics in Prometheus text format.

    Returns:
        Response with metrics data in Prometheus exposition format
    """
    return Response(
        generate_latest(collector_registry),
        content_type="text/plain; version=0.0.4; charset=utf-8",
    )
