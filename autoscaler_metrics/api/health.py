"""Liveness probe for the process hosting the exposition endpoint."""

from typing import Any

from flask import Blueprint, jsonify

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("/healthz", methods=["GET"])
def healthz() -> Any:
    """Report that the process is up and serving requests."""
    return jsonify({"status": "alive", "ready": True}), 200
