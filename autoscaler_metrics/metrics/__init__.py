"""Prometheus series for the cluster autoscaler control loop."""

from autoscaler_metrics.metrics.labels import FailureType, LoopPhase
from autoscaler_metrics.metrics.registry import NAMESPACE, MetricsRegistry

__all__ = [
    "NAMESPACE",
    "FailureType",
    "LoopPhase",
    "MetricsRegistry",
]
