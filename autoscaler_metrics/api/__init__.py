"""HTTP endpoints for the metrics service."""
