"""Prometheus counters for validation outcomes and remote calls."""

from association_validator.monitoring.metrics import (
    associations_validated_total,
    invalid_associations_total,
    transport_requests_total,
)

__all__ = [
    "associations_validated_total",
    "invalid_associations_total",
    "transport_requests_total",
]
