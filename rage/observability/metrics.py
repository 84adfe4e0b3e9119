"""Prometheus metrics for the schema upgrader.

The upgrader is a short-lived process, so metrics live in a dedicated
registry that the CLI pushes to a Pushgateway when enabled.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, push_to_gateway

REGISTRY = CollectorRegistry()

UPGRADE_ROUNDS = Counter(
    "rage_upgrade_rounds_total",
    "Total number of refresh rounds run by the upgrader",
    registry=REGISTRY,
)

UPGRADE_TRANSFORMS = Counter(
    "rage_upgrade_transforms_total",
    "Total number of controller transforms",
    labelnames=["controller", "outcome"],
    registry=REGISTRY,
)

UPGRADE_STEP_LATENCY = Histogram(
    "rage_upgrade_step_latency_seconds",
    "Latency of individual transformer phases",
    labelnames=["controller", "phase"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 15.0, 60.0, 300.0, 900.0),
    registry=REGISTRY,
)


def push_metrics(gateway: str, job: str) -> None:
    """Push the upgrader registry to a Prometheus Pushgateway."""
    push_to_gateway(gateway, job=job, registry=REGISTRY)
