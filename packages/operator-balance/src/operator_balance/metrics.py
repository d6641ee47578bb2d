"""Prometheus metrics for the balance scheduler."""

from prometheus_client import Counter

# Planning outcomes per scheduler
SCHEDULER_EVENTS = Counter(
    "balance_scheduler_events_total",
    "Scheduler planning outcomes",
    ["scheduler", "reason"],  # reason: "no_store", "no_region"
)


def record_scheduler_event(scheduler: str, reason: str) -> None:
    """Record a planning outcome for a scheduler."""
    SCHEDULER_EVENTS.labels(scheduler=scheduler, reason=reason).inc()
