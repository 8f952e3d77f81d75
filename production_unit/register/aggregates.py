"""
Aggregate Engine

Derives Prometheus metrics from the register's events.

CRITICAL RULES:
- Read-only consumer of the event list
- Called only from inside the EventStore lock
- Histograms cannot retract a sample: rebuild after any delete
- Every aggregate is recomputable from the event list alone
"""

from typing import Dict, Iterable, List, Optional
import logging

from prometheus_client import CollectorRegistry, Gauge, Histogram, generate_latest

from .events import ProductionEvent, ProductionStatus
from .time_classifier import classify

logger = logging.getLogger("AggregateEngine")

HOURS = range(24)
# Upper bounds 0..24, +Inf is appended by prometheus_client
HOUR_BUCKETS = tuple(float(h) for h in range(25))


class AggregateEngine:
    """
    Production metrics derived from the event list.

    Counts and hour gauges are recounted on every mutation. The hour
    histogram is fed one sample per insert and replayed from scratch
    after a delete.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None, namespace: str = "production"):
        """
        Initialize aggregate engine.

        Args:
            registry: Prometheus registry to publish to (new private registry if None)
            namespace: Metric name prefix
        """
        self.registry = registry if registry is not None else CollectorRegistry()

        self.total = Gauge(
            "steps",
            "Total number of recorded production steps",
            namespace=namespace,
            registry=self.registry,
        )
        self.by_status = Gauge(
            "steps_by_status",
            "Number of production steps per status",
            ["status"],
            namespace=namespace,
            registry=self.registry,
        )
        self.by_hour = Gauge(
            "steps_by_hour",
            "Number of production steps per status and hour of day",
            ["status", "hour"],
            namespace=namespace,
            registry=self.registry,
        )
        self.hour_histogram = Histogram(
            "step_hour",
            "Distribution of production steps over the hour of day, per status",
            ["status"],
            namespace=namespace,
            buckets=HOUR_BUCKETS,
            registry=self.registry,
        )
        self.completion_time = Gauge(
            "completion_timestamp_seconds",
            "Unix timestamp of completed production steps (DONE only)",
            ["device_id", "operator"],
            namespace=namespace,
            registry=self.registry,
        )

        self._reset_histograms()

    # ========== Counts ==========

    def recompute_counts(self, events: List[ProductionEvent]) -> None:
        """Full recount of total and per-status counts."""
        counts = {status: 0 for status in ProductionStatus}
        for event in events:
            counts[event.status] += 1

        self.total.set(len(events))
        for status, count in counts.items():
            self.by_status.labels(status=status.value).set(count)

    def recompute_hour_distribution(self, events: List[ProductionEvent]) -> None:
        """
        Set every status/hour gauge from a fresh count.

        All 24 buckets are written for every status, zeros included,
        so rate queries over sparse hours still find a series.
        """
        buckets: Dict[ProductionStatus, Dict[int, int]] = {
            status: {hour: 0 for hour in HOURS} for status in ProductionStatus
        }
        for event in events:
            classified = classify(event.timestamp)
            if classified is None:
                continue
            buckets[event.status][classified.hour] += 1

        for status, per_hour in buckets.items():
            for hour, count in per_hour.items():
                self.by_hour.labels(status=status.value, hour=str(hour)).set(count)

    def recompute_completion_times(self, events: List[ProductionEvent]) -> None:
        """Reset the completion timestamp gauge from DONE, classifiable events."""
        self.completion_time.clear()
        for event in events:
            if event.status != ProductionStatus.DONE:
                continue
            classified = classify(event.timestamp)
            if classified is None:
                continue
            self.completion_time.labels(
                device_id=str(event.device_id),
                operator=event.operator,
            ).set(classified.unix_timestamp)

    def refresh(self, events: List[ProductionEvent]) -> None:
        """Recompute every gauge. Histograms are handled separately."""
        self.recompute_counts(events)
        self.recompute_hour_distribution(events)
        self.recompute_completion_times(events)

    # ========== Histograms ==========

    def observe_one(self, event: ProductionEvent) -> bool:
        """
        Record one histogram sample for a newly inserted event.

        Returns:
            True if the event was classifiable and observed
        """
        classified = classify(event.timestamp)
        if classified is None:
            logger.debug(f"Unclassifiable timestamp, not observed: {event!r}")
            return False
        self.hour_histogram.labels(status=event.status.value).observe(classified.hour)
        return True

    def rebuild_histograms(self, events: Iterable[ProductionEvent]) -> None:
        """
        Discard every histogram series and replay all events in order.

        Required after a delete: the removed event's sample cannot
        be retracted from the accumulated buckets.
        """
        self._reset_histograms()
        observed = sum(1 for event in events if self.observe_one(event))
        logger.debug(f"Histograms rebuilt from {observed} classifiable events")

    def _reset_histograms(self) -> None:
        self.hour_histogram.clear()
        # Keep an empty series per status so all three are always exposed
        for status in ProductionStatus:
            self.hour_histogram.labels(status=status.value)

    # ========== Exposition ==========

    def exposition(self) -> bytes:
        """Prometheus text format of the whole registry."""
        return generate_latest(self.registry)
