import logging
import threading
from typing import Iterable, List, Optional

from .aggregates import AggregateEngine
from .events import CompletedEvent, ProductionEvent, ProductionStatus
from .time_classifier import classify

logger = logging.getLogger("EventStore")


class EventStore:
    """
    Single Source of Truth for production events.

    Thread-safe: one lock guards both the event list and the
    aggregates, and is held until recomputation has finished, so
    no reader ever sees aggregates that lag the list.
    """

    def __init__(
        self,
        events: Iterable[ProductionEvent] = (),
        aggregates: Optional[AggregateEngine] = None,
    ):
        """
        Initialize event store.

        Args:
            events: Seed events, validated and stored in order
            aggregates: Aggregate engine to keep fresh (new engine if None)
        """
        self._lock = threading.Lock()
        self._events: List[ProductionEvent] = []
        self.aggregates = aggregates if aggregates is not None else AggregateEngine()

        for event in events:
            event.validate()
            self._events.append(event)

        with self._lock:
            self.aggregates.rebuild_histograms(self._events)
            self.aggregates.refresh(self._events)

        logger.info(f"EventStore initialized with {len(self._events)} events")

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def list_events(self) -> List[ProductionEvent]:
        """Snapshot of all events in insertion order."""
        with self._lock:
            return self._events.copy()

    def insert(self, event: ProductionEvent) -> ProductionEvent:
        """
        Validate and append an event.

        Raises:
            InvalidEvent: the event breaks an admission invariant; nothing is stored
        """
        event.validate()

        with self._lock:
            self._events.append(event)
            try:
                self.aggregates.observe_one(event)
                self.aggregates.refresh(self._events)
            except Exception:
                # Undo the append so list and aggregates still agree
                self._events.pop()
                self.aggregates.rebuild_histograms(self._events)
                self.aggregates.refresh(self._events)
                raise

        logger.info(f"Inserted {event!r}")
        return event

    def delete_by_device_id(self, device_id: int) -> bool:
        """
        Remove the first event recorded for a device.

        device_id is not unique; repeat the call to remove later events
        of the same device.

        Returns:
            True if an event was removed, False if none matched
        """
        with self._lock:
            for index, event in enumerate(self._events):
                if event.device_id == device_id:
                    del self._events[index]
                    break
            else:
                return False

            self.aggregates.rebuild_histograms(self._events)
            self.aggregates.refresh(self._events)

        logger.info(f"Deleted {event!r}")
        return True

    def completed_events(self) -> List[CompletedEvent]:
        """
        DONE events with a classifiable timestamp, in insertion order.

        Events whose timestamp does not classify are left out silently.
        """
        with self._lock:
            events = self._events.copy()

        completed = []
        for event in events:
            if event.status != ProductionStatus.DONE:
                continue
            classified = classify(event.timestamp)
            if classified is None:
                continue
            completed.append(CompletedEvent(
                device_id=event.device_id,
                date=classified.date,
                time_of_day=classified.time_of_day,
                operator=event.operator,
            ))
        return completed

    def exposition(self) -> bytes:
        """Prometheus text exposition, rendered under the store lock."""
        with self._lock:
            return self.aggregates.exposition()
