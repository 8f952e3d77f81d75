"""
Production Event Register

Thread-safe register of production steps.

Responsibilities:
- Admit validated production events
- Classify timestamps into hour-of-day buckets
- Keep status counts, hour gauges and histograms fresh
- Emit read-only completion views

NO:
- Persistence
- HTTP handling
"""

from .errors import RegisterError, InvalidEvent, NotFound, Malformed
from .events import ProductionEvent, ProductionStatus, CompletedEvent
from .time_classifier import ClassifiedTime, classify, hour_of
from .aggregates import AggregateEngine
from .store import EventStore
from .bootstrap import BOOTSTRAP_EVENTS

__all__ = [
    'RegisterError',
    'InvalidEvent',
    'NotFound',
    'Malformed',
    'ProductionEvent',
    'ProductionStatus',
    'CompletedEvent',
    'ClassifiedTime',
    'classify',
    'hour_of',
    'AggregateEngine',
    'EventStore',
    'BOOTSTRAP_EVENTS',
]
