"""Seed events loaded into the register at process start."""

from typing import Tuple

from .events import ProductionEvent, ProductionStatus

BOOTSTRAP_EVENTS: Tuple[ProductionEvent, ...] = (
    ProductionEvent(123, "2025-11-28T15:29:42", ProductionStatus.DONE, "Randolph"),
    ProductionEvent(124, "2025-11-28T12:21:31", ProductionStatus.FAILED, "Amrit"),
    ProductionEvent(125, "2025-12-02T11:11:22", ProductionStatus.DONE, "Jörg"),
    ProductionEvent(126, "2025-12-01T10:10:10", ProductionStatus.IN_PROGRESS, "Daniel"),
    ProductionEvent(127, "2025-12-25T09:09:09", ProductionStatus.DONE, "Olga"),
    ProductionEvent(128, "2025-11-24T08:08:08", ProductionStatus.FAILED, "Lena"),
    ProductionEvent(129, "2025-11-23T07:07:07", ProductionStatus.DONE, "Peer"),
    ProductionEvent(130, "2025-11-22T07:07:08", ProductionStatus.DONE, "Chris"),
    ProductionEvent(131, "2025-11-21T07:07:09", ProductionStatus.DONE, "Alex"),
    ProductionEvent(132, "2025-11-20T07:07:10", ProductionStatus.DONE, "Jordan"),
)
