"""
Production Event Model

A production event records one discrete manufacturing step.

CRITICAL RULES:
- Status is drawn from a closed set
- Events are immutable once stored
- Invalid events are never admitted to the register
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum

from .errors import InvalidEvent

MISSING_FIELDS = "Missing required fields"
INVALID_STATUS = "Invalid status"
INVALID_TYPE = "Invalid field type"


class ProductionStatus(str, Enum):
    """
    Production step status.

    Assigned once at insert, never transitions.
    """
    DONE = "DONE"
    IN_PROGRESS = "IN_PROGRESS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ProductionEvent:
    """
    Production event.

    device_id is not a unique key: a device may appear several
    times across its lifecycle.
    """
    device_id: int
    timestamp: str  # RFC 3339 with or without offset, see time_classifier
    status: ProductionStatus
    operator: str

    @classmethod
    def from_fields(
        cls,
        device_id: Optional[int],
        timestamp: Optional[str],
        status: Optional[str],
        operator: Optional[str],
    ) -> "ProductionEvent":
        """
        Build an event from decoded request fields.

        Missing fields are checked before the status value, so a body
        lacking both reports the missing fields.

        Raises:
            InvalidEvent: a field is missing/empty or the status is unknown
        """
        for name, value in (
            ('device_id', device_id),
            ('timestamp', timestamp),
            ('status', status),
            ('operator', operator),
        ):
            if not value:
                raise InvalidEvent(MISSING_FIELDS, field=name)

        try:
            parsed_status = ProductionStatus(status)
        except ValueError:
            raise InvalidEvent(INVALID_STATUS, field='status') from None

        return cls(
            device_id=device_id,
            timestamp=timestamp,
            status=parsed_status,
            operator=operator,
        )

    def validate(self) -> None:
        """
        Check the admission invariants.

        Raises:
            InvalidEvent: naming the first offending field
        """
        if not self.device_id:
            raise InvalidEvent(MISSING_FIELDS, field='device_id')
        if not self.timestamp:
            raise InvalidEvent(MISSING_FIELDS, field='timestamp')
        if not self.status:
            raise InvalidEvent(MISSING_FIELDS, field='status')
        if not self.operator:
            raise InvalidEvent(MISSING_FIELDS, field='operator')
        # bool is an int subclass
        if not isinstance(self.device_id, int) or isinstance(self.device_id, bool):
            raise InvalidEvent(INVALID_TYPE, field='device_id')
        if not isinstance(self.timestamp, str):
            raise InvalidEvent(INVALID_TYPE, field='timestamp')
        if not isinstance(self.operator, str):
            raise InvalidEvent(INVALID_TYPE, field='operator')
        if not isinstance(self.status, ProductionStatus):
            raise InvalidEvent(INVALID_STATUS, field='status')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'device_id': self.device_id,
            'timestamp': self.timestamp,
            'status': self.status.value,
            'operator': self.operator,
        }

    def __repr__(self) -> str:
        status = getattr(self.status, 'value', self.status)
        return f"ProductionEvent({status}, device={self.device_id}, t={self.timestamp})"


@dataclass(frozen=True)
class CompletedEvent:
    """Completion view of a DONE event with a classifiable timestamp."""
    device_id: int
    date: str  # DD/MM/YYYY
    time_of_day: str  # HH:MM:SS
    operator: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'device_id': self.device_id,
            'date': self.date,
            'time': self.time_of_day,
            'operator': self.operator,
        }
