"""
Timestamp classification for hour-of-day aggregation.

Pure functions, no shared state.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

# Tried in order, first match wins. The hour may be a single digit,
# every other field is fixed width.
_OFFSET_FORMAT = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{1,2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})$"
)
_LOCAL_FORMAT = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{1,2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?$"
)

_HOUR_PREFIX = re.compile(r"^\s*([+-]?\d+):")


@dataclass(frozen=True)
class ClassifiedTime:
    """
    A timestamp that matched one of the accepted formats.

    Wall-clock fields are kept as written; no timezone conversion.
    """
    moment: datetime

    @property
    def date(self) -> str:
        return self.moment.strftime("%d/%m/%Y")

    @property
    def time_of_day(self) -> str:
        return self.moment.strftime("%H:%M:%S")

    @property
    def hour(self) -> int:
        return hour_of(self.time_of_day)

    @property
    def unix_timestamp(self) -> float:
        """Seconds since epoch. Timestamps without offset are read as UTC."""
        moment = self.moment
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.timestamp()


def _parse(text: str, with_offset: bool) -> Optional[datetime]:
    pattern = _OFFSET_FORMAT if with_offset else _LOCAL_FORMAT
    match = pattern.match(text)
    if match is None:
        return None

    fraction = match.group(1)
    body = text
    if fraction:
        # strptime accepts at most microseconds
        body = text.replace(fraction, "." + fraction[1:7].ljust(6, "0"), 1)

    layout = "%Y-%m-%dT%H:%M:%S"
    if fraction:
        layout += ".%f"
    if with_offset:
        if body.endswith("Z"):
            body = body[:-1] + "+00:00"
        layout += "%z"

    try:
        return datetime.strptime(body, layout)
    except ValueError:
        # Right shape, impossible calendar value (e.g. month 13)
        return None


def classify(timestamp: str) -> Optional[ClassifiedTime]:
    """
    Parse a timestamp in one of the accepted formats.

    Formats, in priority order:
        1. 2025-11-28T15:29:42+01:00 (or Z), optional fractional seconds
        2. 2025-11-28T15:29:42, optional fractional seconds

    Returns:
        ClassifiedTime, or None when neither format matches. None means
        "exclude from aggregation", never a failure.
    """
    if not timestamp:
        return None

    for with_offset in (True, False):
        moment = _parse(timestamp, with_offset)
        if moment is not None:
            return ClassifiedTime(moment)
    return None


def hour_of(time_of_day: str) -> int:
    """
    Extract the hour from an HH:MM:SS string.

    Lenient: malformed or out-of-range input yields hour 0 instead
    of failing. Lossy, since a real midnight sample and a malformed
    one land in the same bucket.
    """
    match = _HOUR_PREFIX.match(time_of_day or "")
    if match is None:
        return 0
    hour = int(match.group(1))
    if not 0 <= hour <= 23:
        return 0
    return hour
