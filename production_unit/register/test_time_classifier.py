"""
Time Classifier Test

Validates:
1. Offset and local formats both classify
2. Wall-clock fields are kept as written
3. Unparsable input is excluded, not an error
4. Lenient hour extraction
"""

from datetime import datetime, timezone

from production_unit.register.time_classifier import classify, hour_of


def test_local_format():
    classified = classify("2025-01-10T14:30:00")
    assert classified is not None
    assert classified.date == "10/01/2025"
    assert classified.time_of_day == "14:30:00"
    assert classified.hour == 14


def test_offset_format_is_not_normalised():
    classified = classify("2025-11-28T23:15:00+05:00")
    assert classified is not None
    # Still the 28th at 23h, no conversion to UTC
    assert classified.date == "28/11/2025"
    assert classified.time_of_day == "23:15:00"
    assert classified.hour == 23


def test_zulu_and_fractional_seconds():
    assert classify("2025-11-28T06:00:01Z").hour == 6
    assert classify("2025-11-28T06:00:01.123456789Z").time_of_day == "06:00:01"
    assert classify("2025-11-28T06:00:01.5").hour == 6


def test_single_digit_hour():
    classified = classify("2025-01-10T7:30:00")
    assert classified is not None
    assert classified.time_of_day == "07:30:00"
    assert classified.hour == 7
    assert classify("2025-01-10T7:30:00+02:00").hour == 7
    # Only the hour may be short
    assert classify("2025-01-10T07:3:00") is None
    assert classify("2025-01-10T123:30:00") is None


def test_unix_timestamp_reads_local_as_utc():
    classified = classify("2025-11-28T15:29:42")
    expected = datetime(2025, 11, 28, 15, 29, 42, tzinfo=timezone.utc).timestamp()
    assert classified.unix_timestamp == expected

    with_offset = classify("2025-11-28T16:29:42+01:00")
    assert with_offset.unix_timestamp == expected


def test_unclassifiable_returns_none():
    for text in ["not-a-date", "", "2025-11-28", "2025-11-28 15:29:42", "2025-13-01T10:00:00",
                 "2025-1-5T1:2:3", "2025-11-28T15:29:42+0100"]:
        assert classify(text) is None, text


def test_hour_of_lenient_default():
    assert hour_of("14:30:00") == 14
    assert hour_of("07:00:00") == 7
    assert hour_of("00:59:59") == 0
    # Malformed input falls back to hour 0
    assert hour_of("garbage") == 0
    assert hour_of("") == 0
    assert hour_of("99:00:00") == 0
