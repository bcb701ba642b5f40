"""
Timestamp normalization for chart points.

Chart dates come as "DD/MM/YYYY HH:mm" in Spanish civil time
(CET in winter, CEST in summer) and are exposed as UTC instants.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from .models import SOURCE_TIMEZONE

SOURCE_FORMAT = "%d/%m/%Y %H:%M"


class TimestampError(ValueError):
    """Raised when a chart date cannot be parsed."""


def normalize_timestamp(date_text: str, tz_name: str = SOURCE_TIMEZONE) -> str:
    """
    Convert a local "DD/MM/YYYY HH:mm" date into a UTC ISO-8601 string.

    Args:
        date_text: Local date/time, e.g. "20/11/2025 00:00"
        tz_name: IANA timezone the date is expressed in

    Returns:
        UTC instant with millisecond precision, e.g. "2025-11-19T23:00:00.000Z"

    Raises:
        TimestampError: If the text does not match the expected layout
    """
    if not isinstance(date_text, str):
        raise TimestampError(f"Expected date string, got {type(date_text).__name__}")

    try:
        local = datetime.strptime(date_text.strip(), SOURCE_FORMAT)
    except ValueError as e:
        raise TimestampError(f"Invalid chart date {date_text!r}: {e}") from e

    instant = local.replace(tzinfo=ZoneInfo(tz_name)).astimezone(timezone.utc)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"
