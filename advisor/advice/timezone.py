"""Epoch to city-local date/time conversion using the provider's fixed offset."""

from datetime import UTC, datetime

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def local_datetime(epoch_seconds: int, utc_offset_seconds: int) -> datetime:
    """Shift a UTC epoch by the city's offset. No DST inference."""
    return datetime.fromtimestamp(epoch_seconds + utc_offset_seconds, UTC)


def local_date_time(epoch_seconds: int, utc_offset_seconds: int) -> tuple[str, str]:
    """Return (YYYY-MM-DD, HH:MM) for the timestamp in the city's local zone."""
    local = local_datetime(epoch_seconds, utc_offset_seconds)
    return local.strftime(DATE_FORMAT), local.strftime(TIME_FORMAT)
