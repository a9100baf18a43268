"""Time utilities for report windows and export timestamps."""

from datetime import datetime, timezone

from dateutil import parser as date_parser

# Earliest accession date the report considers when no lower bound is given
HISTORICAL_EPOCH = datetime(1800, 1, 1, 0, 0, 0)


def local_now() -> datetime:
    """Current local wall-clock time as a naive datetime, to the second."""
    return datetime.now().replace(microsecond=0)


def parse_report_timestamp(value: str) -> datetime:
    """
    Parse a free-form date/time string into a naive local timestamp.

    Accession dates are stored as naive local timestamps, so timezone-aware
    input is converted to local time before the tzinfo is dropped. Missing
    time components default to midnight.

    Args:
        value: Date or date/time text (e.g. '2020-01-31', 'Jan 5 2021 10:00')

    Returns:
        Naive datetime truncated to whole seconds

    Raises:
        ValueError: If the text is not a recognizable date
    """
    try:
        parsed = date_parser.parse(value, default=datetime(1900, 1, 1))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unrecognized date/time: {value!r}") from e

    return to_local_naive(parsed)


def to_local_naive(dt: datetime) -> datetime:
    """Naive local wall-clock time to the second; aware values are converted first."""
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt.replace(microsecond=0)


def utc_now_z() -> str:
    """
    Get current UTC time as ISO 8601 string with Z suffix.

    Example:
        >>> utc_now_z()
        '2025-12-23T00:27:07.804867Z'
    """
    return to_utc_z(datetime.now(timezone.utc))


def to_utc_z(dt: datetime) -> str:
    """
    Convert a timezone-aware datetime to ISO 8601 UTC with Z suffix.

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )
    return dt.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')
