"""Aggregation of raw uptime logs into daily status buckets.

A log is newline-delimited text where each line looks like::

    2024-01-05 12:00:00,success

Lines are grouped by GMT calendar date, each day is averaged into a score
between 0 and 1, and the days are re-keyed by how many days ago they were
relative to a reference ``now``.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from .models import DateBuckets, LogRow, NormalizedLog

logger = logging.getLogger(__name__)

# Maximum number of distinct days kept per log (and shown per service).
MAX_DAYS = 30

# Key used for rows whose timestamp cannot be parsed.
INVALID_DATE = "Invalid Date"

# Day categories, also used as CSS classes by the dashboard.
NODATA = "nodata"
SUCCESS = "success"
FAILURE = "failure"
PARTIAL = "partial"

# Days averaging below this are shown as a major outage.
FAILURE_THRESHOLD = 0.3

# Timestamp layouts accepted once "-" in the date has been rewritten to "/".
# An optional UTC offset ("+0100", "+01:00", "Z") may follow the time.
_TIMESTAMP_FORMATS = (
    "%Y/%m/%d %H:%M:%S %z",
    "%Y/%m/%d %H:%M:%S%z",
    "%Y/%m/%d %H:%M:%S.%f %z",
    "%Y/%m/%d %H:%M:%S.%f%z",
    "%Y/%m/%d %H:%M %z",
    "%Y/%m/%d %H:%M%z",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S.%f",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
)

_ONE_DAY = timedelta(days=1)

_CENT = Decimal("0.01")


class ParseError(Exception):
    """Raised when a log line cannot be split into timestamp and outcome."""

    pass


def parse_timestamp(text: str) -> datetime | None:
    """Parse a log timestamp as GMT.

    Dashes in the date are rewritten to slashes before parsing so
    ``2024-01-05`` and ``2024/01/05`` are equivalent. A trailing UTC offset
    such as ``+0100`` or ``Z`` is honored; without one the time is GMT.

    Returns:
        Timezone-aware UTC datetime, or None if the text is not a timestamp.
    """
    day, sep, rest = text.strip().partition(" ")
    normalized = day.replace("-", "/") + sep + rest
    for fmt in _TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(normalized, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    return None


def parse_outcome(line: str) -> LogRow:
    """Parse a single ``<timestamp>,<outcome>`` log line.

    Only the first two comma-separated fields are used; anything after a
    second comma is ignored. The outcome is a success only when it is exactly
    ``success`` after trimming whitespace.

    Args:
        line: A non-empty log line.

    Returns:
        The parsed row. ``date`` is None when the timestamp is malformed.

    Raises:
        ParseError: If the line has no comma.
    """
    parts = line.split(",")
    if len(parts) < 2:
        raise ParseError(f"Missing outcome in log line: {line!r}")

    timestamp, outcome = parts[0], parts[1]
    return LogRow(
        date=parse_timestamp(timestamp),
        outcome=1 if outcome.strip() == "success" else 0,
    )


def date_key(row: LogRow) -> date | str:
    """Return the bucket key for a row: its GMT calendar date."""
    if row.date is None:
        return INVALID_DATE
    return row.date.date()


def format_uptime(success_count: int, total_count: int) -> str:
    """Format a success ratio as a percentage string with two decimals."""
    if not total_count:
        return "--%"
    # Round exact halves up, on the exact value of the float ratio.
    percent = Decimal(success_count / total_count * 100).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{percent}%"


def bucket_by_date(lines: Iterable[str], max_days: int = MAX_DAYS) -> DateBuckets:
    """Group log lines into per-date outcome lists.

    Blank lines and lines without a comma are skipped. Once ``max_days``
    distinct dates have been seen, the first line belonging to a new date
    stops processing; that line is not counted in the aggregate uptime.

    Args:
        lines: Raw log lines, oldest first.
        max_days: Maximum number of distinct dates to keep.

    Returns:
        Buckets plus the aggregate uptime over every counted line.
    """
    buckets: dict[date | str, list[int]] = {}
    success_count = 0
    total_count = 0

    for line in lines:
        if not line.strip():
            continue

        try:
            row = parse_outcome(line)
        except ParseError as e:
            logger.debug("Skipping log line: %s", e)
            continue

        key = date_key(row)
        outcomes = buckets.get(key)
        if outcomes is None:
            if len(buckets) >= max_days:
                logger.debug("Reached %d distinct days, ignoring remaining lines", max_days)
                break
            outcomes = buckets[key] = []

        outcomes.append(row.outcome)
        success_count += row.outcome
        total_count += 1

    return DateBuckets(
        buckets=buckets,
        uptime=format_uptime(success_count, total_count),
        success_count=success_count,
        total_count=total_count,
    )


def day_average(outcomes: list[int] | None) -> float | None:
    """Return the mean of a day's outcomes, or None if there are none."""
    if not outcomes:
        return None
    return sum(outcomes) / len(outcomes)


def average_buckets(buckets: dict[date | str, list[int]]) -> dict[date | str, float | None]:
    """Map each date bucket to its average outcome."""
    return {key: day_average(outcomes) for key, outcomes in buckets.items()}


def relative_days(now: datetime, day: date) -> int:
    """Return whole days between ``now`` and midnight GMT of ``day``."""
    start = datetime.combine(day, time.min, tzinfo=UTC)
    return abs(now - start) // _ONE_DAY


def as_utc(now: datetime) -> datetime:
    """Return ``now`` in UTC, treating naive datetimes as UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def reindex_by_relative_day(
    averages: dict[date | str, float | None],
    now: datetime,
) -> dict[int, float | None]:
    """Re-key daily averages by how many days ago they were.

    Dates that map to the same index overwrite each other in insertion order.
    The invalid-date bucket has no position in time and is dropped.

    Args:
        averages: Average outcome per date key.
        now: Reference time. Naive datetimes are taken as UTC.

    Returns:
        Average outcome per relative day (0 = today).
    """
    now = as_utc(now)
    days: dict[int, float | None] = {}
    for key, avg in averages.items():
        if not isinstance(key, date):
            continue
        days[relative_days(now, key)] = avg
    return days


def classify(avg: float | None) -> str:
    """Return the day category for an average outcome."""
    if avg is None:
        return NODATA
    if avg == 1:
        return SUCCESS
    if avg < FAILURE_THRESHOLD:
        return FAILURE
    return PARTIAL


def normalize_log(text: str, now: datetime, max_days: int = MAX_DAYS) -> NormalizedLog:
    """Run the full aggregation pipeline on raw log text.

    Args:
        text: Raw log contents. An empty string means no data.
        now: Reference time for relative days.
        max_days: Maximum number of distinct dates to keep.

    Returns:
        Daily averages keyed by days ago, plus the aggregate uptime.
    """
    result = bucket_by_date(text.split("\n"), max_days=max_days)
    days = reindex_by_relative_day(average_buckets(result.buckets), now)
    return NormalizedLog(
        days=days,
        uptime=result.uptime,
        success_count=result.success_count,
        total_count=result.total_count,
    )
