"""Data models for uptime logs and rendered reports."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class LogRow:
    """A single parsed log line.

    Attributes:
        date: Timestamp of the check in UTC, or None if it could not be parsed.
        outcome: 1 for a successful check, 0 for anything else.
    """

    date: datetime | None
    outcome: int


@dataclass(frozen=True)
class DateBuckets:
    """Outcomes grouped by GMT calendar date.

    Attributes:
        buckets: Outcomes per date in log order. Unparseable timestamps are
            grouped under the "Invalid Date" key.
        uptime: Aggregate uptime over every counted row (e.g. "99.50%" or "--%").
        success_count: Number of successful rows counted.
        total_count: Number of rows counted.
    """

    buckets: dict[date | str, list[int]]
    uptime: str
    success_count: int = 0
    total_count: int = 0


@dataclass(frozen=True)
class NormalizedLog:
    """Daily averages keyed by days ago, plus the aggregate uptime.

    Attributes:
        days: Average outcome per relative day (0 = today). None means no data.
        uptime: Aggregate uptime string carried through from bucketing.
        success_count: Number of successful rows counted.
        total_count: Number of rows counted.
    """

    days: dict[int, float | None]
    uptime: str
    success_count: int = 0
    total_count: int = 0


@dataclass(frozen=True)
class ServiceEntry:
    """A monitored service from the service list."""

    key: str
    url: str


@dataclass(frozen=True)
class ServiceReport:
    """Aggregated history for one service, ready to render.

    Attributes:
        service: The service this report belongs to.
        log: Normalized daily history.
        status: Category of the most recent day (relative day 0).
    """

    service: ServiceEntry
    log: NormalizedLog
    status: str


@dataclass(frozen=True)
class IncidentFeed:
    """Incident report texts shown in the incident panel."""

    active: str | None
    inactive: str
