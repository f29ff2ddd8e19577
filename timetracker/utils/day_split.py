"""Calendar-day helpers for stopping timers."""
from datetime import datetime, time, timedelta
from typing import NamedTuple


class Segment(NamedTuple):
    """A stopped interval that belongs to a single calendar day."""

    started_at: datetime
    stopped_at: datetime
    duration_in_seconds: int


def local_now() -> datetime:
    """
    Current local wall-clock time, truncated to milliseconds.

    MongoDB stores datetimes with millisecond precision, so values produced
    here round-trip through the database unchanged.
    """
    now = datetime.now()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def duration_in_seconds(started_at: datetime, stopped_at: datetime) -> int:
    """
    Whole seconds between two instants, dropping any sub-second remainder.

    Examples:
        >>> duration_in_seconds(datetime(2024, 1, 1, 10, 0), datetime(2024, 1, 1, 10, 5, 0, 900000))
        300
    """
    return (stopped_at - started_at) // timedelta(seconds=1)


def next_midnight(moment: datetime) -> datetime:
    """
    Start of the calendar day after ``moment``.

    Examples:
        >>> next_midnight(datetime(2024, 1, 1, 23, 55))
        datetime.datetime(2024, 1, 2, 0, 0)
    """
    return datetime.combine(moment.date() + timedelta(days=1), time.min, tzinfo=moment.tzinfo)


def split_at_midnight(started_at: datetime, stopped_at: datetime) -> list[Segment]:
    """
    Split an interval at the first midnight it crosses.

    Args:
        started_at: When the timer was started
        stopped_at: When the timer is being stopped

    Returns:
        One segment when both instants fall on the same calendar day,
        otherwise two: start -> next midnight, and next midnight -> stop.
        Only the first boundary is used; a span over several days still
        yields two segments.

    Examples:
        >>> [s.duration_in_seconds for s in split_at_midnight(
        ...     datetime(2024, 1, 1, 23, 55), datetime(2024, 1, 2, 0, 10))]
        [300, 600]
    """
    if started_at.date() == stopped_at.date():
        return [Segment(started_at, stopped_at, duration_in_seconds(started_at, stopped_at))]

    boundary = next_midnight(started_at)
    return [
        Segment(started_at, boundary, duration_in_seconds(started_at, boundary)),
        Segment(boundary, stopped_at, duration_in_seconds(boundary, stopped_at)),
    ]
