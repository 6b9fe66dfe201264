"""Working-time bookkeeping from come/leave events.

This covers week navigation, break detection and duration formatting.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

BREAK_AFTER = time(11, 55)
BREAK_MIN_LENGTH = timedelta(minutes=25)

_ANCHOR = date(2000, 1, 1)


class EventType(enum.Enum):
    """Whether the machine became active or went away."""

    COME = "come"
    LEAVE = "leave"


@dataclass(frozen=True)
class Event:
    """One come or leave event at a time of day."""

    event_type: EventType
    time: time


@dataclass(frozen=True)
class DaySummary:
    """First and last activity of a day, the work time and the lunch break."""

    first: time
    last: time
    work: timedelta
    break_start: time | None = None
    break_end: time | None = None
    break_delta: timedelta | None = None


def _as_delta(moment: time) -> timedelta:
    return timedelta(
        hours=moment.hour,
        minutes=moment.minute,
        seconds=moment.second,
        microseconds=moment.microsecond,
    )


def _between(later: time, earlier: time) -> timedelta:
    return _as_delta(later) - _as_delta(earlier)


def _add_wrapping(moment: time, delta: timedelta) -> time:
    return (datetime.combine(_ANCHOR, moment) + delta).time()


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def format_delta(delta: timedelta) -> str:
    """Format a duration as ``"Xh Ym"``, ``"Xh"`` or ``"Ym"``."""
    seconds = _trunc_div(delta // timedelta(microseconds=1), 1_000_000)
    hours = _trunc_div(seconds, 3600)
    total_minutes = _trunc_div(seconds, 60)
    minutes = total_minutes - _trunc_div(total_minutes, 60) * 60
    if hours > 0:
        if minutes > 0:
            return f"{hours}h {minutes}m"
        return f"{hours}h"
    return f"{minutes}m"


def get_next_event(events: list[Event], time: time) -> time | None:
    """The time of the first event strictly after ``time``."""
    return next((event.time for event in events if event.time > time), None)


def _monday(year: int, week: int) -> date:
    return date.fromisocalendar(year, week, 1)


def _iso_week(day: date) -> tuple[int, int]:
    calendar = day.isocalendar()
    return calendar[0], calendar[1]


def previous_week(year: int, week: int) -> tuple[int, int]:
    """The ISO (year, week) before the given one."""
    return _iso_week(_monday(year, week) - timedelta(weeks=1))


def next_week(year: int, week: int) -> tuple[int, int]:
    """The ISO (year, week) after the given one."""
    return _iso_week(_monday(year, week) + timedelta(weeks=1))


def week_dates(year: int, week: int) -> list[date]:
    """The dates Monday to Sunday of an ISO week."""
    monday = _monday(year, week)
    return [monday + timedelta(days=offset) for offset in range(7)]


def summarize_day(events: list[Event], last: time | None = None) -> DaySummary | None:
    """Summarize a day's events; ``last`` replaces the last event's time.

    The break starts at the first event after 11:55 and ends at the first
    event at least 25 minutes later. Returns None for a day without events.
    """
    if not events:
        return None
    first = events[0].time
    end = last if last is not None else events[-1].time
    break_start = get_next_event(events, BREAK_AFTER)
    break_end = (
        get_next_event(events, _add_wrapping(break_start, BREAK_MIN_LENGTH))
        if break_start is not None
        else None
    )
    work = _between(end, first)
    if break_start is not None and break_end is not None:
        break_delta = _between(break_end, break_start)
        return DaySummary(
            first=first,
            last=end,
            work=work - break_delta,
            break_start=break_start,
            break_end=break_end,
            break_delta=break_delta,
        )
    return DaySummary(first=first, last=end, work=work)


def add_event(logs: dict[date, list[Event]], day: date, event: Event) -> None:
    """Append ``event`` to the list of ``day`` in ``logs``."""
    logs.setdefault(day, []).append(event)