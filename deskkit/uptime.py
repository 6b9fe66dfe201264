"""Weekly overview of when the machine was in use."""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime, timedelta, timezone

from deskkit import pmset, winevents
from deskkit.worklog import (
    Event,
    EventType,
    format_delta,
    summarize_day,
    week_dates,
)

_LOCAL_OFFSET = timedelta(hours=2)


def get_logs() -> dict[date, list[Event]]:
    """Read come and leave events from the log of the running system."""
    if sys.platform == "win32":
        return winevents.get_logs()
    return pmset.get_logs()


def _hm(moment) -> str:
    return moment.strftime("%H:%M")


def render_week(
    logs: dict[date, list[Event]],
    year: int,
    week: int,
    now: datetime | None = None,
) -> str:
    """Render the events and work times of one ISO week as text.

    On today's date the day ends at ``now`` instead of at its last event.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    today = now.astimezone(timezone.utc).date() if now.tzinfo else now.date()
    lines = [f"{week} KW {year}"]
    for day in week_dates(year, week):
        lines.append(f"{day.strftime('%a')} {day.strftime('%d.%m')}")
        events = logs.get(day, [])
        for event in events:
            text = "come" if event.event_type is EventType.COME else "leave"
            lines.append(f"  {text} {_hm(event.time)}")
        last = (now + _LOCAL_OFFSET).time() if day == today else None
        summary = summarize_day(events, last)
        if summary is None:
            continue
        lines.append(
            f"  {_hm(summary.first)} - {_hm(summary.last)} {format_delta(summary.work)}"
        )
        if summary.break_delta is not None:
            lines.append(
                f"  {_hm(summary.break_start)} - {_hm(summary.break_end)} "
                f"{format_delta(summary.break_delta)}"
            )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Print the overview of an ISO week, the current one by default."""
    now = datetime.now(timezone.utc)
    calendar = now.isocalendar()
    parser = argparse.ArgumentParser(prog="deskkit-uptime")
    parser.add_argument("--year", type=int, default=calendar[0])
    parser.add_argument("--week", type=int, default=calendar[1])
    args = parser.parse_args(argv)
    try:
        week_dates(args.year, args.week)
    except ValueError as exc:
        parser.error(str(exc))
    print(render_week(get_logs(), args.year, args.week, now))
    return 0