"""Come and leave events from the power-management log of ``pmset``."""

from __future__ import annotations

import subprocess
from datetime import date, datetime

from deskkit.worklog import Event, EventType, add_event

_PREFIX_LENGTH = len("2024-10-22 13:29:19 +0200 ")
_TIME_LENGTH = len("2024-10-22 13:29:19")
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_SLEEP_MARKERS = (
    "Entering Sleep state due to 'Software Sleep",
    "Entering Sleep state due to 'Clamshell Sleep",
)
_WAKE_MARKERS = (
    "DarkWake to FullWake from Deep Idle [CDNVAP] : due to Notification Using AC (Charge:100%)",
    "Wake from Deep Idle [CDNVA]",
)


def _classify(line: str) -> EventType | None:
    rest = line[_PREFIX_LENGTH:]
    event_type = None
    if rest.startswith("Sleep") and any(m in line for m in _SLEEP_MARKERS):
        event_type = EventType.LEAVE
    if rest.startswith("Start"):
        event_type = EventType.COME
    if rest.startswith("Wake") and any(m in line for m in _WAKE_MARKERS):
        event_type = EventType.COME
    return event_type


def parse_pmset_log(text: str) -> dict[date, list[Event]]:
    """Group the start, wake and sleep lines of ``pmset -g log`` output by day."""
    logs: dict[date, list[Event]] = {}
    for line in text.splitlines():
        if len(line) <= _PREFIX_LENGTH:
            continue
        try:
            stamp = datetime.strptime(line[:_TIME_LENGTH], _TIME_FORMAT)
        except ValueError:
            continue
        event_type = _classify(line)
        if event_type is not None:
            add_event(logs, stamp.date(), Event(event_type, stamp.time()))
    return logs


def get_logs() -> dict[date, list[Event]]:
    """Read the system's power log; empty if it cannot be read."""
    try:
        result = subprocess.run(["pmset", "-g", "log"], capture_output=True, check=False)
    except OSError:
        return {}
    if result.returncode != 0:
        return {}
    try:
        text = result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return {}
    return parse_pmset_log(text)