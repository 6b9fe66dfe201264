"""Come and leave events from the Windows System event log."""

from __future__ import annotations

import re
import subprocess
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from deskkit.worklog import Event, EventType, add_event

EVENT_TYPES: dict[int, EventType] = {
    12: EventType.COME,  # operating system started
    13: EventType.LEAVE,  # operating system shutting down
    41: EventType.LEAVE,  # rebooted without a clean shutdown
    1074: EventType.LEAVE,  # restart or shutdown initiated
    6005: EventType.COME,
    6006: EventType.LEAVE,
    6008: EventType.LEAVE,
    506: EventType.COME,  # entering Modern Standby
    507: EventType.LEAVE,  # exiting Modern Standby
    42: EventType.COME,  # entering sleep
    107: EventType.LEAVE,  # resumed from sleep
    105: EventType.COME,  # power source changed
}

_SKIPPED_PROVIDER = "Microsoft-Windows-Wininit"
_LOCAL_OFFSET = timedelta(hours=2)
_TIMESTAMP = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})?$"
)


@dataclass(frozen=True)
class SystemEvent:
    """The System part of one event record."""

    event_id: int
    time_created: datetime
    provider_name: str


def event_type_for(event_id: int) -> EventType | None:
    """Whether an event id means coming or leaving; None if it is not tracked."""
    return EVENT_TYPES.get(event_id)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element:
    for child in element:
        if _local(child.tag) == name:
            return child
    raise ValueError(f"event has no {name} element")


def _parse_time(text: str) -> datetime:
    match = _TIMESTAMP.match(text.strip())
    if match is None:
        raise ValueError(f"invalid SystemTime {text!r}")
    base, fraction, zone = match.groups()
    stamp = datetime.strptime(base, "%Y-%m-%dT%H:%M:%S")
    if fraction:
        stamp = stamp.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    if zone and zone != "Z":
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = zone[1:].split(":")
        offset = timedelta(hours=int(hours), minutes=int(minutes)) * sign
        return stamp.replace(tzinfo=timezone(offset)).astimezone(timezone.utc)
    return stamp.replace(tzinfo=timezone.utc)


def _from_element(element: ET.Element) -> SystemEvent:
    system = _child(element, "System")
    provider = _child(system, "Provider").get("Name", "")
    id_text = (_child(system, "EventID").text or "").strip()
    try:
        event_id = int(id_text)
    except ValueError:
        raise ValueError(f"invalid EventID {id_text!r}") from None
    created = _child(system, "TimeCreated").get("SystemTime")
    if created is None:
        raise ValueError("TimeCreated has no SystemTime")
    return SystemEvent(event_id, _parse_time(created), provider)


def parse_event_xml(xml: str) -> SystemEvent:
    """Parse one ``<Event>`` record as rendered by the event log."""
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as exc:
        raise ValueError(f"malformed event XML: {exc}") from exc
    return _from_element(root)


def collect_events(records: Iterable[SystemEvent]) -> dict[date, list[Event]]:
    """Group tracked events by their UTC date, with times shifted to local time."""
    logs: dict[date, list[Event]] = {}
    for record in records:
        if record.provider_name == _SKIPPED_PROVIDER:
            continue
        event_type = event_type_for(record.event_id)
        if event_type is None:
            continue
        naive = record.time_created.astimezone(timezone.utc).replace(tzinfo=None)
        local_time = (naive + _LOCAL_OFFSET).time()
        add_event(logs, naive.date(), Event(event_type, local_time))
    return logs


def _query() -> str:
    ids = " or ".join(f"EventID={event_id}" for event_id in EVENT_TYPES)
    return f"*[System[({ids})]]"


def get_logs() -> dict[date, list[Event]]:
    """Query the System log; on failure report the error and return nothing."""
    command = ["wevtutil", "qe", "System", f"/q:{_query()}", "/f:xml"]
    try:
        result = subprocess.run(command, capture_output=True, check=False)
    except OSError as exc:
        print(f"Error: {exc}")
        return {}
    if result.returncode != 0:
        message = result.stderr.decode("utf-8", errors="replace").strip()
        print(f"Error: {message}")
        return {}
    text = result.stdout.decode("utf-8", errors="replace")
    try:
        root = ET.fromstring(f"<Events>{text}</Events>")
    except ET.ParseError as exc:
        print(f"Error: {exc}")
        return {}
    records = []
    for element in root:
        try:
            records.append(_from_element(element))
        except ValueError:
            continue
    return collect_events(records)