import subprocess
from datetime import date, datetime, time, timezone
from unittest import mock

import pytest

from deskkit.winevents import (
    SystemEvent,
    collect_events,
    event_type_for,
    get_logs,
    parse_event_xml,
)
from deskkit.worklog import EventType


def _xml(event_id, stamp, provider="Microsoft-Windows-Kernel-General"):
    return (
        '<Event xmlns="urn:example:events"><System>'
        f'<Provider Name="{provider}"/>'
        f"<EventID>{event_id}</EventID>"
        f'<TimeCreated SystemTime="{stamp}"/>'
        "</System></Event>"
    )


def test_event_type_mapping():
    assert event_type_for(12) is EventType.COME
    assert event_type_for(13) is EventType.LEAVE
    assert event_type_for(507) is EventType.LEAVE
    assert event_type_for(9999) is None


def test_parse_event_xml():
    event = parse_event_xml(_xml(12, "2024-10-22T11:29:19.1234567Z"))
    assert event == SystemEvent(
        12,
        datetime(2024, 10, 22, 11, 29, 19, 123456, tzinfo=timezone.utc),
        "Microsoft-Windows-Kernel-General",
    )


def test_parse_event_xml_without_namespace_or_fraction():
    event = parse_event_xml(
        "<Event><System><Provider Name='p'/><EventID>13</EventID>"
        "<TimeCreated SystemTime='2024-10-22T11:29:19Z'/></System></Event>"
    )
    assert event.event_id == 13
    assert event.time_created == datetime(2024, 10, 22, 11, 29, 19, tzinfo=timezone.utc)


def test_parse_event_xml_missing_event_id():
    with pytest.raises(ValueError):
        parse_event_xml(
            "<Event><System><Provider Name='p'/>"
            "<TimeCreated SystemTime='2024-10-22T11:29:19Z'/></System></Event>"
        )


def test_parse_event_xml_malformed():
    with pytest.raises(ValueError):
        parse_event_xml("<Event><System>")


def test_collect_events_shifts_time_and_keeps_utc_date():
    stamp = datetime(2024, 10, 22, 11, 29, 19, tzinfo=timezone.utc)
    late = datetime(2024, 10, 22, 23, 30, tzinfo=timezone.utc)
    logs = collect_events([SystemEvent(12, stamp, "p"), SystemEvent(13, late, "p")])
    day = logs[date(2024, 10, 22)]
    assert [e.event_type for e in day] == [EventType.COME, EventType.LEAVE]
    assert day[0].time == time(13, 29, 19)
    assert day[1].time == time(1, 30)


def test_collect_events_skips_wininit_and_unknown_ids():
    stamp = datetime(2024, 10, 22, 8, tzinfo=timezone.utc)
    records = [
        SystemEvent(12, stamp, "Microsoft-Windows-Wininit"),
        SystemEvent(9999, stamp, "p"),
    ]
    assert collect_events(records) == {}


def test_get_logs_parses_wevtutil_output():
    output = _xml(12, "2024-10-22T06:00:00Z") + _xml(13, "2024-10-22T15:00:00Z")
    completed = subprocess.CompletedProcess(
        ["wevtutil"], 0, stdout=output.encode(), stderr=b""
    )
    with mock.patch("deskkit.winevents.subprocess.run", return_value=completed) as run:
        logs = get_logs()
    assert run.call_args.args[0][:3] == ["wevtutil", "qe", "System"]
    assert [e.event_type for e in logs[date(2024, 10, 22)]] == [
        EventType.COME,
        EventType.LEAVE,
    ]


def test_get_logs_reports_missing_command(capsys):
    with mock.patch("deskkit.winevents.subprocess.run", side_effect=FileNotFoundError("x")):
        assert get_logs() == {}
    assert capsys.readouterr().out.startswith("Error:")