"""Tests for stream normalization."""

from replaytap.models import ConsoleFormat, RecordingSession
from replaytap.stream import normalize_console, normalize_network, normalize_websockets

from .conftest import START_MS, console_record, network_record


def test_console_sorted_with_stable_ties() -> None:
    records = [
        console_record(300, "log", "c"),
        console_record(100, "log", "a"),
        console_record(300, "log", "d"),
        console_record(100, "log", "b"),
    ]
    entries = normalize_console(records, START_MS)

    assert [e.relative_ms for e in entries] == [100, 100, 300, 300]
    assert [e.get("args")[0] for e in entries] == ["a", "b", "c", "d"]
    assert [e.order for e in entries] == [1, 3, 0, 2]


def test_console_variant_resolved_from_source_field() -> None:
    entries = normalize_console(
        [console_record(0, "log", "plain"), {"timestamp": START_MS, "source": "console", "args": []}],
        START_MS,
    )
    assert [e.variant for e in entries] == [ConsoleFormat.LEGACY, ConsoleFormat.CAPTURE]


def test_console_negative_and_missing_timestamps() -> None:
    entries = normalize_console([{"timestamp": START_MS - 250, "args": []}, {"args": ["no time"]}], START_MS)
    assert [e.relative_ms for e in entries] == [-250, 0]


def test_network_prefers_wall_time_over_monotonic_timestamp() -> None:
    record = network_record(1500)
    record["timestamp"] = 12345.678
    entries = normalize_network([record], START_MS)
    assert entries[0].relative_ms == 1500


def test_network_uses_timestamp_seconds_when_no_wall_time() -> None:
    entries = normalize_network([{"timestamp": (START_MS + 2500) / 1000}], START_MS)
    assert entries[0].relative_ms == 2500


def test_network_without_time_sits_at_zero() -> None:
    entries = normalize_network([{"request": {"url": "https://example.com/"}}], START_MS)
    assert len(entries) == 1
    assert entries[0].relative_ms == 0


def test_network_accepts_har_and_flat_shapes() -> None:
    records = [network_record(200), network_record(100)]
    har = normalize_network({"log": {"entries": records}}, START_MS)
    flat = normalize_network(records, START_MS)
    assert [e.relative_ms for e in har] == [e.relative_ms for e in flat] == [100, 200]


def test_malformed_collections_yield_empty_streams() -> None:
    assert normalize_console("not a list", START_MS) == []
    assert normalize_console({"oops": 1}, START_MS) == []
    assert normalize_network(42, START_MS) == []
    assert normalize_network({"log": "broken"}, START_MS) == []
    assert normalize_websockets(None, START_MS) == []


def test_malformed_items_are_skipped_not_fatal() -> None:
    entries = normalize_console([console_record(10), "garbage", None, console_record(5)], START_MS)
    assert [e.relative_ms for e in entries] == [5, 10]


def test_nan_timestamp_does_not_crash() -> None:
    entries = normalize_console([{"timestamp": float("nan"), "args": []}], START_MS)
    assert entries[0].relative_ms == 0


def test_websocket_frames_keep_order_and_direction() -> None:
    logs = [
        {
            "url": "wss://example.com/ws",
            "closed": True,
            "frames": [
                {"direction": "sent", "payloadData": "hello"},
                {"direction": "received", "payloadData": "world", "timestamp": (START_MS + 40) / 1000},
            ],
        }
    ]
    (conn,) = normalize_websockets(logs, START_MS)
    assert conn.closed is True
    assert [f.payload for f in conn.frames] == ["hello", "world"]
    assert [f.sent for f in conn.frames] == [True, False]
    assert [f.relative_ms for f in conn.frames] == [None, 40]


def test_one_bad_metadata_field_keeps_the_rest() -> None:
    session = RecordingSession.from_snapshot(
        {"metadata": {"startTime": START_MS, "duration": "unknown", "url": 42}, "consoleLogs": [console_record(300)]}
    )
    assert session.start_time_ms == START_MS
    assert session.metadata.duration is None
    assert session.metadata.url is None
    assert [e.relative_ms for e in normalize_console(session.console_logs, session.start_time_ms)] == [300]
