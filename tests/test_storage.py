"""Tests for the on-disk recording store."""

import json
import re

from replaytap.storage import CONSOLE_FILE, METADATA_FILE, WEBSOCKET_FILE, DiskStore

from .conftest import START_MS, console_record


def test_save_and_load(store: DiskStore) -> None:
    recording_id = store.save_recording(
        console_logs=[console_record(0, "log", "hi")],
        network_requests={"log": {"entries": []}},
        websocket_logs=[{"url": "wss://x.io", "frames": []}],
        metadata={"startTime": START_MS, "url": "https://example.com/", "duration": 1000},
        video=b"webm-bytes",
    )

    assert re.fullmatch(r"[a-f0-9]{8}", recording_id)
    snapshot = store.get_recording(recording_id)
    assert snapshot is not None
    assert snapshot["consoleLogs"][0]["args"] == ["hi"]
    assert snapshot["networkRequests"] == {"log": {"entries": []}}
    assert snapshot["webSocketLogs"][0]["url"] == "wss://x.io"
    assert snapshot["metadata"]["id"] == recording_id
    assert "createdAt" in snapshot["metadata"]
    assert snapshot["metadata"]["url"] == "https://example.com/"
    assert store.get_video_path(recording_id).read_bytes() == b"webm-bytes"


def test_defaults_for_missing_collections(store: DiskStore) -> None:
    recording_id = store.save_recording(metadata={"url": "https://a.io"})
    directory = store.data_dir / recording_id

    assert json.loads((directory / CONSOLE_FILE).read_text()) == []
    assert not (directory / WEBSOCKET_FILE).exists()
    assert store.get_recording(recording_id)["webSocketLogs"] == []
    assert store.get_video_path(recording_id) is None


def test_invalid_ids_never_resolve(store: DiskStore) -> None:
    for recording_id in ("../etc", "XYZ", "", "abc/def", "deadbeef", "abc\n"):
        assert not store.exists(recording_id)
        assert store.get_recording(recording_id) is None
        assert store.get_video_path(recording_id) is None


def test_corrupt_file_returns_none(store: DiskStore, caplog) -> None:
    recording_id = store.save_recording(metadata={})
    (store.data_dir / recording_id / METADATA_FILE).write_text("{not json")

    assert store.get_recording(recording_id) is None
    assert "Failed to read recording" in caplog.text


def test_ids_are_unique(store: DiskStore) -> None:
    ids = {store.save_recording() for _ in range(5)}
    assert len(ids) == 5
