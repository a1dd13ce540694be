from __future__ import annotations

import pytest

from replaytap.config import ViewerConfig
from replaytap.models import RecordingSession
from replaytap.storage import DiskStore

START_MS = 1_700_000_000_000


def console_record(offset_ms: float, level: str = "log", *args, **extra) -> dict:
    return {"timestamp": START_MS + offset_ms, "level": level, "args": list(args), **extra}


def network_record(offset_ms: float, url: str = "https://example.com/api", resource_type: str = "Fetch", **extra) -> dict:
    record = {
        "wallTime": (START_MS + offset_ms) / 1000,
        "resourceType": resource_type,
        "request": {"method": "GET", "url": url, "headers": {"accept": "*/*"}},
        "response": {"status": 200, "headers": {}, "content": {"size": 512, "mimeType": "application/json"}},
    }
    record.update(extra)
    return record


def make_snapshot(console=None, network=None, websockets=None, duration=60_000) -> dict:
    return {
        "metadata": {"startTime": START_MS, "url": "https://example.com/", "duration": duration},
        "consoleLogs": console or [],
        "networkRequests": {"log": {"entries": network or []}},
        "webSocketLogs": websockets or [],
    }


@pytest.fixture
def config(tmp_path) -> ViewerConfig:
    return ViewerConfig(data_dir=tmp_path / "data")


@pytest.fixture
def store(config) -> DiskStore:
    return DiskStore(config.data_dir)


@pytest.fixture
def scenario_session() -> RecordingSession:
    """Console at [0, 500, 2000] with levels [log, error, log] plus two requests."""
    return RecordingSession.from_snapshot(
        make_snapshot(
            console=[
                console_record(0, "log", "boot"),
                console_record(500, "error", "boom"),
                console_record(2000, "log", "later"),
            ],
            network=[
                network_record(100, "https://example.com/app.js", "Script"),
                network_record(3000, "https://example.com/api/items", "XHR"),
            ],
            websockets=[
                {
                    "url": "wss://example.com/socket",
                    "closed": False,
                    "frames": [{"direction": "sent", "payloadData": "ping"}],
                }
            ],
        )
    )
