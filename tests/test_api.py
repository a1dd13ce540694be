"""Tests for the FastAPI routes."""

import pytest
from fastapi.testclient import TestClient

from replaytap.api import create_app

from .conftest import START_MS, console_record, make_snapshot, network_record


@pytest.fixture
def saved(store) -> str:
    snapshot = make_snapshot(
        console=[console_record(0, "log", "boot"), console_record(500, "error", "boom")],
        network=[network_record(100, "https://example.com/app.js", "Script")],
    )
    return store.save_recording(
        console_logs=snapshot["consoleLogs"],
        network_requests=snapshot["networkRequests"],
        metadata=snapshot["metadata"],
        video=b"\x1aE\xdf\xa3 fake webm",
    )


@pytest.fixture
def client(config, store) -> TestClient:
    return TestClient(create_app(config, store))


def test_get_recording(client, saved) -> None:
    response = client.get(f"/api/recordings/{saved}")
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert len(body["consoleLogs"]) == 2
    assert body["metadata"]["id"] == saved


def test_unknown_recording_is_404(client) -> None:
    response = client.get("/api/recordings/deadbeef")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Recording not found"}


def test_video(client, saved) -> None:
    response = client.get(f"/api/recordings/{saved}/video")
    assert response.status_code == 200
    assert response.headers["content-type"] == "video/webm"
    assert response.content.endswith(b"fake webm")


def test_missing_video_is_404(client, store) -> None:
    recording_id = store.save_recording(metadata={})
    assert client.get(f"/api/recordings/{recording_id}/video").status_code == 404


def test_view_page(client, saved) -> None:
    response = client.get(f"/view/{saved}", params={"t": 600, "console": "error"})
    assert response.status_code == 200
    html = response.text
    assert 'class="console-entry filter-hidden" data-index="0"' in html
    assert 'class="console-entry active-entry" data-index="1"' in html
    assert "1/1 requests" in html


def test_view_with_open_network_detail(client, saved) -> None:
    response = client.get(f"/view/{saved}", params={"t": 200, "detail": 0})
    assert 'class="network-entry active-entry detail-open"' in response.text


def test_view_ignores_detail_of_unrevealed_request(client, saved) -> None:
    response = client.get(f"/view/{saved}", params={"t": 0, "detail": 0})
    assert response.status_code == 200
    assert "detail-open" not in response.text
    assert "network-detail" not in response.text


def test_view_survives_malformed_url(client, store) -> None:
    recording_id = store.save_recording(
        network_requests=[network_record(100, "http://[::1/app.js")], metadata={"startTime": START_MS}
    )
    response = client.get(f"/view/{recording_id}", params={"t": 500})
    assert response.status_code == 200
    assert "http://[::1/app.js" in response.text


def test_view_unknown_recording_shows_error_view(client) -> None:
    response = client.get("/view/0123abcd")
    assert response.status_code == 404
    assert 'id="error-view"' in response.text
    assert "Recording not found" in response.text
