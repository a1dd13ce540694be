"""Tests for viewer assembly and page rendering."""

from replaytap.models import RecordingSession
from replaytap.viewer import ERROR_COLOR, REQUEST_COLOR, Viewer, render_page

from .conftest import console_record, make_snapshot


def test_clock_drives_both_panels(scenario_session) -> None:
    viewer = Viewer.from_session(scenario_session)
    viewer.seek(600)

    assert viewer.console.view.projection.time_hidden == (False, False, True)
    assert viewer.console.view.active_index == 1
    assert viewer.network.view.projection.time_hidden == (False, True)
    assert viewer.network.summary == "1/2 requests | 1 WS"


def test_playback_ticks_reach_panels(scenario_session) -> None:
    viewer = Viewer.from_session(scenario_session)
    viewer.clock.advance_to(2100)
    assert viewer.console.view.projection.time_hidden == (False, False, False)
    assert viewer.console.state.reveal.clock_ms == 2100


def test_markers(scenario_session) -> None:
    viewer = Viewer.from_session(scenario_session)
    errors = [m for m in viewer.markers if m.color == ERROR_COLOR]
    requests = [m for m in viewer.markers if m.color == REQUEST_COLOR]
    assert [m.time_ms for m in errors] == [500]
    assert len(requests) == 2
    assert requests[0].label == "GET https://example.com/app.js"


def test_exception_marker_uses_message() -> None:
    session = RecordingSession.from_snapshot(
        make_snapshot(console=[{**console_record(10), "source": "exception", "message": "Uncaught boom"}])
    )
    viewer = Viewer.from_session(session)
    assert viewer.markers[0].label == "Error: Uncaught boom"


def test_page_marks_visibility_classes(scenario_session) -> None:
    viewer = Viewer.from_session(scenario_session, recording_id="abc123")
    viewer.console.select_facet("error")
    viewer.seek(600)
    html = render_page(viewer)

    assert "<title>replaytap - https://example.com/</title>" in html
    assert 'src="/api/recordings/abc123/video"' in html
    assert "1m 0s" in html
    assert 'class="console-entry filter-hidden" data-index="0"' in html
    assert 'class="console-entry active-entry" data-index="1"' in html
    assert 'class="console-entry time-hidden" data-index="2"' in html
    assert 'data-scroll-target="true"' in html
    assert "1/2 requests | 1 WS" in html
    assert "WebSocket Connections (1)" in html
    assert 'class="filter-btn active" data-level="error"' in html


def test_page_includes_open_detail(scenario_session) -> None:
    viewer = Viewer.from_session(scenario_session, recording_id="abc123")
    viewer.seek(5000)
    viewer.network.toggle_detail(1)
    viewer.seek(0)
    html = render_page(viewer)
    assert 'class="network-entry detail-open"' in html
    assert "network-detail" in html


def test_escapes_console_payload() -> None:
    session = RecordingSession.from_snapshot(make_snapshot(console=[console_record(0, "log", "<script>x()</script>")]))
    viewer = Viewer.from_session(session)
    viewer.seek(10)
    html = render_page(viewer)
    assert "<script>" not in html
    assert "&lt;script&gt;x()&lt;/script&gt;" in html


def test_empty_recording_renders() -> None:
    viewer = Viewer.from_session(RecordingSession.from_snapshot({}))
    viewer.seek(1000)
    html = render_page(viewer)
    assert "0/0 requests" in html
    assert viewer.markers == []
