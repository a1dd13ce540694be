"""Viewer assembly: panels, clock and coordinator for one recording.

PUBLIC API:
  - TimelineMarker: Marker on the video progress bar
  - Viewer: Loaded recording wired to a clock
  - build_markers: Markers for console errors and network requests
  - render_page: Full HTML page of a viewer at its current clock
"""

import logging
from dataclasses import dataclass, field

from replaytap.config import ViewerConfig
from replaytap.facets import CONSOLE_FACETS, NETWORK_FACETS
from replaytap.models import RecordingSession
from replaytap.panels import ConsolePanel, NetworkPanel, StreamPanel
from replaytap.render.helpers import escape_html, format_clock, format_duration
from replaytap.stream import normalize_console, normalize_network, normalize_websockets
from replaytap.sync import PlaybackClock, SyncCoordinator

logger = logging.getLogger(__name__)

ERROR_COLOR = "#f85149"
REQUEST_COLOR = "#58a6ff"
MARKER_LABEL_LIMIT = 80


@dataclass(frozen=True)
class TimelineMarker:
    time_ms: int
    color: str
    label: str


def build_markers(console: ConsolePanel, network: NetworkPanel) -> list[TimelineMarker]:
    """Red markers for console errors and exceptions, blue for every request."""
    markers = []
    for entry in console.entries:
        if entry.level != "error":
            continue
        args = entry.get("args")
        first = args[0] if isinstance(args, list) and args and isinstance(args[0], dict) else {}
        text = entry.get("message") or first.get("description") or ""
        markers.append(TimelineMarker(entry.relative_ms, ERROR_COLOR, f"Error: {str(text)[:MARKER_LABEL_LIMIT]}"))

    for entry in network.entries:
        label = f"{entry.method} {entry.url}"[:MARKER_LABEL_LIMIT]
        markers.append(TimelineMarker(entry.relative_ms, REQUEST_COLOR, label))

    return markers


@dataclass
class Viewer:
    """One recording loaded into panels and wired to a playback clock.

    Attributes:
        session: Source recording.
        console: Console panel.
        network: Network panel.
        clock: Playback clock.
        coordinator: Clock -> panels fan-out.
        recording_id: Store id, used for the video URL.
    """

    session: RecordingSession
    console: ConsolePanel
    network: NetworkPanel
    clock: PlaybackClock
    coordinator: SyncCoordinator
    recording_id: str = ""
    markers: list[TimelineMarker] = field(default_factory=list)

    @classmethod
    def from_session(
        cls, session: RecordingSession, config: ViewerConfig | None = None, recording_id: str = ""
    ) -> "Viewer":
        """Normalize all streams, render them once and subscribe both panels to a clock."""
        config = config or ViewerConfig()
        start = session.start_time_ms

        console = ConsolePanel(normalize_console(session.console_logs, start), config)
        network = NetworkPanel(
            normalize_network(session.network_requests, start),
            normalize_websockets(session.websocket_logs, start),
            config,
        )

        clock = PlaybackClock(duration_ms=session.metadata.duration or 0, tick_interval_ms=config.tick_interval_ms)
        coordinator = SyncCoordinator(clock)
        coordinator.attach(console.name, console.on_clock)
        coordinator.attach(network.name, network.on_clock)

        logger.info(
            f"Loaded recording {recording_id or '(unsaved)'}: "
            f"{len(console.entries)} console, {len(network.entries)} network, {len(network.websockets)} ws"
        )
        return cls(
            session=session,
            console=console,
            network=network,
            clock=clock,
            coordinator=coordinator,
            recording_id=recording_id,
            markers=build_markers(console, network),
        )

    def seek(self, ms: float) -> None:
        self.clock.seek_to(ms)


def _render_filters(panel: StreamPanel, facets: tuple[str, ...], attr: str) -> str:
    buttons = []
    for facet in facets:
        css = "filter-btn active" if panel.state.facet.active == facet else "filter-btn"
        buttons.append(f'<button class="{css}" data-{attr}="{escape_html(facet)}">{escape_html(facet)}</button>')
    return "".join(buttons)


def _render_panel(panel: StreamPanel) -> str:
    view = panel.view
    rows = []
    for element in panel.elements:
        classes = list(element.classes)
        if view.projection.time_hidden[element.index]:
            classes.append("time-hidden")
        if view.projection.filter_hidden[element.index]:
            classes.append("filter-hidden")
        if view.active_index == element.index:
            classes.append("active-entry")

        detail = ""
        if view.open_detail == element.index:
            classes.append("detail-open")
            detail = panel.render_detail(element.index)

        scroll = ' data-scroll-target="true"' if view.scroll_to == element.index else ""
        rows.append(
            f'<div class="{" ".join(classes)}" data-index="{element.index}" data-facet="{escape_html(element.facet)}" '
            f'data-relative-ms="{element.relative_ms}"{scroll}>{element.html}{detail}</div>'
        )
    return "".join(rows)


def _render_markers(viewer: Viewer) -> str:
    duration = viewer.clock.duration_ms()
    if duration <= 0:
        return ""
    dots = []
    for marker in viewer.markers:
        pct = marker.time_ms / duration * 100
        if not 0 <= pct <= 100:
            continue
        dots.append(
            f'<div class="vc-marker" style="left: {pct:.3f}%; background-color: {marker.color}" '
            f'title="{escape_html(marker.label)}"></div>'
        )
    return "".join(dots)


def render_page(viewer: Viewer) -> str:
    """Full viewer page at the clock's current position."""
    meta = viewer.session.metadata
    url = meta.url or ""
    video_src = f"/api/recordings/{escape_html(viewer.recording_id)}/video" if viewer.recording_id else ""
    network_header = (
        '<div class="network-header"><span>Method</span><span>URL</span>'
        "<span>Status</span><span>Type</span><span>Size</span></div>"
    )

    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8">'
        f"<title>replaytap - {escape_html(url or 'Recording')}</title></head><body>"
        '<div id="main-content">'
        f'<header><span id="meta-url">{escape_html(url)}</span>'
        f'<span id="meta-duration">{format_duration(meta.duration)}</span></header>'
        f'<video id="video-player" src="{video_src}" data-current-ms="{viewer.clock.current_time_ms():.0f}"></video>'
        f'<div id="vc-time-current">{format_clock(viewer.clock.current_time_ms(), millis=False)}</div>'
        f'<div id="vc-progress-markers">{_render_markers(viewer)}</div>'
        '<section id="console-tab" class="tab-content active">'
        f'<div id="console-filters">{_render_filters(viewer.console, CONSOLE_FACETS, "level")}</div>'
        f'<div id="console-entries">{_render_panel(viewer.console)}</div></section>'
        '<section id="network-tab" class="tab-content">'
        f'<div id="network-filters">{_render_filters(viewer.network, NETWORK_FACETS, "type")}</div>'
        f'<div id="network-summary">{escape_html(viewer.network.summary)}</div>'
        f'<div id="network-entries">{network_header}{_render_panel(viewer.network)}'
        f"{viewer.network.render_websockets()}</div></section>"
        "</div></body></html>"
    )


__all__ = ["TimelineMarker", "Viewer", "build_markers", "render_page"]
