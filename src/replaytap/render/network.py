"""Network panel markup: request rows, request detail pane, WebSocket section.

PUBLIC API:
  - render_network_row: Inner markup of one request row
  - render_network_detail: Detail pane for one request
  - render_response_body: Response body section (binary bodies never decoded)
  - render_websocket_section: WebSocket connections with their frames
  - build_curl: cURL command reproducing a request
"""

import json
from typing import Any

from replaytap.models import NetworkEntry, WebSocketConnection
from replaytap.render.helpers import (
    detail_section,
    escape_html,
    format_clock,
    format_size,
    source_location,
    status_class,
    truncate_url,
)
from replaytap.render.stack import render_initiator_stack

BODY_DISPLAY_LIMIT = 10240
MAX_WS_FRAMES = 100
WS_PAYLOAD_LIMIT = 200


def render_network_row(entry: NetworkEntry) -> str:
    """Inner markup of a request row: method, url, status, type, size."""
    status = entry.status
    status_text = str(status) if status else ("ERR" if entry.error else "-")
    type_text = entry.resource_type or entry.content.get("mimeType") or "-"

    return (
        f'<span class="net-method">{escape_html(entry.method)}</span>'
        f'<span class="net-url" title="{escape_html(entry.url)}">{escape_html(truncate_url(entry.url))}</span>'
        f'<span class="net-status {status_class(status)}">{status_text}</span>'
        f'<span class="net-type">{escape_html(type_text)}</span>'
        f'<span class="net-size">{format_size(entry.size)}</span>'
    )


def format_headers(headers: Any) -> str:
    """Headers as 'name: value' lines; accepts HAR lists or plain dicts."""
    if not headers:
        return "(none)"
    if isinstance(headers, list):
        return "\n".join(f"{h.get('name')}: {h.get('value')}" for h in headers if isinstance(h, dict))
    if isinstance(headers, dict):
        return "\n".join(f"{k}: {v}" for k, v in headers.items())
    return str(headers)


def _header_pairs(headers: Any) -> list[tuple[str, str]]:
    if isinstance(headers, list):
        return [(str(h.get("name")), str(h.get("value"))) for h in headers if isinstance(h, dict)]
    if isinstance(headers, dict):
        return [(str(k), str(v)) for k, v in headers.items()]
    return []


def _shell_quote(text: str) -> str:
    return text.replace("'", "'\\''")


def build_curl(entry: NetworkEntry) -> str:
    """cURL command reproducing the captured request."""
    parts = [f"curl '{_shell_quote(entry.url)}'"]
    if entry.method != "GET":
        parts.append(f"-X {entry.method}")
    for name, value in _header_pairs(entry.request_headers):
        parts.append(f"-H '{name}: {_shell_quote(value)}'")
    if post_data := entry.post_data:
        parts.append(f"--data-raw '{_shell_quote(str(post_data))}'")
    return " \\\n  ".join(parts)


def render_response_body(content: dict, limit: int = BODY_DISPLAY_LIMIT) -> str:
    """Render a response body section.

    Base64 bodies are binary and are never decoded; only an approximate size
    is shown. JSON bodies are pretty-printed when they parse.
    """
    text = content.get("text")
    if not text:
        return ""

    if content.get("encoding") == "base64":
        estimate = round(len(str(text)) * 0.75)
        return detail_section(
            "Response Body", f'<pre class="response-body-content">(binary data, ~{format_size(estimate)})</pre>', pre=False
        )

    body = str(text)
    if "json" in str(content.get("mimeType") or ""):
        try:
            body = json.dumps(json.loads(body), indent=2, ensure_ascii=False)
        except (ValueError, RecursionError):
            pass

    truncated = len(body) > limit
    shown = body[:limit] if truncated else body
    css = "response-body-content truncated" if truncated else "response-body-content"
    html = f'<pre class="{css}">{escape_html(shown)}</pre>'
    if truncated:
        html += f'<div class="response-body-truncated">Truncated (full size {format_size(len(body))})</div>'
    return detail_section("Response Body", html, pre=False)


def _render_redirects(entry: NetworkEntry) -> str:
    chain = [r for r in entry.redirect_chain if isinstance(r, dict)]
    if not chain:
        return ""
    steps = [
        '<div class="redirect-step"><span class="redirect-status status-3xx">'
        f'{escape_html(r.get("status", ""))}</span> <span class="redirect-url">{escape_html(r.get("url") or "")}</span></div>'
        for r in chain
    ]
    steps.append(
        '<div class="redirect-step redirect-final"><span class="redirect-status status-2xx">'
        f'{entry.status or ""}</span> <span class="redirect-url">{escape_html(entry.url)}</span></div>'
    )
    return detail_section("Redirect Chain", f'<div class="redirect-chain">{"".join(steps)}</div>', pre=False)


def _render_timings(timings: dict) -> str:
    items = [
        f'<span class="timing-item">{escape_html(key)}: <span class="timing-value">{value:.1f}ms</span></span>'
        for key, value in timings.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0
    ]
    if not items:
        return ""
    return detail_section("Timing", f'<div class="timing-bar">{"".join(items)}</div>', pre=False)


def _render_initiator(initiator: dict) -> str:
    html = f"<pre>{escape_html(initiator.get('type') or 'other')}</pre>"
    if location := source_location(initiator):
        html += f'<pre class="initiator-location">{escape_html(location)}</pre>'
    html += render_initiator_stack(initiator.get("stack"))
    return detail_section("Initiator", html, pre=False)


def render_network_detail(entry: NetworkEntry, body_limit: int = BODY_DISPLAY_LIMIT) -> str:
    """Detail pane for one request."""
    sections = [detail_section("Time", format_clock(entry.relative_ms, millis=False))]

    if redirects := _render_redirects(entry):
        sections.append(redirects)

    sections.append(detail_section("URL", escape_html(entry.url or "-")))
    sections.append(detail_section("Request Headers", escape_html(format_headers(entry.request_headers))))

    if entry.post_data:
        sections.append(detail_section("Request Body", escape_html(entry.post_data or "(empty)")))

    sections.append(detail_section("Response Headers", escape_html(format_headers(entry.response_headers))))

    if body := render_response_body(entry.content, body_limit):
        sections.append(body)
    if timings := _render_timings(entry.timings):
        sections.append(timings)
    if entry.initiator:
        sections.append(_render_initiator(entry.initiator))
    if entry.error:
        sections.append(detail_section("Error", f'<span class="net-error">{escape_html(entry.error)}</span>'))

    sections.append(detail_section("cURL", escape_html(build_curl(entry))))
    return f'<div class="network-detail">{"".join(sections)}</div>'


def render_websocket_section(
    connections: list[WebSocketConnection],
    max_frames: int = MAX_WS_FRAMES,
    payload_limit: int = WS_PAYLOAD_LIMIT,
) -> str:
    """WebSocket connections, each with a collapsible frame table."""
    if not connections:
        return ""

    html = [f'<div class="ws-section-header"><h3>WebSocket Connections ({len(connections)})</h3></div>']
    for ws in connections:
        state = "ws-closed" if ws.closed else "ws-open"
        html.append(
            '<details class="ws-entry"><summary>'
            f'<span class="ws-url" title="{escape_html(ws.url)}">{escape_html(ws.url)}</span>'
            f'<span class="ws-frame-count">{len(ws.frames)} frames</span>'
            f'<span class="ws-status {state}">{"Closed" if ws.closed else "Open"}</span></summary>'
        )
        html.append('<div class="ws-detail">')
        html.append(detail_section("URL", escape_html(ws.url)))
        if ws.frames:
            rows = ['<div class="ws-frame-header"><span>Dir</span><span>Data</span></div>']
            for frame in ws.frames[:max_frames]:
                arrow, css = ("↑", "ws-dir-sent") if frame.sent else ("↓", "ws-dir-recv")
                data = frame.payload
                if len(data) > payload_limit:
                    data = data[:payload_limit] + "..."
                rows.append(
                    f'<div class="ws-frame-row"><span class="{css}">{arrow}</span>'
                    f'<span class="ws-frame-data">{escape_html(data)}</span></div>'
                )
            if len(ws.frames) > max_frames:
                rows.append(
                    '<div class="ws-frame-row"><span></span>'
                    f'<span class="ws-frame-data">... {len(ws.frames) - max_frames} more frames</span></div>'
                )
            html.append(
                detail_section(f"Frames ({len(ws.frames)})", f'<div class="ws-frames-table">{"".join(rows)}</div>', pre=False)
            )
        html.append("</div></details>")

    return "".join(html)


__all__ = [
    "render_network_row",
    "render_network_detail",
    "render_response_body",
    "render_websocket_section",
    "build_curl",
    "format_headers",
]
