"""Markup renderers for console and network panels.

All renderers are pure and total: captured data of any shape renders to an
HTML-escaped string and nothing raises.

PUBLIC API:
  - render_args: Console message line for an entry
  - renderer_for: Value renderer matching an entry's capture format
  - render_console_row, render_console_detail: Console panel markup
  - render_network_row, render_network_detail: Network panel markup
  - render_websocket_section: WebSocket connections and frames
  - escape_html: Markup escaping used by every renderer
"""

from replaytap.render.console import render_console_detail, render_console_row
from replaytap.render.helpers import escape_html
from replaytap.render.network import render_network_detail, render_network_row, render_websocket_section
from replaytap.render.values import render_args, renderer_for

__all__ = [
    "render_args",
    "renderer_for",
    "render_console_row",
    "render_console_detail",
    "render_network_row",
    "render_network_detail",
    "render_websocket_section",
    "escape_html",
]
