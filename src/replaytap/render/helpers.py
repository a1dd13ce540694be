"""Formatting helpers shared by the panel renderers."""

from html import escape
from typing import Any
from urllib.parse import urlsplit


def escape_html(value: Any) -> str:
    """Escape any value as markup-safe text."""
    return escape(str(value), quote=True)


def js_literal(value: Any) -> str:
    """Stringify a captured primitive the way the page would have printed it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_clock(relative_ms: float, millis: bool = True) -> str:
    """Format a relative offset as MM:SS.mmm (or MM:SS), negatives clamp to zero."""
    ms = max(0, int(relative_ms))
    total_sec = ms // 1000
    text = f"{total_sec // 60:02d}:{total_sec % 60:02d}"
    if millis:
        text += f".{ms % 1000:03d}"
    return text


def format_duration(duration_ms: float | None) -> str:
    """Format recording duration as 'Mm Ss', empty when unknown."""
    if not duration_ms:
        return ""
    total_sec = int(duration_ms // 1000)
    return f"{total_sec // 60}m {total_sec % 60}s"


def format_size(bytes_val: float | None) -> str:
    """Format bytes as human-readable string for display."""
    if not isinstance(bytes_val, (int, float)) or bytes_val <= 0:
        return "-"

    if bytes_val < 1024:
        return f"{int(bytes_val)} B"
    if bytes_val < 1024 * 1024:
        return f"{bytes_val / 1024:.1f} KB"
    return f"{bytes_val / (1024 * 1024):.1f} MB"


def truncate_url(url: str, max_length: int = 60) -> str:
    """Truncate URL for row display, keeping path and query only."""
    if not url:
        return ""

    try:
        parts = urlsplit(url)
    except ValueError:
        parts = None

    if parts and parts.scheme and parts.netloc:
        path = parts.path or "/"
        if parts.query:
            path += f"?{parts.query}"
    else:
        # Not an absolute URL, truncate as-is
        path = url

    return path[:max_length] + "..." if len(path) > max_length else path


def status_class(status: int | None) -> str:
    """CSS class for an HTTP status bucket."""
    if not status:
        return "status-0"
    if 200 <= status < 300:
        return "status-2xx"
    if 300 <= status < 400:
        return "status-3xx"
    if 400 <= status < 500:
        return "status-4xx"
    return "status-5xx"


def detail_section(title: str, body: str, pre: bool = True) -> str:
    """Wrap already-escaped markup in a titled detail section."""
    inner = f"<pre>{body}</pre>" if pre else body
    return f'<div class="detail-section"><h4>{escape_html(title)}</h4>{inner}</div>'


def source_location(record: dict) -> str:
    """'file:line:col' for a record, preferring source-mapped fields; 1-based."""
    if record.get("originalSource"):
        source, line, column = record["originalSource"], record.get("originalLine"), record.get("originalColumn")
    elif record.get("url"):
        source, line, column = record["url"], record.get("lineNumber"), record.get("columnNumber")
    else:
        return ""

    text = str(source)
    if isinstance(line, int):
        text += f":{line + 1}"
    if isinstance(column, int):
        text += f":{column + 1}"
    return text
