"""Stack trace rendering for console entries and network initiators.

A frame is either a call frame or an async-boundary marker. Source-mapped
`original*` fields win over raw ones; line and column are shown 1-based.
"""

from typing import Any

from replaytap.render.helpers import escape_html
from replaytap.render.values import MAX_PREVIEW_DEPTH


def _one_based(value: Any) -> int:
    return value + 1 if isinstance(value, int) else 1


def _frame_location(frame: dict) -> str:
    if frame.get("originalSource"):
        line, column = frame.get("originalLine"), frame.get("originalColumn")
        return f"{frame['originalSource']}:{_one_based(line)}:{_one_based(column)}"
    if frame.get("url"):
        return f"{frame['url']}:{_one_based(frame.get('lineNumber'))}:{_one_based(frame.get('columnNumber'))}"
    return ""


def _async_boundary(description: Any) -> str:
    return f'<div class="stack-frame async-boundary">--- {escape_html(description)} ---</div>'


def render_frame(frame: Any) -> str:
    """Render one call frame or async boundary."""
    if not isinstance(frame, dict):
        return ""
    if frame.get("asyncBoundary"):
        return _async_boundary(frame["asyncBoundary"])

    name = frame.get("originalName") or frame.get("functionName") or "(anonymous)"
    html = f'<div class="stack-frame">at <span class="stack-fn">{escape_html(name)}</span>'
    if location := _frame_location(frame):
        html += f' <span class="stack-location">({escape_html(location)})</span>'
    return html + "</div>"


def render_frames(frames: Any) -> str:
    """Flat frame list for detail panes, empty when there are no frames."""
    if not isinstance(frames, list) or not frames:
        return ""
    return f'<div class="stack-frames">{"".join(render_frame(f) for f in frames)}</div>'


def render_stack_trace(frames: Any) -> str:
    """Collapsible stack trace shown inline under a console message."""
    body = render_frames(frames)
    if not body:
        return ""
    return f'<details class="stack-trace"><summary>Stack trace</summary>{body}</details>'


def render_initiator_stack(stack: Any, depth: int = 0) -> str:
    """Render an initiator stack and its async parents.

    Args:
        stack: {callFrames: [...], parent?: {description, callFrames, parent?}}
        depth: Parent chain position; chains deeper than MAX_PREVIEW_DEPTH are cut.
    """
    if not isinstance(stack, dict) or depth > MAX_PREVIEW_DEPTH:
        return ""

    frames = stack.get("callFrames")
    frames = frames if isinstance(frames, list) else []
    parent = stack.get("parent")
    if not frames and not isinstance(parent, dict):
        return ""

    html = '<div class="stack-frames">' + "".join(render_frame(f) for f in frames)
    if isinstance(parent, dict):
        html += _async_boundary(parent.get("description") or "async")
        html += render_initiator_stack(parent, depth + 1)
    return html + "</div>"
