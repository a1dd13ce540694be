"""Console panel markup: one row per entry plus an expandable detail pane."""

from replaytap.models import ConsoleEntry, ConsoleFormat
from replaytap.render.helpers import detail_section, escape_html, format_clock, source_location
from replaytap.render.stack import render_frames, render_stack_trace
from replaytap.render.values import RemoteObjectRenderer, render_args, renderer_for


def level_label(entry: ConsoleEntry) -> str:
    if entry.source == "exception":
        return "EXCEPTION"
    if entry.source == "browser":
        return "BROWSER"
    return entry.level.upper()


def row_classes(entry: ConsoleEntry) -> list[str]:
    classes = ["console-entry"]
    if entry.source in ("exception", "browser"):
        classes.append(f"{entry.source}-entry")
    return classes


def render_console_row(entry: ConsoleEntry) -> str:
    """Inner markup of a console row: time, level, message, stack, location."""
    message = render_args(entry)

    if stack := render_stack_trace(entry.stack_trace):
        message += f'<div class="console-stack-container">{stack}</div>'

    if entry.source in ("exception", "browser"):
        if location := source_location(entry.raw):
            message += f'<span class="console-source-location">{escape_html(location)}</span>'

    return (
        f'<span class="console-time">{format_clock(entry.relative_ms)}</span>'
        f'<span class="console-level level-{escape_html(entry.level)}">{escape_html(level_label(entry))}</span>'
        f'<span class="console-msg">{message}</span>'
    )


def render_console_detail(entry: ConsoleEntry) -> str:
    """Detail pane with expanded arguments and the full stack."""
    sections = [detail_section("Time", format_clock(entry.relative_ms))]

    source = f" ({escape_html(entry.source)})" if entry.source else ""
    sections.append(detail_section("Level", f"{escape_html(level_label(entry))}{source}"))

    args = entry.get("args")
    renderer = renderer_for(entry)
    if entry.variant is ConsoleFormat.CAPTURE and isinstance(args, list) and isinstance(renderer, RemoteObjectRenderer):
        rows = "".join(
            f'<div class="console-detail-arg"><span class="detail-arg-index">[{i}]</span> '
            f"{renderer.render_expanded(arg)}</div>"
            for i, arg in enumerate(args)
        )
        sections.append(detail_section("Arguments", rows, pre=False))
    elif entry.get("message"):
        sections.append(detail_section("Message", escape_html(entry.get("message"))))

    if location := source_location(entry.raw):
        sections.append(detail_section("Source", escape_html(location)))

    if frames := render_frames(entry.stack_trace):
        sections.append(detail_section("Stack Trace", frames, pre=False))

    return f'<div class="console-detail">{"".join(sections)}</div>'
