"""Captured runtime value rendering.

Console entries come in two capture formats. Legacy entries carry plain JSON
args; capture-protocol entries carry serialized RemoteObjects with optional
bounded previews. The format is resolved once at normalization and
`renderer_for` dispatches to the matching renderer. Both are total: any input
shape renders to an escaped string and nothing raises.

PUBLIC API:
  - ValueRenderer: Rendering interface
  - LegacyValueRenderer: Plain JSON args
  - RemoteObjectRenderer: RemoteObject args with previews
  - renderer_for: Pick the renderer for a console entry
  - render_args: Render a console entry's message line
  - MAX_PREVIEW_DEPTH: Nested preview bound
"""

import json
import reprlib
from abc import ABC, abstractmethod
from typing import Any

from replaytap.models import ConsoleEntry, ConsoleFormat
from replaytap.render.helpers import escape_html, js_literal

MAX_PREVIEW_DEPTH = 10

_UNDEFINED = '<span class="ro-undefined">undefined</span>'
_NULL = '<span class="ro-null">null</span>'
_DEPTH_PLACEHOLDER = '<span class="ro-overflow">…</span>'


def _span(css: str, text: str) -> str:
    return f'<span class="{css}">{text}</span>'


def _bigint(value: Any) -> str:
    if value is None:
        return ""
    text = js_literal(value)
    return text if text.endswith("n") else f"{text}n"


class ValueRenderer(ABC):
    """Render one captured value, or a whole entry's args, to markup."""

    @abstractmethod
    def render_value(self, value: Any) -> str:
        pass

    def render_args(self, entry: ConsoleEntry) -> str:
        args = entry.get("args")
        if not isinstance(args, list):
            message = entry.get("message")
            if message is not None:
                return escape_html(message)
            return escape_html(args) if args is not None else ""
        return " ".join(self.render_value(arg) for arg in args)


class LegacyValueRenderer(ValueRenderer):
    """Plain JSON values from the pre-protocol capture format."""

    def render_value(self, value: Any) -> str:
        if value is None:
            return "null"
        if value == "undefined":
            return "undefined"
        if isinstance(value, dict) and value.get("type") == "Error":
            return escape_html(f"{value.get('message') or ''}\n{value.get('stack') or ''}")
        if isinstance(value, (dict, list)):
            try:
                return escape_html(json.dumps(value, separators=(",", ":"), ensure_ascii=False))
            except (TypeError, ValueError, RecursionError):
                return escape_html(reprlib.repr(value))
        return escape_html(js_literal(value))


class RemoteObjectRenderer(ValueRenderer):
    """Serialized RemoteObjects with bounded ObjectPreviews."""

    def render_args(self, entry: ConsoleEntry) -> str:
        if entry.source in ("exception", "browser"):
            return escape_html(entry.get("message") or "")
        return super().render_args(entry)

    def render_value(self, value: Any) -> str:
        if not value:
            return _UNDEFINED
        if not isinstance(value, dict):
            return escape_html(value)

        kind = value.get("type")
        description = value.get("description")

        if kind == "undefined":
            return _UNDEFINED
        if kind == "boolean":
            return _span("ro-boolean", escape_html(js_literal(value.get("value"))))
        if kind == "number":
            number = description if description is not None else js_literal(value.get("value"))
            return _span("ro-number", escape_html(number))
        if kind == "bigint":
            raw = description or value.get("unserializableValue") or value.get("value")
            return _span("ro-number", escape_html(_bigint(raw)))
        if kind == "string":
            text = value.get("value")
            return _span("ro-string", escape_html(text if text is not None else description or ""))
        if kind == "symbol":
            return _span("ro-symbol", escape_html(description or "Symbol()"))
        if kind == "function":
            return _span("ro-function", f"ƒ {escape_html(description or 'anonymous')}")
        if kind == "object":
            return self._render_object(value)

        # Unknown tag
        if description:
            return escape_html(description)
        return escape_html(js_literal(value["value"])) if "value" in value else ""

    def _render_object(self, obj: dict) -> str:
        subtype = obj.get("subtype")
        description = obj.get("description")

        if subtype == "null":
            return _NULL
        if subtype == "error":
            return _span("ro-error", escape_html(description or "Error"))
        if subtype in ("regexp", "date"):
            return _span(f"ro-{subtype}", escape_html(description or ""))

        preview = obj.get("preview")
        if isinstance(preview, dict):
            return self.render_preview(preview, obj.get("className"))

        return _span("ro-object", escape_html(description or obj.get("className") or "Object"))

    def render_preview(self, preview: dict, class_name: str | None = None, depth: int = 0) -> str:
        """Render an ObjectPreview inline, e.g. `Foo {a: 1, b: "x", ...}`.

        Args:
            preview: ObjectPreview dict.
            class_name: Label shown before the brace for non-plain objects.
            depth: Current nesting level; past MAX_PREVIEW_DEPTH a placeholder is rendered.
        """
        if depth > MAX_PREVIEW_DEPTH:
            return _DEPTH_PLACEHOLDER

        properties = preview.get("properties")
        properties = [p for p in properties if isinstance(p, dict)] if isinstance(properties, list) else []
        is_array = preview.get("subtype") == "array"
        overflow = bool(preview.get("overflow"))

        label = f"{escape_html(class_name)} " if class_name and class_name != "Object" and not is_array else ""
        open_, close = ("[", "]") if is_array else (f"{label}{{", "}")

        if not properties:
            return f"{open_}...{close}" if overflow else f"{open_}{close}"

        rendered = []
        for prop in properties:
            val = self._render_property_value(prop, depth)
            if is_array:
                rendered.append(val)
            else:
                rendered.append(f'{_span("ro-prop-name", escape_html(prop.get("name", "")))}: {val}')

        more = ", ..." if overflow else ""
        return f"{open_}{', '.join(rendered)}{more}{close}"

    def _render_property_value(self, prop: dict, depth: int) -> str:
        nested = prop.get("valuePreview")
        if isinstance(nested, dict):
            return self.render_preview(nested, nested.get("description"), depth + 1)

        kind = prop.get("type")
        value = prop.get("value")

        if kind == "string":
            return _span("ro-string", f'"{escape_html(value or "")}"')
        if kind == "number":
            return _span("ro-number", escape_html(js_literal(value)))
        if kind == "bigint":
            return _span("ro-number", escape_html(_bigint(value)))
        if kind == "boolean":
            return _span("ro-boolean", escape_html(js_literal(value)))
        if kind == "undefined":
            return _UNDEFINED
        if kind == "symbol":
            return _span("ro-symbol", escape_html(value or "Symbol()"))
        if kind == "function":
            return _span("ro-function", "ƒ")
        if kind == "object":
            if prop.get("subtype") == "null":
                return _NULL
            return _span("ro-object", escape_html(value or "Object"))
        return escape_html(value or "")

    def render_expanded(self, value: Any) -> str:
        """Render a RemoteObject for the detail pane: one row per preview property."""
        if not isinstance(value, dict) or value.get("type") != "object":
            return self.render_value(value)

        preview = value.get("preview")
        properties = preview.get("properties") if isinstance(preview, dict) else None
        if not isinstance(properties, list):
            return self.render_value(value)

        label = "Array" if preview.get("subtype") == "array" else value.get("className") or "Object"
        rows = [
            f'<div class="ro-prop-row">{_span("ro-prop-name", escape_html(p.get("name", "")))}: '
            f"{self._render_property_value(p, 0)}</div>"
            for p in properties
            if isinstance(p, dict)
        ]
        if preview.get("overflow"):
            rows.append('<div class="ro-prop-row ro-overflow">...</div>')

        return (
            f'<div class="ro-expanded">{_span("ro-object-label", escape_html(label))}'
            f'<div class="ro-properties">{"".join(rows)}</div></div>'
        )


_LEGACY = LegacyValueRenderer()
_REMOTE = RemoteObjectRenderer()


def renderer_for(entry: ConsoleEntry) -> ValueRenderer:
    """Renderer matching the entry's capture format."""
    return _REMOTE if entry.variant is ConsoleFormat.CAPTURE else _LEGACY


def render_args(entry: ConsoleEntry) -> str:
    """Render a console entry's message line."""
    return renderer_for(entry).render_args(entry)


__all__ = [
    "ValueRenderer",
    "LegacyValueRenderer",
    "RemoteObjectRenderer",
    "renderer_for",
    "render_args",
    "MAX_PREVIEW_DEPTH",
]
