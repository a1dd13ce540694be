"""Stream normalization onto the recording's relative time axis.

Every stream becomes a list sorted ascending by relative_ms, ties kept in
input order. Bad input never raises: a malformed collection yields an empty
stream and a malformed item is skipped.

PUBLIC API:
  - normalize_console: Console records -> ConsoleEntry list
  - normalize_network: HAR document or flat list -> NetworkEntry list
  - normalize_websockets: WebSocket logs -> WebSocketConnection list
  - network_relative_ms: Offset rule shared by network records and WS frames
"""

import logging
import math
from typing import Any

from replaytap.models import (
    ConsoleEntry,
    ConsoleFormat,
    NetworkEntry,
    WebSocketConnection,
    WebSocketFrame,
)

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _records(data: Any, stream: str) -> list[tuple[int, dict]]:
    """Enumerate dict records of a raw collection, skipping anything else."""
    if not isinstance(data, list):
        if data not in (None, {}, ""):
            logger.debug(f"Ignoring malformed {stream} collection of type {type(data).__name__}")
        return []

    records = []
    for index, record in enumerate(data):
        if isinstance(record, dict):
            records.append((index, record))
        else:
            logger.debug(f"Skipping malformed {stream} record #{index}")
    return records


def network_relative_ms(record: dict, start_time_ms: float) -> int:
    """Offset of a network-style record.

    Wall-clock `wallTime` wins over monotonic `timestamp`; both are in
    seconds. Records without either sit at offset 0.
    """
    for key in ("wallTime", "timestamp"):
        value = record.get(key)
        if _is_number(value) and value:
            return round(value * 1000 - start_time_ms)
    return 0


def normalize_console(records: Any, start_time_ms: float) -> list[ConsoleEntry]:
    """Normalize console records.

    Args:
        records: Raw console-log array.
        start_time_ms: Recording start, epoch ms.

    Returns:
        Entries sorted by relative_ms (stable).
    """
    entries = []
    for index, record in _records(records, "console"):
        timestamp = record.get("timestamp")
        relative_ms = round(timestamp - start_time_ms) if _is_number(timestamp) else 0
        variant = ConsoleFormat.CAPTURE if "source" in record else ConsoleFormat.LEGACY
        entries.append(ConsoleEntry(raw=record, relative_ms=relative_ms, order=index, variant=variant))

    return sorted(entries, key=lambda e: e.relative_ms)


def normalize_network(data: Any, start_time_ms: float) -> list[NetworkEntry]:
    """Normalize network requests from a HAR document or a flat array.

    Args:
        data: {"log": {"entries": [...]}} or [...].
        start_time_ms: Recording start, epoch ms.

    Returns:
        Entries sorted by relative_ms (stable).
    """
    raw_entries: Any = []
    if isinstance(data, dict):
        log = data.get("log")
        if isinstance(log, dict):
            raw_entries = log.get("entries") or []
    elif isinstance(data, list):
        raw_entries = data

    entries = [
        NetworkEntry(raw=record, relative_ms=network_relative_ms(record, start_time_ms), order=index)
        for index, record in _records(raw_entries, "network")
    ]
    return sorted(entries, key=lambda e: e.relative_ms)


def normalize_websockets(logs: Any, start_time_ms: float) -> list[WebSocketConnection]:
    """Normalize WebSocket connection logs.

    Frames keep capture order; a frame gets a relative_ms only when it carries
    a time field.
    """
    connections = []
    for _, log in _records(logs, "websocket"):
        frames = []
        for _, frame in _records(log.get("frames"), "websocket frame"):
            has_time = _is_number(frame.get("wallTime")) or _is_number(frame.get("timestamp"))
            frames.append(
                WebSocketFrame(
                    direction=frame.get("direction") or "received",
                    payload=str(frame.get("payloadData") or ""),
                    relative_ms=network_relative_ms(frame, start_time_ms) if has_time else None,
                )
            )
        connections.append(
            WebSocketConnection(url=str(log.get("url") or ""), closed=bool(log.get("closed")), frames=tuple(frames))
        )
    return connections


__all__ = ["normalize_console", "normalize_network", "normalize_websockets", "network_relative_ms"]
