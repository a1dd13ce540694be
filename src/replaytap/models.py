"""Data model for recorded sessions and their normalized streams.

PUBLIC API:
  - RecordingMetadata: Validated metadata.json contents
  - RecordingSession: Immutable snapshot of one recording
  - StreamEntry: Raw record plus its offset from recording start
  - ConsoleEntry: Console record tagged with its capture format
  - NetworkEntry: HAR-like request record
  - WebSocketFrame, WebSocketConnection: WebSocket log records
  - ConsoleFormat: Console capture format discriminator
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class RecordingMetadata(BaseModel):
    """Recording metadata as persisted in metadata.json."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    start_time: float | None = Field(default=None, alias="startTime")
    timestamp: float | str | None = None
    url: str | None = None
    duration: float | None = None
    id: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")

    @field_validator("start_time", "timestamp", "url", "duration", "id", "created_at", mode="wrap")
    @classmethod
    def _drop_invalid(cls, value: Any, handler: Any) -> Any:
        """Degrade a single invalid field to None instead of rejecting the whole file."""
        try:
            return handler(value)
        except ValidationError:
            logger.warning(f"Ignoring invalid metadata value {value!r}")
            return None

    @property
    def start_time_ms(self) -> float:
        """Absolute epoch ms of recording start, 0 when unknown."""
        if self.start_time is not None:
            return self.start_time
        if isinstance(self.timestamp, (int, float)):
            return float(self.timestamp)
        if isinstance(self.timestamp, str):
            try:
                return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00")).timestamp() * 1000
            except ValueError:
                logger.debug(f"Unparseable metadata timestamp: {self.timestamp!r}")
        return 0.0

    @classmethod
    def parse(cls, data: Any) -> "RecordingMetadata":
        """Validate raw metadata, falling back to empty metadata on bad input."""
        if not isinstance(data, dict):
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid recording metadata, using defaults: {e.error_count()} errors")
            return cls()


@dataclass(frozen=True)
class RecordingSession:
    """One loaded recording. Raw collections are kept exactly as captured.

    Attributes:
        metadata: Validated metadata.
        console_logs: Raw console records.
        network_requests: Raw HAR document or flat list.
        websocket_logs: Raw WebSocket connection logs.
    """

    metadata: RecordingMetadata
    console_logs: Any = field(default_factory=list)
    network_requests: Any = field(default_factory=list)
    websocket_logs: Any = field(default_factory=list)

    @property
    def start_time_ms(self) -> float:
        return self.metadata.start_time_ms

    @classmethod
    def from_snapshot(cls, snapshot: dict) -> "RecordingSession":
        """Build a session from a fetch-contract snapshot.

        Args:
            snapshot: {metadata, consoleLogs, networkRequests, webSocketLogs}

        Returns:
            RecordingSession; missing collections become empty lists.
        """
        return cls(
            metadata=RecordingMetadata.parse(snapshot.get("metadata")),
            console_logs=snapshot.get("consoleLogs") or [],
            network_requests=snapshot.get("networkRequests") or [],
            websocket_logs=snapshot.get("webSocketLogs") or [],
        )


class ConsoleFormat(str, Enum):
    """Console capture format, resolved once per entry."""

    LEGACY = "legacy"  # plain JSON args
    CAPTURE = "capture"  # RemoteObject args, has "source"


@dataclass(frozen=True)
class StreamEntry:
    """A raw record placed on the recording's relative time axis.

    Attributes:
        raw: Record as captured.
        relative_ms: Record time minus recording start, in ms (signed).
        order: Position in the original input.
    """

    raw: dict
    relative_ms: int
    order: int

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)


@dataclass(frozen=True)
class ConsoleEntry(StreamEntry):
    variant: ConsoleFormat = ConsoleFormat.LEGACY

    @property
    def source(self) -> str | None:
        return self.raw.get("source") if self.variant is ConsoleFormat.CAPTURE else None

    @property
    def level(self) -> str:
        """Display level: exceptions are errors, browser entries default to info."""
        if self.source == "exception":
            return "error"
        if self.source == "browser":
            return str(self.raw.get("level") or "info")
        return str(self.raw.get("level") or "log")

    @property
    def stack_trace(self) -> list:
        frames = self.raw.get("stackTrace")
        return frames if isinstance(frames, list) else []


@dataclass(frozen=True)
class NetworkEntry(StreamEntry):
    """HAR-like request record with tolerant accessors (flat fields as fallback)."""

    def _section(self, key: str) -> dict:
        value = self.raw.get(key)
        return value if isinstance(value, dict) else {}

    @property
    def request(self) -> dict:
        return self._section("request")

    @property
    def response(self) -> dict:
        return self._section("response")

    @property
    def content(self) -> dict:
        content = self.response.get("content")
        return content if isinstance(content, dict) else {}

    @property
    def method(self) -> str:
        return str(self.request.get("method") or self.raw.get("method") or "GET")

    @property
    def url(self) -> str:
        return str(self.request.get("url") or self.raw.get("url") or "")

    @property
    def status(self) -> int:
        status = self.response.get("status") or self.raw.get("status") or 0
        return status if isinstance(status, int) else 0

    @property
    def resource_type(self) -> str:
        return str(self.raw.get("resourceType") or "")

    @property
    def error(self) -> str | None:
        return self.raw.get("error")

    @property
    def size(self) -> int | None:
        return self.content.get("size") or self.raw.get("encodedDataLength")

    @property
    def request_headers(self) -> Any:
        return self.request.get("headers") or self.raw.get("requestHeaders")

    @property
    def response_headers(self) -> Any:
        return self.response.get("headers") or self.raw.get("responseHeaders")

    @property
    def post_data(self) -> str | None:
        post = self.request.get("postData")
        if isinstance(post, dict):
            return post.get("text")
        return post or self.raw.get("postData")

    @property
    def timings(self) -> dict:
        return self._section("timings")

    @property
    def initiator(self) -> dict | None:
        initiator = self.raw.get("initiator")
        return initiator if isinstance(initiator, dict) else None

    @property
    def redirect_chain(self) -> list:
        chain = self.raw.get("redirectChain")
        return chain if isinstance(chain, list) else []


@dataclass(frozen=True)
class WebSocketFrame:
    direction: str
    payload: str
    relative_ms: int | None = None

    @property
    def sent(self) -> bool:
        return self.direction == "sent"


@dataclass(frozen=True)
class WebSocketConnection:
    url: str
    closed: bool
    frames: tuple[WebSocketFrame, ...] = ()


__all__ = [
    "RecordingMetadata",
    "RecordingSession",
    "ConsoleFormat",
    "StreamEntry",
    "ConsoleEntry",
    "NetworkEntry",
    "WebSocketFrame",
    "WebSocketConnection",
]
