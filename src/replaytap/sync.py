"""Clock source contract and the coordinator fanning clock events out to panels.

PUBLIC API:
  - ClockEvent: timeupdate/seeked notification
  - ClockSource: Subscription contract of a playback clock
  - PlaybackClock: In-process clock with rate-limited ticks
  - SyncCoordinator: Drives every attached stream on every clock event
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Literal

from replaytap.config import DEFAULT_TICK_INTERVAL_MS

logger = logging.getLogger(__name__)

TIME_UPDATE = "timeupdate"
SEEKED = "seeked"


@dataclass(frozen=True)
class ClockEvent:
    kind: Literal["timeupdate", "seeked"]
    ms: float


ClockListener = Callable[[ClockEvent], None]


class ClockSource(ABC):
    """Contract of a playback clock.

    Emits `timeupdate` during playback and `seeked` on every discrete jump.
    """

    def __init__(self):
        self._listeners: list[ClockListener] = []

    def subscribe(self, listener: ClockListener) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: ClockEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    @abstractmethod
    def current_time_ms(self) -> float:
        pass

    @abstractmethod
    def seek_to(self, ms: float) -> None:
        pass

    @abstractmethod
    def duration_ms(self) -> float:
        pass


class PlaybackClock(ClockSource):
    """Clock driven by explicit position updates instead of a media element.

    `advance_to` models playback progress: the position always moves, but a
    `timeupdate` is emitted at most once per `tick_interval_ms` of wall time.
    `seek_to` emits `seeked` immediately.

    Attributes:
        tick_interval_ms: Minimum wall time between two timeupdate events.
    """

    def __init__(
        self,
        duration_ms: float = 0,
        tick_interval_ms: float = DEFAULT_TICK_INTERVAL_MS,
        now: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self._duration_ms = max(0.0, float(duration_ms or 0))
        self._position_ms = 0.0
        self._last_emit: float | None = None
        self._now = now
        self.tick_interval_ms = tick_interval_ms

    def current_time_ms(self) -> float:
        return self._position_ms

    def duration_ms(self) -> float:
        return self._duration_ms

    def _clamp(self, ms: float) -> float:
        ms = max(0.0, float(ms))
        if self._duration_ms:
            ms = min(ms, self._duration_ms)
        return ms

    def advance_to(self, ms: float) -> bool:
        """Move the playhead during playback.

        Returns:
            True if a timeupdate was emitted, False if rate-limited.
        """
        self._position_ms = self._clamp(ms)
        now_ms = self._now() * 1000
        if self._last_emit is not None and now_ms - self._last_emit < self.tick_interval_ms:
            return False
        self._last_emit = now_ms
        self._emit(ClockEvent(TIME_UPDATE, self._position_ms))
        return True

    def seek_to(self, ms: float) -> None:
        self._position_ms = self._clamp(ms)
        self._emit(ClockEvent(SEEKED, self._position_ms))


class SyncCoordinator:
    """Fans clock events out to stream handlers in registration order.

    Each handler runs in its own failure domain: an exception is logged and
    the remaining handlers still run.
    """

    def __init__(self, clock: ClockSource):
        self.clock = clock
        self._handlers: list[tuple[str, Callable[[float], object]]] = []
        self._unsubscribe = clock.subscribe(self._on_event)

    def attach(self, name: str, handler: Callable[[float], object]) -> None:
        """Register a stream's recompute (called with the clock position in ms)."""
        self._handlers.append((name, handler))

    def detach(self) -> None:
        """Stop listening to the clock."""
        self._unsubscribe()

    def _on_event(self, event: ClockEvent) -> None:
        for name, handler in self._handlers:
            try:
                handler(event.ms)
            except Exception:
                logger.exception(f"Stream {name} failed to recompute on {event.kind} at {event.ms}ms")


__all__ = ["ClockEvent", "ClockSource", "PlaybackClock", "SyncCoordinator", "TIME_UPDATE", "SEEKED"]
