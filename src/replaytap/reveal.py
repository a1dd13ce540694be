"""Reveal engine: maps the playback clock onto each stream's visible prefix.

Visibility is a pure function of (entry times, clock). It is recomputed from
scratch on every tick or seek, so rewinds hide entries again and the result
never depends on how the clock got to its value.

PUBLIC API:
  - RevealState: Per-stream state (clock, last visible index, active index)
  - RevealResult: Output of one recompute
  - compute_reveal: Pure single-pass recompute
  - RevealEngine: Stateful wrapper adding once-per-tick scroll following
"""

from dataclasses import dataclass
from typing import Sequence

from replaytap.config import DEFAULT_PROXIMITY_MS


@dataclass(frozen=True)
class RevealState:
    """Reveal state of one stream.

    Attributes:
        clock_ms: Clock of the last recompute, None before the first tick.
        visible_up_to: Index of the last visible entry, -1 when none.
        active_index: Entry nearest the clock within the proximity window, or None.
    """

    clock_ms: float | None = None
    visible_up_to: int = -1
    active_index: int | None = None

    @property
    def has_clock(self) -> bool:
        return self.clock_ms is not None


@dataclass(frozen=True)
class RevealResult:
    """Result of one recompute.

    Attributes:
        clock_ms: Clock the result was computed for.
        visible: Per-entry time visibility (relative_ms <= clock).
        last_visible: Index of the last visible entry, -1 when none.
        active_index: Highlighted entry, or None.
        scroll_to: Entry to scroll into view this tick, or None.
    """

    clock_ms: float
    visible: tuple[bool, ...]
    last_visible: int
    active_index: int | None
    scroll_to: int | None = None

    @property
    def visible_count(self) -> int:
        return sum(self.visible)

    def visible_indices(self) -> list[int]:
        return [i for i, shown in enumerate(self.visible) if shown]


def compute_reveal(times: Sequence[float], clock_ms: float, proximity_ms: float = DEFAULT_PROXIMITY_MS) -> RevealResult:
    """Compute time visibility and the active entry in one pass.

    Args:
        times: relative_ms of each entry, in stream order.
        clock_ms: Current playback position.
        proximity_ms: The nearest visible entry is active only when closer than this.

    Returns:
        RevealResult without a scroll target.
    """
    visible = []
    last_visible = -1
    closest_index = -1
    closest_dist = float("inf")

    for index, relative_ms in enumerate(times):
        if relative_ms <= clock_ms:
            visible.append(True)
            last_visible = index
            dist = abs(relative_ms - clock_ms)
            if dist < closest_dist:
                closest_dist = dist
                closest_index = index
        else:
            visible.append(False)

    active = closest_index if closest_index >= 0 and closest_dist < proximity_ms else None
    return RevealResult(clock_ms=clock_ms, visible=tuple(visible), last_visible=last_visible, active_index=active)


class RevealEngine:
    """Per-stream reveal state machine (no-clock -> revealed-prefix).

    Attributes:
        times: relative_ms of each entry.
        proximity_ms: Active highlight window.
        state: Current RevealState.
    """

    def __init__(self, times: Sequence[float], proximity_ms: float = DEFAULT_PROXIMITY_MS):
        self.times = tuple(times)
        self.proximity_ms = proximity_ms
        self.state = RevealState()

    def advance(self, clock_ms: float) -> RevealResult:
        """Recompute for a tick or seek.

        The last visible entry becomes the scroll target only when it differs
        from the previous tick's, so a seek revealing many entries scrolls once.
        """
        result = compute_reveal(self.times, clock_ms, self.proximity_ms)

        scroll_to = None
        if result.last_visible >= 0 and result.last_visible != self.state.visible_up_to:
            scroll_to = result.last_visible

        self.state = RevealState(
            clock_ms=clock_ms,
            visible_up_to=result.last_visible,
            active_index=result.active_index,
        )
        return RevealResult(
            clock_ms=result.clock_ms,
            visible=result.visible,
            last_visible=result.last_visible,
            active_index=result.active_index,
            scroll_to=scroll_to,
        )

    def reset(self) -> None:
        self.state = RevealState()


__all__ = ["RevealState", "RevealResult", "compute_reveal", "RevealEngine"]
