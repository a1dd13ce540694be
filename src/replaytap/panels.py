"""Stream panels: pre-rendered elements plus their reveal and facet state.

Each panel owns one PanelState. Clock events drive the reveal engine and
re-project; facet changes only re-project the last reveal result.

Detail panes differ between panels. An open network detail stays on screen
even when the clock rewinds past its request. An open console detail gets
no such exemption and hides with its entry.

PUBLIC API:
  - RenderedElement: One pre-rendered row
  - PanelState: Reveal + facet + open detail of one panel
  - PanelView: Snapshot of what a panel displays
  - StreamPanel: Shared panel logic
  - ConsolePanel, NetworkPanel: Concrete panels
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from replaytap.config import ViewerConfig
from replaytap.facets import (
    FacetFilterState,
    Projection,
    console_facet,
    network_facet,
    network_summary,
    project,
)
from replaytap.models import ConsoleEntry, NetworkEntry, WebSocketConnection
from replaytap.render.console import render_console_detail, render_console_row, row_classes
from replaytap.render.network import render_network_detail, render_network_row, render_websocket_section
from replaytap.reveal import RevealEngine, RevealResult, RevealState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedElement:
    """A row rendered once at build time.

    Attributes:
        index: Position in the panel's sorted stream.
        relative_ms: Time of the entry.
        facet: Facet tag used by the filter.
        html: Inner row markup.
        classes: Base CSS classes of the row.
    """

    index: int
    relative_ms: int
    facet: str
    html: str
    classes: tuple[str, ...]


@dataclass
class PanelState:
    """Mutable state of one panel, owned and mutated only by that panel."""

    reveal: RevealState = field(default_factory=RevealState)
    facet: FacetFilterState = field(default_factory=FacetFilterState)
    open_detail: int | None = None


@dataclass(frozen=True)
class PanelView:
    """What a panel displays after the last event.

    Attributes:
        projection: Final visibility per element.
        active_index: Highlighted element or None.
        scroll_to: Element to scroll into view for this event, or None.
        open_detail: Element with an open detail pane, or None.
    """

    projection: Projection
    active_index: int | None
    scroll_to: int | None
    open_detail: int | None

    @property
    def shown_count(self) -> int:
        return self.projection.shown_count


class StreamPanel(ABC):
    """Shared logic of the console and network panels."""

    name = "stream"
    detail_is_sticky = False

    def __init__(self, entries: Sequence, config: ViewerConfig | None = None):
        self.config = config or ViewerConfig()
        self.entries = list(entries)
        self.elements = [self._render_element(i, e) for i, e in enumerate(self.entries)]
        self.engine = RevealEngine([e.relative_ms for e in self.entries], self.config.proximity_ms)
        self.state = PanelState()
        self._last_reveal: RevealResult | None = None
        self.view = self._project(scroll_to=None)

    @abstractmethod
    def _render_element(self, index: int, entry) -> RenderedElement:
        pass

    @abstractmethod
    def render_detail(self, index: int) -> str:
        pass

    @property
    def facets(self) -> list[str]:
        return [el.facet for el in self.elements]

    def _project(self, scroll_to: int | None) -> PanelView:
        sticky = self.state.open_detail if self.detail_is_sticky else None
        projection = project(self._last_reveal, self.facets, self.state.facet, sticky=sticky)
        return PanelView(
            projection=projection,
            active_index=self.state.reveal.active_index,
            scroll_to=scroll_to,
            open_detail=self.state.open_detail,
        )

    def on_clock(self, clock_ms: float) -> PanelView:
        """Recompute visibility for a tick or seek."""
        reveal = self.engine.advance(clock_ms)
        self._last_reveal = reveal
        self.state.reveal = self.engine.state
        self.view = self._project(scroll_to=reveal.scroll_to)
        return self.view

    def select_facet(self, facet: str | None) -> PanelView:
        """Change the active facet; time visibility is left untouched."""
        self.state.facet.select(facet)
        self.view = self._project(scroll_to=None)
        return self.view

    def toggle_detail(self, index: int) -> PanelView:
        """Open the detail pane of an element, or close it if already open.

        Only one detail pane is open per panel, and only time-visible
        elements can be expanded; closing is always allowed.
        """
        if not 0 <= index < len(self.elements):
            logger.debug(f"{self.name}: ignoring detail toggle for out-of-range index {index}")
            return self.view
        if self.state.open_detail != index and self.view.projection.time_hidden[index]:
            logger.debug(f"{self.name}: ignoring detail toggle for time-hidden index {index}")
            return self.view
        self.state.open_detail = None if self.state.open_detail == index else index
        self.view = self._project(scroll_to=None)
        return self.view


class ConsolePanel(StreamPanel):
    name = "console"

    def _render_element(self, index: int, entry: ConsoleEntry) -> RenderedElement:
        return RenderedElement(
            index=index,
            relative_ms=entry.relative_ms,
            facet=console_facet(entry),
            html=render_console_row(entry),
            classes=tuple(row_classes(entry)),
        )

    def render_detail(self, index: int) -> str:
        return render_console_detail(self.entries[index])


class NetworkPanel(StreamPanel):
    name = "network"
    detail_is_sticky = True

    def __init__(
        self,
        entries: Sequence[NetworkEntry],
        websockets: Sequence[WebSocketConnection] = (),
        config: ViewerConfig | None = None,
    ):
        self.websockets = list(websockets)
        super().__init__(entries, config)

    def _render_element(self, index: int, entry: NetworkEntry) -> RenderedElement:
        return RenderedElement(
            index=index,
            relative_ms=entry.relative_ms,
            facet=network_facet(entry),
            html=render_network_row(entry),
            classes=("network-entry",),
        )

    def render_detail(self, index: int) -> str:
        return render_network_detail(self.entries[index], self.config.body_display_limit)

    def render_websockets(self) -> str:
        return render_websocket_section(self.websockets, self.config.max_ws_frames, self.config.ws_payload_limit)

    @property
    def summary(self) -> str:
        return network_summary(
            self.view.shown_count, len(self.entries), self.state.facet.active, ws_count=len(self.websockets)
        )


__all__ = ["RenderedElement", "PanelState", "PanelView", "StreamPanel", "ConsolePanel", "NetworkPanel"]
