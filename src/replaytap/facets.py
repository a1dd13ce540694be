"""Facet filtering layered on top of time visibility.

A facet never changes which entries are time-visible; it only decides which
of them are displayed.

PUBLIC API:
  - FacetFilterState: Active facet of one panel
  - Projection: Final per-element visibility
  - console_facet, network_facet: Facet tag of an entry
  - project: Intersect a RevealResult with the facet selection
  - network_summary: Request count line of the network panel
  - NETWORK_TYPE_MAP: Resource type buckets
"""

from dataclasses import dataclass

from replaytap.models import ConsoleEntry, NetworkEntry
from replaytap.reveal import RevealResult

ALL = "all"

NETWORK_TYPE_MAP: dict[str, tuple[str, ...]] = {
    "fetch": ("XHR", "Fetch"),
    "js": ("Script",),
    "css": ("Stylesheet",),
    "img": ("Image",),
    "doc": ("Document",),
    "font": ("Font",),
    "media": ("Media",),
    "ws": ("WebSocket",),
}

CONSOLE_FACETS = (ALL, "log", "info", "warn", "error", "debug", "exception", "browser")
NETWORK_FACETS = (ALL, *NETWORK_TYPE_MAP, "other")


@dataclass
class FacetFilterState:
    """Active facet of one panel ("all" or a facet tag)."""

    active: str = ALL

    def select(self, facet: str | None) -> None:
        self.active = facet or ALL

    def matches(self, facet: str) -> bool:
        return self.active == ALL or self.active == facet


def console_facet(entry: ConsoleEntry) -> str:
    """Facet of a console entry: capture source tag wins over the level."""
    if entry.source in ("exception", "browser"):
        return entry.source
    return entry.level


def network_facet(entry: NetworkEntry) -> str:
    """Coarse resource bucket of a request, "other" when unmapped."""
    for facet, types in NETWORK_TYPE_MAP.items():
        if entry.resource_type in types:
            return facet
    return "other"


@dataclass(frozen=True)
class Projection:
    """Final visibility of every element of a panel.

    Attributes:
        time_hidden: Hidden because the clock has not reached the entry.
        filter_hidden: Time-visible but excluded by the active facet.
        shown_count: Elements neither time- nor filter-hidden.
    """

    time_hidden: tuple[bool, ...]
    filter_hidden: tuple[bool, ...]
    shown_count: int

    def shown(self, index: int) -> bool:
        return not self.time_hidden[index] and not self.filter_hidden[index]


def project(
    reveal: RevealResult | None,
    facets: list[str],
    state: FacetFilterState,
    sticky: int | None = None,
) -> Projection:
    """Intersect time visibility with the facet selection.

    Args:
        reveal: Latest reveal result; None (no clock yet) hides everything by time.
        facets: Facet tag of each element.
        state: Panel facet state.
        sticky: Element exempt from time hiding (an open network detail pane).

    Returns:
        Projection for all elements.
    """
    time_hidden = []
    filter_hidden = []
    shown_count = 0

    for index, facet in enumerate(facets):
        visible = reveal is not None and reveal.visible[index]
        hidden_by_time = not visible and index != sticky
        # Filter state is only evaluated for elements on screen
        hidden_by_facet = not hidden_by_time and not state.matches(facet)
        time_hidden.append(hidden_by_time)
        filter_hidden.append(hidden_by_facet)
        if not hidden_by_time and not hidden_by_facet:
            shown_count += 1

    return Projection(time_hidden=tuple(time_hidden), filter_hidden=tuple(filter_hidden), shown_count=shown_count)


def network_summary(shown: int, total: int, facet: str, ws_count: int = 0) -> str:
    """'{shown}/{total} requests [(facet)] [| N WS]'."""
    text = f"{shown}/{total} requests"
    if facet != ALL:
        text += f" ({facet})"
    if ws_count > 0:
        text += f" | {ws_count} WS"
    return text


__all__ = [
    "ALL",
    "NETWORK_TYPE_MAP",
    "CONSOLE_FACETS",
    "NETWORK_FACETS",
    "FacetFilterState",
    "Projection",
    "console_facet",
    "network_facet",
    "project",
    "network_summary",
]
