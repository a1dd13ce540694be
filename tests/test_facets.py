"""Tests for facet classification and projection."""

from replaytap.facets import (
    FacetFilterState,
    console_facet,
    network_facet,
    network_summary,
    project,
)
from replaytap.models import ConsoleEntry, ConsoleFormat, NetworkEntry
from replaytap.reveal import compute_reveal


def console(raw: dict) -> ConsoleEntry:
    variant = ConsoleFormat.CAPTURE if "source" in raw else ConsoleFormat.LEGACY
    return ConsoleEntry(raw=raw, relative_ms=0, order=0, variant=variant)


def test_console_facet_precedence() -> None:
    assert console_facet(console({"source": "exception", "level": "warn"})) == "exception"
    assert console_facet(console({"source": "browser", "level": "error"})) == "browser"
    assert console_facet(console({"source": "console", "level": "warn"})) == "warn"
    assert console_facet(console({"level": "error"})) == "error"
    assert console_facet(console({})) == "log"


def test_network_facet_table() -> None:
    facets = {
        "XHR": "fetch",
        "Fetch": "fetch",
        "Script": "js",
        "Stylesheet": "css",
        "Image": "img",
        "Document": "doc",
        "Font": "font",
        "Media": "media",
        "WebSocket": "ws",
        "Ping": "other",
        "": "other",
    }
    for resource_type, facet in facets.items():
        entry = NetworkEntry(raw={"resourceType": resource_type}, relative_ms=0, order=0)
        assert network_facet(entry) == facet


def test_projection_is_intersection() -> None:
    reveal = compute_reveal([0, 500, 2000], 600)
    facets = ["log", "error", "log"]

    everything = project(reveal, facets, FacetFilterState())
    errors = project(reveal, facets, FacetFilterState("error"))

    assert everything.time_hidden == errors.time_hidden == (False, False, True)
    assert [everything.shown(i) for i in range(3)] == [True, True, False]
    assert [errors.shown(i) for i in range(3)] == [False, True, False]
    assert errors.shown_count == 1


def test_no_clock_hides_everything() -> None:
    projection = project(None, ["log", "log"], FacetFilterState())
    assert projection.time_hidden == (True, True)
    assert projection.shown_count == 0


def test_sticky_element_escapes_time_hiding_but_not_facet() -> None:
    reveal = compute_reveal([0, 5000], 100)
    facets = ["js", "fetch"]

    projection = project(reveal, facets, FacetFilterState(), sticky=1)
    assert projection.time_hidden == (False, False)
    assert projection.shown_count == 2

    filtered = project(reveal, facets, FacetFilterState("js"), sticky=1)
    assert filtered.filter_hidden == (False, True)


def test_select_none_resets_to_all() -> None:
    state = FacetFilterState("css")
    state.select(None)
    assert state.active == "all"


def test_network_summary() -> None:
    assert network_summary(3, 10, "all") == "3/10 requests"
    assert network_summary(1, 10, "img", ws_count=2) == "1/10 requests (img) | 2 WS"
