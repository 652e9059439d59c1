"""Shared test fixtures and helpers for cellgraph tests."""

import pytest

from cellgraph import Graph


# --- Helpers ---


def element(cell_id: str, **attrs) -> dict:
    """Attributes of a basic element."""
    return {"id": cell_id, "type": "basic.Rect", **attrs}


def link(cell_id: str, source: str | None, target: str | None, **attrs) -> dict:
    """Attributes of a link; None ends become free points."""
    return {
        "id": cell_id,
        "type": "standard.Link",
        "source": {"id": source} if source else {"x": 0, "y": 0},
        "target": {"id": target} if target else {"x": 0, "y": 0},
        **attrs,
    }


def ids(cells) -> list[str]:
    return [c.id for c in cells]


# --- Fixtures ---


@pytest.fixture
def graph():
    """An empty graph."""
    return Graph()


@pytest.fixture
def chain(graph):
    """a -> b -> c, plus an isolated d.

    Links: ab (a->b), bc (b->c).
    """
    graph.add_cells([
        element("a"),
        element("b"),
        element("c"),
        element("d"),
        link("ab", "a", "b"),
        link("bc", "b", "c"),
    ])
    return graph


@pytest.fixture
def tree(graph):
    """a -> b, a -> c, b -> d, c -> d (diamond)."""
    graph.add_cells([
        element("a"),
        element("b"),
        element("c"),
        element("d"),
        link("ab", "a", "b"),
        link("ac", "a", "c"),
        link("bd", "b", "d"),
        link("cd", "c", "d"),
    ])
    return graph


@pytest.fixture
def recorder(graph):
    """Records every graph event name as (event, batch_name-or-None)."""
    events = []

    def record(event, *args):
        payload = args[0] if args and isinstance(args[0], dict) else {}
        events.append((event, payload.get("batch_name")))

    graph.on("all", record)
    return events
