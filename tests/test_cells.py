"""Tests for cell models: attributes, events, embedding and geometry."""

import pytest

from cellgraph import CellKind, Element, Link, create_cell
from cellgraph.geometry import Point

from conftest import element, ids, link


# ─────────────────────────────────────────────────────────────────────────────
# Attributes and change events
# ─────────────────────────────────────────────────────────────────────────────


class TestAttributes:
    """Tests for set / unset / previous / prop."""

    def test_generated_id(self):
        cell = Element({"type": "basic.Rect"})
        assert len(cell.id) == 26

    def test_defaults_are_not_shared(self):
        a = Element({"type": "t"})
        b = Element({"type": "t"})
        a.get("position")["x"] = 99
        assert b.get("position") == {"x": 0, "y": 0}

    def test_set_emits_per_key_then_change(self):
        cell = Element({"id": "a", "type": "t"})
        events = []
        cell.on("all", lambda event, *args: events.append(event))
        cell.set({"label": "A", "angle": 0, "z": 3})
        assert events == ["change:label", "change:z", "change"]

    def test_set_without_changes_is_quiet(self):
        cell = Element({"id": "a", "type": "t", "label": "A"})
        events = []
        cell.on("all", lambda event, *args: events.append(event))
        cell.set("label", "A")
        assert events == []

    def test_silent_set(self):
        cell = Element({"id": "a", "type": "t"})
        events = []
        cell.on("all", lambda event, *args: events.append(event))
        cell.set("label", "A", silent=True)
        assert events == []
        assert cell.get("label") == "A"

    def test_previous_and_changed(self):
        cell = Element({"id": "a", "type": "t", "label": "old"})
        cell.set("label", "new")
        assert cell.previous("label") == "old"
        assert cell.has_changed("label")
        assert not cell.has_changed("type")
        assert cell.changed_attributes() == {"label": "new"}

    def test_unset(self):
        cell = Element({"id": "a", "type": "t", "label": "A"})
        seen = []
        cell.on("change:label", lambda c, value, opt: seen.append(value))
        cell.unset("label")
        assert not cell.has("label")
        assert "label" not in cell.attributes
        assert seen == [None]

    def test_id_cannot_change(self):
        cell = Element({"id": "a", "type": "t"})
        with pytest.raises(ValueError):
            cell.set("id", "b")

    def test_set_key_without_value_rejected(self):
        cell = Element({"id": "a", "type": "t", "z": 1})
        with pytest.raises(TypeError, match="No value given"):
            cell.set("z")
        assert cell.get("z") == 1

    def test_prop_reads_and_writes_nested(self):
        cell = Element({"id": "a", "type": "t", "attrs": {"body": {"fill": "red"}}})
        assert cell.prop("attrs/body/fill") == "red"
        assert cell.prop("attrs/label/text") is None
        cell.prop(["attrs", "label", "text"], "hi")
        assert cell.get("attrs") == {"body": {"fill": "red"}, "label": {"text": "hi"}}

    def test_to_json_is_a_copy(self):
        cell = Element({"id": "a", "type": "t"})
        data = cell.to_json()
        data["position"]["x"] = 50
        assert cell.get("position") == {"x": 0, "y": 0}


# ─────────────────────────────────────────────────────────────────────────────
# Variants
# ─────────────────────────────────────────────────────────────────────────────


def test_create_cell_picks_variant():
    assert create_cell({"type": "x"}).kind is CellKind.ELEMENT
    assert create_cell({"type": "x", "source": {"id": "a"}}).kind is CellKind.LINK


def test_link_endpoints_are_normalized():
    l = Link({"type": "t", "source": {"id": "a", "port": "out", "anchor": {"name": "center"}}, "target": None})
    assert l.source() == {"id": "a", "port": "out", "anchor": {"name": "center"}}
    assert l.target() == {"x": 0, "y": 0}


def test_link_set_source_accepts_cell():
    a = Element({"id": "a", "type": "t"})
    l = Link({"type": "t"})
    l.set_source(a)
    assert l.source() == {"id": "a"}


def test_clone_has_new_id_and_no_embedding():
    cell = Element({"id": "a", "type": "t", "parent": "p", "embeds": ["c"], "label": "A"})
    clone = cell.clone()
    assert clone.id != "a"
    assert clone.get("label") == "A"
    assert clone.get("parent") is None
    assert clone.get("embeds") is None
    assert isinstance(clone, Element)


# ─────────────────────────────────────────────────────────────────────────────
# Embedding
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def family(graph):
    graph.add_cells([element("g"), element("p"), element("c"), element("other")])
    graph.get_cell("g").embed(graph.get_cell("p"))
    graph.get_cell("p").embed(graph.get_cell("c"))
    return graph


class TestEmbedding:
    """Tests for embed / unembed and ancestry."""

    def test_ancestry(self, family):
        c = family.get_cell("c")
        assert ids(c.get_ancestors()) == ["p", "g"]
        assert c.is_embedded_in(family.get_cell("g"))
        assert not c.is_embedded_in(family.get_cell("g"), deep=False)
        assert c.get_parent_cell() is family.get_cell("p")

    def test_embedded_cells(self, family):
        g = family.get_cell("g")
        assert ids(g.get_embedded_cells()) == ["p"]
        assert ids(g.get_embedded_cells(deep=True)) == ["p", "c"]
        assert ids(g.get_embedded_cells(deep=True, breadth_first=True)) == ["p", "c"]

    def test_embedded_cells_breadth_first_order(self, family):
        g = family.get_cell("g")
        g.embed(family.get_cell("other"))
        assert ids(g.get_embedded_cells(deep=True)) == ["p", "c", "other"]
        assert ids(g.get_embedded_cells(deep=True, breadth_first=True)) == ["p", "other", "c"]

    def test_recursive_embedding_rejected(self, family):
        with pytest.raises(ValueError, match="Recursive embedding"):
            family.get_cell("c").embed(family.get_cell("g"))
        with pytest.raises(ValueError, match="Recursive embedding"):
            family.get_cell("c").embed(family.get_cell("c"))

    def test_embedding_embedded_cell_needs_reparent(self, family):
        other = family.get_cell("other")
        c = family.get_cell("c")
        with pytest.raises(ValueError, match="already embedded"):
            other.embed(c)
        other.embed(c, reparent=True)
        assert c.get("parent") == "other"
        assert family.get_cell("p").get("embeds") is None

    def test_unembed(self, family):
        p, c = family.get_cell("p"), family.get_cell("c")
        p.unembed(c)
        assert not c.is_embedded()
        assert p.get("embeds") is None

    def test_embed_runs_in_batch(self, graph, recorder):
        graph.add_cells([element("p"), element("c")])
        recorder.clear()
        graph.get_cell("p").embed(graph.get_cell("c"))
        assert recorder[0] == ("batch:start", "embed")
        assert recorder[-1] == ("batch:stop", "embed")


# ─────────────────────────────────────────────────────────────────────────────
# Geometry
# ─────────────────────────────────────────────────────────────────────────────


def test_element_bbox_with_rotation():
    cell = Element({"type": "t", "position": {"x": 0, "y": 0}, "size": {"width": 20, "height": 10}, "angle": 90})
    bbox = cell.get_bbox()
    assert (bbox.width, bbox.height) == (20, 10)
    rotated = cell.get_bbox(rotate=True)
    assert rotated.width == pytest.approx(10)
    assert rotated.height == pytest.approx(20)
    assert rotated.center().x == pytest.approx(10)


def test_element_translate_moves_embeds(graph):
    graph.add_cells([
        element("p", position={"x": 0, "y": 0}),
        element("c", position={"x": 5, "y": 5}),
    ])
    graph.get_cell("p").embed(graph.get_cell("c"))
    graph.get_cell("p").translate(10, 0)
    assert graph.get_cell("p").get("position") == {"x": 10, "y": 0}
    assert graph.get_cell("c").get("position") == {"x": 15, "y": 5}


def test_element_scale_about_origin():
    cell = Element({"type": "t", "position": {"x": 10, "y": 10}, "size": {"width": 10, "height": 10}})
    cell.scale(2, 3, Point(0, 0))
    assert cell.get("position") == {"x": 20, "y": 30}
    assert cell.get("size") == {"width": 20, "height": 30}


def test_link_bbox_uses_cell_centers_and_vertices(graph):
    graph.add_cells([
        element("a", position={"x": 0, "y": 0}, size={"width": 10, "height": 10}),
        element("b", position={"x": 90, "y": 0}, size={"width": 10, "height": 10}),
        link("ab", "a", "b", vertices=[{"x": 50, "y": 40}]),
    ])
    bbox = graph.get_cell("ab").get_bbox()
    assert (bbox.x, bbox.y, bbox.width, bbox.height) == (5, 5, 90, 35)


def test_link_translate_moves_free_ends_only(graph):
    graph.add_cells([element("a"), link("l", "a", None, vertices=[{"x": 1, "y": 1}])])
    l = graph.get_cell("l")
    l.translate(10, 10)
    assert l.get("source") == {"id": "a"}
    assert l.get("target") == {"x": 10, "y": 10}
    assert l.get("vertices") == [{"x": 11, "y": 11}]


def test_self_loop_has_loop(graph):
    graph.add_cells([element("a"), link("loop", "a", "a"), link("ab", "a", None)])
    assert graph.get_cell("loop").has_loop()
    assert not graph.get_cell("ab").has_loop()
