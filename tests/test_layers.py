"""Tests for z-ordered cell layers."""

import logging

import pytest

from cellgraph import Element, LayerError
from cellgraph.layers import CellLayer

from conftest import element, ids


def test_default_layer_exists(graph):
    assert [layer.id for layer in graph.get_cell_layers()] == ["cells"]
    assert graph.get_default_cell_layer().id == "cells"
    assert graph.cell_layers_controller.implicit


def test_add_cell_layer(graph):
    events = []
    graph.on("layers:add", lambda layer, opt: events.append(layer.id))
    layer = graph.add_cell_layer({"id": "top", "label": "Top"})
    assert layer.attributes == {"label": "Top"}
    assert graph.has_cell_layer("top")
    assert events == ["top"]
    with pytest.raises(LayerError):
        graph.add_cell_layer({"id": "top"})


def test_get_unknown_layer_raises(graph):
    with pytest.raises(LayerError):
        graph.get_cell_layer("nope")


def test_cells_order_follows_layer_order(graph):
    graph.add_cell_layer({"id": "top"})
    graph.add_cells([element("a", layer="top"), element("b"), element("c")])
    assert ids(graph.get_cells()) == ["b", "c", "a"]
    # z is counted per layer
    assert graph.get_cell("a").get("z") == 1
    assert graph.get_cell("c").get("z") == 2


def test_change_layer_moves_cell(graph):
    graph.add_cell_layer({"id": "top"})
    graph.add_cells([element("a"), element("b")])
    graph.get_cell("a").set("layer", "top")
    assert ids(graph.get_cell_layer("cells").cells) == ["b"]
    assert ids(graph.get_cell_layer("top").cells) == ["a"]
    assert graph.get_cell("a").layer() == "top"


def test_change_z_reorders(graph):
    graph.add_cells([element("a"), element("b"), element("c")])
    graph.get_cell("a").set("z", 5)
    assert ids(graph.get_cells()) == ["b", "c", "a"]
    assert graph.max_z_index() == 5
    assert graph.min_z_index() == 2


def test_remove_default_layer_raises(graph):
    with pytest.raises(LayerError):
        graph.remove_cell_layer("cells")


def test_remove_layer_removes_its_cells(graph):
    removed = []
    graph.on("layers:remove", lambda layer, opt: removed.append(layer.id))
    graph.add_cell_layer({"id": "top"})
    graph.add_cells([element("a", layer="top"), element("b")])
    graph.remove_cell_layer("top")
    assert ids(graph.get_cells()) == ["b"]
    assert not graph.has_cell_layer("top")
    assert removed == ["top"]


def test_set_default_cell_layer_moves_unassigned_cells(graph):
    graph.add_cell_layer({"id": "top"})
    graph.add_cell_layer({"id": "back"})
    graph.add_cells([element("a"), element("b", layer="back")])
    graph.set_default_cell_layer("top")
    assert graph.default_cell_layer_id == "top"
    assert ids(graph.get_cell_layer("cells").cells) == []
    assert ids(graph.get_cell_layer("top").cells) == ["a"]
    assert ids(graph.get_cell_layer("back").cells) == ["b"]
    assert graph.get_cell("a").layer() == "top"


def test_reset_cell_layers_replaces_layers(graph):
    graph.add_cell_layer({"id": "top"})
    graph.add_cells([element("a"), element("b", layer="top")])
    graph.reset_cell_layers([{"id": "back"}, {"id": "top"}], default_cell_layer="back")
    assert [layer.id for layer in graph.get_cell_layers()] == ["back", "top"]
    assert ids(graph.get_cell_layer("back").cells) == ["a"]
    assert ids(graph.get_cell_layer("top").cells) == ["b"]


def test_reset_cell_layers_unknown_default_raises(graph):
    with pytest.raises(LayerError):
        graph.reset_cell_layers([{"id": "back"}], default_cell_layer="front")


def test_unknown_layer_on_reset_falls_back(graph, caplog):
    with caplog.at_level(logging.WARNING, logger="cellgraph.layers"):
        graph.reset_cells([element("a", layer="ghost")])
    assert ids(graph.get_default_cell_layer().cells) == ["a"]
    assert "ghost" in caplog.text


def test_reset_sorts_by_z(graph):
    graph.reset_cells([element("a", z=3), element("b", z=1), element("c", z=2)])
    assert ids(graph.get_cells()) == ["b", "c", "a"]


# --- CellLayer ---


def test_cell_layer_equal_z_keeps_insertion_order():
    layer = CellLayer("l")
    first = Element({"id": "1", "z": 1})
    second = Element({"id": "2", "z": 1})
    low = Element({"id": "0", "z": 0})
    layer.add(first)
    layer.add(second)
    layer.add(low)
    assert ids(layer.cells) == ["0", "1", "2"]
    assert layer.min_z_index() == 0
    assert layer.max_z_index() == 1


def test_cell_layer_unsorted_add_appends():
    layer = CellLayer("l")
    layer.add(Element({"id": "1", "z": 5}), sort=False)
    layer.add(Element({"id": "2", "z": 1}), sort=False)
    assert ids(layer.cells) == ["1", "2"]
    layer.sort()
    assert ids(layer.cells) == ["2", "1"]


def test_empty_layer_z_bounds_are_zero():
    layer = CellLayer("l")
    assert layer.max_z_index() == 0
    assert layer.min_z_index() == 0
    assert layer.to_json() == {"id": "l"}
