"""Layers: named z-order partitions of the graph's cells.

Every cell lives in exactly one layer (its `layer` attribute, or the graph's
default layer). Within a layer cells are kept ordered by `z`; the graph's
overall cell order is the layers' order followed by each layer's z order.
"""

from __future__ import annotations

import bisect
import logging
from typing import TYPE_CHECKING, Any, Iterable

from .cells import Cell
from .constants import DEFAULT_LAYER_ID, LAYER_ATTRIBUTE
from .models import LayerError, LayerSpec

if TYPE_CHECKING:
    from .graph import Graph

logger = logging.getLogger(__name__)


def _z(cell: Cell) -> float:
    return cell.get("z") or 0


class CellLayer:
    """Cells of one layer, ordered by z."""

    def __init__(self, layer_id: str, attributes: dict[str, Any] | None = None):
        self.id = layer_id
        self.attributes = dict(attributes or {})
        self.cells: list[Cell] = []

    def __repr__(self) -> str:
        return f"CellLayer(id={self.id!r}, cells={len(self.cells)})"

    def __len__(self) -> int:
        return len(self.cells)

    def max_z_index(self) -> float:
        return _z(self.cells[-1]) if self.cells else 0

    def min_z_index(self) -> float:
        return _z(self.cells[0]) if self.cells else 0

    def add(self, cell: Cell, sort: bool = True) -> None:
        if sort:
            # Equal z keeps insertion order
            self.cells.insert(bisect.bisect_right(self.cells, _z(cell), key=_z), cell)
        else:
            self.cells.append(cell)

    def remove(self, cell: Cell) -> None:
        try:
            self.cells.remove(cell)
        except ValueError:
            logger.debug(f"Cell {cell.id} not in layer {self.id}")

    def sort(self) -> None:
        self.cells.sort(key=_z)

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, **self.attributes}


class CellLayersController:
    """Assigns cells to layers by reacting to graph notifications."""

    def __init__(self, graph: Graph, default_layer_id: str = DEFAULT_LAYER_ID):
        self.graph = graph
        self._layers: dict[str, CellLayer] = {default_layer_id: CellLayer(default_layer_id)}
        self.default_cell_layer_id = default_layer_id
        # True while only the built-in default layer exists
        self.implicit = True
        self._cell_layer: dict[str, str] = {}

        graph.on("add", self._on_add)
        graph.on("remove", self._on_remove)
        graph.on("reset", self._on_reset)
        graph.on(f"change:{LAYER_ATTRIBUTE}", self._on_change_layer)
        graph.on("change:z", self._on_change_z)

    # --- Queries ---

    def has_cell_layer(self, layer_id: str) -> bool:
        return layer_id in self._layers

    def get_cell_layer(self, layer_id: str | None = None) -> CellLayer:
        layer_id = layer_id or self.default_cell_layer_id
        if layer_id not in self._layers:
            raise LayerError(f"Layer {layer_id!r} does not exist.")
        return self._layers[layer_id]

    def get_cell_layers(self) -> list[CellLayer]:
        return list(self._layers.values())

    def get_default_cell_layer(self) -> CellLayer:
        return self._layers[self.default_cell_layer_id]

    def get_cells(self) -> list[Cell]:
        return [cell for layer in self._layers.values() for cell in layer.cells]

    def layer_of(self, cell: Cell) -> CellLayer | None:
        layer_id = self._cell_layer.get(cell.id)
        return self._layers.get(layer_id) if layer_id else None

    def max_z_index(self, layer_id: str | None = None) -> float:
        return self.get_cell_layer(layer_id).max_z_index()

    def min_z_index(self, layer_id: str | None = None) -> float:
        return self.get_cell_layer(layer_id).min_z_index()

    # --- Layer management ---

    def add_cell_layer(self, layer: CellLayer | LayerSpec | dict, **opt: Any) -> CellLayer:
        layer = self._make_layer(layer)
        if layer.id in self._layers:
            raise LayerError(f"Layer {layer.id!r} already exists.")
        self._layers[layer.id] = layer
        self.implicit = False
        self.graph.trigger("layers:add", layer, opt)
        return layer

    def remove_cell_layer(self, layer_id: str, **opt: Any) -> None:
        """Remove a layer together with its cells."""
        if layer_id == self.default_cell_layer_id:
            raise LayerError("Cannot remove the default layer.")
        layer = self.get_cell_layer(layer_id)
        if layer.cells:
            self.graph.remove_cells(list(layer.cells), **opt)
        del self._layers[layer_id]
        self.graph.trigger("layers:remove", layer, opt)

    def set_default_cell_layer(self, layer_id: str, **opt: Any) -> None:
        """Make `layer_id` the default; cells without a layer move there."""
        new_default = self.get_cell_layer(layer_id)
        old_default = self.get_default_cell_layer()
        if new_default is old_default:
            return
        self.default_cell_layer_id = layer_id
        self.implicit = False
        movers = [c for c in old_default.cells if not c.get(LAYER_ATTRIBUTE)]
        for cell in movers:
            old_default.remove(cell)
            new_default.add(cell)
            self._cell_layer[cell.id] = layer_id
        self.graph.trigger("layers:default", new_default, opt)

    def reset_cell_layers(
        self,
        layers: Iterable[CellLayer | LayerSpec | dict],
        default_cell_layer: str | None = None,
        **opt: Any,
    ) -> None:
        """Replace all layers and re-place every cell of the graph."""
        new_layers = [self._make_layer(layer) for layer in layers]
        if not new_layers:
            new_layers = [CellLayer(default_cell_layer or DEFAULT_LAYER_ID)]
        by_id = {layer.id: layer for layer in new_layers}

        if default_cell_layer is None:
            default_id = (
                self.default_cell_layer_id
                if self.default_cell_layer_id in by_id
                else new_layers[0].id
            )
        elif default_cell_layer in by_id:
            default_id = default_cell_layer
        else:
            raise LayerError(f"Default layer {default_cell_layer!r} does not exist.")

        self._layers = by_id
        self.default_cell_layer_id = default_id
        self.implicit = False
        self._place_all(self.graph.cell_collection)
        self.graph.trigger("layers:reset", self.get_cell_layers(), opt)

    def to_json(self) -> list[dict[str, Any]]:
        return [layer.to_json() for layer in self._layers.values()]

    # --- Notifications ---

    def _on_add(self, cell: Cell, collection: Any, opt: dict) -> None:
        self._place(cell, sort=opt.get("sort") is not False)

    def _on_remove(self, cell: Cell, *_: Any) -> None:
        layer_id = self._cell_layer.pop(cell.id, None)
        if layer_id in self._layers:
            self._layers[layer_id].remove(cell)

    def _on_reset(self, collection: Iterable[Cell], *_: Any) -> None:
        self._place_all(collection)

    def _on_change_layer(self, cell: Cell, value: Any, opt: dict) -> None:
        if cell.id not in self._cell_layer:
            return
        self._on_remove(cell)
        self._place(cell, sort=opt.get("sort") is not False)

    def _on_change_z(self, cell: Cell, value: Any, opt: dict) -> None:
        layer = self.layer_of(cell)
        if layer is None or opt.get("sort") is False:
            return
        layer.remove(cell)
        layer.add(cell)

    # --- Internals ---

    def _place(self, cell: Cell, sort: bool = True) -> None:
        layer_id = cell.get(LAYER_ATTRIBUTE) or self.default_cell_layer_id
        if layer_id not in self._layers:
            logger.warning(
                f"Cell {cell.id} names unknown layer {layer_id!r}, "
                f"placing it in {self.default_cell_layer_id!r}"
            )
            layer_id = self.default_cell_layer_id
        self._layers[layer_id].add(cell, sort=sort)
        self._cell_layer[cell.id] = layer_id

    def _place_all(self, cells: Iterable[Cell]) -> None:
        for layer in self._layers.values():
            layer.cells = []
        self._cell_layer = {}
        for cell in cells:
            self._place(cell, sort=False)
        for layer in self._layers.values():
            layer.sort()

    @staticmethod
    def _make_layer(layer: CellLayer | LayerSpec | dict) -> CellLayer:
        if isinstance(layer, CellLayer):
            return layer
        layer_spec = layer if isinstance(layer, LayerSpec) else LayerSpec.model_validate(layer)
        return CellLayer(layer_spec.id, layer_spec.model_extra)
