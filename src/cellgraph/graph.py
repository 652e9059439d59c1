"""Graph - orchestrates the cell collection, adjacency index, layers and batches.

The graph owns one CellCollection. Every structural change to that
collection (add, remove, reset, link source/target change) is reflected in
the AdjacencyIndex synchronously, before any other observer hears about it.
Multi-cell operations run inside named batches so observers can coalesce
their work.

Performance: adjacency queries (inbound/outbound edges, is_source/is_sink)
are O(1); neighbor queries are O(degree); sources/sinks are O(|nodes|);
reset is the only full rebuild.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from contextlib import AbstractContextManager
from typing import Any, Iterable, Iterator

from .batches import BatchTracker
from .cells import Cell, CellKind, CellNamespace, Link
from .collection import CellCollection
from .constants import (
    BATCH_ADD,
    BATCH_CLEAR,
    BATCH_REMOVE,
    BATCH_REPLACE_CELL,
    BATCH_RESET,
    BATCH_SYNC_CELLS,
    BATCH_TRANSFER_CONNECTED_LINKS,
    BATCH_TRANSFER_EMBEDS,
    DEFAULT_LAYER_ID,
    DISCONNECTED_POINT,
    LAYER_ATTRIBUTE,
)
from .events import Events
from .geometry import Point, Rect
from .index import AdjacencyIndex
from .layers import CellLayer, CellLayersController
from .models import CellTypeError, GraphDocument, LayerSpec, endpoint_id
from .query import Iteratee, TraversalService
from .subgraph import clone_cells, clone_subgraph, get_subgraph

logger = logging.getLogger(__name__)

CellInit = Cell | dict[str, Any]


def _flatten(items: Iterable[Any]) -> Iterator[Any]:
    for item in items:
        if isinstance(item, (list, tuple)):
            yield from _flatten(item)
        else:
            yield item


def _attributes_of(cell: CellInit) -> dict[str, Any]:
    return cell.attributes if isinstance(cell, Cell) else cell


class Graph(Events):
    """Main entry point for cell graph operations.

    Thread-safety: single-threaded and synchronous. Observers run on the
    caller's stack; callbacks used for querying must not mutate the graph.
    """

    def __init__(
        self,
        attributes: dict[str, Any] | None = None,
        cell_namespace: CellNamespace | None = None,
        default_layer_id: str = DEFAULT_LAYER_ID,
    ):
        super().__init__()
        self.attributes: dict[str, Any] = dict(attributes or {})

        self.cell_collection = CellCollection(self, cell_namespace)
        self._index = AdjacencyIndex()
        self._batches = BatchTracker(self.trigger)
        # Ids of links already scheduled by an outer remove_links
        self._cascading: set[str] = set()

        collection = self.cell_collection
        # Index first: observers below always see an up-to-date index
        collection.on("add", self._index.on_add)
        collection.on("remove", self._index.on_remove)
        collection.on("reset", self._index.on_reset)
        collection.on("change:source", self._index.on_change_source)
        collection.on("change:target", self._index.on_change_target)
        # Make every collection event available on the graph
        collection.on("all", self.trigger)
        collection.on("remove", self._remove_cell)

        self.cell_layers_controller = CellLayersController(self, default_layer_id)

        # Query service - all read-only traversal delegated here
        self._query = TraversalService(get_cell=self.get_cell, index=self._index)

    def __len__(self) -> int:
        return len(self.cell_collection)

    def __contains__(self, item: object) -> bool:
        return item in self.cell_collection

    @property
    def index(self) -> AdjacencyIndex:
        """The adjacency index (read-only use)."""
        return self._index

    # --- Graph attributes ---

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def set(self, attrs: dict[str, Any], **opt: Any) -> "Graph":
        changed = [k for k, v in attrs.items() if self.attributes.get(k) != v]
        self.attributes.update(attrs)
        if not opt.get("silent") and changed:
            for key in changed:
                self.trigger(f"change:{key}", self, self.attributes[key], opt)
            self.trigger("change", self, opt)
        return self

    # --- Batches ---

    def start_batch(self, name: str, **data: Any) -> None:
        self._batches.start_batch(name, **data)

    def stop_batch(self, name: str, **data: Any) -> None:
        self._batches.stop_batch(name, **data)

    def has_active_batch(self, name: str | Iterable[str] | None = None) -> bool:
        return self._batches.has_active_batch(name)

    def batch(self, name: str, **data: Any) -> AbstractContextManager[None]:
        """Context manager pairing start_batch/stop_batch."""
        return self._batches.batch(name, **data)

    # --- Cell lifecycle ---

    def _prepare_cell(self, cell: CellInit, ensure_z_index: bool = False) -> CellInit:
        """Validate a cell and optionally give it a z above its layer's top."""
        attrs = _attributes_of(cell)
        if not isinstance(attrs, dict) or not isinstance(attrs.get("type"), str):
            raise CellTypeError("Cell type must be a string.")

        if ensure_z_index:
            layer = self.get_cell_layer(attrs.get(LAYER_ATTRIBUTE) or self.default_cell_layer_id)
            if isinstance(cell, Cell):
                if not cell.has("z"):
                    cell.set("z", layer.max_z_index() + 1)
            elif cell.get("z") is None:
                cell = {**cell, "z": layer.max_z_index() + 1}

        return cell

    def add_cell(self, cell: CellInit | list, **opt: Any) -> Cell | list[Cell]:
        """Add one cell (or delegate a list to add_cells).

        Returns the cell now stored under that id.
        """
        if isinstance(cell, (list, tuple)):
            return self.add_cells(cell, **opt)

        prepared = self.cell_collection.prepare(self._prepare_cell(cell, ensure_z_index=True))
        self.cell_collection.add(prepared, **opt)
        return self.get_cell(prepared.id) or prepared

    def add_cells(self, cells: Iterable[CellInit], **opt: Any) -> list[Cell]:
        """Add many cells inside an "add" batch.

        Each add carries `position` (len-1 down to 0) and `max_position`
        hints in its options.
        """
        cells = list(_flatten(cells))
        if not cells:
            return []

        opt = dict(opt)
        opt["max_position"] = opt["position"] = len(cells) - 1
        added: list[Cell] = []
        with self.batch(BATCH_ADD, **opt):
            for cell in cells:
                added.append(self.add_cell(cell, **opt))
                opt["position"] -= 1
        return added

    def reset_cells(self, cells: Iterable[CellInit], **opt: Any) -> "Graph":
        """Replace every cell in one go (bulk load).

        Existing z values are kept; none are assigned. All cells are
        validated before the collection is touched.
        """
        with self.batch(BATCH_RESET, **opt):
            prepared = [self._prepare_cell(c, ensure_z_index=False) for c in _flatten(cells)]
            self.cell_collection.reset(prepared, **opt)
        return self

    def remove_cells(self, cells: Iterable[Cell], **opt: Any) -> "Graph":
        cells = list(cells)
        if cells:
            with self.batch(BATCH_REMOVE):
                for cell in cells:
                    cell.remove(**opt)
        return self

    def replace_cell(self, current: Cell, replacement: CellInit, **opt: Any) -> Cell:
        """Swap `current` for a cell built from the merged attributes.

        Connected links and embedded cells of `current` are kept: the removal
        is announced with `clear` and `replace` so no cascade happens.
        Replacement attributes win over the current ones.
        """
        with self.batch(BATCH_REPLACE_CELL, **opt):
            current.trigger(
                "remove", current, current.collection, {**opt, "clear": True, "replace": True}
            )
            merged = {**current.attributes, **_attributes_of(replacement)}
            if isinstance(replacement, Cell):
                replacement.set(merged, **opt)
                target: CellInit = replacement
            else:
                target = merged
            return self.add_cell(target, **{**opt, "replace": True})

    def sync_cell(
        self,
        cell_init: CellInit,
        changed_layers: set[str] | None = None,
        **opt: Any,
    ) -> Cell:
        """Upsert one cell by id.

        Same id and type (or no type given): sparse patch of the attributes.
        Same id, different type: replace_cell. Unknown id: add_cell.
        Layers whose z order may need re-sorting are added to `changed_layers`.
        """
        attrs = _attributes_of(cell_init)
        current = self.get_cell(attrs.get("id"))

        if current is None:
            cell = self.add_cell(cell_init, **opt)
            if changed_layers is not None:
                changed_layers.add(cell.layer())
            return cell

        if "type" in attrs and current.get("type") != attrs["type"]:
            cell = self.replace_cell(current, cell_init, **opt)
            if changed_layers is not None:
                changed_layers.add(cell.layer())
            return cell

        reorders = any(
            key in attrs and attrs[key] != current.get(key) for key in ("z", LAYER_ATTRIBUTE)
        )
        # Attributes missing from `attrs` are left alone
        current.set(attrs, **opt)
        if changed_layers is not None and reorders:
            changed_layers.add(current.layer())
        return current

    def sync_cells(
        self,
        cell_inits: Iterable[CellInit],
        remove: bool = False,
        sort: bool = True,
        **opt: Any,
    ) -> "Graph":
        """Synchronize the graph with `cell_inits`.

        Args:
            cell_inits: Cells (or attribute dicts) to upsert by id
            remove: Also remove graph cells whose id is not in `cell_inits`
            sort: Re-sort each affected layer once, after all upserts
        """
        cell_inits = list(cell_inits)
        current_cells = self.get_cells() if remove else []
        incoming_ids: set[Any] = set()
        changed_layers: set[str] | None = set() if sort else None
        # Prevent a sort per mutation; affected layers are sorted once below
        set_opt = {**opt, "sort": False}

        with self.batch(BATCH_SYNC_CELLS, **opt):
            for cell_init in cell_inits:
                if remove:
                    incoming_ids.add(_attributes_of(cell_init).get("id"))
                self.sync_cell(cell_init, changed_layers, **set_opt)

            removed = 0
            if remove:
                for cell in current_cells:
                    # Cascades may already have taken it out
                    if cell.id not in incoming_ids and cell.graph is self:
                        cell.remove(**set_opt)
                        removed += 1

            for layer_id in changed_layers or ():
                if layer_id and self.has_cell_layer(layer_id):
                    self.get_cell_layer(layer_id).sort()

        logger.debug(
            f"Synced {len(cell_inits)} cells, removed {removed}, "
            f"sorted layers {sorted(changed_layers or ())}"
        )
        return self

    def clear(self, **opt: Any) -> "Graph":
        """Remove every cell, links first, without link cascades."""
        opt = {**opt, "clear": True}
        if not len(self.cell_collection):
            return self

        with self.batch(BATCH_CLEAR, **opt):
            # Links go first so removing elements has nothing left to cascade
            cells = sorted(
                self.cell_collection, key=lambda c: 0 if c.kind is CellKind.LINK else 1
            )
            for cell in cells:
                cell.remove(**opt)
        return self

    def _remove_cell(self, cell: Cell, collection: Any, opt: dict[str, Any]) -> None:
        """React to a cell announcing its removal."""
        if not opt.get("clear") and cell.id not in self._cascading:
            if opt.get("disconnect_links"):
                self.disconnect_links(cell, **opt)
            else:
                self.remove_links(cell, **opt)
        # Silently: the cell already announced its own removal
        self.cell_collection.remove(cell, silent=True)

    def disconnect_links(self, cell: Cell, **opt: Any) -> None:
        """Park every end of a connected link that points at `cell`."""
        for link in self.get_connected_links(cell):
            for end in ("source", "target"):
                if endpoint_id(link.get(end)) == cell.id:
                    link.set(end, dict(DISCONNECTED_POINT), **opt)

    def remove_links(self, cell: Cell, **opt: Any) -> None:
        """Remove every link connected to `cell`, and every link attached to those."""
        links = self._collect_cascade(cell)
        link_ids = {link.id for link in links}
        self._cascading |= link_ids
        try:
            for link in links:
                # Embedded removals may have taken it out already
                if link.graph is self:
                    link.remove(**opt)
        finally:
            self._cascading -= link_ids

    def _collect_cascade(self, cell: Cell) -> list[Cell]:
        """Links removed along with `cell`, nearest first."""
        links: list[Cell] = []
        seen = {cell.id}
        queue = deque([cell])
        while queue:
            current = queue.popleft()
            for link in self.get_connected_links(current):
                if link.id not in seen:
                    seen.add(link.id)
                    links.append(link)
                    queue.append(link)
        return links

    def transfer_cell_embeds(self, source: Cell, target: Cell, **opt: Any) -> None:
        """Re-embed all children of `source` into `target`."""
        with self.batch(BATCH_TRANSFER_EMBEDS):
            children = source.get_embedded_cells()
            if children:
                target.embed(children, **{**opt, "reparent": True})

    def transfer_cell_connected_links(self, source: Cell, target: Cell, **opt: Any) -> None:
        """Reconnect every link attached to `source` to `target`."""
        with self.batch(BATCH_TRANSFER_CONNECTED_LINKS):
            for link in self.get_connected_links(source):
                if endpoint_id(link.get("source")) == source.id:
                    link.prop(["source", "id"], target.id, **opt)
                if endpoint_id(link.get("target")) == source.id:
                    link.prop(["target", "id"], target.id, **opt)

    # --- Layers ---

    @property
    def default_cell_layer_id(self) -> str:
        return self.cell_layers_controller.default_cell_layer_id

    def add_cell_layer(self, layer: CellLayer | LayerSpec | dict, **opt: Any) -> CellLayer:
        return self.cell_layers_controller.add_cell_layer(layer, **opt)

    def remove_cell_layer(self, layer: CellLayer | str, **opt: Any) -> None:
        layer_id = layer.id if isinstance(layer, CellLayer) else layer
        self.cell_layers_controller.remove_cell_layer(layer_id, **opt)

    def get_default_cell_layer(self) -> CellLayer:
        return self.cell_layers_controller.get_default_cell_layer()

    def set_default_cell_layer(self, layer_id: str, **opt: Any) -> None:
        self.cell_layers_controller.set_default_cell_layer(layer_id, **opt)

    def get_cell_layer(self, layer_id: str) -> CellLayer:
        return self.cell_layers_controller.get_cell_layer(layer_id)

    def has_cell_layer(self, layer_id: str) -> bool:
        return self.cell_layers_controller.has_cell_layer(layer_id)

    def get_cell_layers(self) -> list[CellLayer]:
        return self.cell_layers_controller.get_cell_layers()

    def reset_cell_layers(
        self,
        layers: Iterable[CellLayer | LayerSpec | dict],
        default_cell_layer: str | None = None,
        **opt: Any,
    ) -> "Graph":
        self.cell_layers_controller.reset_cell_layers(
            layers, default_cell_layer=default_cell_layer, **opt
        )
        return self

    def min_z_index(self, layer_id: str | None = None) -> float:
        return self.cell_layers_controller.min_z_index(layer_id)

    def max_z_index(self, layer_id: str | None = None) -> float:
        return self.cell_layers_controller.max_z_index(layer_id)

    # --- Lookups ---

    def get_cell(self, cell_id: str | None) -> Cell | None:
        return self.cell_collection.get(cell_id)

    def get_cells(self) -> list[Cell]:
        """All cells in layer order, z order within each layer."""
        return self.cell_layers_controller.get_cells()

    def get_elements(self) -> list[Cell]:
        return [c for c in self.get_cells() if c.kind is CellKind.ELEMENT]

    def get_links(self) -> list[Cell]:
        return [c for c in self.get_cells() if c.kind is CellKind.LINK]

    def get_first_cell(self, layer_id: str | None = None) -> Cell | None:
        if layer_id is None:
            cells = self.get_cells()
        else:
            cells = self.get_cell_layer(layer_id).cells
        return cells[0] if cells else None

    def get_last_cell(self, layer_id: str | None = None) -> Cell | None:
        if layer_id is None:
            cells = self.get_cells()
        else:
            cells = self.get_cell_layer(layer_id).cells
        return cells[-1] if cells else None

    def get_common_ancestor(self, *cells: Cell) -> Cell | None:
        """Closest cell every given cell is embedded in, or None."""
        if not cells:
            return None
        chains = sorted(([a.id for a in cell.get_ancestors()] for cell in cells), key=len)
        shortest, rest = chains[0], chains[1:]
        for ancestor_id in shortest:
            if all(ancestor_id in chain for chain in rest):
                return self.get_cell(ancestor_id)
        return None

    # --- Adjacency queries (delegated to TraversalService) ---

    def get_outbound_edges(self, node_id: str):
        return self._index.outbound_edges(node_id)

    def get_inbound_edges(self, node_id: str):
        return self._index.inbound_edges(node_id)

    def get_connected_links(self, cell: Cell, **opt: Any) -> list[Cell]:
        return self._query.get_connected_links(cell, **opt)

    def get_neighbors(self, cell: Cell, **opt: Any) -> list[Cell]:
        return self._query.get_neighbors(cell, **opt)

    def is_neighbor(self, cell_a: Cell, cell_b: Cell, **opt: Any) -> bool:
        return self._query.is_neighbor(cell_a, cell_b, **opt)

    def search(self, cell: Cell, iteratee: Iteratee, breadth_first: bool = False, **opt: Any) -> None:
        self._query.search(cell, iteratee, breadth_first=breadth_first, **opt)

    def bfs(self, cell: Cell, iteratee: Iteratee, **opt: Any) -> None:
        self._query.bfs(cell, iteratee, **opt)

    def dfs(self, cell: Cell, iteratee: Iteratee, **opt: Any) -> None:
        self._query.dfs(cell, iteratee, **opt)

    def get_successors(self, cell: Cell, **opt: Any) -> list[Cell]:
        return self._query.get_successors(cell, **opt)

    def get_predecessors(self, cell: Cell, **opt: Any) -> list[Cell]:
        return self._query.get_predecessors(cell, **opt)

    def is_successor(self, cell_a: Cell, cell_b: Cell) -> bool:
        return self._query.is_successor(cell_a, cell_b)

    def is_predecessor(self, cell_a: Cell, cell_b: Cell) -> bool:
        return self._query.is_predecessor(cell_a, cell_b)

    def get_sources(self) -> list[Cell]:
        return self._query.get_sources()

    def get_sinks(self) -> list[Cell]:
        return self._query.get_sinks()

    def is_source(self, cell: Cell) -> bool:
        return self._query.is_source(cell)

    def is_sink(self, cell: Cell) -> bool:
        return self._query.is_sink(cell)

    # --- Subgraphs ---

    def get_subgraph(self, cells: Iterable[Cell], deep: bool = False) -> list[Cell]:
        return get_subgraph(self, cells, deep=deep)

    def clone_cells(self, cells: Iterable[Cell]) -> dict[str, Cell]:
        return clone_cells(cells)

    def clone_subgraph(self, cells: Iterable[Cell], deep: bool = False) -> dict[str, Cell]:
        return clone_subgraph(self, cells, deep=deep)

    # --- Serialization ---

    def to_json(self) -> dict[str, Any]:
        """Exchange form: graph attributes, cells and (non-default) layers."""
        data = copy.deepcopy(self.attributes)
        data["cells"] = self.cell_collection.to_json()
        controller = self.cell_layers_controller
        if not controller.implicit:
            data["cellLayers"] = controller.to_json()
            data["defaultCellLayer"] = controller.default_cell_layer_id
        return data

    def from_json(self, data: dict[str, Any], **opt: Any) -> "Graph":
        """Load an exchange document; layers are applied before cells.

        Raises:
            GraphDocumentError: If `cells` is missing or the document is malformed
        """
        document = GraphDocument.load(data)
        if document.cell_layers is not None:
            self.reset_cell_layers(
                document.cell_layers, default_cell_layer=document.default_cell_layer, **opt
            )
        self.reset_cells(document.cells, **opt)
        self.set(document.attributes, **opt)
        return self

    # --- Spatial lookups ---

    def find_elements_at_point(self, point: Point | dict, strict: bool = False) -> list[Cell]:
        return self._filter_at_point(self.get_elements(), point, strict)

    def find_links_at_point(self, point: Point | dict, strict: bool = False) -> list[Cell]:
        return self._filter_at_point(self.get_links(), point, strict)

    def find_cells_at_point(self, point: Point | dict, strict: bool = False) -> list[Cell]:
        return self._filter_at_point(self.get_cells(), point, strict)

    def find_elements_in_area(self, area: Rect | dict, strict: bool = False) -> list[Cell]:
        return self._filter_in_area(self.get_elements(), area, strict)

    def find_links_in_area(self, area: Rect | dict, strict: bool = False) -> list[Cell]:
        return self._filter_in_area(self.get_links(), area, strict)

    def find_cells_in_area(self, area: Rect | dict, strict: bool = False) -> list[Cell]:
        return self._filter_in_area(self.get_cells(), area, strict)

    def find_elements_under_element(self, element: Cell, search_by: str = "bbox", strict: bool = False) -> list[Cell]:
        return self._filter_under_element(self.get_elements(), element, search_by, strict)

    def find_links_under_element(self, element: Cell, search_by: str = "bbox", strict: bool = False) -> list[Cell]:
        return self._filter_under_element(self.get_links(), element, search_by, strict)

    def find_cells_under_element(self, element: Cell, search_by: str = "bbox", strict: bool = False) -> list[Cell]:
        return self._filter_under_element(self.get_cells(), element, search_by, strict)

    @staticmethod
    def _filter_at_point(cells: list[Cell], point: Point | dict, strict: bool) -> list[Cell]:
        if isinstance(point, dict):
            point = Point.from_dict(point)
        result = []
        for cell in cells:
            bbox = cell.get_bbox(rotate=True)
            if bbox is not None and bbox.contains_point(point, strict=strict):
                result.append(cell)
        return result

    @staticmethod
    def _filter_in_area(cells: list[Cell], area: Rect | dict, strict: bool) -> list[Cell]:
        if isinstance(area, dict):
            area = Rect.from_dict(area)
        result = []
        for cell in cells:
            bbox = cell.get_bbox(rotate=True)
            if bbox is None:
                continue
            if area.contains_rect(bbox) if strict else area.intersects(bbox):
                result.append(cell)
        return result

    def _filter_under_element(
        self, cells: list[Cell], element: Cell, search_by: str, strict: bool
    ) -> list[Cell]:
        bbox = element.get_bbox(rotate=True)
        if search_by == "bbox":
            found = self._filter_in_area(cells, bbox, strict)
        else:
            found = self._filter_at_point(cells, bbox.point(search_by), False)
        return [cell for cell in found if self._is_under(cell, element)]

    @staticmethod
    def _is_under(cell: Cell, element: Cell) -> bool:
        if cell.kind is CellKind.LINK:
            return (
                endpoint_id(cell.get("source")) != element.id
                and endpoint_id(cell.get("target")) != element.id
                and not cell.is_embedded_in(element)
            )
        return cell.id != element.id and not cell.is_embedded_in(element)

    def get_bbox(self) -> Rect | None:
        """Bounding box of every cell (None for an empty graph)."""
        return self.get_cells_bbox(self.get_cells())

    @staticmethod
    def get_cells_bbox(cells: Iterable[Cell], rotate: bool = True) -> Rect | None:
        result: Rect | None = None
        for cell in cells:
            rect = cell.get_bbox(rotate=rotate)
            if rect is None:
                continue
            result = rect if result is None else result.union(rect)
        return result

    # --- Geometry transforms ---

    def translate(self, dx: float, dy: float, **opt: Any) -> "Graph":
        """Move every cell; embedded cells move with their parents."""
        for cell in self.get_cells():
            if not cell.is_embedded():
                cell.translate(dx, dy, **opt)
        return self

    def resize(self, width: float, height: float, **opt: Any) -> "Graph":
        return self.resize_cells(width, height, self.get_cells(), **opt)

    def resize_cells(self, width: float, height: float, cells: Iterable[Cell], **opt: Any) -> "Graph":
        """Scale `cells` so their joint bounding box becomes width x height."""
        cells = list(cells)
        bbox = self.get_cells_bbox(cells)
        if bbox is not None:
            sx = max(width / bbox.width, 0) if bbox.width else 1
            sy = max(height / bbox.height, 0) if bbox.height else 1
            for cell in cells:
                cell.scale(sx, sy, bbox.origin(), **opt)
        return self


# --- Link validations ---


def multi_links(graph: Graph, link: Link) -> bool:
    """False if another link already joins the same source and target (ports included)."""
    source = link.source()
    target = link.target()
    if not (source.get("id") and target.get("id")):
        return True

    source_cell = link.get_source_cell()
    if source_cell is None:
        return True

    same = [
        other
        for other in graph.get_connected_links(source_cell, outbound=True)
        if other.source().get("id") == source["id"]
        and (not other.source().get("port") or other.source().get("port") == source.get("port"))
        and other.target().get("id") == target["id"]
        and (not other.target().get("port") or other.target().get("port") == target.get("port"))
    ]
    return len(same) <= 1


def link_pinning(graph: Graph, link: Link) -> bool:
    """False if either end of the link is a free point."""
    return bool(link.source().get("id") and link.target().get("id"))
