"""Cell models: elements (nodes) and links (edges).

A cell is an observable attribute map with a stable `id` and a string `type`.
Setting attributes emits `change:<attr>` per changed attribute followed by a
single `change`. Cells embed other cells through the `parent` / `embeds`
attributes; the graph they belong to resolves those ids.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from .constants import BATCH_EMBED, BATCH_REMOVE, BATCH_UNEMBED, LAYER_ATTRIBUTE
from .events import Events
from .geometry import Point, Rect
from .models import endpoint_id, generate_id, normalize_endpoint

if TYPE_CHECKING:
    from .collection import CellCollection
    from .graph import Graph

logger = logging.getLogger(__name__)

_MISSING = object()


class CellKind(str, Enum):
    """Discriminant of the closed Element | Link variant."""

    ELEMENT = "element"
    LINK = "link"


class Cell(Events):
    """Base class for graph cells. Use Element or Link."""

    kind: CellKind
    defaults: dict[str, Any] = {}

    def __init__(self, attributes: dict[str, Any] | None = None, **kwargs: Any):
        super().__init__()
        attrs = {**copy.deepcopy(self.defaults), **(attributes or {}), **kwargs}
        if not attrs.get("id"):
            attrs["id"] = generate_id()
        self.attributes: dict[str, Any] = {
            key: self._normalize(key, value) for key, value in attrs.items()
        }
        self._previous_attributes: dict[str, Any] = dict(self.attributes)
        self._changed: dict[str, Any] = {}
        self._changing = False
        self.collection: CellCollection | None = None
        self.graph: Graph | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, type={self.get('type')!r})"

    @property
    def id(self) -> str:
        return self.attributes["id"]

    # --- Attributes ---

    def _normalize(self, key: str, value: Any) -> Any:
        return value

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def has(self, key: str) -> bool:
        return self.attributes.get(key) is not None

    def set(self, key: str | dict[str, Any], value: Any = _MISSING, **opt: Any) -> "Cell":
        """Set one attribute or a mapping of attributes.

        Options are passed through to the change handlers; `silent=True`
        suppresses notifications.
        """
        if isinstance(key, str) and value is _MISSING:
            raise TypeError(f"No value given for attribute {key!r}.")
        attrs = {key: value} if isinstance(key, str) else dict(key)
        return self._apply(attrs, unset=False, opt=opt)

    def unset(self, key: str, **opt: Any) -> "Cell":
        if key not in self.attributes:
            return self
        return self._apply({key: None}, unset=True, opt=opt)

    def _apply(self, attrs: dict[str, Any], unset: bool, opt: dict[str, Any]) -> "Cell":
        if "id" in attrs and attrs["id"] != self.id:
            raise ValueError("Cell id cannot be changed once set.")

        outermost = not self._changing
        self._changing = True
        if outermost:
            self._previous_attributes = dict(self.attributes)
            self._changed = {}

        changes = []
        for key, value in attrs.items():
            if unset:
                self.attributes.pop(key, None)
                changes.append(key)
                self._changed[key] = None
                continue
            value = self._normalize(key, value)
            if key not in self.attributes or self.attributes[key] != value:
                changes.append(key)
                self._changed[key] = value
            self.attributes[key] = value

        try:
            if not opt.get("silent"):
                for key in changes:
                    self.trigger(f"change:{key}", self, self.attributes.get(key), opt)
                if outermost and self._changed:
                    self.trigger("change", self, opt)
        finally:
            if outermost:
                self._changing = False
        return self

    def previous(self, key: str, default: Any = None) -> Any:
        """Value of `key` before the last set() call."""
        return self._previous_attributes.get(key, default)

    def has_changed(self, key: str | None = None) -> bool:
        if key is None:
            return bool(self._changed)
        return key in self._changed

    def changed_attributes(self) -> dict[str, Any]:
        return dict(self._changed)

    def prop(self, path: str | list[str], value: Any = _MISSING, **opt: Any) -> Any:
        """Read or write a nested attribute addressed by "a/b/c" or a key list."""
        keys = path.split("/") if isinstance(path, str) else list(path)
        if value is _MISSING:
            current: Any = self.attributes
            for key in keys:
                if not isinstance(current, dict) or key not in current:
                    return None
                current = current[key]
            return current

        top = keys[0]
        if len(keys) == 1:
            return self.set(top, value, **opt)
        root = copy.deepcopy(self.attributes.get(top)) or {}
        node = root
        for key in keys[1:-1]:
            node = node.setdefault(key, {})
        node[keys[-1]] = value
        return self.set(top, root, **opt)

    def to_json(self) -> dict[str, Any]:
        return copy.deepcopy(self.attributes)

    def clone(self) -> "Cell":
        """Copy with a fresh id and without embedding references."""
        attrs = copy.deepcopy(self.attributes)
        attrs.pop("id", None)
        attrs.pop("parent", None)
        attrs.pop("embeds", None)
        return type(self)(attrs)

    def layer(self) -> str | None:
        """Id of the layer this cell lives in."""
        layer_id = self.get(LAYER_ATTRIBUTE)
        if layer_id:
            return layer_id
        if self.graph is not None:
            return self.graph.default_cell_layer_id
        return None

    # --- Embedding ---

    def get_parent_cell(self) -> "Cell | None":
        parent_id = self.get("parent")
        if not parent_id or self.graph is None:
            return None
        return self.graph.get_cell(parent_id)

    def get_ancestors(self) -> list["Cell"]:
        ancestors = []
        if self.graph is None:
            return ancestors
        parent = self.get_parent_cell()
        while parent is not None:
            ancestors.append(parent)
            parent = parent.get_parent_cell()
        return ancestors

    def is_embedded(self) -> bool:
        return bool(self.get("parent"))

    def is_embedded_in(self, cell: "Cell", deep: bool = True) -> bool:
        """True if this cell is a (deep) descendant of `cell`."""
        parent_id = self.get("parent")
        if not deep:
            return parent_id == cell.id
        seen = set()
        while parent_id and parent_id not in seen:
            if parent_id == cell.id:
                return True
            seen.add(parent_id)
            if self.graph is None:
                return False
            parent = self.graph.get_cell(parent_id)
            if parent is None:
                return False
            parent_id = parent.get("parent")
        return False

    def get_embedded_cells(self, deep: bool = False, breadth_first: bool = False) -> list["Cell"]:
        """Cells embedded in this one; with `deep`, all descendants."""
        if self.graph is None:
            return []
        graph = self.graph
        direct = [c for c in (graph.get_cell(i) for i in self.get("embeds") or []) if c]
        if not deep:
            return direct

        result: list[Cell] = []
        if breadth_first:
            queue = deque(direct)
            while queue:
                cell = queue.popleft()
                result.append(cell)
                queue.extend(cell.get_embedded_cells())
        else:
            stack = list(reversed(direct))
            while stack:
                cell = stack.pop()
                result.append(cell)
                stack.extend(reversed(cell.get_embedded_cells()))
        return result

    def embed(self, cells: "Cell | Iterable[Cell]", **opt: Any) -> "Cell":
        """Make `cells` children of this cell.

        With `reparent=True` cells already embedded elsewhere are moved;
        otherwise embedding an embedded cell is an error.
        """
        children = [cells] if isinstance(cells, Cell) else list(cells)
        for child in children:
            if child is self or self.is_embedded_in(child):
                raise ValueError("Recursive embedding not allowed.")
            if child.is_embedded() and child.get("parent") != self.id and not opt.get("reparent"):
                raise ValueError(f"Cell {child.id} is already embedded in {child.get('parent')}.")

        with self._batch(BATCH_EMBED):
            for child in children:
                old_parent = child.get_parent_cell()
                if old_parent is not None and old_parent is not self:
                    old_parent.unembed(child, **opt)
                child.set("parent", self.id, **opt)
            embeds = list(self.get("embeds") or [])
            embeds.extend(c.id for c in children if c.id not in embeds)
            self.set("embeds", embeds, **opt)
        return self

    def unembed(self, cells: "Cell | Iterable[Cell]", **opt: Any) -> "Cell":
        children = [cells] if isinstance(cells, Cell) else list(cells)
        ids = {c.id for c in children}
        with self._batch(BATCH_UNEMBED):
            for child in children:
                child.unset("parent", **opt)
            embeds = [i for i in self.get("embeds") or [] if i not in ids]
            if embeds:
                self.set("embeds", embeds, **opt)
            else:
                self.unset("embeds", **opt)
        return self

    def _batch(self, name: str):
        if self.graph is not None:
            return self.graph.batch(name)
        return _NullBatch()

    # --- Lifecycle ---

    def remove(self, **opt: Any) -> "Cell":
        """Remove this cell (and its embedded cells) from its graph.

        The graph reacts to the `remove` notification by removing or
        disconnecting the connected links, depending on `disconnect_links`.
        """
        graph = self.graph
        if graph is None:
            if self.collection is not None:
                self.collection.remove(self, **opt)
            return self

        with graph.batch(BATCH_REMOVE):
            parent = self.get_parent_cell()
            if parent is not None:
                parent.unembed(self, **opt)
            for embed in self.get_embedded_cells():
                embed.remove(**opt)
            self.trigger("remove", self, self.collection, opt)
        return self

    # --- Geometry ---

    def get_bbox(self, rotate: bool = False) -> Rect | None:
        raise NotImplementedError

    def translate(self, dx: float, dy: float, **opt: Any) -> "Cell":
        raise NotImplementedError

    def scale(self, sx: float, sy: float, origin: Point | None = None, **opt: Any) -> "Cell":
        raise NotImplementedError


class _NullBatch:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class Element(Cell):
    """A node with a position, a size and a rotation angle."""

    kind = CellKind.ELEMENT
    defaults = {
        "position": {"x": 0, "y": 0},
        "size": {"width": 1, "height": 1},
        "angle": 0,
    }

    def position(self) -> Point:
        return Point.from_dict(self.get("position"))

    def size(self) -> tuple[float, float]:
        size = self.get("size") or {}
        return float(size.get("width", 0)), float(size.get("height", 0))

    def get_bbox(self, rotate: bool = False) -> Rect:
        pos = self.position()
        width, height = self.size()
        rect = Rect(pos.x, pos.y, width, height)
        if rotate:
            return rect.rotated_bbox(float(self.get("angle") or 0))
        return rect

    def translate(self, dx: float, dy: float, **opt: Any) -> "Element":
        if not dx and not dy:
            return self
        pos = self.position().offset(dx, dy)
        self.set("position", {"x": pos.x, "y": pos.y}, **opt)
        for embed in self.get_embedded_cells():
            embed.translate(dx, dy, **opt)
        return self

    def scale(self, sx: float, sy: float, origin: Point | None = None, **opt: Any) -> "Element":
        origin = origin or Point()
        pos = self.position()
        width, height = self.size()
        self.set(
            {
                "position": {
                    "x": origin.x + (pos.x - origin.x) * sx,
                    "y": origin.y + (pos.y - origin.y) * sy,
                },
                "size": {"width": width * sx, "height": height * sy},
            },
            **opt,
        )
        return self


class Link(Cell):
    """An edge whose `source` and `target` are endpoint descriptors."""

    kind = CellKind.LINK
    defaults = {"source": {}, "target": {}}

    def _normalize(self, key: str, value: Any) -> Any:
        if key in ("source", "target"):
            return normalize_endpoint(value)
        return value

    def source(self) -> dict:
        return self.attributes.get("source") or {}

    def target(self) -> dict:
        return self.attributes.get("target") or {}

    def set_source(self, descriptor: dict | Cell, **opt: Any) -> "Link":
        if isinstance(descriptor, Cell):
            descriptor = {"id": descriptor.id}
        self.set("source", descriptor, **opt)
        return self

    def set_target(self, descriptor: dict | Cell, **opt: Any) -> "Link":
        if isinstance(descriptor, Cell):
            descriptor = {"id": descriptor.id}
        self.set("target", descriptor, **opt)
        return self

    def get_source_cell(self) -> Cell | None:
        source_id = endpoint_id(self.source())
        if source_id is None or self.graph is None:
            return None
        return self.graph.get_cell(source_id)

    def get_target_cell(self) -> Cell | None:
        target_id = endpoint_id(self.target())
        if target_id is None or self.graph is None:
            return None
        return self.graph.get_cell(target_id)

    def has_loop(self, deep: bool = False) -> bool:
        """True when both ends hit the same cell (or, with `deep`, the same ancestry)."""
        source_id = endpoint_id(self.source())
        target_id = endpoint_id(self.target())
        if source_id is None or target_id is None:
            return False
        if source_id == target_id:
            return True
        if deep and self.graph is not None:
            source_cell = self.get_source_cell()
            target_cell = self.get_target_cell()
            if source_cell is None or target_cell is None:
                return False
            return source_cell.is_embedded_in(target_cell) or target_cell.is_embedded_in(source_cell)
        return False

    def vertices(self) -> list[Point]:
        return [Point.from_dict(v) for v in self.get("vertices") or []]

    def _end_point(self, end: str) -> Point:
        descriptor = self.source() if end == "source" else self.target()
        cell = self.get_source_cell() if end == "source" else self.get_target_cell()
        if cell is not None:
            bbox = cell.get_bbox()
            if bbox is not None:
                return bbox.center()
        return Point.from_dict(descriptor)

    def get_bbox(self, rotate: bool = False) -> Rect | None:
        points = [self._end_point("source"), *self.vertices(), self._end_point("target")]
        return Rect.from_points(points)

    def translate(self, dx: float, dy: float, **opt: Any) -> "Link":
        """Move vertices and free endpoints; connected ends follow their cells."""
        if not dx and not dy:
            return self
        return self._transform(lambda p: p.offset(dx, dy), **opt)

    def scale(self, sx: float, sy: float, origin: Point | None = None, **opt: Any) -> "Link":
        origin = origin or Point()
        return self._transform(
            lambda p: Point(origin.x + (p.x - origin.x) * sx, origin.y + (p.y - origin.y) * sy),
            **opt,
        )

    def _transform(self, fn, **opt: Any) -> "Link":
        attrs: dict[str, Any] = {}
        if self.get("vertices"):
            attrs["vertices"] = [{"x": p.x, "y": p.y} for p in map(fn, self.vertices())]
        for end in ("source", "target"):
            descriptor = self.get(end) or {}
            if endpoint_id(descriptor) is None:
                moved = fn(Point.from_dict(descriptor))
                attrs[end] = {**descriptor, "x": moved.x, "y": moved.y}
        if attrs:
            self.set(attrs, **opt)
        return self


CellNamespace = dict[str, type[Cell]]


def create_cell(attributes: dict[str, Any], namespace: CellNamespace | None = None) -> Cell:
    """Build a cell from plain attributes.

    The `type` is looked up in `namespace` first; unknown types become a
    Link when they carry a `source` or `target`, otherwise an Element.
    """
    cls = (namespace or {}).get(attributes.get("type"))
    if cls is None:
        cls = Link if ("source" in attributes or "target" in attributes) else Element
    return cls(attributes)
