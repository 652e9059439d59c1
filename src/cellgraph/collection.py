"""Ordered, id-keyed observable store of cells.

Emits `add(cell, collection, opt)`, `remove(cell, collection, opt)` and
`reset(collection, opt)`, and re-broadcasts every event of the cells it holds
(`change`, `change:<attr>`, ...), so a single subscription on the collection
sees every structural and attribute change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from .cells import Cell, CellNamespace, create_cell
from .events import Events

if TYPE_CHECKING:
    from .graph import Graph

logger = logging.getLogger(__name__)


class CellCollection(Events):
    """Insertion-ordered cell store owned by a graph."""

    def __init__(self, graph: Graph | None = None, cell_namespace: CellNamespace | None = None):
        super().__init__()
        self.graph = graph
        self.cell_namespace: CellNamespace = dict(cell_namespace or {})
        self._cells: dict[str, Cell] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._cells.values()))

    def __contains__(self, item: object) -> bool:
        key = item.id if isinstance(item, Cell) else item
        return key in self._cells

    @property
    def models(self) -> list[Cell]:
        return list(self._cells.values())

    def get(self, cell_id: str | None) -> Cell | None:
        if cell_id is None:
            return None
        return self._cells.get(cell_id)

    def prepare(self, cell: Cell | dict[str, Any]) -> Cell:
        """Turn plain attributes into a cell of the right class."""
        if isinstance(cell, Cell):
            return cell
        return create_cell(cell, self.cell_namespace)

    def add(self, cells: Cell | dict | Iterable[Cell | dict], **opt: Any) -> list[Cell]:
        """Insert cells; ids already present are skipped."""
        items = [cells] if isinstance(cells, (Cell, dict)) else list(cells)
        added = []
        for item in items:
            cell = self.prepare(item)
            if cell.id in self._cells:
                logger.debug(f"Cell {cell.id} already in collection, skipping add")
                continue
            self._cells[cell.id] = cell
            self._add_reference(cell)
            added.append(cell)
            if not opt.get("silent"):
                cell.trigger("add", cell, self, opt)
        return added

    def remove(self, cells: Cell | Iterable[Cell], **opt: Any) -> list[Cell]:
        """Take cells out of the store; unknown cells are ignored."""
        items = [cells] if isinstance(cells, Cell) else list(cells)
        removed = []
        for item in items:
            cell = self._cells.pop(item.id, None)
            if cell is None:
                continue
            removed.append(cell)
            if not opt.get("silent"):
                cell.trigger("remove", cell, self, opt)
            self._remove_reference(cell)
        return removed

    def reset(self, cells: Iterable[Cell | dict] = (), **opt: Any) -> list[Cell]:
        """Replace the whole content, emitting a single `reset`."""
        previous = list(self._cells.values())
        for cell in previous:
            self._remove_reference(cell)
        self._cells = {}
        added = self.add(cells, **{**opt, "silent": True})
        if not opt.get("silent"):
            self.trigger("reset", self, {**opt, "previous_models": previous})
        return added

    def to_json(self) -> list[dict[str, Any]]:
        return [cell.to_json() for cell in self._cells.values()]

    def _add_reference(self, cell: Cell) -> None:
        cell.collection = self
        cell.graph = self.graph
        cell.on("all", self._on_cell_event)

    def _remove_reference(self, cell: Cell) -> None:
        if cell.collection is self:
            cell.collection = None
            cell.graph = None
        cell.off("all", self._on_cell_event)

    def _on_cell_event(self, event: str, *args: Any) -> None:
        # add/remove notifications aimed at another collection stay there
        if event in ("add", "remove") and len(args) > 1 and args[1] is not self:
            return
        self.trigger(event, *args)
