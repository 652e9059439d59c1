"""Read-only traversal queries on the cell graph.

Everything here reads the adjacency index and resolves ids through the
graph's cell lookup; nothing mutates the graph. Graph delegates its query
methods to TraversalService via thin wrappers.
"""

import logging
from collections import deque
from typing import Any, Callable, Iterator

from .cells import Cell, CellKind
from .index import AdjacencyIndex
from .models import endpoint_id

logger = logging.getLogger(__name__)

# Iteratee result that ends a search outright (internal; public callbacks
# can only prune with False)
_STOP = object()

Iteratee = Callable[[Cell, int], Any]


def _directions(inbound: bool | None, outbound: bool | None) -> tuple[bool, bool]:
    """Both directions unless the caller picked one."""
    if inbound is None and outbound is None:
        return True, True
    return bool(inbound), bool(outbound)


class TraversalService:
    """Neighbor resolution, BFS/DFS and reachability over the adjacency index.

    Uses callable accessors to always read current state (not stale copies).
    """

    def __init__(self, get_cell: Callable[[str], Cell | None], index: AdjacencyIndex):
        self._get_cell = get_cell
        self._index = index

    def _resolve(self, descriptor: Any) -> Cell | None:
        cell_id = endpoint_id(descriptor)
        return self._get_cell(cell_id) if cell_id is not None else None

    # --- Connected links ---

    def get_connected_links(
        self,
        cell: Cell,
        inbound: bool | None = None,
        outbound: bool | None = None,
        indirect: bool = False,
        deep: bool = False,
        include_enclosed: bool = False,
    ) -> list[Cell]:
        """All links whose source or target is `cell`, each once.

        - indirect: also follow links attached to the links found
        - deep: also collect links of every cell embedded in `cell`; links
          with both ends inside the embedded set are skipped unless
          `include_enclosed` is set
        """
        inbound, outbound = _directions(inbound, outbound)
        links: list[Cell] = []
        # Dedup guard: self-loops are both inbound and outbound, and
        # indirect chains may come back to a link already found
        seen: set[str] = set()

        def add(edge_id: str) -> Cell | None:
            if edge_id in seen:
                return None
            link = self._get_cell(edge_id)
            if link is None:
                return None
            links.append(link)
            seen.add(edge_id)
            return link

        def follow(model: Cell, forward: bool) -> Iterator[tuple[Cell, bool]]:
            """Add the links on one side of `model`, yielding the walks they start."""
            edge_ids = self._index.outbound_edges if forward else self._index.inbound_edges
            for edge_id in list(edge_ids(model.id)):
                link = add(edge_id)
                if link is not None and indirect:
                    if inbound:
                        yield link, False
                    if outbound:
                        yield link, True
            if indirect and model.kind is CellKind.LINK:
                end_cell = self._resolve(model.get("target" if forward else "source"))
                if end_cell is not None and end_cell.kind is CellKind.LINK and add(end_cell.id):
                    yield end_cell, forward

        def walk(model: Cell, forward: bool) -> None:
            # Explicit stack: link-to-link chains can be arbitrarily long
            stack = [follow(model, forward)]
            while stack:
                step = next(stack[-1], None)
                if step is None:
                    stack.pop()
                else:
                    stack.append(follow(*step))

        if outbound:
            walk(cell, True)
        if inbound:
            walk(cell, False)

        if deep:
            embedded = cell.get_embedded_cells(deep=True)
            embedded_elements = {c.id for c in embedded if c.kind is CellKind.ELEMENT}

            def enclosed(edge_id: str) -> bool:
                link = self._get_cell(edge_id)
                if link is None:
                    return False
                source_id = endpoint_id(link.get("source"))
                target_id = endpoint_id(link.get("target"))
                return source_id in embedded_elements and target_id in embedded_elements

            for embed in embedded:
                if embed.kind is CellKind.LINK:
                    continue
                edge_ids = []
                if outbound:
                    edge_ids.extend(self._index.outbound_edges(embed.id))
                if inbound:
                    edge_ids.extend(self._index.inbound_edges(embed.id))
                for edge_id in edge_ids:
                    if edge_id in seen:
                        continue
                    if not include_enclosed and enclosed(edge_id):
                        continue
                    add(edge_id)

        return links

    # --- Neighbors ---

    def get_neighbors(
        self,
        cell: Cell,
        inbound: bool | None = None,
        outbound: bool | None = None,
        deep: bool = False,
        indirect: bool = False,
    ) -> list[Cell]:
        """Elements at the other end of the links connected to `cell`."""
        inbound, outbound = _directions(inbound, outbound)
        neighbors: dict[str, Cell] = {}

        def collect(descriptor: Any, loop: bool) -> None:
            neighbor_id = endpoint_id(descriptor)
            if neighbor_id is None or neighbor_id in neighbors:
                return
            other = self._get_cell(neighbor_id)
            if other is None or other.kind is not CellKind.ELEMENT:
                return
            if loop or (other is not cell and not (deep and other.is_embedded_in(cell))):
                neighbors[neighbor_id] = other

        links = self.get_connected_links(
            cell, inbound=inbound, outbound=outbound, deep=deep, indirect=indirect
        )
        for link in links:
            loop = link.has_loop(deep=deep)
            if inbound:
                collect(link.get("source"), loop)
            if outbound:
                collect(link.get("target"), loop)

        if cell.kind is CellKind.LINK:
            ends = []
            if inbound:
                ends.append(self._resolve(cell.get("source")))
            if outbound:
                ends.append(self._resolve(cell.get("target")))
            for end in ends:
                if end is not None and end.kind is CellKind.ELEMENT:
                    neighbors.setdefault(end.id, end)

        return list(neighbors.values())

    def is_neighbor(
        self,
        cell_a: Cell,
        cell_b: Cell,
        inbound: bool | None = None,
        outbound: bool | None = None,
        deep: bool = False,
        indirect: bool = False,
    ) -> bool:
        """True if a link connected to `cell_a` has `cell_b` at its other end."""
        inbound, outbound = _directions(inbound, outbound)
        links = self.get_connected_links(
            cell_a, inbound=inbound, outbound=outbound, deep=deep, indirect=indirect
        )
        for link in links:
            if inbound and endpoint_id(link.get("source")) == cell_b.id:
                return True
            if outbound and endpoint_id(link.get("target")) == cell_b.id:
                return True
        return False

    # --- Search ---

    def bfs(self, cell: Cell, iteratee: Iteratee, **opt: Any) -> None:
        """Breadth-first search from `cell`.

        `iteratee(cell, distance)` is called once per reachable cell, where
        distance is the number of levels crossed before the cell was first
        reached (not a shortest weighted path; mostly useful on trees).
        Returning False skips that cell's neighbors.
        """
        visited: set[str] = set()
        distance: dict[str, int] = {cell.id: 0}
        queue = deque([cell])

        while queue:
            current = queue.popleft()
            if current.id in visited:
                continue
            visited.add(current.id)
            result = iteratee(current, distance[current.id])
            if result is _STOP:
                return
            if result is False:
                continue
            for neighbor in self.get_neighbors(current, **opt):
                if neighbor.id not in distance:
                    distance[neighbor.id] = distance[current.id] + 1
                queue.append(neighbor)

    def dfs(self, cell: Cell, iteratee: Iteratee, **opt: Any) -> None:
        """Depth-first search from `cell`; same contract as bfs().

        The first neighbor found is explored first, before its siblings.
        """
        visited: set[str] = set()
        distance: dict[str, int] = {cell.id: 0}
        stack = [cell]

        while stack:
            current = stack.pop()
            if current.id in visited:
                continue
            visited.add(current.id)
            result = iteratee(current, distance[current.id])
            if result is _STOP:
                return
            if result is False:
                continue
            neighbors = self.get_neighbors(current, **opt)
            for neighbor in neighbors:
                if neighbor.id not in visited:
                    distance[neighbor.id] = distance[current.id] + 1
            stack.extend(reversed(neighbors))

    def search(self, cell: Cell, iteratee: Iteratee, breadth_first: bool = False, **opt: Any) -> None:
        if breadth_first:
            self.bfs(cell, iteratee, **opt)
        else:
            self.dfs(cell, iteratee, **opt)

    def get_successors(self, cell: Cell, breadth_first: bool = False, **opt: Any) -> list[Cell]:
        """Every cell reachable from `cell` following links forwards."""
        return self._collect(cell, breadth_first, {**opt, "inbound": False, "outbound": True})

    def get_predecessors(self, cell: Cell, breadth_first: bool = False, **opt: Any) -> list[Cell]:
        """Every cell reachable from `cell` following links backwards."""
        return self._collect(cell, breadth_first, {**opt, "inbound": True, "outbound": False})

    def is_successor(self, cell_a: Cell, cell_b: Cell) -> bool:
        """True if `cell_b` is reachable forwards from `cell_a`."""
        return self._reaches(cell_a, cell_b, {"inbound": False, "outbound": True})

    def is_predecessor(self, cell_a: Cell, cell_b: Cell) -> bool:
        """True if `cell_b` is reachable backwards from `cell_a`."""
        return self._reaches(cell_a, cell_b, {"inbound": True, "outbound": False})

    def _collect(self, cell: Cell, breadth_first: bool, opt: dict[str, Any]) -> list[Cell]:
        found: list[Cell] = []

        def visit(current: Cell, _distance: int) -> None:
            if current is not cell:
                found.append(current)

        self.search(cell, visit, breadth_first=breadth_first, **opt)
        return found

    def _reaches(self, start: Cell, goal: Cell, opt: dict[str, Any]) -> bool:
        hit = False

        def visit(current: Cell, _distance: int) -> Any:
            nonlocal hit
            if current.id == goal.id and current is not start:
                hit = True
                return _STOP
            return None

        self.dfs(start, visit, **opt)
        return hit

    # --- Roots and leaves ---

    def get_sources(self) -> list[Cell]:
        """Elements without inbound links. O(|nodes|)."""
        return [
            cell
            for node_id in list(self._index.node_ids())
            if self._index.is_source(node_id) and (cell := self._get_cell(node_id)) is not None
        ]

    def get_sinks(self) -> list[Cell]:
        """Elements without outbound links. O(|nodes|)."""
        return [
            cell
            for node_id in list(self._index.node_ids())
            if self._index.is_sink(node_id) and (cell := self._get_cell(node_id)) is not None
        ]

    def is_source(self, cell: Cell) -> bool:
        return self._index.is_source(cell.id)

    def is_sink(self, cell: Cell) -> bool:
        return self._index.is_sink(cell.id)
