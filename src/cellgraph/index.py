"""Adjacency index kept in sync with the cell collection.

Maintains, per node id, the ids of links leaving it (`out`) and entering it
(`in`), plus the sets of element and link ids currently in the graph. The
index is updated only from collection notifications:

- add / remove of a cell
- reset of the whole collection (full rebuild, the only O(n) path)
- change of a link's `source` or `target`

Sets are insertion-ordered (dict keys), so queries are deterministic and
membership / deletion stay O(1).
"""

from __future__ import annotations

import logging
from collections.abc import KeysView
from typing import Any, Iterable

from .cells import Cell, CellKind, Link
from .models import endpoint_id

logger = logging.getLogger(__name__)

_EMPTY: dict[str, None] = {}


class AdjacencyIndex:
    """Outgoing/incoming edge ids per node, plus node and edge id sets.

    Indices for O(1) lookups:
    - _nodes: element ids in the graph
    - _edges: link ids in the graph
    - _out: node id -> ids of links whose source references it
    - _in: node id -> ids of links whose target references it
    """

    def __init__(self) -> None:
        self._nodes: dict[str, None] = {}
        self._edges: dict[str, None] = {}
        self._out: dict[str, dict[str, None]] = {}
        self._in: dict[str, dict[str, None]] = {}

    # --- Queries ---

    def outbound_edges(self, node_id: str) -> KeysView[str]:
        """O(1) lookup of link ids leaving `node_id` (empty when unknown)."""
        return self._out.get(node_id, _EMPTY).keys()

    def inbound_edges(self, node_id: str) -> KeysView[str]:
        """O(1) lookup of link ids entering `node_id` (empty when unknown)."""
        return self._in.get(node_id, _EMPTY).keys()

    def node_ids(self) -> KeysView[str]:
        return self._nodes.keys()

    def edge_ids(self) -> KeysView[str]:
        return self._edges.keys()

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    def is_source(self, node_id: str) -> bool:
        return not self._in.get(node_id)

    def is_sink(self, node_id: str) -> bool:
        return not self._out.get(node_id)

    # --- Collection notifications ---

    def on_add(self, cell: Cell, *_: Any) -> None:
        if cell.kind is CellKind.LINK:
            self._edges[cell.id] = None
            self._link(self._out, endpoint_id(cell.get("source")), cell.id)
            self._link(self._in, endpoint_id(cell.get("target")), cell.id)
        else:
            self._nodes[cell.id] = None

    def on_remove(self, cell: Cell, *_: Any) -> None:
        if cell.kind is CellKind.LINK:
            self._edges.pop(cell.id, None)
            self._unlink(self._out, endpoint_id(cell.get("source")), cell.id)
            self._unlink(self._in, endpoint_id(cell.get("target")), cell.id)
        else:
            # Buckets stay while links still point here; they go with the links
            self._nodes.pop(cell.id, None)

    def on_reset(self, cells: Iterable[Cell], *_: Any) -> None:
        self.clear()
        count = 0
        for cell in cells:
            self.on_add(cell)
            count += 1
        logger.debug(f"Rebuilt adjacency index from {count} cells")

    def on_change_source(self, link: Link, *_: Any) -> None:
        self._relink(self._out, link, "source")

    def on_change_target(self, link: Link, *_: Any) -> None:
        self._relink(self._in, link, "target")

    def clear(self) -> None:
        self._nodes = {}
        self._edges = {}
        self._out = {}
        self._in = {}

    # --- Internals ---

    def _relink(self, buckets: dict[str, dict[str, None]], link: Cell, end: str) -> None:
        if link.kind is not CellKind.LINK or link.id not in self._edges:
            return
        self._unlink(buckets, endpoint_id(link.previous(end)), link.id)
        self._link(buckets, endpoint_id(link.get(end)), link.id)

    @staticmethod
    def _link(buckets: dict[str, dict[str, None]], node_id: str | None, edge_id: str) -> None:
        if node_id is None:
            return
        buckets.setdefault(node_id, {})[edge_id] = None

    def _unlink(self, buckets: dict[str, dict[str, None]], node_id: str | None, edge_id: str) -> None:
        if node_id is None or node_id not in buckets:
            return
        bucket = buckets[node_id]
        bucket.pop(edge_id, None)
        # Clean up empty bucket
        if not bucket:
            del buckets[node_id]

    def check_consistency(self, cells: Iterable[Cell]) -> list[str]:
        """Validate that the index matches `cells`. Returns list of errors.

        This is a debug/test utility to detect index drift after incremental
        updates. An empty list means the index is consistent.
        """
        errors: list[str] = []
        cells = list(cells)

        # 1. Node and edge sets
        expected_nodes = {c.id for c in cells if c.kind is CellKind.ELEMENT}
        expected_edges = {c.id for c in cells if c.kind is CellKind.LINK}
        actual_nodes = set(self._nodes)
        actual_edges = set(self._edges)
        if missing := expected_nodes - actual_nodes:
            errors.append(f"_nodes missing: {missing}")
        if extra := actual_nodes - expected_nodes:
            errors.append(f"_nodes has stale entries: {extra}")
        if missing := expected_edges - actual_edges:
            errors.append(f"_edges missing: {missing}")
        if extra := actual_edges - expected_edges:
            errors.append(f"_edges has stale entries: {extra}")

        # 2. Buckets match link endpoints
        expected_out: dict[str, set[str]] = {}
        expected_in: dict[str, set[str]] = {}
        for cell in cells:
            if cell.kind is not CellKind.LINK:
                continue
            if source_id := endpoint_id(cell.get("source")):
                expected_out.setdefault(source_id, set()).add(cell.id)
            if target_id := endpoint_id(cell.get("target")):
                expected_in.setdefault(target_id, set()).add(cell.id)

        for name, expected, actual in (
            ("_out", expected_out, self._out),
            ("_in", expected_in, self._in),
        ):
            for node_id in set(expected) | set(actual):
                want = expected.get(node_id, set())
                got = set(actual.get(node_id, ()))
                if want != got:
                    errors.append(
                        f"{name}[{node_id}] mismatch: expected {sorted(want)}, got {sorted(got)}"
                    )
                elif node_id in actual and not got:
                    errors.append(f"{name}[{node_id}] is an empty bucket")

        return errors
