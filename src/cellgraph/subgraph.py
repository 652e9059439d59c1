"""Subgraph extraction and cloning.

A subgraph is the closure of a cell set under two rules: a link pulls in its
endpoint cells, and a link is pulled in once both its endpoints are present.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from .cells import Cell, CellKind
from .models import endpoint_id

if TYPE_CHECKING:
    from .graph import Graph

logger = logging.getLogger(__name__)


def get_subgraph(graph: Graph, cells: Iterable[Cell], deep: bool = False) -> list[Cell]:
    """Return `cells` plus the links connecting them, in discovery order.

    For `A --L--> B`, both get_subgraph([A, B]) and get_subgraph([L]) give
    [A, L, B]-equivalent sets. With `deep`, embedded cells of every given
    cell are included too.
    """
    subgraph: dict[str, Cell] = {}
    elements: list[Cell] = []
    links: list[Cell] = []

    def include(cell: Cell) -> None:
        if cell.id in subgraph:
            return
        subgraph[cell.id] = cell
        if cell.kind is CellKind.LINK:
            links.append(cell)
        else:
            elements.append(cell)

    for cell in cells:
        include(cell)
        if deep:
            for embed in cell.get_embedded_cells(deep=True):
                include(embed)

    # A link pulls in its endpoints
    for link in list(links):
        for end in ("source", "target"):
            end_id = endpoint_id(link.get(end))
            if end_id is None or end_id in subgraph:
                continue
            end_cell = graph.get_cell(end_id)
            if end_cell is None:
                logger.warning(f"Link {link.id} {end} {end_id} is not in the graph")
                continue
            subgraph[end_id] = end_cell
            elements.append(end_cell)

    # A link joins once both its endpoints are in
    for element in elements:
        for link in graph.get_connected_links(element, deep=deep):
            if link.id in subgraph:
                continue
            source_id = endpoint_id(link.get("source"))
            target_id = endpoint_id(link.get("target"))
            if source_id in subgraph and target_id in subgraph:
                subgraph[link.id] = link

    return list(subgraph.values())


def clone_cells(cells: Iterable[Cell]) -> dict[str, Cell]:
    """Clone cells, rewriting references between them to the clones' ids.

    Returns a map of original id -> clone. `parent`, `embeds` and link
    endpoints that point inside the set are remapped; references leaving the
    set are kept for endpoints and dropped for embedding.
    """
    originals: dict[str, Cell] = {}
    for cell in cells:
        originals.setdefault(cell.id, cell)

    clones = {cell_id: cell.clone() for cell_id, cell in originals.items()}

    for cell_id, cell in originals.items():
        clone = clones[cell_id]
        if clone.kind is CellKind.LINK:
            for end in ("source", "target"):
                end_id = endpoint_id(clone.get(end))
                if end_id is not None and end_id in clones:
                    clone.prop([end, "id"], clones[end_id].id)

        parent_id = cell.get("parent")
        if parent_id and parent_id in clones:
            clone.set("parent", clones[parent_id].id)

        embeds = [clones[e].id for e in cell.get("embeds") or [] if e in clones]
        if embeds:
            clone.set("embeds", embeds)

    return clones


def clone_subgraph(graph: Graph, cells: Iterable[Cell], deep: bool = False) -> dict[str, Cell]:
    """Clone `cells` together with their subgraph closure."""
    return clone_cells(get_subgraph(graph, cells, deep=deep))
