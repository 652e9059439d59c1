"""Cell graph package: an observable diagram graph with an adjacency index.

Public API:
- Graph: cell collection + adjacency index + layers + batches
- Element, Link, Cell, CellKind: cell models
- multi_links, link_pinning: link validations
- CellTypeError, GraphDocumentError, LayerError: errors
"""

from .cells import Cell, CellKind, Element, Link, create_cell
from .graph import Graph, link_pinning, multi_links
from .layers import CellLayer
from .models import CellTypeError, GraphDocumentError, LayerError

__all__ = [
    "Graph",
    "Cell",
    "CellKind",
    "Element",
    "Link",
    "CellLayer",
    "create_cell",
    "multi_links",
    "link_pinning",
    "CellTypeError",
    "GraphDocumentError",
    "LayerError",
]
