"""CLI for inspecting cell graph documents.

Reads a graph JSON document (`{"cells": [...], ...}`) and answers
adjacency and traversal questions about it.
"""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .cells import Cell, CellKind
from .graph import Graph
from .models import CellTypeError, GraphDocumentError

console = Console()

logger = logging.getLogger(__name__)


def load_graph(path: Path) -> Graph:
    """Build a graph from a JSON document on disk."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    graph = Graph().from_json(data)
    logger.info(f"Loaded {len(graph)} cells from {path}")
    return graph


def _cell_summary(cell: Cell) -> dict:
    summary = {"id": cell.id, "type": cell.get("type"), "kind": cell.kind.value}
    if cell.kind is CellKind.LINK:
        summary["source"] = cell.get("source")
        summary["target"] = cell.get("target")
    return summary


def _cells_table(cells: list[Cell], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Kind")
    for cell in cells:
        table.add_row(cell.id, str(cell.get("type")), cell.kind.value)
    return table


def _print_cells(cells: list[Cell], as_json: bool, title: str) -> None:
    if as_json:
        click.echo(json.dumps([_cell_summary(c) for c in cells], indent=2))
        return
    if cells:
        console.print(_cells_table(cells, title))
    else:
        console.print(f"[dim]No {title.lower()}[/dim]")


def _get_cell_or_exit(ctx: click.Context, graph: Graph, cell_id: str) -> Cell:
    cell = graph.get_cell(cell_id)
    if cell is None:
        console.print(f"[red]Cell not found:[/red] {cell_id}")
        ctx.exit(1)
    return cell


@click.group()
@click.option(
    "--log-level",
    envvar="CELLGRAPH_LOG_LEVEL",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, log_level):
    """Cellgraph - inspect diagram graphs stored as JSON."""
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_or_exit(ctx: click.Context, path: Path) -> Graph:
    try:
        return load_graph(path)
    except (GraphDocumentError, CellTypeError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx, path, as_json):
    """Show cell, element, link and layer counts.

    Examples:
        cellgraph stats diagram.json
    """
    graph = _load_or_exit(ctx, path)
    result = {
        "cells": len(graph),
        "elements": len(graph.get_elements()),
        "links": len(graph.get_links()),
        "layers": [layer.id for layer in graph.get_cell_layers()],
        "sources": len(graph.get_sources()),
        "sinks": len(graph.get_sinks()),
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    console.print(f"[bold]{path}[/bold]")
    console.print(f"Cells: {result['cells']}")
    console.print(f"  Elements: {result['elements']}")
    console.print(f"  Links:    {result['links']}")
    console.print(f"Layers: {', '.join(result['layers'])}")
    console.print(f"Sources: {result['sources']}, Sinks: {result['sinks']}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("cell_id")
@click.option("--inbound", is_flag=True, help="Only follow links entering the cell")
@click.option("--outbound", is_flag=True, help="Only follow links leaving the cell")
@click.option("--deep", is_flag=True, help="Include links of embedded cells")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def neighbors(ctx, path, cell_id, inbound, outbound, deep, as_json):
    """List the elements linked to a cell.

    Examples:
        cellgraph neighbors diagram.json a
        cellgraph neighbors diagram.json a --outbound
    """
    graph = _load_or_exit(ctx, path)
    cell = _get_cell_or_exit(ctx, graph, cell_id)
    found = graph.get_neighbors(
        cell, inbound=inbound or None, outbound=outbound or None, deep=deep
    )
    _print_cells(found, as_json, "Neighbors")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("cell_id")
@click.option("--bfs", "breadth_first", is_flag=True, help="Breadth-first order")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def successors(ctx, path, cell_id, breadth_first, as_json):
    """List every element reachable from a cell following links forwards."""
    graph = _load_or_exit(ctx, path)
    cell = _get_cell_or_exit(ctx, graph, cell_id)
    _print_cells(graph.get_successors(cell, breadth_first=breadth_first), as_json, "Successors")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("cell_id")
@click.option("--bfs", "breadth_first", is_flag=True, help="Breadth-first order")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def predecessors(ctx, path, cell_id, breadth_first, as_json):
    """List every element reachable from a cell following links backwards."""
    graph = _load_or_exit(ctx, path)
    cell = _get_cell_or_exit(ctx, graph, cell_id)
    _print_cells(graph.get_predecessors(cell, breadth_first=breadth_first), as_json, "Predecessors")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def roots(ctx, path, as_json):
    """List sources (no inbound links) and sinks (no outbound links)."""
    graph = _load_or_exit(ctx, path)
    sources = graph.get_sources()
    sinks = graph.get_sinks()

    if as_json:
        result = {
            "sources": [c.id for c in sources],
            "sinks": [c.id for c in sinks],
        }
        click.echo(json.dumps(result, indent=2))
        return

    _print_cells(sources, False, "Sources")
    _print_cells(sinks, False, "Sinks")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("cell_ids", nargs=-1, required=True)
@click.option("--deep", is_flag=True, help="Include embedded cells")
@click.pass_context
def subgraph(ctx, path, cell_ids, deep):
    """Print the subgraph around the given cells as a graph document.

    Examples:
        cellgraph subgraph diagram.json a b > part.json
    """
    graph = _load_or_exit(ctx, path)
    cells = [_get_cell_or_exit(ctx, graph, cell_id) for cell_id in cell_ids]
    found = graph.get_subgraph(cells, deep=deep)
    click.echo(json.dumps({"cells": [c.to_json() for c in found]}, indent=2))


if __name__ == "__main__":
    cli()
