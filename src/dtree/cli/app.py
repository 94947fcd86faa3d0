"""
Decision tree CLI: validate tree files, render them, look up nodes and walk them.

Tree files are YAML definitions (see ``dtree.io.loaders``). A bare name such as
``fruit`` resolves to ``./trees/fruit.yaml``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, List, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from dtree.cli.formatters import (
    build_node_table,
    build_path_table,
    build_statistics_table,
    build_tree_view,
    format_value,
)
from dtree.cli.load_helpers import load_or_exit, resolve_or_exit
from dtree.core.tree import DecisionTree, Traverse
from dtree.io.loaders import load_tree, load_tree_directory

app = typer.Typer(help="Decision tree CLI: validate, show, find and walk decision trees.")
console = Console()

_LOG_FORMAT = "%(levelname)s %(asctime)s [%(filename)s:%(lineno)d] %(message)s"
_LOG_DATE_FORMAT = "%m-%d %H:%M:%S"


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)"),
) -> None:
    """Decision tree CLI."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        console.print(f"[red]Unknown log level[/red]: {log_level}")
        raise typer.Exit(code=2)
    logging.basicConfig(level=level, format=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)


def _load(file_path: str, verbose: bool) -> DecisionTree:
    resolved = resolve_or_exit(file_path, console=console)
    return load_or_exit(load_tree, resolved, console=console, verbose_errors=verbose)


def parse_input(raw: str) -> Any:
    """Parse a command-line input as a YAML scalar so 'false' and '3' arrive typed."""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


@app.command()
def validate(
    path: str = typer.Argument(..., help="Tree file, tree name, or directory of tree files"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Validate one tree file or every tree file in a directory."""
    if os.path.isdir(path):
        trees = load_or_exit(load_tree_directory, path, console=console, verbose_errors=verbose)
        for name, tree in trees.items():
            console.print(f"[green]OK[/green] {escape(name)}: {len(tree)} node(s)")
        console.print(f"[green]OK[/green] Loaded {len(trees)} tree(s)")
        return

    tree = _load(path, verbose)
    console.print(f"[green]OK[/green] Loaded {len(tree)} node(s), depth {tree.get_depth()}")


@app.command()
def show(
    file_path: str = typer.Argument(..., help="Tree file or name"),
    start: Optional[str] = typer.Option(None, "--start", help="Render only the subtree at this node id"),
    stats: bool = typer.Option(False, "--stats", help="Show tree statistics"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Render a decision tree."""
    tree = _load(file_path, verbose)
    if start is not None and start not in tree:
        console.print(f"[red]Node not found[/red]: {escape(start)}")
        raise typer.Exit(code=2)

    console.print(build_tree_view(tree, start))
    if stats:
        console.print(build_statistics_table(tree))


@app.command()
def find(
    file_path: str = typer.Argument(..., help="Tree file or name"),
    node_id: str = typer.Argument(..., help="Node id to look up"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Show a single node and its path from the root."""
    tree = _load(file_path, verbose)
    ref = tree.find(node_id)
    if ref is None:
        console.print(f"[red]Node not found[/red]: {escape(node_id)}")
        raise typer.Exit(code=1)
    console.print(build_node_table(ref))


@app.command()
def walk(
    file_path: str = typer.Argument(..., help="Tree file or name"),
    inputs: List[str] = typer.Argument(..., help="Input values, matched against one level each"),
    start: Optional[str] = typer.Option(None, "--start", help="Node id to start from (default: root)"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Walk the tree from the root, one input per level."""
    tree = _load(file_path, verbose)

    origin = tree.root if start is None else tree.find(start)
    if origin is None:
        console.print(f"[red]Node not found[/red]: {escape(start or '')}")
        raise typer.Exit(code=2)

    values = [parse_input(raw) for raw in inputs]
    cursor = Traverse.start(origin)
    try:
        visited = cursor.walk(values)
    except TypeError as exc:
        console.print(f"[red]Cannot compare input[/red]: {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print(build_path_table(origin, visited, values))
    console.print(f"\n[bold]Stopped at:[/bold] {escape(cursor.position)} (decision: {escape(format_value(cursor.decision()))})")

    if not visited:
        console.print(f"[red]No child of '{escape(origin.id)}' matches[/red] {escape(format_value(values[0]))}")
        raise typer.Exit(code=1)
    if len(visited) < len(values):
        unmatched = values[len(visited)]
        console.print(f"[yellow]No match for[/yellow] {escape(format_value(unmatched))}; remaining inputs ignored")


__all__ = ["app", "parse_input"]
