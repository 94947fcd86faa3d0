from __future__ import annotations

"""Shared helpers for loading tree files with CLI-friendly errors."""

from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from dtree.cli.paths import find_tree_file
from dtree.io.loaders import LoaderError

T = TypeVar("T")


def resolve_or_exit(name_or_path: str, *, console: Console) -> str:
    try:
        return find_tree_file(name_or_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)


def load_or_exit(
    loader_fn: Callable[..., T],
    *args: Any,
    console: Console,
    verbose_errors: bool = False,
    **kwargs: Any,
) -> T:
    try:
        return loader_fn(*args, **kwargs)
    except LoaderError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load tree:[/red] {escape(err.message)}\n{escape(str(err.cause))}")
        else:
            console.print(f"[red]Failed to load tree:[/red] {escape(str(err))}")
        raise typer.Exit(code=1)


__all__ = ["load_or_exit", "resolve_or_exit"]
