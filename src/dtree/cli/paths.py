from __future__ import annotations

"""Utilities for resolving tree definition paths."""

from pathlib import Path

from dtree.io.loaders.tree_loader import TREE_SUFFIXES


def trees_dir() -> Path:
    return Path.cwd() / "trees"


def default_tree_path(name: str) -> str:
    """Path under ./trees/ for a bare tree name, adding .yaml when missing."""
    base = Path(name).name
    if not base.endswith(TREE_SUFFIXES):
        base = f"{base}.yaml"
    return str(trees_dir() / base)


def find_tree_file(name_or_path: str) -> str:
    """
    Find a tree definition file.

    1. If path exists as-is, use it
    2. If path exists with .yaml extension, use it
    3. Otherwise, look in trees/ under the working directory

    Raises:
        FileNotFoundError: If file cannot be found
    """
    p = Path(name_or_path)
    if p.exists():
        return str(p)

    if not str(name_or_path).endswith(TREE_SUFFIXES):
        p_with_yaml = Path(f"{name_or_path}.yaml")
        if p_with_yaml.exists():
            return str(p_with_yaml)

    candidate = Path(default_tree_path(name_or_path))
    if candidate.exists():
        return str(candidate)

    raise FileNotFoundError(
        f"Tree file not found: '{name_or_path}'\nLooked in:\n  - {name_or_path}\n  - {candidate}"
    )


__all__ = ["default_tree_path", "find_tree_file", "trees_dir"]
