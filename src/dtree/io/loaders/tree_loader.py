from __future__ import annotations

import glob
import os
from typing import Any, Dict, List, Mapping

import yaml
from pydantic import ValidationError

from dtree.core.errors import DuplicateIdentityError
from dtree.core.tree import DecisionTree
from dtree.io.loaders.errors import LoaderError
from dtree.io.loaders.file_spec import TreeFileSpec
from dtree.utils.logging import log_calls, summarize_tree

TREE_SUFFIXES = (".yaml", ".yml")


def _read_yaml(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Malformed YAML", cause=exc) from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise LoaderError(path, "Unreadable tree file", cause=exc) from exc


def _tree_files(path: str) -> List[str]:
    files: List[str] = []
    for suffix in TREE_SUFFIXES:
        files.extend(glob.glob(os.path.join(path, "**", f"*{suffix}"), recursive=True))
    return sorted(files)


def parse_tree_file(data: Any, source: str = "<memory>") -> TreeFileSpec:
    """Validate raw YAML data against the tree file schema."""
    if not isinstance(data, Mapping):
        raise LoaderError(source, f"Expected a mapping at the top level, got {type(data).__name__}")
    try:
        return TreeFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(source, "Invalid decision tree definition", cause=exc) from exc


@log_calls(summarize=summarize_tree)
def load_tree_from_dict(data: Any, source: str = "<memory>") -> DecisionTree:
    """Build a tree from an already parsed definition mapping.

    Expected format:
    root:
      id: root
      data: fruit basket
    children:
      - id: first
        data: banana
        decision: true
        operator: equals
        children: []
    """
    spec = parse_tree_file(data, source)
    try:
        return spec.build_tree()
    except DuplicateIdentityError as exc:
        raise LoaderError(source, f"Duplicate node id '{exc.node_id}'", cause=exc) from exc


def load_tree(path: str) -> DecisionTree:
    """Load a single decision tree YAML file."""
    if not os.path.isfile(path):
        raise LoaderError(path, "Tree file not found")
    return load_tree_from_dict(_read_yaml(path), source=path)


def load_tree_directory(path: str) -> Dict[str, DecisionTree]:
    """Load every ``*.yaml``/``*.yml`` file under a directory, keyed by file stem."""
    trees: Dict[str, DecisionTree] = {}
    if not os.path.exists(path):
        return trees
    files = _tree_files(path)
    for fp in files:
        name = os.path.splitext(os.path.basename(fp))[0]
        if name in trees:
            raise LoaderError(fp, f"Tree name '{name}' is defined by more than one file")
        trees[name] = load_tree(fp)
    return trees


@log_calls()
def dump_tree(tree: DecisionTree, path: str) -> None:
    """Write a tree in the same format ``load_tree`` reads.

    The YAML text is rendered before the file is opened, so a payload PyYAML
    cannot represent leaves no partial file behind.
    """
    text = yaml.safe_dump(tree.to_dict(), sort_keys=False, allow_unicode=True)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


__all__ = ["TREE_SUFFIXES", "dump_tree", "load_tree", "load_tree_directory", "load_tree_from_dict", "parse_tree_file"]
