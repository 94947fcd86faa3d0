"""
Shared fixtures for decision tree tests.
"""

import textwrap

import pytest

from dtree.core.tree import DecisionTree

FRUIT_YAML = textwrap.dedent(
    """
    root:
      id: root
      data: fruit basket
    children:
      - id: first
        data: banana
        decision: true
        operator: equals
      - id: second
        data: apple
        decision: false
        operator: equals
        children:
          - id: fourth
            data: red apple
            decision: true
          - id: fifth
            data: green apple
            decision: false
      - id: third
        data: orange
        decision: false
        operator: equals
    """
)


def build_fruit_tree() -> DecisionTree:
    """root -> {first, second -> {fourth, fifth}, third}."""
    tree = DecisionTree.init()
    root = tree.root
    root.append("first", "banana", True)
    second = root.append("second", "apple", False)
    root.append("third", "orange", False)
    second.append("fourth", "red apple", True)
    second.append("fifth", "green apple", False)
    return tree


@pytest.fixture
def fruit_tree() -> DecisionTree:
    return build_fruit_tree()


@pytest.fixture
def fruit_yaml(tmp_path):
    """Fruit tree definition written to a temporary file."""
    path = tmp_path / "fruit.yaml"
    path.write_text(FRUIT_YAML, encoding="utf-8")
    return path
