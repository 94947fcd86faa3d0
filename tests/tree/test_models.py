"""
Tests for decision tree data models.

Tests cover:
- Node
- DecisionTree.init
- append / extend and the global index
- NodeRef navigation
- Structural validation of deserialized trees
"""

import pytest
from pydantic import ValidationError

from dtree.core.errors import DecisionTreeError, DuplicateIdentityError
from dtree.core.operators import Op
from dtree.core.tree.handles import NodeRef
from dtree.core.tree.models import DecisionTree, Node


class TestNode:
    """Tests for the Node record."""

    def test_node_creation(self):
        """Node defaults to a childless root-like record."""
        node = Node(id="root")

        assert node.id == "root"
        assert node.parent_id is None
        assert node.children_ids == []
        assert node.operator is None
        assert node.decision is None
        assert node.is_root
        assert node.is_leaf

    def test_node_operator_accepts_symbol(self):
        """Operator can be given as a symbol."""
        node = Node(id="n", operator=">=", decision=3, parent_id="root")

        assert node.operator is Op.GREATER_OR_EQUAL
        assert not node.is_root

    def test_node_id_is_frozen(self):
        """A node's identity cannot be reassigned."""
        node = Node(id="n")

        with pytest.raises(ValidationError):
            node.id = "other"

    def test_node_rejects_empty_id(self):
        with pytest.raises(ValidationError):
            Node(id="")

    def test_describe(self):
        node = Node(id="first", data="banana", decision=True, operator="equals", parent_id="root")

        assert node.describe() == "[first] 'banana' | == True"


class TestTreeInit:
    """Tests for DecisionTree.init."""

    def test_init_has_only_root(self):
        """A new tree holds exactly the root with the default id."""
        tree = DecisionTree.init()

        assert tree.root_id == "root"
        assert len(tree) == 1
        assert list(tree.nodes) == ["root"]
        assert tree.root.decision() is None
        assert tree.root.operator is None
        assert tree.root.parent() is None

    def test_init_custom_root(self):
        tree = DecisionTree.init("start", data="payload")

        assert tree.root.id == "start"
        assert tree.root.data == "payload"
        assert "start" in tree
        assert "root" not in tree


class TestAppend:
    """Tests for append."""

    def test_append_returns_new_child(self):
        """append targets the receiver and returns the new child's handle."""
        tree = DecisionTree.init()

        child = tree.root.append("first", "banana", True, Op.EQUAL)

        assert isinstance(child, NodeRef)
        assert child.id == "first"
        assert child.data == "banana"
        assert child.decision() is True
        assert child.operator is Op.EQUAL
        assert child.parent() == tree.root
        assert tree.root.children() == [child]

    def test_append_preserves_order(self, fruit_tree):
        """Children are kept in append order."""
        assert fruit_tree.nodes["root"].children_ids == ["first", "second", "third"]
        assert fruit_tree.nodes["second"].children_ids == ["fourth", "fifth"]

    def test_append_chaining_descends(self):
        """Chained appends build deeper levels."""
        tree = DecisionTree.init()

        leaf = tree.root.append("a", None, 1).append("b", None, 2).append("c", None, 3)

        assert [n.id for n in tree.get_path_to_node(leaf.id)] == ["root", "a", "b", "c"]

    def test_append_via_tree(self):
        tree = DecisionTree.init()

        ref = tree.append("root", "x", data="payload", decision=5, operator="lt")

        assert ref.operator is Op.LESS_THAN
        assert tree.find("x") == ref

    def test_append_unknown_parent(self):
        tree = DecisionTree.init()

        with pytest.raises(KeyError):
            tree.append("nowhere", "x")
        assert len(tree) == 1

    def test_duplicate_id_rejected(self, fruit_tree):
        """Re-using an id anywhere fails and leaves the tree unchanged."""
        fourth = fruit_tree.find("fourth")
        before_children = fourth.child_len()
        before_root_children = fruit_tree.root.child_len()
        before_index = len(fruit_tree)

        with pytest.raises(DuplicateIdentityError) as excinfo:
            fourth.append("first", "another banana", True)
        with pytest.raises(DuplicateIdentityError):
            fruit_tree.root.append("first", "banana", True)

        assert excinfo.value.node_id == "first"
        assert fourth.child_len() == before_children
        assert fruit_tree.root.child_len() == before_root_children
        assert len(fruit_tree) == before_index
        assert fruit_tree.find("first").parent() == fruit_tree.root

    def test_duplicate_root_id_rejected(self):
        tree = DecisionTree.init()

        with pytest.raises(DuplicateIdentityError):
            tree.root.append("root")

    def test_duplicate_error_hierarchy(self):
        """DuplicateIdentityError is both a library error and a KeyError."""
        assert issubclass(DuplicateIdentityError, DecisionTreeError)
        assert issubclass(DuplicateIdentityError, KeyError)
        assert str(DuplicateIdentityError("first")) == "Duplicate node id: first"

    def test_unknown_operator_leaves_tree_unchanged(self):
        tree = DecisionTree.init()

        with pytest.raises(ValueError):
            tree.root.append("x", None, 1, "approximately")

        assert len(tree) == 1
        assert tree.root.child_len() == 0

    def test_handles_stay_valid_while_tree_grows(self):
        """Handles taken early still resolve after many appends."""
        tree = DecisionTree.init()
        first = tree.root.append("first", None, 0)

        for i in range(50):
            tree.root.append(f"n{i}", None, i)

        assert first.decision() == 0
        assert first.parent() == tree.root
        assert tree.root.child_len() == 51


class TestExtend:
    """Tests for batch appends."""

    def test_extend_returns_receiver(self):
        tree = DecisionTree.init()

        same = tree.root.extend([("a", "A", 1), ("b", "B", 2, "gt")])

        assert same == tree.root
        assert [c.id for c in tree.root.children()] == ["a", "b"]
        assert tree.find("a").operator is Op.EQUAL
        assert tree.find("b").operator is Op.GREATER_THAN

    def test_extend_is_all_or_nothing(self, fruit_tree):
        """A single bad entry rejects the whole batch."""
        before = len(fruit_tree)

        with pytest.raises(DuplicateIdentityError):
            fruit_tree.find("third").extend([("x", None, 1), ("second", None, 2)])
        with pytest.raises(DuplicateIdentityError):
            fruit_tree.find("third").extend([("y", None, 1), ("y", None, 2)])
        with pytest.raises(ValueError):
            fruit_tree.find("third").extend([("z", None, 1, "nope")])

        assert len(fruit_tree) == before
        assert fruit_tree.find("x") is None
        assert fruit_tree.find("y") is None
        assert fruit_tree.find("third").is_leaf

    def test_extend_bad_entry_shape(self):
        tree = DecisionTree.init()

        with pytest.raises(ValueError):
            tree.root.extend([("only-id",)])


class TestFind:
    """Tests for global lookup."""

    def test_find_missing_is_none(self, fruit_tree):
        assert fruit_tree.find("missing") is None
        assert fruit_tree.root.find("missing") is None

    def test_find_is_global(self, fruit_tree):
        """Lookup from deep inside the tree reaches unrelated branches."""
        fifth = fruit_tree.find("fifth")

        assert fifth.find("third") == fruit_tree.find("third")
        assert fifth.find("root") == fruit_tree.root

    def test_index_completeness(self, fruit_tree):
        """Every node reachable from the root is found as itself."""
        for node, _depth in fruit_tree.iter_depth_first():
            ref = fruit_tree.find(node.id)
            assert ref is not None
            assert ref.node is node

        assert sum(1 for _ in fruit_tree.iter_depth_first()) == len(fruit_tree)


class TestNavigation:
    """Tests for NodeRef navigation and tree queries."""

    def test_siblings(self, fruit_tree):
        second = fruit_tree.find("second")

        assert [s.id for s in second.siblings()] == ["first", "third"]
        assert fruit_tree.root.siblings() == []

    def test_last_child(self, fruit_tree):
        assert fruit_tree.root.last_child().id == "third"
        assert fruit_tree.find("first").last_child() is None

    def test_handle_equality(self, fruit_tree):
        """Handles compare by tree identity and id."""
        other = DecisionTree.init()

        assert fruit_tree.find("root") == fruit_tree.root
        assert fruit_tree.root != other.root
        assert len({fruit_tree.root, fruit_tree.find("root")}) == 1

    def test_depth_first_order(self, fruit_tree):
        order = [(node.id, depth) for node, depth in fruit_tree.iter_depth_first()]

        assert order == [
            ("root", 0),
            ("first", 1),
            ("second", 1),
            ("fourth", 2),
            ("fifth", 2),
            ("third", 1),
        ]

    def test_statistics(self, fruit_tree):
        stats = fruit_tree.get_statistics()

        assert stats == {"total_nodes": 6, "depth": 3, "leaf_nodes": 4, "branch_points": 2}
        assert DecisionTree.init().get_depth() == 1

    def test_queries_on_unknown_id(self, fruit_tree):
        assert fruit_tree.get_node("missing") is None
        assert fruit_tree.get_children("missing") == []
        assert fruit_tree.get_siblings("missing") == []
        assert fruit_tree.get_path_to_node("missing") == []


class TestStructureValidation:
    """Deserialized trees must describe a consistent arena."""

    def test_model_dump_round_trip(self, fruit_tree):
        restored = DecisionTree.model_validate(fruit_tree.model_dump())

        assert restored.nodes["second"].children_ids == ["fourth", "fifth"]
        assert restored.find("fourth").parent().id == "second"
        assert restored.find("third").operator is Op.EQUAL

    def test_missing_root(self):
        with pytest.raises(ValidationError):
            DecisionTree(root_id="root", nodes={})

    def test_child_without_back_reference(self):
        data = {
            "root_id": "root",
            "nodes": {
                "root": {"id": "root", "children_ids": ["a"]},
                "a": {"id": "a", "parent_id": "elsewhere", "operator": "equals"},
            },
        }

        with pytest.raises(ValidationError):
            DecisionTree.model_validate(data)

    def test_unreachable_cycle(self):
        data = {
            "root_id": "root",
            "nodes": {
                "root": {"id": "root"},
                "a": {"id": "a", "parent_id": "b", "children_ids": ["b"], "operator": "equals"},
                "b": {"id": "b", "parent_id": "a", "children_ids": ["a"], "operator": "equals"},
            },
        }

        with pytest.raises(ValidationError):
            DecisionTree.model_validate(data)

    def test_mismatched_key(self):
        data = {"root_id": "root", "nodes": {"root": {"id": "other"}}}

        with pytest.raises(ValidationError):
            DecisionTree.model_validate(data)
