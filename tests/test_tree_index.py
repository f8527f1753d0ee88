from bookgrid.model import TreeNode
from bookgrid.tree_index import build_index


def test_build_index_registers_every_node(deep_tree):
    index = build_index(deep_tree)
    assert len(index) == 10
    assert index.get_item("13").title == "PyPI"
    assert "14" in index
    assert index.get_item("missing") is None


def test_child_folder_ids_keeps_source_order_and_skips_bookmarks(deep_tree):
    index = build_index(deep_tree)
    assert index.child_folder_ids("0") == ["1", "2"]
    assert index.child_folder_ids("10") == ["12", "14"]
    assert index.child_folder_ids("1") == ["10"]


def test_child_folder_ids_is_empty_for_leaves_and_unknown_ids(deep_tree):
    index = build_index(deep_tree)
    assert index.child_folder_ids("11") == []
    assert index.child_folder_ids("nope") == []
    assert index.child_folder_ids("14") == []
    assert index.has_sub_folders("10") is True
    assert index.has_sub_folders("12") is False


def test_build_index_duplicate_ids_last_visited_wins():
    first = TreeNode(id="dup", title="first", children=[])
    second = TreeNode(id="dup", title="second", url="https://x/")
    index = build_index([TreeNode(id="0", title="", children=[first, second])])
    assert index.get_item("dup") is second


def test_build_index_handles_forest_of_roots():
    a = TreeNode(id="a", title="A", children=[TreeNode(id="a1", title="A1", url="https://a/")])
    b = TreeNode(id="b", title="B", children=[])
    index = build_index([a, b])
    assert set(index.by_id) == {"a", "a1", "b"}


def test_build_index_survives_very_deep_trees():
    root = TreeNode(id="0", title="", children=[])
    node = root
    for i in range(5000):
        child = TreeNode(id=f"f{i}", title=f"F{i}", children=[])
        node.children.append(child)
        node = child
    index = build_index([root])
    assert len(index) == 5001
    assert index.child_folder_ids("f4998") == ["f4999"]
