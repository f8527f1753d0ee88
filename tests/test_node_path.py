from bookgrid.model import TreeNode
from bookgrid.node_path import find_node_by_id, get_node_path, get_top_level_folders

from conftest import folder, link


def test_top_level_folders_excludes_direct_bookmarks(scenario_tree):
    folders = get_top_level_folders(scenario_tree)
    assert [f.id for f in folders] == ["1"]


def test_top_level_folders_of_empty_inputs():
    assert get_top_level_folders([]) == []
    assert get_top_level_folders([TreeNode(id="0", title="")]) == []
    assert get_top_level_folders([TreeNode(id="0", title="", children=[])]) == []


def test_top_level_folders_skips_nodes_with_url_and_children():
    odd = TreeNode(id="odd", title="Odd", url="https://odd/", children=[])
    tree = [folder("0", "", odd, folder("1", "Real"))]
    assert [f.id for f in get_top_level_folders(tree)] == ["1"]


def test_top_level_folders_only_looks_at_first_root():
    tree = [folder("a", "A", folder("a1", "A1")), folder("b", "B", folder("b1", "B1"))]
    assert [f.id for f in get_top_level_folders(tree)] == ["a1"]


def test_node_path_returns_chain_without_root(deep_tree):
    path = get_node_path(deep_tree, "13")
    assert [n.id for n in path] == ["1", "10", "12", "13"]


def test_node_path_drops_untitled_nodes():
    tree = [folder("r", "", folder("a", "   ", folder("b", "B", link("c", "C", "https://c/"))))]
    assert [n.id for n in get_node_path(tree, "c")] == ["b", "c"]


def test_node_path_drops_configured_root_id():
    tree = [folder("root", "Root title", folder("a", "A"))]
    assert [n.id for n in get_node_path(tree, "a")] == ["root", "a"]
    assert [n.id for n in get_node_path(tree, "a", root_id="root")] == ["a"]


def test_node_path_unknown_id_is_empty(deep_tree):
    assert get_node_path(deep_tree, "404") == []
    assert get_node_path([], "1") == []


def test_node_path_first_preorder_match_wins():
    tree = [
        folder(
            "0",
            "",
            folder("a", "A", folder("dup", "First")),
            folder("b", "B", folder("dup", "Second")),
        )
    ]
    path = get_node_path(tree, "dup")
    assert [n.title for n in path] == ["A", "First"]


def test_find_node_by_id_searches_all_depths(deep_tree):
    assert find_node_by_id(deep_tree, "12").title == "Python"
    assert find_node_by_id(deep_tree, "0").id == "0"
    assert find_node_by_id(deep_tree, "nope") is None
