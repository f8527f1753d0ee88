from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .model import ROOT_ID, TreeNode


def get_top_level_folders(tree: Sequence[TreeNode]) -> List[TreeNode]:
    """Folders directly under the first root; bookmarks at that level are left out."""
    if not tree:
        return []
    root = tree[0]
    if not root.children:
        return []
    return [node for node in root.children if not node.url and node.children is not None]


def find_node_by_id(tree: Sequence[TreeNode], node_id: str) -> Optional[TreeNode]:
    stack: List[TreeNode] = list(reversed(tree))
    while stack:
        node = stack.pop()
        if node.id == node_id:
            return node
        if node.children:
            stack.extend(reversed(node.children))
    return None


def get_node_path(tree: Sequence[TreeNode], node_id: str, root_id: str = ROOT_ID) -> List[TreeNode]:
    """Root-to-node chain of the first pre-order match, node included.

    The synthetic root and untitled nodes are dropped so the result can be
    shown as a breadcrumb. Empty when ``node_id`` is not in the tree.
    """
    chain = _chain_to(tree, node_id)
    return [node for node in chain if node.id != root_id and node.title and node.title.strip()]


def _chain_to(tree: Sequence[TreeNode], node_id: str) -> List[TreeNode]:
    # Each entry carries the chain of ancestors above the node.
    stack: List[Tuple[TreeNode, Tuple[TreeNode, ...]]] = [(node, ()) for node in reversed(tree)]
    while stack:
        node, ancestors = stack.pop()
        chain = ancestors + (node,)
        if node.id == node_id:
            return list(chain)
        if node.children:
            stack.extend((child, chain) for child in reversed(node.children))
    return []
