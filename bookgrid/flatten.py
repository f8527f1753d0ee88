from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from .log import get_logger
from .model import ROOT_ID, FlatBookmark, TreeNode
from .node_path import find_node_by_id, get_node_path

log = get_logger(__name__)

PathEntry = Union[str, TreeNode]


def flatten_bookmarks(
    nodes: Sequence[TreeNode],
    parent_path: Sequence[PathEntry] = (),
) -> List[FlatBookmark]:
    """Every bookmark below ``nodes`` in pre-order, tagged with its folder ids.

    ``parent_path`` seeds the ancestor ids of ``nodes`` themselves; it may hold
    ids or the nodes returned by ``get_node_path``.
    """
    seed = tuple(p.id if isinstance(p, TreeNode) else str(p) for p in parent_path)
    out: List[FlatBookmark] = []
    stack: List[Tuple[TreeNode, Tuple[str, ...]]] = [(node, seed) for node in reversed(nodes)]
    while stack:
        node, path = stack.pop()
        if node.url:
            out.append(
                FlatBookmark(
                    id=node.id,
                    title=node.title,
                    url=node.url,
                    date_added=node.date_added or 0,
                    parent_id=node.parent_id or "",
                    parent_path=path,
                )
            )
        elif node.children is not None:
            child_path = path + (node.id,)
            stack.extend((child, child_path) for child in reversed(node.children))
    return out


def get_bookmarks_in_folder(
    tree: Sequence[TreeNode],
    folder_id: Optional[str],
    root_id: str = ROOT_ID,
) -> List[FlatBookmark]:
    """Bookmarks under ``folder_id`` (any depth), or the whole tree when it is None."""
    if not folder_id:
        return flatten_bookmarks(tree)

    folder = find_node_by_id(tree, folder_id)
    if folder is None or folder.children is None:
        log.debug("Folder %s not found or has no children.", folder_id)
        return []

    path = get_node_path(tree, folder_id, root_id)
    return flatten_bookmarks(folder.children, path)
