from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .log import get_logger
from .model import TreeNode

log = get_logger(__name__)


@dataclass
class TreeIndex:
    by_id: Dict[str, TreeNode] = field(default_factory=dict)

    def get_item(self, node_id: str) -> Optional[TreeNode]:
        return self.by_id.get(node_id)

    def child_folder_ids(self, node_id: str) -> List[str]:
        """Ids of the direct children of ``node_id`` that are not bookmarks, in source order."""
        item = self.by_id.get(node_id)
        if item is None or item.children is None:
            return []
        return [child.id for child in item.children if not child.url]

    def has_sub_folders(self, node_id: str) -> bool:
        return bool(self.child_folder_ids(node_id))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.by_id

    def __len__(self) -> int:
        return len(self.by_id)


def build_index(forest: Iterable[TreeNode]) -> TreeIndex:
    """Register every node of ``forest`` by id, depth-first pre-order.

    Duplicate ids are not detected: the node visited last wins.
    """
    by_id: Dict[str, TreeNode] = {}
    stack: List[TreeNode] = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        by_id[node.id] = node
        if node.children:
            stack.extend(reversed(node.children))
    log.debug("Indexed %d tree nodes.", len(by_id))
    return TreeIndex(by_id=by_id)
