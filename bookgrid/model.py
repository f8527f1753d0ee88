from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

SortField = Literal["title", "dateAdded"]
SortOrder = Literal["asc", "desc"]
SearchMode = Literal["all", "title", "url"]

# Id of the synthetic root the browser bookmarks API puts above the real roots.
ROOT_ID = "0"


@dataclass
class TreeNode:
    """One folder or bookmark of a bookmark tree.

    A node is a folder iff ``children`` is not None and a bookmark iff ``url``
    is a non-empty string. Producers are trusted to keep these exclusive; a node carrying
    both is flattened as a bookmark, its children unvisited, and nothing here rejects it.
    """

    id: str
    title: str = ""
    url: Optional[str] = None
    date_added: Optional[int] = None
    parent_id: Optional[str] = None
    children: Optional[List["TreeNode"]] = None
    index: Optional[int] = None
    date_group_modified: Optional[int] = None

    @property
    def is_folder(self) -> bool:
        return self.children is not None

    @property
    def is_bookmark(self) -> bool:
        """True when ``url`` is a non-empty string; ``url=""`` is not a bookmark."""
        return bool(self.url)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TreeNode":
        """Build a node (and its subtree) from the camelCase browser API shape."""
        root = _node_from_fields(data)
        stack: List[Tuple[TreeNode, Dict[str, Any]]] = [(root, data)]
        while stack:
            node, raw = stack.pop()
            raw_children = raw.get("children")
            if raw_children is None:
                continue
            node.children = []
            for raw_child in raw_children:
                child = _node_from_fields(raw_child)
                node.children.append(child)
                stack.append((child, raw_child))
        return root

    def to_dict(self) -> Dict[str, Any]:
        out = _fields_to_dict(self)
        stack: List[Tuple[TreeNode, Dict[str, Any]]] = [(self, out)]
        while stack:
            node, raw = stack.pop()
            if node.children is None:
                continue
            raw["children"] = []
            for child in node.children:
                raw_child = _fields_to_dict(child)
                raw["children"].append(raw_child)
                stack.append((child, raw_child))
        return out


@dataclass(frozen=True)
class FlatBookmark:
    id: str
    title: str
    url: str
    date_added: int = 0
    parent_id: str = ""
    parent_path: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "dateAdded": self.date_added,
            "parentId": self.parent_id,
            "parentPath": list(self.parent_path),
        }


def forest_from_json(source: Union[str, bytes, List[Dict[str, Any]], Dict[str, Any]]) -> List[TreeNode]:
    """Load a ``bookmarks.getTree()`` dump (a list of roots, or a single root)."""
    data = json.loads(source) if isinstance(source, (str, bytes)) else source
    if isinstance(data, dict):
        data = [data]
    return [TreeNode.from_dict(d) for d in data]


def _node_from_fields(raw: Dict[str, Any]) -> TreeNode:
    return TreeNode(
        id=str(raw.get("id", "")),
        title=str(raw.get("title") or ""),
        url=raw.get("url"),
        date_added=_maybe_int(raw.get("dateAdded")),
        parent_id=None if raw.get("parentId") is None else str(raw["parentId"]),
        index=_maybe_int(raw.get("index")),
        date_group_modified=_maybe_int(raw.get("dateGroupModified")),
    )


def _fields_to_dict(node: TreeNode) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": node.id, "title": node.title}
    if node.url is not None:
        out["url"] = node.url
    if node.date_added is not None:
        out["dateAdded"] = node.date_added
    if node.date_group_modified is not None:
        out["dateGroupModified"] = node.date_group_modified
    if node.index is not None:
        out["index"] = node.index
    if node.parent_id is not None:
        out["parentId"] = node.parent_id
    return out


def _maybe_int(v) -> Optional[int]:
    if v is None:
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None
