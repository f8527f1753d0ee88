from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .log import get_logger
from .model import ROOT_ID, TreeNode

log = get_logger(__name__)

_ROOT_KEYS = ("bookmark_bar", "other", "synced")
# Milliseconds between 1601-01-01 (WebKit epoch) and 1970-01-01.
_WEBKIT_EPOCH_OFFSET_MS = 11_644_473_600_000


def parse_chromium_bookmarks(profile_or_file: Path) -> List[TreeNode]:
    """Read a Chromium ``Bookmarks`` file into the ``bookmarks.getTree()`` shape.

    The synthetic root has id "0" and holds the bookmark bar, other and synced
    folders in that order.
    """
    path = _resolve_bookmarks_path(profile_or_file)
    data = json.loads(path.read_text(encoding="utf-8"))
    forest = chromium_forest(data)
    log.info("Read Chromium bookmarks: %s", path)
    return forest


def chromium_forest(data: Dict[str, Any]) -> List[TreeNode]:
    roots = data.get("roots") or {}
    root = TreeNode(id=ROOT_ID, title="", children=[])

    stack: List[Tuple[Dict[str, Any], TreeNode]] = []
    for key in _ROOT_KEYS:
        raw = roots.get(key)
        if not isinstance(raw, dict):
            continue
        stack.append((raw, root))

    # Walk in document order: reverse pushes so the first entry pops first.
    stack.reverse()
    while stack:
        raw, parent = stack.pop()
        node = _node_from_entry(raw, parent)
        if node is None:
            continue
        parent.children.append(node)
        if node.children is not None:
            stack.extend((child, node) for child in reversed(raw.get("children") or []))
    return [root]


def _node_from_entry(raw: Dict[str, Any], parent: TreeNode) -> Optional[TreeNode]:
    kind = raw.get("type")
    common = dict(
        id=str(raw.get("id", "")),
        title=str(raw.get("name") or ""),
        date_added=_webkit_to_ms(raw.get("date_added")),
        parent_id=parent.id,
        index=len(parent.children or []),
    )
    if kind == "folder":
        return TreeNode(children=[], date_group_modified=_webkit_to_ms(raw.get("date_modified")), **common)
    if kind == "url" and raw.get("url"):
        return TreeNode(url=str(raw["url"]), **common)
    log.warning("Skipping Chromium bookmark entry of type %r (id=%s).", kind, raw.get("id"))
    return None


def _resolve_bookmarks_path(profile_or_file: Path) -> Path:
    p = Path(profile_or_file)
    if p.is_file():
        return p
    f = p / "Bookmarks"
    if f.exists():
        return f
    raise FileNotFoundError(f"Bookmarks file not found in {p}")


def _webkit_to_ms(value) -> Optional[int]:
    if value in (None, "", "0", 0):
        return None
    try:
        return int(value) // 1000 - _WEBKIT_EPOCH_OFFSET_MS
    except (TypeError, ValueError):
        return None
