from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict, List, Optional

from .log import get_logger
from .model import TreeNode

log = get_logger(__name__)

ROOT_GUID = "root________"

_ROOT_LABELS = {
    "toolbar": "Bookmarks Toolbar",
    "menu": "Bookmarks Menu",
    "unfiled": "Other Bookmarks",
    "mobile": "Mobile Bookmarks",
    "tags": "Tags",
}

_ROOT_GUID_TO_NAME = {
    "menu________": "menu",
    "toolbar_____": "toolbar",
    "tags________": "tags",
    "unfiled_____": "unfiled",
    "mobile______": "mobile",
}

_TYPE_BOOKMARK = 1
_TYPE_FOLDER = 2


def parse_firefox_places(profile_or_db_path: Path) -> List[TreeNode]:
    """Read a Firefox profile's bookmarks as the tree ``bookmarks.getTree()`` returns.

    One root (untitled) holds the menu, toolbar, other and mobile folders; the
    tags folder is left out. Separators and ``place:`` queries are skipped.
    """
    db_path = _resolve_places_path(profile_or_db_path)
    uri = f"file:{db_path.as_posix()}?mode=ro"
    conn = sqlite3.connect(uri, uri=True)
    conn.row_factory = sqlite3.Row
    try:
        guid_expr = "b.guid" if _has_column(conn, "moz_bookmarks", "guid") else "NULL AS guid"
        hidden_expr = "p.hidden" if _has_column(conn, "moz_places", "hidden") else "0 AS hidden"
        rows = conn.execute(
            f"""
            SELECT
              b.id, b.fk, b.parent, b.type, b.position, b.title, {guid_expr}, b.dateAdded, b.lastModified,
              p.url, {hidden_expr}
            FROM moz_bookmarks b
            LEFT JOIN moz_places p ON p.id = b.fk
            ORDER BY b.parent, b.position, b.id
            """
        ).fetchall()
        root_rows = []
        if _has_table(conn, "moz_bookmarks_roots"):
            root_rows = conn.execute(
                "SELECT root_name, folder_id FROM moz_bookmarks_roots"
            ).fetchall()
    finally:
        conn.close()

    roots_by_id = {int(r["folder_id"]): str(r["root_name"]) for r in root_rows}
    if not roots_by_id:
        # Newer desktop profiles lack moz_bookmarks_roots; derive roots by stable GUIDs.
        for r in rows:
            root_name = _ROOT_GUID_TO_NAME.get(str(r["guid"] or ""))
            if root_name:
                roots_by_id[int(r["id"])] = root_name

    top_id = next((int(r["id"]) for r in rows if int(r["parent"] or 0) == 0), None)
    if top_id is None:
        log.warning("No bookmarks root in %s", db_path)
        return []

    nodes: Dict[int, TreeNode] = {}
    skipped = 0
    for r in rows:
        row_id = int(r["id"])
        node = _node_for_row(r, roots_by_id, is_top=row_id == top_id)
        if node is None:
            skipped += 1
            continue
        nodes[row_id] = node

    # Rows arrive grouped by parent in position order, so children keep their order.
    for r in rows:
        row_id = int(r["id"])
        if row_id == top_id or row_id not in nodes:
            continue
        parent_row_id = int(r["parent"] or 0)
        if parent_row_id == top_id and roots_by_id.get(row_id) == "tags":
            continue
        parent = nodes.get(parent_row_id)
        if parent is None or parent.children is None:
            continue
        child = nodes[row_id]
        child.parent_id = parent.id
        child.index = len(parent.children)
        parent.children.append(child)

    if skipped:
        log.debug("Skipped %d separators, queries and hidden places.", skipped)
    log.info("Read %d bookmark nodes from %s", len(nodes), db_path)
    return [nodes[top_id]]


def _node_for_row(r: sqlite3.Row, roots_by_id: Dict[int, str], *, is_top: bool) -> Optional[TreeNode]:
    row_id = int(r["id"])
    node_id = str(r["guid"]) if r["guid"] else str(row_id)
    kind = int(r["type"] or 0)
    date_added = _moz_time_to_ms(r["dateAdded"])

    if is_top:
        return TreeNode(id=node_id if r["guid"] else ROOT_GUID, title="", date_added=date_added, children=[])

    if kind == _TYPE_FOLDER:
        root_name = roots_by_id.get(row_id)
        if root_name:
            title = _ROOT_LABELS.get(root_name, root_name.title())
        else:
            title = (r["title"] or "").strip()
        return TreeNode(
            id=node_id,
            title=title,
            date_added=date_added,
            date_group_modified=_moz_time_to_ms(r["lastModified"]),
            children=[],
        )

    if kind != _TYPE_BOOKMARK or r["fk"] is None:
        return None
    url = (r["url"] or "").strip()
    if not url or url.startswith("place:"):
        return None
    if int(r["hidden"] or 0) != 0:
        return None
    return TreeNode(
        id=node_id,
        title=(r["title"] or "").strip() or url,
        url=url,
        date_added=date_added,
    )


def _resolve_places_path(profile_or_db_path: Path) -> Path:
    p = Path(profile_or_db_path)
    if p.is_file():
        return p
    db = p / "places.sqlite"
    if db.exists():
        return db
    raise FileNotFoundError(f"places.sqlite not found in {p}")


def _has_table(conn: sqlite3.Connection, name: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=? LIMIT 1",
        (name,),
    ).fetchone()
    return row is not None


def _has_column(conn: sqlite3.Connection, table_name: str, column_name: str) -> bool:
    rows = conn.execute(f"PRAGMA table_info({table_name})").fetchall()
    return any(str(r[1]) == column_name for r in rows)


def _moz_time_to_ms(value) -> Optional[int]:
    if value is None:
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    if iv <= 0:
        return None
    # Firefox PRTime is microseconds since Unix epoch.
    if iv > 100_000_000_000_000:
        return iv // 1000
    return iv
