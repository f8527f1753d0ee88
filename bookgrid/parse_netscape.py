from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup  # type: ignore

from .log import get_logger
from .model import TreeNode

log = get_logger(__name__)
_WS_RE = re.compile(r"\s+")

IMPORT_ROOT_TITLE = "收藏夹栏"


def parse_bookmarks_html(path: Path, root_title: str = IMPORT_ROOT_TITLE) -> List[TreeNode]:
    text = path.read_text(encoding="utf-8", errors="replace")
    forest = parse_bookmarks_text(text, root_title=root_title)
    log.info("Parsed bookmarks export: %s", path)
    return forest


def parse_bookmarks_text(text: str, root_title: str = IMPORT_ROOT_TITLE) -> List[TreeNode]:
    """Build a single-root forest from a Netscape bookmark export.

    Ids are sequential strings in document pre-order, starting with "1" for the
    synthetic root.
    """
    soup = BeautifulSoup(text, "lxml")
    dl = soup.find("dl")
    if dl is None:
        raise ValueError("Could not find <DL> root in bookmarks file")

    counter = 0

    def next_id() -> str:
        nonlocal counter
        counter += 1
        return str(counter)

    root = TreeNode(id=next_id(), title=root_title, children=[])
    folders = bookmarks = 0

    stack: List[Tuple[object, TreeNode]] = [(dt, root) for dt in reversed(_entries(dl))]
    while stack:
        dt, parent = stack.pop()
        h3 = dt.find("h3", recursive=False)
        if h3 is not None:
            folder = TreeNode(
                id=next_id(),
                title=_WS_RE.sub(" ", h3.get_text(strip=True)),
                date_added=_seconds_to_ms(h3.get("add_date")),
                date_group_modified=_seconds_to_ms(h3.get("last_modified")),
                parent_id=parent.id,
                index=len(parent.children),
                children=[],
            )
            parent.children.append(folder)
            folders += 1
            sub_dl = _folder_list(dt)
            if sub_dl is None:
                log.warning("Folder without DL: %s", folder.title)
                continue
            stack.extend((child, folder) for child in reversed(_entries(sub_dl)))
            continue

        a = dt.find("a", recursive=False)
        if a is not None and a.get("href"):
            parent.children.append(
                TreeNode(
                    id=next_id(),
                    title=_WS_RE.sub(" ", a.get_text(strip=True)),
                    url=a.get("href"),
                    date_added=_seconds_to_ms(a.get("add_date")),
                    parent_id=parent.id,
                    index=len(parent.children),
                )
            )
            bookmarks += 1

    log.debug("Imported %d folders and %d bookmarks.", folders, bookmarks)
    return [root]


def _entries(dl) -> list:
    # lxml leaves <DT> unclosed, so later siblings nest inside earlier ones;
    # an entry belongs to the list that is its nearest DL ancestor.
    return [dt for dt in dl.find_all("dt") if dt.find_parent("dl") is dl]


def _folder_list(dt):
    for sub_dl in dt.find_all("dl"):
        if sub_dl.find_parent("dt") is dt:
            return sub_dl
    # Exports usually put the folder's DL right after its DT.
    nxt = dt.find_next_sibling()
    if nxt is not None and nxt.name == "dl":
        return nxt
    return None


def _seconds_to_ms(v) -> Optional[int]:
    if v is None:
        return None
    try:
        return int(v) * 1000
    except ValueError:
        return None
