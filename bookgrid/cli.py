from __future__ import annotations

import argparse
import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .config import Settings, load_settings
from .log import LogConfig, get_logger, setup_logging
from .model import FlatBookmark, TreeNode
from .search import GlobalSearchOptions, is_valid_pattern
from .store import open_store
from .tree_index import TreeIndex
from .view import VIRTUAL_ROOT_ID, BookmarkView, ViewState

log = get_logger(__name__)


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="bookgrid",
        description="Browse, search and sort a bookmark tree (browser profile or HTML export).",
    )
    p.add_argument("-V", "--version", action="version", version=f"bookgrid {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (optional). Env vars override defaults.")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARN/ERROR (overrides env/config).")
    p.add_argument("--no-color", action="store_true", help="Disable colored logging.")

    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--html", help="Netscape bookmarks HTML export.")
    src.add_argument("--firefox-profile", help="Firefox profile dir or places.sqlite.")
    src.add_argument("--chromium-profile", help="Chromium/Chrome profile dir or Bookmarks file.")
    src.add_argument("--tree-json", help="JSON dump of bookmarks.getTree().")

    sub = p.add_subparsers(dest="cmd", required=True)

    fo = sub.add_parser("folders", help="Show the folder tree.")
    fo.add_argument("--json", action="store_true", help="Print JSON lines instead of a tree.")

    ls = sub.add_parser("ls", help="List bookmarks in a folder (all bookmarks without --folder).")
    ls.add_argument("--folder", default=None, help="Folder id.")
    ls.add_argument("--query", default="", help="Case-insensitive filter on title or URL.")
    ls.add_argument("--sort", choices=["title", "dateAdded"], default=None, help="Sort field.")
    ls.add_argument("--order", choices=["asc", "desc"], default=None, help="Sort order.")
    ls.add_argument("--json", action="store_true", help="Print JSON lines instead of a table.")

    pa = sub.add_parser("path", help="Show the breadcrumb of a node.")
    pa.add_argument("node_id", help="Node id.")
    pa.add_argument("--json", action="store_true", help="Print JSON lines instead of text.")

    se = sub.add_parser("search", help="Search all bookmarks.")
    se.add_argument("query", help="Search text (or pattern with --regex).")
    se.add_argument("--mode", choices=["all", "title", "url"], default=None, help="Fields to search.")
    se.add_argument("--case-sensitive", action="store_true", default=None, help="Match case.")
    se.add_argument("--regex", action="store_true", default=None, help="Treat the query as a regular expression.")
    se.add_argument("--json", action="store_true", help="Print JSON lines instead of a table.")

    args = p.parse_args(argv)
    cfg = load_settings(args.config)
    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_color:
        cfg.no_color = True
    setup_logging(LogConfig(level=cfg.log_level, no_color=cfg.no_color))

    kind, path = _source_from_args(args)
    store = open_store(kind, Path(path), import_root_title=cfg.import_root_title)
    try:
        tree = store.tree()
    except (OSError, ValueError, sqlite3.Error) as e:
        log.error("Failed to load bookmarks from %s: %s", path, e)
        return 2

    view = BookmarkView(tree, ViewState(), locale=cfg.locale, root_id=cfg.root_id)
    if args.cmd == "folders":
        return _cmd_folders(args, view)
    if args.cmd == "ls":
        return _cmd_ls(args, view, cfg)
    if args.cmd == "path":
        return _cmd_path(args, view)
    if args.cmd == "search":
        return _cmd_search(args, view, cfg)
    return 2


def _source_from_args(args) -> tuple[str, str]:
    if args.html:
        return "html", args.html
    if args.firefox_profile:
        return "firefox", args.firefox_profile
    if args.chromium_profile:
        return "chromium", args.chromium_profile
    return "json", args.tree_json


def _cmd_folders(args, view: BookmarkView) -> int:
    index = view.sidebar_index()
    if args.json:
        for node, depth in _walk_folders(index):
            print(json.dumps({"id": node.id, "title": node.title, "depth": depth}, ensure_ascii=False))
        return 0

    root = Tree("Bookmarks")
    branches = {VIRTUAL_ROOT_ID: root}
    for node, _depth in _walk_folders(index):
        parent = branches.get(node.parent_id or "", root)
        branches[node.id] = parent.add(f"{escape(node.title)} [dim]({node.id})[/dim]")
    Console().print(root)
    return 0


def _walk_folders(index: TreeIndex) -> Iterable[tuple[TreeNode, int]]:
    stack = [(fid, 0) for fid in reversed(index.child_folder_ids(VIRTUAL_ROOT_ID))]
    while stack:
        fid, depth = stack.pop()
        node = index.get_item(fid)
        if node is None or node.children is None:
            continue
        yield node, depth
        stack.extend((cid, depth + 1) for cid in reversed(index.child_folder_ids(fid)))


def _cmd_ls(args, view: BookmarkView, cfg: Settings) -> int:
    sort_field = args.sort or cfg.default_sort_field or None
    view.state.current_folder_id = args.folder
    view.state.search_query = args.query
    view.state.sort_field = sort_field
    view.state.sort_order = args.order or cfg.default_sort_order
    _print_bookmarks(view.visible_bookmarks, as_json=args.json)
    return 0


def _cmd_path(args, view: BookmarkView) -> int:
    view.state.current_folder_id = args.node_id
    crumbs = view.breadcrumb
    if args.json:
        for node in crumbs:
            print(json.dumps({"id": node.id, "title": node.title}, ensure_ascii=False))
    elif crumbs:
        print(" > ".join(node.title for node in crumbs))
    return 0


def _cmd_search(args, view: BookmarkView, cfg: Settings) -> int:
    options = GlobalSearchOptions(
        mode=args.mode or cfg.search_mode,
        case_sensitive=cfg.search_case_sensitive if args.case_sensitive is None else args.case_sensitive,
        use_regex=cfg.search_regex if args.regex is None else args.regex,
    )
    if options.use_regex and not is_valid_pattern(args.query):
        log.warning("Invalid regular expression %r; searching for it as plain text.", args.query)
    found = view.search_all(args.query, options)
    if cfg.search_max_results > 0:
        found = found[: cfg.search_max_results]
    _print_bookmarks(found, as_json=args.json)
    return 0


def _print_bookmarks(bookmarks: List[FlatBookmark], *, as_json: bool) -> None:
    if as_json:
        for b in bookmarks:
            print(json.dumps(b.to_dict(), ensure_ascii=False))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Title", overflow="fold")
    table.add_column("URL", overflow="fold")
    table.add_column("Added", no_wrap=True)
    for b in bookmarks:
        table.add_row(escape(b.title), escape(b.url), _format_date(b.date_added))
    console = Console()
    console.print(table)
    console.print(f"{len(bookmarks)} bookmarks")


def _format_date(ms: Optional[int]) -> str:
    if not ms:
        return ""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")
