import json
import os
from pathlib import Path

import pytest

from bookgrid.model import TreeNode
from bookgrid.store import BookmarkStore, open_store


def _write_tree(path: Path, title: str, mtime_ns: int) -> None:
    path.write_text(
        json.dumps([{"id": "0", "title": "", "children": [{"id": "1", "title": title, "children": []}]}]),
        encoding="utf-8",
    )
    os.utime(path, ns=(mtime_ns, mtime_ns))


def test_store_caches_until_source_changes(tmp_path: Path):
    src = tmp_path / "tree.json"
    _write_tree(src, "First", 1_000_000_000_000_000_000)
    store = open_store("json", src)

    first = store.tree()
    assert first[0].children[0].title == "First"
    assert store.tree() is first

    _write_tree(src, "Second", 1_000_000_001_000_000_000)
    second = store.tree()
    assert second is not first
    assert second[0].children[0].title == "Second"


def test_store_invalidate_forces_reload_and_notifies(tmp_path: Path):
    calls = []

    def loader(path: Path):
        calls.append(path)
        return [TreeNode(id="0", title="", children=[])]

    store = BookmarkStore(tmp_path / "whatever", loader)
    seen = []
    unsubscribe = store.on_change(seen.append)

    store.tree()
    store.tree()
    assert len(calls) == 1
    assert len(seen) == 1

    store.invalidate()
    store.tree()
    assert len(calls) == 2
    assert len(seen) == 2

    unsubscribe()
    store.invalidate()
    store.tree()
    assert len(seen) == 2


def test_open_store_html_uses_import_root_title(tmp_path: Path):
    src = tmp_path / "bookmarks.html"
    src.write_text('<DL><p><DT><A HREF="https://a.example/">A</A></DL><p>', encoding="utf-8")
    tree = open_store("html", src, import_root_title="Imported").tree()
    assert tree[0].title == "Imported"
    assert tree[0].children[0].url == "https://a.example/"


def test_open_store_rejects_unknown_kind(tmp_path: Path):
    with pytest.raises(ValueError):
        open_store("opera", tmp_path)


def test_store_load_errors_propagate(tmp_path: Path):
    store = open_store("chromium", tmp_path)
    with pytest.raises(FileNotFoundError):
        store.tree()
