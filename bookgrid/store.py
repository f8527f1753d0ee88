from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .log import get_logger
from .model import TreeNode, forest_from_json
from .parse_chromium import parse_chromium_bookmarks
from .parse_firefox_places import parse_firefox_places
from .parse_netscape import IMPORT_ROOT_TITLE, parse_bookmarks_html

log = get_logger(__name__)

Loader = Callable[[Path], List[TreeNode]]
Listener = Callable[[List[TreeNode]], None]
Stamp = Tuple[Tuple[str, int, int], ...]

SOURCE_KINDS = ("html", "firefox", "chromium", "json")


class BookmarkStore:
    """Current tree snapshot of one bookmark source.

    The snapshot is rebuilt from scratch whenever a watched file changes or
    ``invalidate()`` is called; nothing derived from it is ever patched.
    """

    def __init__(self, source: Path, loader: Loader, *, watch: Optional[Sequence[Path]] = None) -> None:
        self.source = Path(source)
        self._loader = loader
        self._watch = [Path(p) for p in watch] if watch else [self.source]
        self._tree: Optional[List[TreeNode]] = None
        self._stamp: Optional[Stamp] = None
        self._listeners: List[Listener] = []

    def tree(self) -> List[TreeNode]:
        stamp = self._current_stamp()
        if self._tree is None or stamp != self._stamp:
            self.load(stamp)
        return self._tree or []

    def load(self, stamp: Optional[Stamp] = None) -> List[TreeNode]:
        tree = self._loader(self.source)
        self._tree = tree
        self._stamp = stamp if stamp is not None else self._current_stamp()
        log.debug("Loaded bookmark snapshot from %s", self.source)
        for listener in list(self._listeners):
            listener(tree)
        return tree

    def invalidate(self) -> None:
        self._tree = None
        self._stamp = None

    def on_change(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with each reloaded snapshot; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _current_stamp(self) -> Stamp:
        out = []
        for p in self._watch:
            try:
                st = p.stat()
            except FileNotFoundError:
                continue
            out.append((str(p), st.st_mtime_ns, st.st_size))
        return tuple(out)


def open_store(kind: str, path: Path, *, import_root_title: str = IMPORT_ROOT_TITLE) -> BookmarkStore:
    path = Path(path)
    if kind == "html":
        return BookmarkStore(path, partial(parse_bookmarks_html, root_title=import_root_title))
    if kind == "firefox":
        db = path if path.is_file() else path / "places.sqlite"
        # Firefox writes through the WAL file before checkpointing into places.sqlite.
        return BookmarkStore(path, parse_firefox_places, watch=[db, db.with_name(db.name + "-wal")])
    if kind == "chromium":
        f = path if path.is_file() else path / "Bookmarks"
        return BookmarkStore(path, parse_chromium_bookmarks, watch=[f])
    if kind == "json":
        return BookmarkStore(path, _load_tree_json)
    raise ValueError(f"Unknown bookmark source kind: {kind}")


def _load_tree_json(path: Path) -> List[TreeNode]:
    return forest_from_json(path.read_text(encoding="utf-8"))
