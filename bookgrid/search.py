from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .log import get_logger
from .model import FlatBookmark, SearchMode

log = get_logger(__name__)


@dataclass(frozen=True)
class GlobalSearchOptions:
    mode: SearchMode = "all"
    case_sensitive: bool = False
    use_regex: bool = False


def search_bookmarks(bookmarks: Sequence[FlatBookmark], query: str) -> Sequence[FlatBookmark]:
    """Folder-view filter: case-insensitive substring on title or url.

    A blank query returns ``bookmarks`` itself, not a copy.
    """
    if not query.strip():
        return bookmarks
    q = query.lower()
    return [b for b in bookmarks if q in b.title.lower() or q in b.url.lower()]


def global_search(
    bookmarks: Sequence[FlatBookmark],
    query: str,
    options: GlobalSearchOptions = GlobalSearchOptions(),
) -> List[FlatBookmark]:
    """Search across all bookmarks. A blank query matches nothing.

    In regex mode a pattern that does not compile falls back to a
    case-insensitive substring search for the raw query.
    """
    if not query.strip():
        return []

    if options.use_regex:
        flags = 0 if options.case_sensitive else re.IGNORECASE
        try:
            pattern = re.compile(query, flags)
        except re.error as e:
            log.debug("Invalid search pattern %r (%s); using substring search.", query, e)
            q = query.lower()
            return [b for b in bookmarks if any(q in text.lower() for text in _search_texts(b, options.mode))]
        return [b for b in bookmarks if any(pattern.search(text) for text in _search_texts(b, options.mode))]

    if options.case_sensitive:
        return [b for b in bookmarks if any(query in text for text in _search_texts(b, options.mode))]
    q = query.lower()
    return [b for b in bookmarks if any(q in text.lower() for text in _search_texts(b, options.mode))]


def is_valid_pattern(query: str) -> bool:
    try:
        re.compile(query)
    except re.error:
        return False
    return True


def _search_texts(b: FlatBookmark, mode: SearchMode) -> Tuple[str, ...]:
    if mode == "title":
        return (b.title,)
    if mode == "url":
        return (b.url,)
    return (b.title, b.url)
