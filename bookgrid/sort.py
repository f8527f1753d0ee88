from __future__ import annotations

from functools import cmp_to_key
from typing import Any, List, Sequence, Tuple

from .collation import DEFAULT_LOCALE, title_sort_key
from .model import FlatBookmark, SortField, SortOrder


def sort_bookmarks(
    bookmarks: Sequence[FlatBookmark],
    field: SortField,
    order: SortOrder,
    locale: str = DEFAULT_LOCALE,
) -> List[FlatBookmark]:
    """Stable sort into a new list. ``desc`` negates the ``asc`` comparison."""
    sign = -1 if order == "desc" else 1
    decorated = [(_sort_value(b, field, locale), b) for b in bookmarks]

    def _cmp(x: Tuple[Any, FlatBookmark], y: Tuple[Any, FlatBookmark]) -> int:
        return sign * _compare(x[0], y[0])

    decorated.sort(key=cmp_to_key(_cmp))
    return [b for _key, b in decorated]


def _sort_value(b: FlatBookmark, field: str, locale: str) -> Any:
    if field == "title":
        return title_sort_key(b.title, locale)
    if field == "dateAdded":
        return b.date_added or 0
    # Unknown fields compare equal, leaving input order.
    return 0


def _compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)
