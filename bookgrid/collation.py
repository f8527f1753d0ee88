from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Any, List, Tuple

from pypinyin import Style, lazy_pinyin
from pyuca import Collator

DEFAULT_LOCALE = "zh_CN"

SortKey = Tuple[Any, ...]

# Primary groups under Chinese collation: symbols and digits, then Han, then
# letters of every other script.
_GROUP_COMMON = 0
_GROUP_HAN = 1
_GROUP_LETTER = 2


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loads the DUCET table once per process.
    return Collator()


def is_chinese_locale(locale: str) -> bool:
    return locale.replace("-", "_").lower().split("_", 1)[0] == "zh"


def title_sort_key(text: str, locale: str = DEFAULT_LOCALE) -> SortKey:
    """Collation key for ``text`` under ``locale``.

    Chinese locales put Han characters ahead of Latin letters and order them
    by tone-numbered pinyin; the UCA key of the raw text breaks remaining ties.
    """
    raw = tuple(_collator().sort_key(text or ""))
    if not text or not is_chinese_locale(locale):
        return (raw,)
    return (tuple(_chinese_primaries(text)), raw)


def _chinese_primaries(text: str) -> List[Tuple[int, Tuple[int, ...]]]:
    out: List[Tuple[int, Tuple[int, ...]]] = []
    for run, is_han in _han_runs(text):
        if is_han:
            readings = lazy_pinyin(run, style=Style.TONE3)
            if len(readings) != len(run):
                readings = [lazy_pinyin(ch, style=Style.TONE3)[0] for ch in run]
            out.extend((_GROUP_HAN, _primary(r)) for r in readings)
            continue
        for ch in run:
            weights = _primary(ch)
            if not weights:
                continue
            group = _GROUP_LETTER if unicodedata.category(ch).startswith("L") else _GROUP_COMMON
            out.append((group, weights))
    return out


def _han_runs(text: str) -> List[Tuple[str, bool]]:
    runs: List[Tuple[str, bool]] = []
    for ch in text:
        han = _is_han(ch)
        if runs and runs[-1][1] == han:
            runs[-1] = (runs[-1][0] + ch, han)
        else:
            runs.append((ch, han))
    return runs


def _is_han(ch: str) -> bool:
    return unicodedata.name(ch, "").startswith(("CJK UNIFIED IDEOGRAPH", "CJK COMPATIBILITY IDEOGRAPH"))


def _primary(s: str) -> Tuple[int, ...]:
    # pyuca keys list every level's weights with 0 as the level separator.
    key = _collator().sort_key(s)
    end = key.index(0) if 0 in key else len(key)
    return tuple(key[:end])
