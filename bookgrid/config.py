from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    v = os.getenv(name)
    if v is None or v.strip() not in choices:
        return default
    return v.strip()


@dataclass
class Settings:
    # Collation
    locale: str = "zh_CN"

    # Tree conventions
    root_id: str = "0"
    import_root_title: str = "收藏夹栏"

    # Folder listing
    default_sort_field: str = ""  # "" (source order) | title | dateAdded
    default_sort_order: str = "asc"  # asc | desc

    # Global search
    search_mode: str = "all"  # all | title | url
    search_case_sensitive: bool = False
    search_regex: bool = False
    search_max_results: int = 0  # 0 => no cap

    # Logging / UX
    log_level: str = "WARNING"
    no_color: bool = False

    @staticmethod
    def from_env() -> "Settings":
        s = Settings()
        s.locale = _env_str("BOOKGRID_LOCALE", s.locale)

        s.root_id = _env_str("BOOKGRID_ROOT_ID", s.root_id)
        s.import_root_title = _env_str("BOOKGRID_IMPORT_ROOT_TITLE", s.import_root_title)

        s.default_sort_field = _env_choice("BOOKGRID_SORT_FIELD", ("", "title", "dateAdded"), s.default_sort_field)
        s.default_sort_order = _env_choice("BOOKGRID_SORT_ORDER", ("asc", "desc"), s.default_sort_order)

        s.search_mode = _env_choice("BOOKGRID_SEARCH_MODE", ("all", "title", "url"), s.search_mode)
        s.search_case_sensitive = _env_bool("BOOKGRID_SEARCH_CASE_SENSITIVE", s.search_case_sensitive)
        s.search_regex = _env_bool("BOOKGRID_SEARCH_REGEX", s.search_regex)
        s.search_max_results = _env_int("BOOKGRID_SEARCH_MAX_RESULTS", s.search_max_results)

        s.log_level = _env_str("BOOKGRID_LOG_LEVEL", s.log_level)
        s.no_color = _env_bool("BOOKGRID_NO_COLOR", s.no_color)
        return s

    @staticmethod
    def from_file(path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        s = Settings.from_env()
        for k, v in data.items():
            if hasattr(s, k):
                setattr(s, k, v)
        return s


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_file(Path(config_path))
    return Settings.from_env()
