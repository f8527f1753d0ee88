from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

# Libraries that chat at INFO/DEBUG about things users of the CLI never need.
_QUIET_LOGGERS = ("bs4", "pypinyin")


@dataclass(frozen=True)
class LogConfig:
    level: Union[str, int] = "WARNING"
    no_color: bool = False


def resolve_level(level: Union[str, int, None]) -> int:
    """Accept ``"debug"``, ``"DEBUG"``, ``"10"`` or ``10``; anything else is WARNING."""
    if isinstance(level, int):
        return level
    text = (level or "").strip()
    if text.isdigit():
        return int(text)
    value = logging.getLevelName(text.upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(cfg: LogConfig) -> None:
    level = resolve_level(cfg.level)

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    plain = cfg.no_color or os.getenv("NO_COLOR") is not None or not sys.stderr.isatty()
    if plain:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    else:
        # markup stays off: bookmark titles routinely contain [brackets].
        handler = RichHandler(
            console=Console(stderr=True, highlight=False),
            markup=False,
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)
    root.addHandler(handler)

    # bs4 reports odd markup through the warnings module.
    logging.captureWarnings(True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
