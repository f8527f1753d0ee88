"""bookgrid: browse a bookmark tree as a searchable, sortable flat list."""

from importlib import metadata
from pathlib import Path


def _read_version() -> str:
    # A source checkout carries VERSION next to the package; wheels only have metadata.
    p = Path(__file__).resolve().parents[1] / "VERSION"
    if p.is_file():
        return p.read_text(encoding="utf-8").strip()
    try:
        return metadata.version("bookgrid")
    except metadata.PackageNotFoundError:
        return "0+unknown"


__version__ = _read_version()
