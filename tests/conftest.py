import sys
from pathlib import Path

import pytest

# Allow `import bookgrid` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from bookgrid.model import TreeNode  # noqa: E402


def folder(id, title, *children, parent_id=None):
    node = TreeNode(id=id, title=title, parent_id=parent_id, children=list(children))
    for c in node.children:
        c.parent_id = id
    return node


def link(id, title, url, date_added=None):
    return TreeNode(id=id, title=title, url=url, date_added=date_added)


@pytest.fixture
def scenario_tree():
    """Root "0" with folder Work (one bookmark) and a bookmark directly under the root."""
    return [
        folder(
            "0",
            "",
            folder("1", "Work", link("2", "Ticket", "http://x", 100)),
            link("3", "Direct", "http://y", 50),
        )
    ]


@pytest.fixture
def deep_tree():
    return [
        folder(
            "0",
            "",
            folder(
                "1",
                "Bookmarks bar",
                folder(
                    "10",
                    "Dev",
                    link("11", "GitHub", "https://github.com/", 300),
                    folder("12", "Python", link("13", "PyPI", "https://pypi.org/", 200)),
                    folder("14", "Empty"),
                ),
                link("15", "News", "https://news.example/", 100),
            ),
            folder("2", "Other bookmarks", link("20", "Recipes", "https://food.example/", 400)),
        )
    ]
