from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .collation import DEFAULT_LOCALE
from .flatten import get_bookmarks_in_folder
from .log import get_logger
from .model import ROOT_ID, FlatBookmark, SortField, SortOrder, TreeNode
from .node_path import get_node_path, get_top_level_folders
from .search import GlobalSearchOptions, global_search, search_bookmarks
from .sort import sort_bookmarks
from .tree_index import TreeIndex, build_index

log = get_logger(__name__)

VIRTUAL_ROOT_ID = "virtual-root"
VIRTUAL_ROOT_TITLE = "书签"


@dataclass
class ViewState:
    current_folder_id: Optional[str] = None
    search_query: str = ""
    sort_field: Optional[SortField] = None
    sort_order: SortOrder = "asc"


def initial_folder_id(tree: Sequence[TreeNode]) -> Optional[str]:
    """First top-level folder when the root holds no bookmarks of its own, else None."""
    folders = get_top_level_folders(tree)
    if not folders:
        return None
    direct = [node for node in (tree[0].children or []) if node.url]
    if direct:
        return None
    return folders[0].id


class BookmarkView:
    """Folder navigation, filtering and sorting over one tree snapshot."""

    def __init__(
        self,
        tree: Sequence[TreeNode],
        state: Optional[ViewState] = None,
        *,
        locale: str = DEFAULT_LOCALE,
        root_id: str = ROOT_ID,
    ) -> None:
        self.tree = list(tree)
        self.locale = locale
        self.root_id = root_id
        if state is None:
            state = ViewState(current_folder_id=initial_folder_id(self.tree))
        self.state = state

    @property
    def folders(self) -> List[TreeNode]:
        return get_top_level_folders(self.tree)

    @property
    def breadcrumb(self) -> List[TreeNode]:
        if not self.state.current_folder_id:
            return []
        return get_node_path(self.tree, self.state.current_folder_id, self.root_id)

    @property
    def folder_bookmarks(self) -> List[FlatBookmark]:
        return get_bookmarks_in_folder(self.tree, self.state.current_folder_id, self.root_id)

    @property
    def all_bookmarks(self) -> List[FlatBookmark]:
        return get_bookmarks_in_folder(self.tree, None, self.root_id)

    @property
    def visible_bookmarks(self) -> List[FlatBookmark]:
        found = search_bookmarks(self.folder_bookmarks, self.state.search_query)
        if self.state.sort_field is None:
            return list(found)
        return sort_bookmarks(found, self.state.sort_field, self.state.sort_order, self.locale)

    def navigate(self, folder_id: Optional[str]) -> None:
        if self.state.search_query:
            self.state.search_query = ""
        self.state.current_folder_id = folder_id

    def search_all(self, query: str, options: GlobalSearchOptions = GlobalSearchOptions()) -> List[FlatBookmark]:
        return global_search(self.all_bookmarks, query, options)

    def select_search_result(self, bookmark: FlatBookmark) -> None:
        """Jump to the folder holding ``bookmark`` and clear the folder filter."""
        if bookmark.parent_id:
            self.state.current_folder_id = bookmark.parent_id
        self.state.search_query = ""
        log.debug("Selected %s; folder is now %s", bookmark.id, self.state.current_folder_id)

    def sidebar_index(self) -> TreeIndex:
        """Index of the top-level folders under a virtual root listing them in order."""
        root = TreeNode(id=VIRTUAL_ROOT_ID, title=VIRTUAL_ROOT_TITLE, children=self.folders)
        return build_index([root])
