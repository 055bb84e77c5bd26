"""
Watch Folders - Breadcrumbs

Path chain from a root folder down to the browsed subfolder.
"""
from typing import List

from src.watchfolders.errors import BreadcrumbError
from src.watchfolders.models import BreadcrumbEntry, FolderView
from src.watchfolders.paths import canonical_path
from src.watchfolders.protocols import FileSystem

MAX_BREADCRUMB_DEPTH = 256


def build_breadcrumbs(root: FolderView, selected_path: str, filesystem: FileSystem) -> List[BreadcrumbEntry]:
    """
    Breadcrumbs ordered root first, selected_path last.

    Raises BreadcrumbError if selected_path does not lie under root.
    """
    breadcrumbs: List[BreadcrumbEntry] = []
    current = selected_path

    while canonical_path(current) != root.safe_path:
        if len(breadcrumbs) >= MAX_BREADCRUMB_DEPTH:
            raise BreadcrumbError(root.path, selected_path, f"deeper than {MAX_BREADCRUMB_DEPTH} levels")
        breadcrumbs.append(BreadcrumbEntry(current))
        parent = filesystem.parent_of(current)
        if parent is None:
            raise BreadcrumbError(root.path, selected_path)
        current = parent

    breadcrumbs.append(BreadcrumbEntry(root.path))
    breadcrumbs.reverse()
    return breadcrumbs
