"""
Watch Folders - Subfolder Navigator

Browsing session over one root folder for interactive callers. Listings
are built in a worker thread; when requests overlap, only the most recent
one is applied.
"""
import asyncio
from typing import List, Optional, Tuple

from loguru import logger

from src.core.events import Signal
from src.watchfolders.breadcrumbs import build_breadcrumbs
from src.watchfolders.browser import SubfolderBrowser
from src.watchfolders.highlighter import PlaybackHighlighter
from src.watchfolders.models import BreadcrumbEntry, FolderView, SubfolderEntry
from src.watchfolders.protocols import FileSystem

Listing = Tuple[Optional[str], List[SubfolderEntry], List[BreadcrumbEntry]]


class SubfolderNavigator:
    """
    Holds the current root, directory, listing and breadcrumbs.

    changed is emitted after each applied listing and after highlighting
    is refreshed.

    Usage:
        navigator = service.create_navigator()
        await navigator.open_root(await service.get_selected_folder())
        await navigator.navigate(navigator.subfolders[0])
    """

    def __init__(
        self,
        browser: SubfolderBrowser,
        filesystem: FileSystem,
        highlighter: Optional[PlaybackHighlighter] = None,
    ):
        self.browser = browser
        self.filesystem = filesystem
        self.highlighter = highlighter
        self.changed = Signal("SubfolderNavigatorChanged")

        self.root: Optional[FolderView] = None
        self.current_path: Optional[str] = None
        self.subfolders: List[SubfolderEntry] = []
        self.breadcrumbs: List[BreadcrumbEntry] = []
        self._request_id = 0

    async def open_root(self, root: Optional[FolderView]) -> Optional[List[SubfolderEntry]]:
        """Show the top level of root. None clears the session."""
        return await self._load(root, None)

    async def navigate(self, entry: SubfolderEntry) -> Optional[List[SubfolderEntry]]:
        """Open a listed entry; a ".." entry goes one level up."""
        return await self._load(self.root, entry)

    async def navigate_to_breadcrumb(self, breadcrumb: BreadcrumbEntry) -> Optional[List[SubfolderEntry]]:
        if self.root is not None and breadcrumb.safe_path == self.root.safe_path:
            return await self._load(self.root, None)
        return await self._load(self.root, SubfolderEntry(breadcrumb.path))

    async def refresh(self) -> Optional[List[SubfolderEntry]]:
        """Re-read the current directory."""
        if self.root is None or self.current_path is None:
            return await self._load(self.root, None)
        return await self._load(self.root, SubfolderEntry(self.current_path))

    def refresh_highlight(self) -> None:
        if self.highlighter is not None:
            self.highlighter.highlight(self.subfolders)
        self.changed.emit()

    async def _load(self, root: Optional[FolderView], selected: Optional[SubfolderEntry]):
        """
        Build and apply a listing.

        Returns the new listing, or None if a newer request was issued
        while this one was running. OSError from the filesystem propagates
        and leaves the current state untouched.
        """
        self._request_id += 1
        request_id = self._request_id

        current_path, subfolders, breadcrumbs = await asyncio.to_thread(self._build, root, selected)

        if request_id != self._request_id:
            logger.debug(f"Discarding stale listing of '{current_path}'")
            return None

        self.root = root
        self.current_path = current_path
        self.subfolders = subfolders
        self.breadcrumbs = breadcrumbs
        self.refresh_highlight()
        return self.subfolders

    def _build(self, root: Optional[FolderView], selected: Optional[SubfolderEntry]) -> Listing:
        if root is None:
            return None, [], []

        browse_path = self.browser.resolve_browse_path(root, selected)
        subfolders = self.browser.list_subfolders(root, selected)
        breadcrumbs = build_breadcrumbs(root, browse_path, self.filesystem)
        return browse_path, subfolders, breadcrumbs
