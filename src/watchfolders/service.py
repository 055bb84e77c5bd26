"""
Watch Folders - Folders Service

Application entry point for watched folders: root folder catalog,
debounced inclusion edits, subfolder browsing and playback highlighting.
"""
import asyncio
import weakref
from typing import Iterable, List, Optional

from loguru import logger

from src.core.base_system import BaseSystem
from src.core.decorators import subscribe_event, system
from src.core.events import EventBus, Events, Signal
from src.watchfolders.batcher import FolderMutationBatcher
from src.watchfolders.breadcrumbs import build_breadcrumbs
from src.watchfolders.browser import SubfolderBrowser
from src.watchfolders.catalog import FolderCatalog
from src.watchfolders.filesystem import LocalFileSystem
from src.watchfolders.highlighter import PlaybackHighlighter
from src.watchfolders.models import (
    AddFolderResult,
    BreadcrumbEntry,
    FolderView,
    RemoveFolderResult,
    SubfolderEntry,
)
from src.watchfolders.navigator import SubfolderNavigator
from src.watchfolders.protocols import FileSystem, FolderRepository, PlaybackState
from src.watchfolders.repository import JsonFolderRepository


@system(depends_on=[EventBus])
class FoldersService(BaseSystem):
    """
    Watched folders service.

    Collaborators may be injected; otherwise a JsonFolderRepository at
    config.data.folders.store_path and the local filesystem are used.
    Playback is optional and can be attached later with attach_playback().

    folders_changed is emitted without arguments on the event loop thread.
    When an EventBus is registered, the same change is published as
    Events.FOLDERS_CHANGED.
    """

    def __init__(
        self,
        locator,
        config,
        repository: Optional[FolderRepository] = None,
        playback: Optional[PlaybackState] = None,
        filesystem: Optional[FileSystem] = None,
    ):
        super().__init__(locator, config)
        self.repository = repository
        self.filesystem = filesystem or LocalFileSystem()
        self.folders_changed = Signal("FoldersChanged")
        self.folders_changed.connect(self._publish_folders_changed)

        self._highlighter = PlaybackHighlighter(playback) if playback is not None else None
        self._navigators = weakref.WeakSet()
        self._catalog: Optional[FolderCatalog] = None
        self._batcher: Optional[FolderMutationBatcher] = None
        self._browser = SubfolderBrowser(self.filesystem)

    async def initialize(self) -> None:
        logger.info("FoldersService initializing")
        settings = self.config.data.folders

        if self.repository is None:
            self.repository = JsonFolderRepository(settings.store_path)

        self._catalog = FolderCatalog(self.repository, self.config, self.folders_changed)
        self._batcher = FolderMutationBatcher(
            self.repository,
            delay=settings.save_delay_seconds,
            on_flushed=self.folders_changed.emit,
        )

        await super().initialize()
        logger.info("FoldersService ready")

    async def shutdown(self) -> None:
        logger.info("FoldersService shutting down")
        if self._batcher is not None:
            await self._batcher.shutdown(flush=True)
        await super().shutdown()

    def attach_playback(self, playback: Optional[PlaybackState]) -> None:
        self._highlighter = PlaybackHighlighter(playback) if playback is not None else None
        for navigator in list(self._navigators):
            navigator.highlighter = self._highlighter

    # ==================== Catalog ====================

    async def get_folders(self) -> List[FolderView]:
        return await self._catalog.get_folders()

    async def add_folder(self, path: str) -> AddFolderResult:
        return await self._catalog.add_folder(path)

    async def remove_folder(self, folder_id: int) -> RemoveFolderResult:
        return await self._catalog.remove_folder(folder_id)

    async def get_selected_folder(self) -> Optional[FolderView]:
        return await self._catalog.get_selected_folder()

    def set_selected_folder(self, folder: Optional[FolderView]) -> None:
        """Store the selection and publish Events.FOLDER_SELECTED with the folder."""
        self._catalog.set_selected_folder(folder)
        self._publish(Events.FOLDER_SELECTED, folder)

    async def mark_folder(self, folder: FolderView, show_in_collection: Optional[bool] = None) -> None:
        """Queue an inclusion flag change; saved after the quiet period."""
        await self._batcher.mark(folder, show_in_collection)

    async def save_marked_folders(self) -> bool:
        """Save queued inclusion edits now instead of waiting for the timer."""
        return await self._batcher.flush()

    # ==================== Browsing ====================

    async def get_subfolders(
        self,
        root: Optional[FolderView],
        selected: Optional[SubfolderEntry] = None,
    ) -> List[SubfolderEntry]:
        """Listing for (root, selected), built off the event loop. OSError propagates."""
        return await asyncio.to_thread(self._browser.list_subfolders, root, selected)

    async def get_breadcrumbs(self, root: FolderView, selected_path: str) -> List[BreadcrumbEntry]:
        return await asyncio.to_thread(build_breadcrumbs, root, selected_path, self.filesystem)

    def set_playing_subfolder(self, entries: Iterable[SubfolderEntry]) -> None:
        if self._highlighter is not None:
            self._highlighter.highlight(entries)

    def create_navigator(self) -> SubfolderNavigator:
        navigator = SubfolderNavigator(self._browser, self.filesystem, self._highlighter)
        self._navigators.add(navigator)
        return navigator

    @subscribe_event(Events.PLAYBACK_CHANGED)
    async def on_playback_changed(self, data=None) -> None:
        for navigator in list(self._navigators):
            navigator.refresh_highlight()

    # ==================== Notifications ====================

    def _publish_folders_changed(self) -> None:
        self._publish(Events.FOLDERS_CHANGED)

    def _publish(self, event: str, data=None) -> None:
        try:
            bus = self.locator.get_system(EventBus)
        except (KeyError, AttributeError):
            return
        bus.publish_sync(event, data)
