"""
Watch Folders - Folder Catalog

Lists, adds and removes root folders and resolves the selected one.
"""
from typing import List, Optional

from loguru import logger

from src.core.events import Signal
from src.watchfolders.models import AddFolderResult, FolderView, RemoveFolderResult
from src.watchfolders.paths import canonical_path
from src.watchfolders.protocols import FolderRepository, PreferenceStore

SELECTION_SECTION = "selections"
SELECTED_FOLDER_KEY = "selected_folder"


class FolderCatalog:
    """
    Root folder catalog on top of a FolderRepository.

    folders_changed is emitted (no arguments) whenever the set of folders
    may have changed. It is emitted on the calling thread.
    """

    def __init__(
        self,
        repository: FolderRepository,
        preferences: PreferenceStore,
        folders_changed: Optional[Signal] = None,
    ):
        self.repository = repository
        self.preferences = preferences
        self.folders_changed = folders_changed or Signal("FoldersChanged")

    async def get_folders(self) -> List[FolderView]:
        """All folders in store order; folders that fail to project are skipped."""
        folders = await self.repository.get_folders()

        views: List[FolderView] = []
        for folder in folders:
            try:
                views.append(FolderView(folder))
            except Exception as e:
                logger.error(f"Error while getting folders. Exception: {e}")
        return views

    async def add_folder(self, path: str) -> AddFolderResult:
        result = await self.repository.add_folder(path)

        if result in (AddFolderResult.SUCCESS, AddFolderResult.ALREADY_EXISTS):
            self.folders_changed.emit()
        else:
            logger.warning(f"Folder '{path}' was not added: {result.value}")
        return result

    async def remove_folder(self, folder_id: int) -> RemoveFolderResult:
        result = await self.repository.remove_folder(folder_id)

        if result != RemoveFolderResult.SUCCESS:
            logger.warning(f"Folder id={folder_id} was not removed: {result.value}")
        # Emitted for every outcome; listeners re-read the catalog anyway
        self.folders_changed.emit()
        return result

    async def get_selected_folder(self) -> Optional[FolderView]:
        """
        The folder named by the saved selection.

        Falls back to the first folder when nothing is saved or the saved
        path is no longer a root folder. None when there are no folders.
        """
        folders = await self.get_folders()
        if not folders:
            return None

        saved_path = self.preferences.get(SELECTION_SECTION, SELECTED_FOLDER_KEY)
        if not saved_path:
            return folders[0]

        saved_safe_path = canonical_path(saved_path)
        for folder in folders:
            if folder.safe_path == saved_safe_path:
                return folder
        return folders[0]

    def set_selected_folder(self, folder: Optional[FolderView]) -> None:
        """Remember folder as the selection; None clears it."""
        self.preferences.update(SELECTION_SECTION, SELECTED_FOLDER_KEY, folder.path if folder else None)
