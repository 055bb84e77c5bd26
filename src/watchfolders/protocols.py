"""
Contracts of the collaborators the folders core relies on.

Structural protocols: any object with matching members qualifies,
no inheritance needed.
"""
from typing import Any, List, Optional, Protocol, runtime_checkable

from src.watchfolders.models import AddFolderResult, Folder, RemoveFolderResult


@runtime_checkable
class FolderRepository(Protocol):
    """Durable store of watched root folders."""

    async def get_folders(self) -> List[Folder]:
        ...

    async def add_folder(self, path: str) -> AddFolderResult:
        ...

    async def remove_folder(self, folder_id: int) -> RemoveFolderResult:
        ...

    async def update_folders(self, folders: List[Folder]) -> None:
        """Persist the given folders in one batch; raises on failure."""
        ...


@runtime_checkable
class PlaybackState(Protocol):
    """Read-only view of the player."""

    @property
    def has_current_track(self) -> bool:
        ...

    @property
    def current_track_path(self) -> Optional[str]:
        ...

    @property
    def is_playing(self) -> bool:
        ...

    @property
    def is_paused(self) -> bool:
        ...

    @property
    def is_stopped(self) -> bool:
        ...


@runtime_checkable
class PreferenceStore(Protocol):
    """Section/key settings storage (ConfigManager satisfies this)."""

    def get(self, section: str, key: str) -> Any:
        ...

    def update(self, section: str, key: str, value: Any) -> None:
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Directory primitives used for browsing."""

    def list_subdirectories(self, path: str) -> List[str]:
        """Immediate child directories of path; raises OSError on access failure."""
        ...

    def parent_of(self, path: str) -> Optional[str]:
        ...
