"""
Watch Folders - watched root folders of a media library.

Provides:
- FoldersService: application system exposing the operations below
- FolderCatalog: add/remove/list root folders, selected folder
- FolderMutationBatcher: debounced saving of show-in-collection flags
- SubfolderBrowser / build_breadcrumbs: one-level subfolder browsing
- PlaybackHighlighter: marks subfolders holding the playing track
- SubfolderNavigator: stateful browsing session with last-request-wins
"""
from .models import (
    AddFolderResult,
    BreadcrumbEntry,
    Folder,
    FolderView,
    RemoveFolderResult,
    SubfolderEntry,
)
from .errors import BreadcrumbError, FolderStoreError, WatchFoldersError
from .paths import canonical_path, is_same_or_descendant, parent_path
from .protocols import FileSystem, FolderRepository, PlaybackState, PreferenceStore
from .repository import JsonFolderRepository
from .filesystem import LocalFileSystem
from .batcher import FolderMutationBatcher
from .catalog import FolderCatalog
from .browser import SubfolderBrowser
from .breadcrumbs import build_breadcrumbs
from .highlighter import PlaybackHighlighter
from .navigator import SubfolderNavigator
from .service import FoldersService

__all__ = [
    "AddFolderResult",
    "BreadcrumbEntry",
    "Folder",
    "FolderView",
    "RemoveFolderResult",
    "SubfolderEntry",
    "BreadcrumbError",
    "FolderStoreError",
    "WatchFoldersError",
    "canonical_path",
    "is_same_or_descendant",
    "parent_path",
    "FileSystem",
    "FolderRepository",
    "PlaybackState",
    "PreferenceStore",
    "JsonFolderRepository",
    "LocalFileSystem",
    "FolderMutationBatcher",
    "FolderCatalog",
    "SubfolderBrowser",
    "build_breadcrumbs",
    "PlaybackHighlighter",
    "SubfolderNavigator",
    "FoldersService",
]
