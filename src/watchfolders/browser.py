"""
Watch Folders - Subfolder Browser

Lists the directories below a root folder one level at a time. Browsing
never goes above the root: a ".." entry is only offered below it.
"""
from typing import List, Optional

from src.watchfolders.models import FolderView, SubfolderEntry
from src.watchfolders.paths import canonical_path
from src.watchfolders.protocols import FileSystem


class SubfolderBrowser:

    def __init__(self, filesystem: FileSystem):
        self.filesystem = filesystem

    def resolve_browse_path(self, root: FolderView, selected: Optional[SubfolderEntry]) -> str:
        """Directory that a listing for (root, selected) shows."""
        if selected is None:
            return root.path
        if not selected.is_go_to_parent:
            return selected.path

        parent = self.filesystem.parent_of(selected.path)
        if parent is None:
            raise FileNotFoundError(f"No parent directory for '{selected.path}'")
        return parent

    def list_subfolders(
        self,
        root: Optional[FolderView],
        selected: Optional[SubfolderEntry] = None,
    ) -> List[SubfolderEntry]:
        """
        Entries for the directory selected within root.

        Args:
            root: Root folder being browsed; None yields an empty listing
            selected: Entry the user picked; None lists the root itself.
                A ".." entry lists the parent of its path.

        Returns:
            A ".." entry pointing at the listed directory (unless it is the
            root), followed by one entry per child directory.

        Raises:
            OSError: The directory could not be listed.
        """
        if root is None:
            return []

        if selected is None:
            return [SubfolderEntry(path) for path in self.filesystem.list_subdirectories(root.path)]

        browse_path = self.resolve_browse_path(root, selected)

        entries: List[SubfolderEntry] = []
        if canonical_path(browse_path) != root.safe_path:
            entries.append(SubfolderEntry(browse_path, is_go_to_parent=True))

        entries.extend(SubfolderEntry(path) for path in self.filesystem.list_subdirectories(browse_path))
        return entries
