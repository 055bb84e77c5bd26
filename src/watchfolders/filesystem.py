"""
Local filesystem access for subfolder browsing.
"""
import os
from typing import List, Optional

from src.watchfolders.paths import parent_path


class LocalFileSystem:
    """FileSystem implementation backed by os.scandir."""

    def list_subdirectories(self, path: str) -> List[str]:
        """
        Immediate child directories of path, sorted by case-insensitive name.

        Symlinks to directories are included. Raises FileNotFoundError,
        PermissionError or NotADirectoryError when path cannot be listed.
        """
        directories = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    if entry.is_dir():
                        directories.append(entry.path)
                except OSError:
                    # Broken symlink or entry removed while listing
                    continue
        directories.sort(key=lambda p: os.path.basename(p).casefold())
        return directories

    def parent_of(self, path: str) -> Optional[str]:
        return parent_path(path)
