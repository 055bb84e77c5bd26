"""Exceptions raised by the watch folders core."""


class WatchFoldersError(Exception):
    """Base class for watch folders errors."""
    pass


class FolderStoreError(WatchFoldersError):
    """The folder store could not persist a change."""
    pass


class BreadcrumbError(WatchFoldersError):
    """
    The breadcrumb walk could not reach the root folder.

    Raised when the selected path is not located under the root, which
    would otherwise walk up to the filesystem root without terminating.
    """

    def __init__(self, root_path: str, selected_path: str, reason: str = "not under root"):
        self.root_path = root_path
        self.selected_path = selected_path
        self.reason = reason
        super().__init__(f"Cannot build breadcrumbs for '{selected_path}' in root '{root_path}': {reason}")
