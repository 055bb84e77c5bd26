"""
Path normalization helpers.

Every equality or containment check between folder paths goes through
canonical_path() so that casing, separator style and trailing slashes
never affect the result.
"""
import os
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def canonical_path(path: PathLike) -> str:
    """Return the comparable form of a path ("" for an empty path)."""
    text = os.fspath(path)
    if not text:
        return ""
    normalized = os.path.normpath(os.path.abspath(text)).replace("\\", "/")
    # Keep "/" and drive roots ("c:/") intact
    if len(normalized) > 1 and normalized.endswith("/") and not normalized.endswith(":/"):
        normalized = normalized.rstrip("/")
    return normalized.casefold()


def is_same_or_descendant(path: PathLike, ancestor: PathLike) -> bool:
    """True if path equals ancestor or lies below it, compared per path component."""
    candidate = canonical_path(path)
    base = canonical_path(ancestor)
    if not candidate or not base:
        return False
    if candidate == base:
        return True
    return candidate.startswith(base.rstrip("/") + "/")


def parent_path(path: PathLike) -> Optional[str]:
    """Parent directory of path, or None when path is a filesystem root."""
    absolute = os.path.abspath(os.fspath(path))
    parent = os.path.dirname(absolute)
    if not parent or parent == absolute:
        return None
    return parent


def display_name(path: PathLike) -> str:
    """Last component of a path; the path itself for filesystem roots."""
    absolute = os.path.abspath(os.fspath(path))
    return os.path.basename(absolute) or absolute
