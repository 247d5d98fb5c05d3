"""Local destination paths for discovered files."""

from pathlib import PurePosixPath

import httpx

from .models import ResolveMode


def strip_dir_path(dir_path: str, dir_name: str) -> str:
    """
    Keep the segments of `dir_path` from the first one equal to `dir_name`.

    Returns an empty string when no segment matches.
    """
    parts = PurePosixPath(dir_path).parts
    for i, part in enumerate(parts):
        if part == dir_name:
            return str(PurePosixPath(*parts[i:]))
    return ""


def resolve_directory(file_path: str, target_dir_name: str, mode: ResolveMode) -> str:
    """
    Compute the local directory for a repository file.

    Args:
        file_path: Repository-root-relative path from the API
        target_dir_name: Name of the directory being cloned
        mode: FULL_PATH keeps the parent path verbatim, CURRENT_DIR_ONLY
            roots it at the first segment equal to `target_dir_name`

    Returns:
        Relative POSIX directory ("." for files at the repository root)
    """
    parent = str(PurePosixPath(file_path).parent)
    if mode is ResolveMode.CURRENT_DIR_ONLY:
        # Falls back to the full parent when the name never appears
        return strip_dir_path(parent, target_dir_name) or parent
    return parent


def file_name_from_url(download_url: str) -> str:
    """Last path segment of a download URL, percent-decoded, query ignored."""
    try:
        path = httpx.URL(download_url).path
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid download URL {download_url!r}: {e}") from e
    name = path.rstrip("/").rsplit("/", 1)[-1]
    if not name:
        raise ValueError(f"No file name in download URL: {download_url}")
    return name


def check_contained(local_directory: str, file_name: str) -> None:
    """
    Reject destinations that would escape the output root.

    Raises:
        ValueError: absolute directory, `..` segment, or a file name that
            is not a single plain segment
    """
    directory = PurePosixPath(local_directory)
    if directory.is_absolute() or ".." in directory.parts:
        raise ValueError(f"Directory escapes the output root: {local_directory!r}")
    if file_name in ("", ".", "..") or "/" in file_name or "\\" in file_name:
        raise ValueError(f"Invalid file name: {file_name!r}")
