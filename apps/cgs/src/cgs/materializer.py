"""Writing discovered files to disk."""

import logging
import shutil
from pathlib import Path

from ghcontents import GitHubClient

from .exceptions import FileSystemFailed
from .models import DownloadTarget, InlineBytes, RepositoryLocator

logger = logging.getLogger(__name__)


class FileMaterializer:
    """Materializes download targets under a destination root."""

    def __init__(self, client: GitHubClient, dest: Path):
        self.client = client
        self.dest = Path(dest)

    def materialize(self, target: DownloadTarget) -> Path:
        """
        Write one target, creating its directory first.

        Returns:
            Path of the written file

        Raises:
            DownloadFailed: remote content could not be fetched
            FileSystemFailed: directory or file could not be written
        """
        directory = self.dest / target.local_directory
        root = self.dest.resolve()
        if not (directory / target.file_name).resolve().is_relative_to(root):
            raise FileSystemFailed(
                f"Refusing to write {target.local_directory}/{target.file_name} outside {root}"
            )
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemFailed(f"Failed to create directory {directory}: {e}") from e

        file_path = directory / target.file_name
        try:
            if isinstance(target.source, InlineBytes):
                file_path.write_bytes(target.source.data)
                size = len(target.source.data)
            else:
                size = self.client.download(target.source, file_path)
        except OSError as e:
            raise FileSystemFailed(f"Failed to write {file_path}: {e}") from e

        logger.info("Wrote %s (%d bytes)", file_path, size)
        return file_path

    def reset_destination(self, locator: RepositoryLocator) -> bool:
        """
        Remove a previous copy of the sub-directory so the clone starts clean.

        Nothing is removed for repository-root links.

        Returns:
            Whether a directory was deleted
        """
        if not locator.subdir_path:
            return False
        existing = self.dest / locator.subdir_path
        if not existing.is_dir():
            return False
        logger.info("Deleting existing directory: %s", existing)
        try:
            shutil.rmtree(existing)
        except OSError as e:
            raise FileSystemFailed(f"Failed to delete existing directory {existing}: {e}") from e
        return True
