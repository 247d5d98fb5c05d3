"""Recursive contents traversal."""

import logging
from typing import Callable, Iterator

from ghcontents import (
    ContentEntry,
    GitHubClient,
    InlineFile,
    InvalidApiResponse,
    ResponsePayloadInvalid,
)

from .exceptions import LISTING_ERRORS, DepthLimitExceeded
from .models import CloneOptions, DownloadTarget, InlineBytes, ListingFailure
from .resolver import check_contained, file_name_from_url, resolve_directory

logger = logging.getLogger(__name__)

FailureCallback = Callable[[ListingFailure], None]


class ContentLister:
    """
    Depth-first, pre-order walk over a contents API tree.

    One lister is one traversal: listing URLs already visited are never
    requested again, so the generator returned by `list` is not restartable.
    """

    def __init__(
        self,
        client: GitHubClient,
        options: CloneOptions,
        on_failure: FailureCallback | None = None,
    ):
        self.client = client
        self.options = options
        self.on_failure = on_failure
        self.failures: list[ListingFailure] = []
        self._visited: set[str] = set()

    def list(self, api_url: str, target_dir_name: str) -> Iterator[DownloadTarget]:
        """
        Lazily discover files below `api_url`.

        Failures while listing a sub-directory are recorded and skip only
        that subtree; failures at `api_url` itself propagate.

        Yields:
            DownloadTarget per discovered file, in API order
        """
        logger.info("Listing %s (target=%s, mode=%s)", api_url, target_dir_name, self.options.mode.value)
        return self._walk(api_url, target_dir_name, depth=0)

    def _walk(self, url: str, target_dir_name: str, depth: int) -> Iterator[DownloadTarget]:
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            raise DepthLimitExceeded(url, max_depth)
        if url in self._visited:
            logger.warning("Skipping already listed directory: %s", url)
            return
        self._visited.add(url)

        contents = self.client.list_contents(url)

        if isinstance(contents, InlineFile):
            logger.debug("Inline file payload: %s", contents.name)
            yield self._target(".", contents.name, InlineBytes(contents.decode()))
            return

        for entry in contents.entries():
            if entry.type == "dir":
                logger.debug("Recursing into directory: %s", entry.path)
                try:
                    yield from self._walk(entry.url, target_dir_name, depth + 1)
                except LISTING_ERRORS as e:
                    self._record(entry.url, e)
            else:
                yield self._file_target(entry, target_dir_name)

    def _file_target(self, entry: ContentEntry, target_dir_name: str) -> DownloadTarget:
        local_directory = resolve_directory(entry.path, target_dir_name, self.options.mode)

        if entry.download_url:
            try:
                file_name = file_name_from_url(entry.download_url)
            except ValueError as e:
                raise ResponsePayloadInvalid(str(e)) from e
            return self._target(local_directory, file_name, entry.download_url)

        # No raw link: ask for the file object and use its inline content
        if not entry.url:
            raise ResponsePayloadInvalid(f"File entry {entry.path!r} has no download or listing url")
        logger.debug("Fetching inline content for %s", entry.path)
        contents = self.client.list_contents(entry.url)
        if not isinstance(contents, InlineFile):
            raise InvalidApiResponse(f"Expected a file object for {entry.path!r}")
        return self._target(local_directory, entry.name, InlineBytes(contents.decode()))

    @staticmethod
    def _target(local_directory: str, file_name: str, source: str | InlineBytes) -> DownloadTarget:
        try:
            check_contained(local_directory, file_name)
        except ValueError as e:
            raise ResponsePayloadInvalid(str(e)) from e
        return DownloadTarget(local_directory, file_name, source)

    def _record(self, url: str, error: Exception) -> None:
        logger.warning("Failed to list sub-directory content %s: %s", url, error)
        failure = ListingFailure(url=url, error=error)
        self.failures.append(failure)
        if self.on_failure:
            self.on_failure(failure)
