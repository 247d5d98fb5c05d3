"""Sub-directory clone orchestration."""

import logging
from pathlib import Path
from typing import Callable

import httpx
from ghcontents import GitHubClient

from .exceptions import LISTING_ERRORS
from .lister import ContentLister, FailureCallback
from .locator import parse_locator
from .materializer import FileMaterializer
from .models import CloneOptions, CloneReport, ListingFailure, RepositoryLocator

logger = logging.getLogger(__name__)

FileCallback = Callable[[Path], None]


class SubdirCloner:
    """Clones one repository sub-directory into a local tree."""

    def __init__(
        self,
        options: CloneOptions | None = None,
        on_file: FileCallback | None = None,
        on_failure: FailureCallback | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize cloner.

        Args:
            options: Run settings (defaults to full-path mode in the cwd)
            on_file: Called with each written file path
            on_failure: Called for each directory that could not be listed
            transport: Custom httpx transport (used by tests)
        """
        self.options = options or CloneOptions()
        self.on_file = on_file
        self.on_failure = on_failure
        self.transport = transport

    def create_client(self, locator: RepositoryLocator) -> GitHubClient:
        return GitHubClient(
            base_url=locator.api_base_url,
            user_agent=self.options.user_agent,
            timeout=self.options.timeout,
            max_retries=self.options.max_retries,
            transport=self.transport,
        )

    def clone(self, url: str) -> CloneReport:
        """
        Clone the sub-directory a tree URL points at.

        Listing failures are recorded in the report, including one at the
        top-level directory. Everything else aborts the run.

        Raises:
            InvalidUrl, MissingPathSegment: link is unusable
            DownloadFailed: a file could not be fetched
            FileSystemFailed: the local tree could not be written
        """
        locator = parse_locator(url)
        logger.info(
            "Cloning %s/%s@%s path=%s into %s",
            locator.owner, locator.repo, locator.branch, locator.subdir_path or "/", self.options.dest,
        )
        client = self.create_client(locator)
        materializer = FileMaterializer(client, self.options.dest)
        report = CloneReport()

        if self.options.reset:
            materializer.reset_destination(locator)

        lister = ContentLister(client, self.options, on_failure=self._failure_hook(report))
        api_url = client.contents_url(locator.owner, locator.repo, locator.subdir_path, locator.branch)
        try:
            for target in lister.list(api_url, locator.target_dir_name):
                file_path = materializer.materialize(target)
                report.written.append(file_path)
                if self.on_file:
                    self.on_file(file_path)
        except LISTING_ERRORS as e:
            logger.error("Failed to list directory content: %s", e)
            self._failure_hook(report)(ListingFailure(url=api_url, error=e))

        logger.info("Cloned %d files, %d listing failures", len(report.written), len(report.failures))
        return report

    def _failure_hook(self, report: CloneReport) -> FailureCallback:
        def record(failure: ListingFailure) -> None:
            report.failures.append(failure)
            if self.on_failure:
                self.on_failure(failure)

        return record
