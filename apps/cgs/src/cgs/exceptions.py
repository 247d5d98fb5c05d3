"""Subdirectory cloner errors."""

from ghcontents import ApiRequestFailed, ResponsePayloadInvalid


class CloneError(Exception):
    """Base exception for cloner errors."""


class InvalidUrl(CloneError):
    """Link cannot be parsed as an absolute URL."""


class MissingPathSegment(CloneError):
    """Link path is missing owner, repository, marker or branch."""

    def __init__(self, url: str, segment: str):
        self.url = url
        self.segment = segment
        super().__init__(f"No {segment} in the URL path: {url}")


class FileSystemFailed(CloneError):
    """Local directory or file could not be created, written or removed."""


class DepthLimitExceeded(CloneError):
    """Directory nesting went past the configured maximum depth."""

    def __init__(self, url: str, max_depth: int):
        self.url = url
        self.max_depth = max_depth
        super().__init__(f"Maximum depth {max_depth} exceeded at {url}")


# Failures that only cost the subtree being listed
LISTING_ERRORS = (ApiRequestFailed, ResponsePayloadInvalid, DepthLimitExceeded)
