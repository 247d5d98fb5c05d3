"""GitHub contents API client utilities."""

from .client import GitHubClient
from .exceptions import (
    ApiRequestFailed,
    DownloadFailed,
    GitHubError,
    InvalidApiResponse,
    ResponsePayloadInvalid,
    UnknownEntryType,
)
from .models import ContentEntry, ContentsResponse, DirectoryListing, InlineFile, parse_contents

__all__ = [
    "GitHubClient",
    "ContentEntry",
    "ContentsResponse",
    "DirectoryListing",
    "InlineFile",
    "parse_contents",
    "GitHubError",
    "ApiRequestFailed",
    "ResponsePayloadInvalid",
    "InvalidApiResponse",
    "UnknownEntryType",
    "DownloadFailed",
]
