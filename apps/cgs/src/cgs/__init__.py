"""Clone a GitHub sub-directory."""

__version__ = "1.0.0"

from .cloner import SubdirCloner
from .lister import ContentLister
from .locator import parse_locator
from .materializer import FileMaterializer
from .models import (
    CloneOptions,
    CloneReport,
    DownloadTarget,
    InlineBytes,
    ListingFailure,
    RepositoryLocator,
    ResolveMode,
)
from .resolver import resolve_directory

__all__ = [
    "SubdirCloner",
    "ContentLister",
    "FileMaterializer",
    "parse_locator",
    "resolve_directory",
    "CloneOptions",
    "CloneReport",
    "DownloadTarget",
    "InlineBytes",
    "ListingFailure",
    "RepositoryLocator",
    "ResolveMode",
]
