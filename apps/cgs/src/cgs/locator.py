"""Tree URL parsing."""

import logging

import httpx

from .exceptions import InvalidUrl, MissingPathSegment
from .models import RepositoryLocator

logger = logging.getLogger(__name__)

REQUIRED_SEGMENTS = ("account", "repository", "tree", "branch")


def parse_locator(url: str) -> RepositoryLocator:
    """
    Resolve a browsing URL into repository coordinates.

    `https://github.com/{owner}/{repo}/tree/{branch}/{subpath...}`

    Args:
        url: Sub-directory link

    Returns:
        RepositoryLocator

    Raises:
        InvalidUrl: not an absolute URL
        MissingPathSegment: fewer than 4 path segments
    """
    try:
        parsed = httpx.URL(url.strip())
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidUrl(f"Invalid URL: {url}") from e
    if not parsed.scheme or not parsed.host:
        raise InvalidUrl(f"Invalid URL: {url}")

    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) < len(REQUIRED_SEGMENTS):
        raise MissingPathSegment(url, REQUIRED_SEGMENTS[len(segments)])

    owner, repo, marker, branch, *subdir = segments
    locator = RepositoryLocator(
        host=parsed.host,
        owner=owner,
        repo=repo,
        marker=marker,
        branch=branch,
        subdir_segments=tuple(subdir),
    )
    logger.debug(
        "Parsed locator: %s/%s@%s path=%s", owner, repo, branch, locator.subdir_path
    )
    return locator
