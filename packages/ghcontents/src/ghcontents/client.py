"""GitHub contents API client."""

import logging
from pathlib import Path
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from .exceptions import ApiRequestFailed, DownloadFailed, ResponsePayloadInvalid
from .models import ContentsResponse, DirectoryListing, parse_contents

logger = logging.getLogger(__name__)

# Retry configuration
DEFAULT_MAX_RETRIES = 3
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 10  # seconds
DEFAULT_TIMEOUT = 30.0  # seconds
DOWNLOAD_CHUNK_SIZE = 64 * 1024

DEFAULT_USER_AGENT = "cgs-subdir-cloner"

# Retryable exceptions
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.WriteTimeout,
    httpx.PoolTimeout,
    httpx.NetworkError,
)


def is_retryable(exc: BaseException) -> bool:
    """Transport failures and 5xx responses are worth another attempt."""
    if isinstance(exc, RETRYABLE_EXCEPTIONS):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


def create_retry_decorator(
    max_retries: int = DEFAULT_MAX_RETRIES,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
):
    """Create a retry decorator with specified max retries."""
    return retry(
        retry=retry_if_exception(is_retryable),
        stop=stop_after_attempt(max(1, max_retries)),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def _api_message(response: httpx.Response) -> str | None:
    """Extract GitHub's `message` field from an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


class GitHubClient:
    """GitHub contents API client with retry support."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        min_wait: float = DEFAULT_MIN_WAIT,
        max_wait: float = DEFAULT_MAX_WAIT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            base_url: Custom API base URL (defaults to GitHub API)
            user_agent: Client identifying header, sent with every request
            timeout: Request timeout in seconds (None or 0 disables it)
            max_retries: Maximum number of attempts for transient failures
            min_wait: Minimum backoff between attempts in seconds
            max_wait: Maximum backoff between attempts in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout or None
        self.max_retries = max_retries
        self.min_wait = min_wait
        self.max_wait = max_wait
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }
        logger.info("GitHub client ready, base_url=%s, max_retries=%d", self.base_url, max_retries)

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            headers=self.headers,
            follow_redirects=True,
            transport=self.transport,
        )

    def _retrying(self):
        return create_retry_decorator(self.max_retries, self.min_wait, self.max_wait)

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make HTTP request with retry."""

        @self._retrying()
        def do_request() -> httpx.Response:
            logger.debug("Request: %s %s", method, url)
            with self._client() as client:
                response = client.request(method, url, **kwargs)
                logger.debug("Response: %s %s (status=%d)", method, url, response.status_code)
                if response.status_code >= 500:
                    logger.warning("Server error %d, will retry", response.status_code)
                response.raise_for_status()
                return response

        return do_request()

    def contents_url(self, owner: str, repo: str, path: str = "", ref: str | None = None) -> str:
        """Build the contents endpoint URL for a repository path."""
        endpoint = f"{self.base_url}/repos/{owner}/{repo}/contents/{path.strip('/')}"
        params = {"ref": ref} if ref else {}
        return str(httpx.URL(endpoint, params=params))

    def list_contents(self, url: str) -> ContentsResponse:
        """
        Fetch one contents API page.

        Args:
            url: Absolute contents URL (from `contents_url` or an entry's `url`)

        Returns:
            DirectoryListing or InlineFile

        Raises:
            ApiRequestFailed: transport error or non-success status
            ResponsePayloadInvalid: body is not JSON or matches no known shape
        """
        try:
            response = self._request("GET", url)
        except httpx.HTTPStatusError as e:
            message = _api_message(e.response) or e.response.reason_phrase
            raise ApiRequestFailed(
                url, f"HTTP {e.response.status_code}: {message}", e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise ApiRequestFailed(url, f"Request failed: {e}") from e
        except httpx.InvalidURL as e:
            raise ApiRequestFailed(url, f"Invalid URL: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ResponsePayloadInvalid(f"Response from {url} is not valid JSON") from e

        contents = parse_contents(data)
        if isinstance(contents, DirectoryListing):
            logger.debug("Directory listing: %d items", len(contents))
        else:
            logger.debug("Single file response: %s", contents.name)
        return contents

    def get_contents(
        self, owner: str, repo: str, path: str = "", ref: str | None = None
    ) -> ContentsResponse:
        """Fetch repository contents by coordinates."""
        logger.info("Fetching contents: %s/%s path=%s ref=%s", owner, repo, path, ref)
        return self.list_contents(self.contents_url(owner, repo, path, ref))

    def download(self, url: str, dest: Path) -> int:
        """
        Stream a file to `dest`, truncating any existing file.

        Returns:
            Number of bytes written

        Raises:
            DownloadFailed: transport error or non-success status
            OSError: destination cannot be written
        """

        @self._retrying()
        def do_download() -> int:
            logger.debug("Downloading: %s -> %s", url, dest)
            with self._client() as client, client.stream("GET", url) as response:
                if response.status_code >= 500:
                    logger.warning("Server error %d, will retry", response.status_code)
                response.raise_for_status()
                written = 0
                with dest.open("wb") as f:
                    for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
                return written

        try:
            return do_download()
        except httpx.HTTPStatusError as e:
            raise DownloadFailed(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise DownloadFailed(url, f"Download failed: {e}") from e
        except httpx.InvalidURL as e:
            raise DownloadFailed(url, f"Invalid URL: {e}") from e
