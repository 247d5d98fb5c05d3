"""GitHub contents API errors."""


class GitHubError(Exception):
    """Base exception for contents API errors."""


class ApiRequestFailed(GitHubError):
    """Listing request could not be completed (transport or HTTP error)."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")


class ResponsePayloadInvalid(GitHubError):
    """Listing response body is not usable."""


class InvalidApiResponse(ResponsePayloadInvalid):
    """Payload is neither a directory listing nor an inline file object."""


class UnknownEntryType(ResponsePayloadInvalid):
    """Listing entry has a missing or unrecognized `type` field."""

    def __init__(self, entry_type: object, path: str | None = None):
        self.entry_type = entry_type
        self.path = path
        where = f" at {path}" if path else ""
        super().__init__(f"Unknown entry type {entry_type!r}{where}")


class DownloadFailed(GitHubError):
    """File download could not be completed."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"{message} ({url})")
