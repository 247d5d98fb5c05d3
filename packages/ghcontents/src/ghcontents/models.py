"""GitHub contents API data models."""

import base64
import binascii
from typing import Any, Iterator, Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import InvalidApiResponse, ResponsePayloadInvalid, UnknownEntryType

ENTRY_TYPES = ("dir", "file")


class ContentEntry(BaseModel):
    """Contents listing item (file or directory)."""

    name: str
    path: str
    type: Literal["file", "dir"]
    url: str | None = None  # Listing URL, required for directories
    download_url: str | None = None  # Absent for some files, content is then inline
    sha: str | None = None
    size: int | None = None

    @model_validator(mode="after")
    def _dir_has_url(self) -> "ContentEntry":
        if self.type == "dir" and not self.url:
            raise ValueError("directory entry without listing url")
        return self

    @classmethod
    def from_api(cls, raw: Any) -> "ContentEntry":
        """
        Validate a single raw listing item.

        Raises:
            UnknownEntryType: `type` is missing or not "dir"/"file"
            ResponsePayloadInvalid: any other field is missing or malformed
        """
        if not isinstance(raw, dict):
            raise ResponsePayloadInvalid(f"Listing item is not an object: {raw!r}")
        entry_type = raw.get("type")
        if entry_type not in ENTRY_TYPES:
            raise UnknownEntryType(entry_type, raw.get("path"))
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ResponsePayloadInvalid(
                f"Malformed {entry_type} entry {raw.get('path')!r}: {e}"
            ) from e


class InlineFile(BaseModel):
    """Single-object response carrying base64 encoded file content."""

    type: Literal["file"]
    name: str
    path: str | None = None
    encoding: Literal["base64"]
    content: str

    def decode(self) -> bytes:
        """Decode content, ignoring the line breaks GitHub embeds every 60 chars."""
        stripped = self.content.replace("\n", "").replace("\r", "")
        try:
            return base64.b64decode(stripped, validate=True)
        except binascii.Error as e:
            raise ResponsePayloadInvalid(f"Invalid base64 content for {self.name}: {e}") from e


class DirectoryListing(BaseModel):
    """Array response; items are validated lazily, one per iteration step."""

    items: list[Any] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def entries(self) -> Iterator[ContentEntry]:
        for raw in self.items:
            yield ContentEntry.from_api(raw)


ContentsResponse = DirectoryListing | InlineFile


def parse_contents(data: Any) -> ContentsResponse:
    """
    Classify a decoded contents API payload.

    Returns:
        DirectoryListing for the array shape, InlineFile for a single
        base64 file object

    Raises:
        InvalidApiResponse: payload matches neither shape
    """
    if isinstance(data, list):
        return DirectoryListing(items=data)
    if isinstance(data, dict):
        try:
            return InlineFile.model_validate(data)
        except ValidationError as e:
            message = data.get("message")
            detail = f"API message: {message}" if message else str(e)
            raise InvalidApiResponse(f"Unexpected object payload ({detail})") from e
    raise InvalidApiResponse(f"Unexpected payload type: {type(data).__name__}")
