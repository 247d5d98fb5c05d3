"""Subdirectory cloner data models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ghcontents.client import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from pydantic import BaseModel, ConfigDict, Field


class ResolveMode(str, Enum):
    """How discovered files are placed locally."""

    FULL_PATH = "full-path"  # Mirror the repository-relative path
    CURRENT_DIR_ONLY = "curdir"  # Root the tree at the target directory's name


class RepositoryLocator(BaseModel):
    """Repository coordinates resolved from a tree URL."""

    model_config = ConfigDict(frozen=True)

    host: str
    owner: str
    repo: str
    marker: str  # Usually "tree", not interpreted
    branch: str
    subdir_segments: tuple[str, ...] = ()

    @property
    def subdir_path(self) -> str:
        return "/".join(self.subdir_segments)

    @property
    def target_dir_name(self) -> str:
        """Last URL segment; the branch when the link points at the repository root."""
        return self.subdir_segments[-1] if self.subdir_segments else self.branch

    @property
    def api_base_url(self) -> str:
        return f"https://api.{self.host}"


class CloneOptions(BaseModel):
    """Immutable settings for one clone run."""

    model_config = ConfigDict(frozen=True)

    mode: ResolveMode = ResolveMode.FULL_PATH
    dest: Path = Field(default_factory=Path.cwd)
    max_depth: int | None = Field(default=None, ge=0)
    reset: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = DEFAULT_TIMEOUT
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=1)


@dataclass(frozen=True)
class InlineBytes:
    """File content already present in the API response."""

    data: bytes


@dataclass(frozen=True)
class DownloadTarget:
    """A discovered file and where it goes."""

    local_directory: str
    file_name: str
    source: str | InlineBytes  # download URL or decoded content


@dataclass(frozen=True)
class ListingFailure:
    """A directory that could not be listed; its subtree yielded nothing."""

    url: str
    error: Exception


@dataclass
class CloneReport:
    """Outcome of a clone run."""

    written: list[Path] = field(default_factory=list)
    failures: list[ListingFailure] = field(default_factory=list)
