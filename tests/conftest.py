# Test Fixtures
import base64
from typing import Callable

import httpx
import pytest

from cgs import CloneOptions

API_ROOT = "https://api.github.com/repos/acme/widgets/contents"
RAW_ROOT = "https://raw.githubusercontent.com/acme/widgets/main"

Route = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeGitHub:
    """In-memory contents API for a single repository at ref `main`."""

    def __init__(self):
        self.routes: dict[str, Route] = {}
        self.requests: list[str] = []

    @staticmethod
    def key(url: str) -> str:
        return str(httpx.URL(url))

    def contents_url(self, path: str = "") -> str:
        return self.key(f"{API_ROOT}/{path}?ref=main")

    def add_route(self, url: str, route: Route) -> None:
        self.routes[self.key(url)] = route

    def add_listing(self, path: str, entries: list[dict]) -> str:
        url = self.contents_url(path)
        self.add_route(url, httpx.Response(200, json=entries))
        return url

    def file_entry(self, path: str, data: bytes) -> dict:
        download_url = f"{RAW_ROOT}/{path}"
        self.add_route(download_url, httpx.Response(200, content=data))
        return {
            "type": "file",
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "url": self.contents_url(path),
            "download_url": download_url,
            "sha": "0" * 40,
            "size": len(data),
        }

    def dir_entry(self, path: str) -> dict:
        return {
            "type": "dir",
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "url": self.contents_url(path),
            "download_url": None,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(route):
            return route(request)
        # Fresh copy so a route can be served more than once
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def inline_payload(name: str, data: bytes, path: str | None = None) -> dict:
    # GitHub wraps base64 content every 60 characters
    encoded = base64.b64encode(data).decode("ascii")
    wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)) + "\n"
    return {
        "type": "file",
        "name": name,
        "path": path or name,
        "encoding": "base64",
        "content": wrapped,
    }


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def options(tmp_path):
    return CloneOptions(dest=tmp_path, max_retries=1)


@pytest.fixture
def example_tree(github):
    """`src/lib` with a.txt, sub/ and sub/b.txt."""
    github.add_listing("src/lib", [
        github.file_entry("src/lib/a.txt", b"alpha\n"),
        github.dir_entry("src/lib/sub"),
    ])
    github.add_listing("src/lib/sub", [
        github.file_entry("src/lib/sub/b.txt", b"beta\n"),
    ])
    return github


def read_tree(root) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }
