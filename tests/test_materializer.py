# File materializer tests
import pytest

from cgs import DownloadTarget, FileMaterializer, InlineBytes, parse_locator
from cgs.exceptions import FileSystemFailed
from ghcontents import DownloadFailed, GitHubClient


@pytest.fixture
def materializer(github, tmp_path):
    return FileMaterializer(GitHubClient(transport=github.transport, max_retries=1), tmp_path)


class TestMaterialize:

    def test_downloads_into_nested_directory(self, github, materializer, tmp_path):
        entry = github.file_entry("src/lib/sub/b.txt", b"beta")
        path = materializer.materialize(DownloadTarget("src/lib/sub", "b.txt", entry["download_url"]))
        assert path == tmp_path / "src/lib/sub/b.txt"
        assert path.read_bytes() == b"beta"

    def test_existing_directory_is_fine(self, github, materializer, tmp_path):
        (tmp_path / "src").mkdir()
        entry = github.file_entry("src/a.txt", b"a")
        materializer.materialize(DownloadTarget("src", "a.txt", entry["download_url"]))
        assert (tmp_path / "src/a.txt").read_bytes() == b"a"

    def test_inline_bytes_need_no_network(self, github, materializer, tmp_path):
        path = materializer.materialize(DownloadTarget(".", "a.txt", InlineBytes(b"\x00\x01")))
        assert path.read_bytes() == b"\x00\x01"
        assert github.requests == []

    def test_download_failure_propagates(self, materializer):
        with pytest.raises(DownloadFailed):
            materializer.materialize(DownloadTarget("x", "a.txt", "https://raw.githubusercontent.com/gone/a.txt"))

    @pytest.mark.parametrize("directory, name", [("../outside", "a.txt"), ("sub", "../../a.txt")])
    def test_refuses_to_write_outside_dest(self, materializer, tmp_path, directory, name):
        with pytest.raises(FileSystemFailed, match="outside"):
            materializer.materialize(DownloadTarget(directory, name, InlineBytes(b"a")))
        assert not (tmp_path.parent / "outside").exists()
        assert not (tmp_path.parent / "a.txt").exists()

    def test_absolute_directory_refused(self, materializer, tmp_path):
        outside = tmp_path.parent / f"{tmp_path.name}-abs"
        with pytest.raises(FileSystemFailed):
            materializer.materialize(DownloadTarget(str(outside), "a.txt", InlineBytes(b"a")))
        assert not outside.exists()

    def test_directory_blocked_by_file(self, materializer, tmp_path):
        (tmp_path / "src").write_text("not a dir")
        with pytest.raises(FileSystemFailed):
            materializer.materialize(DownloadTarget("src", "a.txt", InlineBytes(b"a")))


class TestResetDestination:

    def test_deletes_existing_subdirectory(self, materializer, tmp_path):
        stale = tmp_path / "src/lib/old.txt"
        stale.parent.mkdir(parents=True)
        stale.write_text("stale")
        assert materializer.reset_destination(parse_locator("https://github.com/a/b/tree/main/src/lib"))
        assert not (tmp_path / "src/lib").exists()
        assert (tmp_path / "src").is_dir()

    def test_missing_directory_is_noop(self, materializer):
        assert not materializer.reset_destination(parse_locator("https://github.com/a/b/tree/main/src"))

    def test_repository_root_never_deleted(self, materializer, tmp_path):
        (tmp_path / "keep.txt").write_text("keep")
        assert not materializer.reset_destination(parse_locator("https://github.com/a/b/tree/main"))
        assert (tmp_path / "keep.txt").exists()
