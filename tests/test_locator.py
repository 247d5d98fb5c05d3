# Locator parsing tests
import pytest

from cgs import parse_locator
from cgs.exceptions import InvalidUrl, MissingPathSegment


class TestParseLocator:

    def test_decomposes_tree_url(self):
        loc = parse_locator("https://github.com/acme/widgets/tree/main/src/lib")
        assert (loc.owner, loc.repo, loc.marker, loc.branch) == ("acme", "widgets", "tree", "main")
        assert loc.subdir_segments == ("src", "lib")
        assert loc.subdir_path == "src/lib"
        assert loc.target_dir_name == "lib"

    def test_api_base_from_host(self):
        loc = parse_locator("https://github.com/acme/widgets/tree/main/src")
        assert loc.api_base_url == "https://api.github.com"

    def test_repository_root(self):
        loc = parse_locator("https://github.com/acme/widgets/tree/dev")
        assert loc.subdir_path == ""
        # Last URL segment doubles as the target name
        assert loc.target_dir_name == "dev"

    def test_marker_value_not_interpreted(self):
        loc = parse_locator("https://github.com/acme/widgets/blob/main/docs")
        assert loc.marker == "blob"
        assert loc.subdir_path == "docs"

    def test_trailing_slash_ignored(self):
        loc = parse_locator("https://github.com/acme/widgets/tree/main/src/lib/")
        assert loc.subdir_path == "src/lib"
        assert loc.target_dir_name == "lib"

    def test_percent_encoded_segments_decoded(self):
        loc = parse_locator("https://github.com/acme/widgets/tree/main/my%20docs")
        assert loc.subdir_path == "my docs"

    @pytest.mark.parametrize("url, missing", [
        ("https://github.com/", "account"),
        ("https://github.com/acme", "repository"),
        ("https://github.com/acme/widgets", "tree"),
        ("https://github.com/acme/widgets/tree", "branch"),
    ])
    def test_missing_segments(self, url, missing):
        with pytest.raises(MissingPathSegment) as exc:
            parse_locator(url)
        assert exc.value.segment == missing

    @pytest.mark.parametrize("url", ["not a url", "acme/widgets/tree/main", ""])
    def test_invalid_url(self, url):
        with pytest.raises(InvalidUrl):
            parse_locator(url)

    def test_locator_is_immutable(self):
        loc = parse_locator("https://github.com/acme/widgets/tree/main/src")
        with pytest.raises(Exception):
            loc.branch = "other"
