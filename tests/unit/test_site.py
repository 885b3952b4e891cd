#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the site context and post asset resolution."""

import pytest

from sitemark.site import (
    InMemoryAssetIndex,
    SiteContext,
    resolve_post_asset,
    resolve_post_asset_dir,
    source_relative_path,
)


class FailingResolver:
    """Resolver whose lookups always raise."""

    def find_post_by_source_path(self, source):
        raise RuntimeError("database unavailable")

    def find_asset_by_key(self, key):
        raise RuntimeError("database unavailable")


@pytest.mark.unit
class TestSiteContext:
    """Tests for SiteContext."""

    def test_defaults(self):
        """Test an empty configuration."""
        site = SiteContext.from_mapping(None)

        assert site.url == ""
        assert site.root == "/"
        assert site.relative_link is False
        assert site.source_dir == "source"
        assert site.post_asset_folder is False

    def test_from_mapping(self):
        """Test site keys are read from a host configuration."""
        site = SiteContext.from_mapping(
            {"url": "http://example.com", "root": "/blog/", "relative_link": True, "post_asset_folder": True}
        )

        assert site.url == "http://example.com"
        assert site.root == "/blog/"
        assert site.relative_link is True
        assert site.post_asset_folder is True


@pytest.mark.unit
class TestSourceRelativePath:
    """Tests for source_relative_path."""

    def test_relative_to_source_dir(self):
        """Test the source directory prefix is removed."""
        assert source_relative_path("source/_posts/hello.md", "source") == "_posts/hello.md"

    def test_absolute_path(self):
        """Test absolute paths containing the source directory."""
        assert source_relative_path("/home/me/blog/source/_posts/hello.md", "source") == "_posts/hello.md"

    def test_windows_separators(self):
        """Test backslashes are normalized."""
        assert source_relative_path("source\\_posts\\hello.md", "source") == "_posts/hello.md"

    def test_outside_source_dir(self):
        """Test unrelated paths are returned normalized."""
        assert source_relative_path("drafts/hello.md", "source") == "drafts/hello.md"


@pytest.mark.unit
class TestResolvePostAssetDir:
    """Tests for resolve_post_asset_dir."""

    def test_known_post(self, asset_index):
        """Test the asset directory is named after the post file."""
        site = SiteContext(post_asset_folder=True)

        assert resolve_post_asset_dir("source/_posts/hello.md", site, asset_index) == "source/_posts/hello"

    def test_unknown_post(self, asset_index):
        """Test documents that are not posts have no asset directory."""
        assert resolve_post_asset_dir("source/about.md", SiteContext(), asset_index) is None

    def test_missing_inputs(self, asset_index):
        """Test a missing path or resolver."""
        assert resolve_post_asset_dir(None, SiteContext(), asset_index) is None
        assert resolve_post_asset_dir("source/_posts/hello.md", SiteContext(), None) is None

    def test_failing_resolver(self, caplog):
        """Test resolver errors are logged and treated as a miss."""
        with caplog.at_level("WARNING"):
            result = resolve_post_asset_dir("source/_posts/hello.md", SiteContext(), FailingResolver())

        assert result is None
        assert "Post lookup failed" in caplog.text


@pytest.mark.unit
class TestResolvePostAsset:
    """Tests for resolve_post_asset."""

    def test_hit(self, asset_index):
        """Test a known asset resolves to its published path."""
        assert resolve_post_asset("cat.jpg", "source/_posts/hello", asset_index) == "2020/01/hello/cat.jpg"

    def test_miss(self, asset_index):
        """Test unknown assets resolve to None."""
        assert resolve_post_asset("dog.jpg", "source/_posts/hello", asset_index) is None

    def test_backslashes_normalized(self):
        """Test keys and asset paths use forward slashes."""
        index = InMemoryAssetIndex()
        index.add_asset("source\\_posts\\hello\\img\\cat.jpg", "2020\\01\\hello\\img\\cat.jpg")

        assert resolve_post_asset("img\\cat.jpg", "source/_posts/hello", index) == "2020/01/hello/img/cat.jpg"

    def test_failing_resolver(self, caplog):
        """Test resolver errors are logged and treated as a miss."""
        with caplog.at_level("WARNING"):
            result = resolve_post_asset("cat.jpg", "source/_posts/hello", FailingResolver())

        assert result is None
        assert "Asset lookup failed" in caplog.text
