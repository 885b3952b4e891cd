#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for URL helpers."""

import pytest

from sitemark.utils.urls import (
    encode_url,
    external_link_attributes,
    is_external_link,
    is_site_relative,
    is_unsafe_url,
    mangle_email,
    url_for,
)


@pytest.mark.unit
class TestEncodeUrl:
    """Tests for encode_url."""

    def test_non_ascii_path(self):
        """Test UTF-8 path segments are percent-encoded."""
        assert encode_url("/foo/bár.jpg") == "/foo/b%C3%A1r.jpg"

    def test_already_encoded_path_is_stable(self):
        """Test encoding twice does not double-encode."""
        assert encode_url("/foo/b%C3%A1r.jpg") == "/foo/b%C3%A1r.jpg"

    def test_idna_host(self):
        """Test non-ASCII hosts are converted to punycode."""
        assert encode_url("http://fóo.com/bar.jpg") == "http://xn--fo-5ja.com/bar.jpg"

    def test_percent_encoded_host(self):
        """Test hosts already percent-encoded by the tokenizer are decoded first."""
        assert encode_url("http://f%C3%B3o.com/bar.jpg") == "http://xn--fo-5ja.com/bar.jpg"

    def test_spaces_and_query(self):
        """Test spaces are encoded and ampersands escaped for HTML."""
        assert encode_url("/a b.png?x=1&y=2") == "/a%20b.png?x=1&amp;y=2"

    def test_fragment(self):
        """Test fragment-only URLs pass through."""
        assert encode_url("#section") == "#section"

    def test_empty(self):
        """Test the empty URL."""
        assert encode_url("") == ""


@pytest.mark.unit
class TestUnsafeUrl:
    """Tests for is_unsafe_url."""

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "vbscript:msgbox", "data:text/html;base64,xx"])
    def test_unsafe_prefixes(self, url):
        """Test script-capable schemes are detected."""
        assert is_unsafe_url(url)

    def test_safe_url(self):
        """Test ordinary URLs are safe."""
        assert not is_unsafe_url("https://example.com/")

    def test_case_sensitive(self):
        """Test the prefix match is case-sensitive."""
        assert not is_unsafe_url("JAVASCRIPT:alert(1)")


@pytest.mark.unit
class TestIsExternalLink:
    """Tests for is_external_link."""

    def test_same_host(self):
        """Test links to the site host are internal."""
        assert not is_external_link("http://example.com/foo", "http://example.com")

    def test_other_host(self):
        """Test links to another host are external."""
        assert is_external_link("http://bar.com/", "http://example.com")

    def test_excluded_host_list(self):
        """Test excluded hosts are internal."""
        assert not is_external_link("http://bar.com/", "http://example.com", exclude=["bar.com"])

    def test_excluded_host_string(self):
        """Test a single excluded host string."""
        assert not is_external_link("http://bar.com/", "http://example.com", exclude="bar.com")

    def test_exclude_is_exact_match(self):
        """Test subdomains of an excluded host are still external."""
        assert is_external_link("http://www.bar.com/", "http://example.com", exclude=["bar.com"])

    def test_relative_link(self):
        """Test relative paths are internal."""
        assert not is_external_link("/about/", "http://example.com")

    def test_protocol_relative(self):
        """Test protocol-relative URLs are resolved."""
        assert is_external_link("//bar.com/x", "http://example.com")

    def test_non_http_scheme(self):
        """Test mailto links are never external."""
        assert not is_external_link("mailto:someone@bar.com", "http://example.com")

    def test_no_site_url(self):
        """Test nothing is external without a site URL."""
        assert not is_external_link("http://bar.com/", "")


@pytest.mark.unit
class TestExternalLinkAttributes:
    """Tests for the external link attribute table."""

    def test_disabled(self):
        """Test no attributes when both flags are off."""
        assert external_link_attributes(False, False) == ""

    def test_enable_only(self):
        """Test new-tab attributes."""
        assert external_link_attributes(True, False) == ' target="_blank" rel="noopener"'

    def test_nofollow_only(self):
        """Test nofollow without a new tab."""
        assert external_link_attributes(False, True) == ' rel="noopener external nofollow noreferrer"'

    def test_both(self):
        """Test new tab with nofollow."""
        assert external_link_attributes(True, True) == ' target="_blank" rel="noopener external nofollow noreferrer"'


@pytest.mark.unit
class TestUrlFor:
    """Tests for url_for and is_site_relative."""

    def test_root_prepended(self):
        """Test the site root is prepended."""
        assert url_for("/bar/baz.jpg", "/blog/") == "/blog/bar/baz.jpg"

    def test_relative_path(self):
        """Test paths without a leading slash."""
        assert url_for("bar.jpg", "/blog/") == "/blog/bar.jpg"

    def test_default_root(self):
        """Test the default root."""
        assert url_for("bar.jpg") == "/bar.jpg"

    @pytest.mark.parametrize("url", ["https://example.com/a.png", "//cdn.example.com/a.png", "#top"])
    def test_absolute_urls_pass_through(self, url):
        """Test absolute, protocol-relative and fragment URLs are untouched."""
        assert url_for(url, "/blog/") == url
        assert not is_site_relative(url)


@pytest.mark.unit
class TestMangleEmail:
    """Tests for mangle_email."""

    def test_character_references(self):
        """Test every character becomes a decimal reference."""
        assert mangle_email("a@b") == "&#97;&#64;&#98;"

    def test_deterministic(self):
        """Test output does not vary between calls."""
        assert mangle_email("me@example.com") == mangle_email("me@example.com")
