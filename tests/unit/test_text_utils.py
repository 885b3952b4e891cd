#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for text utilities."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sitemark.utils.text import escape_html, html_to_attribute_text, slugize, strip_html_tags


@pytest.mark.unit
class TestSlugize:
    """Tests for slugize."""

    def test_spaces_become_separators(self):
        """Test words are joined with hyphens."""
        assert slugize("Hello world") == "Hello-world"

    def test_case_is_kept(self):
        """Test no case change without a transform."""
        assert slugize("Hello World") == "Hello-World"

    def test_punctuation_runs_collapse(self):
        """Test runs of unsafe punctuation become one separator."""
        assert slugize("What's new? (2020)") == "What-s-new-2020"

    def test_leading_and_trailing_separators_trimmed(self):
        """Test separators are trimmed from both ends."""
        assert slugize("  -- Title --  ") == "Title"

    def test_diacritics_removed(self):
        """Test accented letters are folded."""
        assert slugize("Café déjà vu") == "Cafe-deja-vu"

    def test_cjk_kept(self):
        """Test CJK text is kept as is."""
        assert slugize("中文 标题") == "中文-标题"

    def test_kana_voicing_marks_kept(self):
        """Test voiced kana are not folded to their unvoiced base."""
        assert slugize("ガイド") == "ガイド"
        assert slugize("パン") == "パン"

    def test_indic_vowel_signs_kept(self):
        """Test Devanagari vowel signs stay attached to their letters."""
        assert slugize("हिन्दी भाषा") == "हिन्दी-भाषा"

    def test_decomposed_latin_folded(self):
        """Test decomposed accents on Latin letters are folded too."""
        assert slugize("Cafe\u0301") == "Cafe"

    def test_control_characters_removed(self):
        """Test control characters are dropped."""
        assert slugize("a\x00b") == "ab"

    def test_transforms(self):
        """Test lower and upper case transforms."""
        assert slugize("Hello World", transform=1) == "hello-world"
        assert slugize("Hello World", transform=2) == "HELLO-WORLD"

    def test_custom_separator(self):
        """Test a custom separator."""
        assert slugize("Hello big world", separator="_") == "Hello_big_world"

    def test_only_punctuation(self):
        """Test punctuation-only text gives an empty slug."""
        assert slugize("?!.") == ""

    @given(st.text(max_size=50))
    def test_slug_is_fragment_safe(self, text):
        """Test slugs never contain whitespace or URL-unsafe characters."""
        slug = slugize(text)

        assert not any(char in slug for char in " \t\n\"'<>#?&/\\")
        assert not slug.startswith("-")
        assert not slug.endswith("-")
        assert "--" not in slug


@pytest.mark.unit
class TestHtmlHelpers:
    """Tests for HTML helpers."""

    def test_strip_html_tags(self):
        """Test tags are removed and entities kept."""
        assert strip_html_tags("<b>a &amp; b</b>") == "a &amp; b"

    def test_html_to_attribute_text(self):
        """Test tag-stripped text is escaped for attributes."""
        assert html_to_attribute_text('<em>"quoted"</em> &amp; more') == "&quot;quoted&quot; &amp; more"

    def test_escape_html(self):
        """Test escaping can be disabled."""
        assert escape_html("<a>") == "&lt;a&gt;"
        assert escape_html("<a>", enabled=False) == "<a>"
