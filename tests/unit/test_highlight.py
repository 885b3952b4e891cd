#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for code block highlighting."""

import pytest

from sitemark.utils.highlight import highlight_code, language_from_info


@pytest.mark.unit
class TestLanguageFromInfo:
    """Tests for language_from_info."""

    @pytest.mark.parametrize(
        "info, expected",
        [
            ("python", "python"),
            ("js title=app.js", "js"),
            ("  ruby  ", "ruby"),
            ("", None),
            ("   ", None),
            (None, None),
        ],
    )
    def test_first_word(self, info, expected):
        """Test the language is the first word of the info string."""
        assert language_from_info(info) == expected


@pytest.mark.unit
class TestHighlightCode:
    """Tests for highlight_code."""

    def test_known_language(self):
        """Test Pygments token spans for a known language."""
        result = highlight_code("def f():\n    return 1\n", "python")

        assert '<span class="k">def</span>' in result
        assert "<pre" not in result

    def test_unknown_language_escaped(self):
        """Test unknown languages fall back to escaped text."""
        assert highlight_code("<b>&</b>", "nosuchlang") == "&lt;b&gt;&amp;&lt;/b&gt;"

    def test_no_language(self):
        """Test code without a language is escaped."""
        assert highlight_code('x = "<y>"\n') == 'x = "&lt;y&gt;"'

    def test_disabled(self):
        """Test highlighting can be switched off."""
        assert highlight_code("print(1)", "python", enabled=False) == "print(1)"

    def test_dedent_and_trailing_newlines(self):
        """Test common indentation and trailing newlines are removed."""
        assert highlight_code("    a\n      b\n\n") == "a\n  b"

    def test_escapes_inside_spans(self):
        """Test markup characters in highlighted code are escaped."""
        result = highlight_code('print("<b>")', "python")

        assert "<b>" not in result
        assert "&lt;b&gt;" in result
