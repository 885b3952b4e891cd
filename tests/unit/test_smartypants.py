#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for smart punctuation."""

import pytest

from sitemark.constants import DEFAULT_QUOTES
from sitemark.utils.smartypants import resolve_quotes, smartypants


@pytest.mark.unit
class TestSmartypants:
    """Tests for smartypants."""

    def test_dashes(self):
        """Test triple and double hyphens."""
        assert smartypants("a --- b -- c") == "a — b – c"

    def test_ellipsis(self):
        """Test three dots become an ellipsis."""
        assert smartypants("wait...") == "wait…"

    def test_double_quotes(self):
        """Test opening and closing double quotes."""
        assert smartypants('say "hi"') == "say “hi”"

    def test_single_quotes(self):
        """Test opening and closing single quotes."""
        assert smartypants("'tis 'quoted'") == "‘tis ‘quoted’"

    def test_apostrophe(self):
        """Test apostrophes inside words close."""
        assert smartypants("it's") == "it’s"

    def test_quote_after_bracket(self):
        """Test quotes open after an opening bracket."""
        assert smartypants('("x")') == "(“x”)"

    def test_nested_quotes(self):
        """Test a double quote directly after an opening single quote opens."""
        assert smartypants("'\"a\" b") == "‘“a” b"

    def test_custom_glyphs(self):
        """Test a custom quotes string."""
        assert smartypants("\"a\" 'b'", quotes="«»‹›") == "«a» ‹b›"

    def test_invalid_glyphs_fall_back(self):
        """Test a quotes string of the wrong length uses the defaults."""
        assert smartypants('"a"', quotes="«»") == "“a”"

    def test_plain_text_unchanged(self):
        """Test text without punctuation is untouched."""
        assert smartypants("Hello world") == "Hello world"


@pytest.mark.unit
class TestResolveQuotes:
    """Tests for resolve_quotes."""

    def test_valid(self):
        """Test four characters are accepted."""
        assert resolve_quotes("«»‹›") == "«»‹›"

    @pytest.mark.parametrize("value", [None, "", "abc", "abcde", 42])
    def test_invalid(self, value):
        """Test anything else selects the defaults."""
        assert resolve_quotes(value) == DEFAULT_QUOTES
