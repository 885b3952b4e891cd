"""Pytest configuration and shared fixtures for the sitemark test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Verbosity, settings

from sitemark.options import RenderOptions
from sitemark.renderer import NodeRenderer
from sitemark.site import InMemoryAssetIndex, SiteContext

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def site() -> SiteContext:
    """Site context for http://example.com served from /blog/."""
    return SiteContext(url="http://example.com", root="/blog/")


@pytest.fixture
def make_renderer(site):
    """Build a NodeRenderer with option overrides."""

    def _make(**overrides) -> NodeRenderer:
        return NodeRenderer(RenderOptions(**overrides), site=site)

    return _make


@pytest.fixture
def asset_index() -> InMemoryAssetIndex:
    """Asset index holding one post with one asset.

    The post ``_posts/hello.md`` is published at ``2020/01/hello/`` and owns
    ``cat.jpg``.
    """
    index = InMemoryAssetIndex()
    index.add_post("_posts/hello.md", slug="hello", path="2020/01/hello/")
    index.add_asset("source/_posts/hello/cat.jpg", "2020/01/hello/cat.jpg")
    return index
