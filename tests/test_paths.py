"""
Tests for path normalization and helpers.
"""

import pytest

from canvasfs import paths
from canvasfs.exceptions import InvalidPathError
from canvasfs.types import ErrorKind


class TestNormalize:
    """Test cases for paths.normalize."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("/App.jsx", "/App.jsx"),
            ("App.jsx", "/App.jsx"),
            ("/", "/"),
            ("/components/", "/components"),
            ("/a//b/./c", "/a/b/c"),
            ("/a/b/../c", "/a/c"),
            ("components/ui/Card.jsx", "/components/ui/Card.jsx"),
            ("/src/User Profile.tsx", "/src/User Profile.tsx"),
        ],
    )
    def test_normalizes(self, raw, expected):
        """Test canonical forms of valid paths."""
        assert paths.normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "/..", "/a/../..", "/a\x00b", "/a\nb"])
    def test_rejects_invalid(self, raw):
        """Test that malformed paths raise InvalidPath."""
        with pytest.raises(InvalidPathError) as exc_info:
            paths.normalize(raw)
        assert exc_info.value.kind == ErrorKind.INVALID_PATH

    def test_rejects_non_string(self):
        """Test that non-string input raises InvalidPath."""
        with pytest.raises(InvalidPathError):
            paths.normalize(None)

    def test_idempotent(self):
        """Test that normalizing twice changes nothing."""
        once = paths.normalize("a/./b/../c/")
        assert paths.normalize(once) == once


class TestHelpers:
    """Test cases for parent, name, ancestors and is_ancestor."""

    def test_parent(self):
        assert paths.parent("/a/b") == "/a"
        assert paths.parent("/a") == "/"

    def test_parent_of_root(self):
        with pytest.raises(InvalidPathError):
            paths.parent("/")

    def test_name(self):
        assert paths.name("/components/Button.jsx") == "Button.jsx"
        assert paths.name("/") == ""

    def test_join(self):
        assert paths.join("/", "App.jsx") == "/App.jsx"
        assert paths.join("/components", "Button.jsx") == "/components/Button.jsx"

    def test_ancestors(self):
        assert paths.ancestors("/a/b/c") == ["/", "/a", "/a/b"]
        assert paths.ancestors("/a") == ["/"]
        assert paths.ancestors("/") == []

    def test_is_ancestor(self):
        assert paths.is_ancestor("/a", "/a/b")
        assert paths.is_ancestor("/", "/a")
        assert not paths.is_ancestor("/a", "/a")
        assert not paths.is_ancestor("/a", "/ab")

    @pytest.mark.parametrize("segment", ["", ".", "..", "a/b", "a\x01"])
    def test_invalid_names(self, segment):
        assert not paths.is_valid_name(segment)

    def test_valid_name(self):
        assert paths.is_valid_name("Button.jsx")
