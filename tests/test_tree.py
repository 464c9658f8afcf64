"""
Tests for the in-memory tree store.
"""

import pytest

from canvasfs.exceptions import (
    AlreadyExistsError,
    CannotDeleteRootError,
    InvalidPathError,
    NotFoundError,
)
from canvasfs.types import NodeKind, TreeEntry


class TestCreateAndRead:
    """Test cases for creating and reading files and directories."""

    def test_read_after_create(self, tree):
        """Test that reading right after creating returns the exact content."""
        content = "const App = () => null;\r\n\n  trailing  "
        tree.create_file("/App.jsx", content)
        assert tree.read_file("/App.jsx") == content

    def test_create_returns_normalized_path(self, tree):
        assert tree.create_file("App.jsx") == "/App.jsx"
        assert tree.read_file("/App.jsx") == ""

    def test_creates_missing_ancestors(self, tree):
        """Test that missing ancestor directories are created implicitly."""
        tree.create_file("/components/ui/Card.jsx", "card")
        assert tree.kind("/components") == NodeKind.DIRECTORY
        assert tree.kind("/components/ui") == NodeKind.DIRECTORY
        assert tree.list("/components") == [TreeEntry("ui", NodeKind.DIRECTORY)]

    def test_create_existing_fails(self, tree):
        tree.create_file("/App.jsx", "a")
        with pytest.raises(AlreadyExistsError):
            tree.create_file("/App.jsx", "b")
        assert tree.read_file("/App.jsx") == "a"

    def test_create_at_root_fails(self, tree):
        with pytest.raises(InvalidPathError):
            tree.create_file("/")

    def test_create_under_file_fails(self, tree):
        """Test that an ancestor occupied by a file is rejected without side effects."""
        tree.create_file("/App.jsx", "a")
        with pytest.raises(AlreadyExistsError):
            tree.create_file("/App.jsx/child.js", "b")
        assert tree.list("/") == [TreeEntry("App.jsx", NodeKind.FILE)]

    def test_create_directory_then_file(self, tree):
        """Test listing a directory after adding a component to it."""
        tree.create_directory("/components")
        tree.create_file("/components/Button.jsx", "...")
        entries = tree.list("/components")
        assert [entry.as_tuple() for entry in entries] == [("Button.jsx", NodeKind.FILE)]

    def test_create_directory_is_idempotent(self, tree):
        tree.create_directory("/components")
        tree.create_file("/components/Button.jsx")
        assert tree.create_directory("/components") == "/components"
        assert len(tree.list("/components")) == 1

    def test_create_directory_over_file_fails(self, tree):
        tree.create_file("/App.jsx")
        with pytest.raises(AlreadyExistsError):
            tree.create_directory("/App.jsx")

    def test_read_directory_fails(self, tree):
        tree.create_directory("/components")
        with pytest.raises(NotFoundError):
            tree.read_file("/components")

    def test_read_missing_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.read_file("/missing.js")

    def test_write_file(self, tree):
        tree.create_file("/App.jsx", "a")
        tree.write_file("/App.jsx", "b")
        assert tree.read_file("/App.jsx") == "b"

    def test_write_missing_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.write_file("/App.jsx", "b")
        assert not tree.exists("/App.jsx")


class TestQueries:
    """Test cases for exists, kind and list."""

    def test_kind_never_raises(self, tree):
        assert tree.kind("") is None
        assert tree.kind("/..") is None
        assert tree.kind("/missing") is None
        assert not tree.exists("/a\x00")

    def test_root_is_directory(self, tree):
        assert tree.is_dir("/")
        assert tree.list("/") == []

    def test_list_insertion_order(self, tree):
        for name in ("zeta.js", "alpha.js", "mid.js"):
            tree.create_file(f"/{name}")
        assert [entry.name for entry in tree.list()] == ["zeta.js", "alpha.js", "mid.js"]

    def test_list_file_fails(self, tree):
        tree.create_file("/App.jsx")
        with pytest.raises(NotFoundError):
            tree.list("/App.jsx")


class TestDelete:
    """Test cases for deleting nodes."""

    def test_delete_directory_removes_subtree(self, populated_tree):
        """Test that deleting a directory removes every descendant."""
        populated_tree.delete("/components")
        assert not populated_tree.exists("/components")
        with pytest.raises(NotFoundError):
            populated_tree.read_file("/components/Button.jsx")
        assert populated_tree.is_file("/App.jsx")

    def test_delete_root_fails(self, populated_tree):
        with pytest.raises(CannotDeleteRootError):
            populated_tree.delete("/")
        assert populated_tree.count() == (2, 4)

    def test_delete_missing_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.delete("/missing.js")


class TestRename:
    """Test cases for renaming and moving nodes."""

    def test_rename_file(self, tree):
        """Test that the content moves and the old path disappears."""
        tree.create_file("/a.js", "content of a")
        assert tree.rename("/a.js", "/b.js") == ("/a.js", "/b.js")
        assert tree.read_file("/b.js") == "content of a"
        with pytest.raises(NotFoundError):
            tree.read_file("/a.js")

    def test_rename_keeps_subtree(self, populated_tree):
        node = populated_tree._lookup("/components")
        populated_tree.rename("/components", "/src/components")
        assert populated_tree._lookup("/src/components") is node
        assert populated_tree.read_file("/src/components/ui/Card.jsx") == (
            "export default () => <div/>;\n"
        )

    def test_rename_appends_to_new_parent(self, tree):
        for name in ("a.js", "b.js", "c.js"):
            tree.create_file(f"/{name}")
        tree.rename("/a.js", "/z.js")
        assert [entry.name for entry in tree.list()] == ["b.js", "c.js", "z.js"]

    def test_rename_to_existing_fails(self, tree):
        tree.create_file("/a.js", "a")
        tree.create_file("/b.js", "b")
        with pytest.raises(AlreadyExistsError):
            tree.rename("/a.js", "/b.js")
        assert tree.read_file("/a.js") == "a"
        assert tree.read_file("/b.js") == "b"

    def test_rename_missing_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.rename("/a.js", "/b.js")

    def test_rename_root_fails(self, tree):
        with pytest.raises(InvalidPathError):
            tree.rename("/", "/root")

    def test_rename_into_own_subtree_fails(self, populated_tree):
        """Test that a directory cannot be moved inside itself."""
        with pytest.raises(InvalidPathError):
            populated_tree.rename("/components", "/components/ui/nested")
        assert populated_tree.is_file("/components/Button.jsx")

    def test_rename_under_file_fails(self, tree):
        tree.create_file("/a.js")
        tree.create_file("/b.js")
        with pytest.raises(AlreadyExistsError):
            tree.rename("/b.js", "/a.js/b.js")
        assert tree.is_file("/b.js")


class TestTraversal:
    """Test cases for walk, files, count and render."""

    def test_walk_depth_first(self, populated_tree):
        assert [path for path, _ in populated_tree.walk()] == [
            "/App.jsx",
            "/components",
            "/components/Button.jsx",
            "/components/ui",
            "/components/ui/Card.jsx",
            "/styles.css",
        ]

    def test_files(self, populated_tree):
        files = populated_tree.files()
        assert list(files) == [
            "/App.jsx",
            "/components/Button.jsx",
            "/components/ui/Card.jsx",
            "/styles.css",
        ]
        assert files["/styles.css"] == "body { margin: 0; }\n"

    def test_count(self, populated_tree):
        assert populated_tree.count() == (2, 4)

    def test_render(self, populated_tree):
        assert populated_tree.render() == "\n".join(
            [
                "/",
                "  App.jsx",
                "  components/",
                "    Button.jsx",
                "    ui/",
                "      Card.jsx",
                "  styles.css",
            ]
        )

    def test_render_subtree(self, populated_tree):
        assert populated_tree.render("/components/ui") == "/components/ui\n  Card.jsx"
