"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import MagicMock

import pytest

from canvasfs.config import AgentConfig, CanvasFSConfig, DatabaseConfig
from canvasfs.editor import TextEditor
from canvasfs.tree import FileTree
from canvasfs.workspace import Workspace, create_workspace


@pytest.fixture
def tree():
    """
    Create an empty tree.

    Returns:
        FileTree with only the root directory
    """
    return FileTree()


@pytest.fixture
def populated_tree():
    """
    Create a small component tree.

    Layout:
        /App.jsx
        /components/Button.jsx
        /components/ui/Card.jsx
        /styles.css
    """
    tree = FileTree()
    tree.create_file("/App.jsx", "import Button from './components/Button';\n")
    tree.create_file("/components/Button.jsx", "export default () => <button/>;\n")
    tree.create_file("/components/ui/Card.jsx", "export default () => <div/>;\n")
    tree.create_file("/styles.css", "body { margin: 0; }\n")
    return tree


@pytest.fixture
def editor():
    """Create a text editor over an empty tree."""
    return TextEditor()


@pytest.fixture
def config():
    """In-memory configuration that ignores the environment."""
    return CanvasFSConfig.default_local()


@pytest.fixture
def workspace(config):
    """
    Create an initialized ephemeral workspace.

    Returns:
        Workspace backed by an in-memory SQLite database
    """
    workspace = create_workspace(config)
    yield workspace
    workspace.close()


@pytest.fixture
def read_only_workspace():
    """Create an initialized read-only workspace holding one file."""
    workspace = Workspace(config=CanvasFSConfig.default_local(), read_only=True)
    workspace.initialize()
    # Seed through the tree directly; the workspace itself rejects writes
    workspace.tree.create_file("/App.jsx", "const App = () => null;\n")
    yield workspace
    workspace.close()


@pytest.fixture
def db_config(tmp_path):
    """
    Build a factory for configurations sharing one SQLite file.

    Returns:
        Callable returning a fresh CanvasFSConfig on every call
    """
    db_path = str(tmp_path / "canvasfs.db")

    def make(**agent_options) -> CanvasFSConfig:
        return CanvasFSConfig(
            database=DatabaseConfig(sqlite_path=db_path),
            agent=AgentConfig(**agent_options),
        )

    return make


@pytest.fixture
def mock_observer():
    """
    Create a mock observer for mutation events.

    Returns:
        Mock callable
    """
    return MagicMock()
