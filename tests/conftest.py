"""Shared test fixtures for Claude History Viewer."""

import os
import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that need Qt."""
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv or ["test"])
    app.setOrganizationName("claude-history-viewer-tests")
    yield app


@pytest.fixture
def isolated_settings(qapp, tmp_path):
    """Point QSettings at a per-test INI directory."""
    from PySide6.QtCore import QSettings
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path / "config"))
    return tmp_path / "config"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def simple_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "simple_session.jsonl"


@pytest.fixture
def tools_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "session_with_tools.jsonl"


@pytest.fixture
def legacy_transcript_path(fixtures_dir) -> Path:
    return fixtures_dir / "legacy_transcript.jsonl"


@pytest.fixture
def malformed_session_path(fixtures_dir) -> Path:
    return fixtures_dir / "malformed_session.jsonl"


@pytest.fixture
def tmp_claude_dir(tmp_path) -> Path:
    """Create a temporary ~/.claude directory with one empty project."""
    claude_dir = tmp_path / ".claude"
    project_dir = claude_dir / "projects" / "-home-wiz-projects-myapp"
    project_dir.mkdir(parents=True)
    return claude_dir


@pytest.fixture
def tmp_project_dir(tmp_claude_dir) -> Path:
    return tmp_claude_dir / "projects" / "-home-wiz-projects-myapp"


@pytest.fixture
def tmp_session_file(tmp_project_dir, simple_session_path) -> Path:
    """Copy the simple session into the temporary project."""
    dest = tmp_project_dir / "test-session.jsonl"
    dest.write_text(simple_session_path.read_text())
    return dest
