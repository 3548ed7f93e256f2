"""Tests for claude_history_viewer.services.history_backend."""

from unittest.mock import MagicMock, patch

import pytest

from claude_history_viewer.services.config_manager import ConfigManager
from claude_history_viewer.services.history_backend import HistoryBackend
from claude_history_viewer.types import GitCommit
from helpers import make_line, write_session


@pytest.fixture
def config(isolated_settings, tmp_claude_dir):
    config = ConfigManager()
    config.set_string("general/claudeDir", str(tmp_claude_dir))
    return config


@pytest.fixture
def commit_source():
    return MagicMock(return_value=[GitCommit("abc", "msg", "2026-02-14T14:01:00+00:00", ["a.py"])])


@pytest.fixture
def backend(config, commit_source):
    return HistoryBackend(config=config, commit_source=commit_source)


@pytest.fixture
def errors(backend):
    collected = []
    backend.error_occurred.connect(lambda msg: collected.append(msg))
    return collected


# ---------------------------------------------------------------------------
# 1. Listing
# ---------------------------------------------------------------------------

def test_list_projects(backend, tmp_session_file, errors):
    projects = backend.list_projects()
    assert projects == [{
        "name": "home/wiz/projects/myapp",
        "path": str(tmp_session_file.parent),
        "session_count": 1,
    }]
    assert errors == []


def test_list_sessions_and_messages(backend, tmp_session_file, errors):
    sessions = backend.list_sessions(str(tmp_session_file.parent))
    assert [s["id"] for s in sessions] == ["test-session"]
    assert sessions[0]["input_tokens"] == 470

    messages = backend.list_messages(sessions[0]["path"])
    assert len(messages) == 5
    assert messages[0]["message"]["content"] == "Hello, can you help me with a Python script?"
    assert errors == []


def test_list_code_snippets(backend, tmp_session_file):
    snippets = backend.list_code_snippets(str(tmp_session_file))
    assert [s["language"] for s in snippets] == ["python"]


# ---------------------------------------------------------------------------
# 2. Hard failures become error signals
# ---------------------------------------------------------------------------

def test_missing_project_emits_error(backend, tmp_path, errors):
    assert backend.list_sessions(str(tmp_path / "gone")) == []
    assert errors == ["Project path does not exist"]


def test_missing_session_emits_error(backend, tmp_path, errors):
    assert backend.list_messages(str(tmp_path / "gone.jsonl")) == []
    assert backend.list_code_snippets(str(tmp_path / "gone.jsonl")) == []
    assert errors == ["Session file does not exist"] * 2


def test_missing_home_emits_error(isolated_settings):
    backend = HistoryBackend(config=ConfigManager())
    errors = []
    backend.error_occurred.connect(errors.append)
    with patch("claude_history_viewer.utils.path_codec.Path.home", side_effect=RuntimeError):
        assert backend.list_projects() == []
    assert errors == ["Could not find home directory"]


def test_missing_context_session_returns_empty_context(backend, tmp_path, errors):
    assert backend.get_context(str(tmp_path / "gone.jsonl"), "x") == {
        "file_changes": [],
        "git_commits": [],
        "project_path": "",
    }
    assert errors == ["Session file does not exist"]


# ---------------------------------------------------------------------------
# 3. Search, context and dashboard use settings
# ---------------------------------------------------------------------------

def test_search_respects_max_results(backend, config, tmp_project_dir):
    write_session(tmp_project_dir / "s.jsonl", [
        make_line("user", f"needle {i}", uuid=f"m{i}", timestamp=f"2026-02-13T10:00:0{i}Z")
        for i in range(5)
    ])
    assert len(backend.search("needle")) == 5

    config.set_int("search/maxResults", 2)
    results = backend.search("needle")
    assert [r["message_uuid"] for r in results] == ["m4", "m3"]


def test_search_without_projects_root(backend, tmp_claude_dir, errors):
    (tmp_claude_dir / "projects" / "-home-wiz-projects-myapp").rmdir()
    (tmp_claude_dir / "projects").rmdir()
    assert backend.search("anything") == []
    assert errors == []


def test_get_context(backend, commit_source, tmp_project_dir, tools_session_path):
    session = tmp_project_dir / "tools.jsonl"
    session.write_text(tools_session_path.read_text())

    context = backend.get_context(str(session), "home/wiz/projects/myapp")

    assert len(context["file_changes"]) == 4
    assert context["git_commits"][0]["hash"] == "abc"
    assert context["project_path"] == "/home/wiz/projects/myapp"
    commit_source.assert_called_once()


def test_default_commit_source_uses_timeout(config, tmp_project_dir, tools_session_path):
    session = tmp_project_dir / "tools.jsonl"
    session.write_text(tools_session_path.read_text())
    config.set_int("git/timeout", 3)

    with patch("claude_history_viewer.services.history_backend.fetch_commits", return_value=[]) as fetch:
        HistoryBackend(config=config).get_context(str(session), "home/wiz/projects/myapp")

    assert fetch.call_args.kwargs["timeout"] == 3.0


def test_dashboard_stats(backend, config, tmp_session_file):
    stats = backend.get_dashboard_stats()
    assert stats["total_sessions"] == 1
    assert stats["total_messages"] == 7
    assert stats["avg_session_minutes"] == pytest.approx(5.0)

    config.set_float("pricing/inputPerMillion", 0.0)
    config.set_float("pricing/outputPerMillion", 1_000_000.0)
    assert backend.get_dashboard_stats()["estimated_cost"] == pytest.approx(215.0)


def test_dashboard_without_projects_root(isolated_settings, tmp_path):
    config = ConfigManager()
    config.set_string("general/claudeDir", str(tmp_path / "empty-claude"))
    stats = HistoryBackend(config=config).get_dashboard_stats()
    assert stats["total_sessions"] == 0
    assert stats["daily_stats"] == []
    assert stats["estimated_cost"] == 0.0
