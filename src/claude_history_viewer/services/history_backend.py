"""QObject boundary exposing the history operations to the GUI.

Every slot builds its services fresh from the current settings, runs the
operation synchronously and returns a JSON-compatible payload. Hard failures
are reported through ``error_occurred`` with an empty payload.
"""

import functools
import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, Signal, Slot

from claude_history_viewer.errors import HistoryError
from claude_history_viewer.types import DashboardStats, SessionContext
from claude_history_viewer.services.config_manager import ConfigManager
from claude_history_viewer.services.context_correlator import CommitSource, get_session_context
from claude_history_viewer.services.git_resolver import fetch_commits
from claude_history_viewer.services.search_engine import SearchEngine
from claude_history_viewer.services.session_manager import SessionManager
from claude_history_viewer.services.stats_aggregator import build_dashboard_stats
from claude_history_viewer.utils.code_snippets import extract_code_snippets
from claude_history_viewer.utils.payload import to_payload

logger = logging.getLogger(__name__)


class HistoryBackend(QObject):
    """Stateless request/response facade over the transcript services."""

    error_occurred = Signal(str)  # caller-facing message

    def __init__(
        self,
        parent=None,
        config: ConfigManager | None = None,
        commit_source: CommitSource | None = None,
    ):
        super().__init__(parent)
        self._config = config if config is not None else ConfigManager(self)
        self._commit_source = commit_source

    def _session_manager(self) -> SessionManager:
        return SessionManager(self._config.claude_dir())

    def _search_engine(self) -> SearchEngine:
        return SearchEngine(
            projects_root=self._session_manager().projects_root,
            max_results=self._config.get_int("search/maxResults"),
            context_before=self._config.get_int("search/contextBefore"),
            context_after=self._config.get_int("search/contextAfter"),
        )

    def _get_commit_source(self) -> CommitSource:
        if self._commit_source is not None:
            return self._commit_source
        return functools.partial(fetch_commits, timeout=self._config.get_float("git/timeout"))

    def _run(self, operation: str, func: Callable[[], Any], empty: Any) -> Any:
        try:
            return to_payload(func())
        except (HistoryError, OSError) as e:
            logger.warning("%s failed: %s", operation, e)
            self.error_occurred.emit(str(e))
            return empty

    @Slot(result=list)
    def list_projects(self) -> list:
        return self._run("list_projects", lambda: self._session_manager().list_projects(), [])

    @Slot(str, result=list)
    def list_sessions(self, project_path: str) -> list:
        return self._run(
            "list_sessions",
            lambda: self._session_manager().list_sessions(project_path),
            [],
        )

    @Slot(str, result=list)
    def list_messages(self, session_path: str) -> list:
        return self._run(
            "list_messages",
            lambda: self._session_manager().list_messages(session_path),
            [],
        )

    @Slot(str, result=list)
    def search(self, query: str) -> list:
        return self._run("search", lambda: self._search_engine().search(query), [])

    @Slot(str, str, result=dict)
    def get_context(self, session_path: str, project_name: str) -> dict:
        return self._run(
            "get_context",
            lambda: get_session_context(session_path, project_name, self._get_commit_source()),
            to_payload(SessionContext()),
        )

    @Slot(result=dict)
    def get_dashboard_stats(self) -> dict:
        return self._run(
            "get_dashboard_stats",
            lambda: build_dashboard_stats(
                self._session_manager().projects_root,
                input_cost_per_million=self._config.get_float("pricing/inputPerMillion"),
                output_cost_per_million=self._config.get_float("pricing/outputPerMillion"),
            ),
            to_payload(DashboardStats()),
        )

    @Slot(str, result=list)
    def list_code_snippets(self, session_path: str) -> list:
        return self._run(
            "list_code_snippets",
            lambda: extract_code_snippets(self._session_manager().list_messages(session_path)),
            [],
        )
