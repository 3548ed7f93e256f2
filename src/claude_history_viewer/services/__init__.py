"""Services for Claude History Viewer."""

from claude_history_viewer.services.session_manager import SessionManager
from claude_history_viewer.services.search_engine import SearchEngine
from claude_history_viewer.services.stats_aggregator import build_dashboard_stats
from claude_history_viewer.services.context_correlator import get_session_context
from claude_history_viewer.services.git_resolver import fetch_commits, parse_git_log
from claude_history_viewer.services.config_manager import ConfigManager
from claude_history_viewer.services.history_backend import HistoryBackend

__all__ = [
    "SessionManager",
    "SearchEngine",
    "build_dashboard_stats",
    "get_session_context",
    "fetch_commits",
    "parse_git_log",
    "ConfigManager",
    "HistoryBackend",
]
