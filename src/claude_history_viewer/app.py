"""Application entry point: headless runner for the history operations."""

import argparse
import logging
import sys

import orjson
from PySide6.QtCore import QCoreApplication

from claude_history_viewer.services.config_manager import ConfigManager
from claude_history_viewer.services.history_backend import HistoryBackend

APP_NAME = "Claude History Viewer"
ORG_NAME = "claude-history-viewer"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-history-viewer",
        description="Query Claude transcripts and print the result as JSON.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("projects", help="List projects")
    sub.add_parser("sessions", help="List sessions of a project").add_argument("project_path")
    sub.add_parser("messages", help="List messages of a session").add_argument("session_path")
    sub.add_parser("search", help="Search all sessions").add_argument("query")
    context = sub.add_parser("context", help="File changes and commits for a session")
    context.add_argument("session_path")
    context.add_argument("project_name")
    sub.add_parser("dashboard", help="Usage and activity statistics")
    sub.add_parser("snippets", help="Code snippets of a session").add_argument("session_path")
    return parser


def _dispatch(backend: HistoryBackend, args: argparse.Namespace):
    if args.command == "projects":
        return backend.list_projects()
    if args.command == "sessions":
        return backend.list_sessions(args.project_path)
    if args.command == "messages":
        return backend.list_messages(args.session_path)
    if args.command == "search":
        return backend.search(args.query)
    if args.command == "context":
        return backend.get_context(args.session_path, args.project_name)
    if args.command == "dashboard":
        return backend.get_dashboard_stats()
    return backend.list_code_snippets(args.session_path)


def run(argv: list[str] | None = None) -> int:
    """Run one operation and print its payload. Returns the exit status."""
    args = _build_parser().parse_args(argv)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(ORG_NAME)

    config = ConfigManager()
    logging.basicConfig(
        level=logging.DEBUG if config.get_bool("advanced/debugLogging") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    errors: list[str] = []
    backend = HistoryBackend(config=config)
    backend.error_occurred.connect(errors.append)

    payload = _dispatch(backend, args)
    if errors:
        print(errors[0], file=sys.stderr)
        return 1

    sys.stdout.buffer.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n")
    return 0
