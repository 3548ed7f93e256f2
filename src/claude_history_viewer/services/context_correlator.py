"""Session context: files the session edited and commits made while it ran."""

import logging
from pathlib import Path
from typing import Callable

from claude_history_viewer.errors import SessionNotFound
from claude_history_viewer.types import FileChange, GitCommit, SessionContext
from claude_history_viewer.types.messages import content_from_raw, Blocks
from claude_history_viewer.services.git_resolver import fetch_commits
from claude_history_viewer.services.jsonl_parser import iter_records
from claude_history_viewer.utils.path_codec import project_dir_from_name

logger = logging.getLogger(__name__)

# (project_dir, since, until) -> commits
CommitSource = Callable[[str, str, str], list[GitCommit]]

# Tool name -> input field holding the target path
FILE_TOOLS: dict[str, str] = {
    "Edit": "file_path",
    "Write": "file_path",
    "mcp_edit": "filePath",
    "mcp_write": "filePath",
}


def extract_file_changes(raw: dict, timestamp: str) -> list[FileChange]:
    """File-mutating tool_use blocks in one record's message content."""
    message = raw.get("message")
    if not isinstance(message, dict) or not isinstance(message.get("content"), list):
        return []

    content = content_from_raw(message["content"])
    if not isinstance(content, Blocks):
        return []

    changes = []
    for block in content.blocks:
        if block.kind != "tool_use":
            continue
        name = block.fields.get("name")
        field_name = FILE_TOOLS.get(name) if isinstance(name, str) else None
        if field_name is None:
            continue
        tool_input = block.fields.get("input")
        file_path = tool_input.get(field_name) if isinstance(tool_input, dict) else None
        if isinstance(file_path, str):
            changes.append(FileChange(file_path=file_path, action=name, timestamp=timestamp))
    return changes


def get_session_context(
    session_path: str | Path,
    project_name: str,
    commit_source: CommitSource | None = None,
) -> SessionContext:
    """Collect file changes from a session and the commits inside its time span.

    The commit source is only consulted when the session has timestamps.
    """
    path = Path(session_path)
    if not path.exists():
        raise SessionNotFound()

    if commit_source is None:
        commit_source = fetch_commits

    file_changes: list[FileChange] = []
    timestamps: list[str] = []
    for raw in iter_records(path):
        timestamp = raw.get("timestamp")
        if not isinstance(timestamp, str):
            timestamp = ""
        if timestamp:
            timestamps.append(timestamp)
        file_changes.extend(extract_file_changes(raw, timestamp))

    project_path = project_dir_from_name(project_name)
    git_commits: list[GitCommit] = []
    if timestamps:
        # ISO 8601 strings: lexicographic min/max is chronological
        since, until = min(timestamps), max(timestamps)
        git_commits = commit_source(project_path, since, until)
        logger.debug(
            "%d commits in %s between %s and %s", len(git_commits), project_path, since, until,
        )

    return SessionContext(
        file_changes=file_changes,
        git_commits=git_commits,
        project_path=project_path,
    )
