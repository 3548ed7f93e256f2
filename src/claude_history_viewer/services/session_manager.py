"""Project and session discovery over the Claude data directory."""

import logging
from pathlib import Path

from claude_history_viewer.errors import ProjectNotFound, SessionNotFound
from claude_history_viewer.types import Message, Project, Session
from claude_history_viewer.services.jsonl_parser import parse_session_file, scan_session
from claude_history_viewer.utils.path_codec import (
    PROJECTS_DIRNAME,
    TRANSCRIPTS_DIRNAME,
    claude_home,
    decode_project_name,
)

logger = logging.getLogger(__name__)

TRANSCRIPTS_PROJECT_NAME = "OpenCode Sessions"


def list_project_dirs(projects_root: Path) -> list[Path]:
    """Immediate subdirectories of the projects root, sorted by name.

    Unreadable entries are dropped; a missing root yields an empty list.
    """
    try:
        entries = sorted(projects_root.iterdir())
    except OSError:
        logger.debug("Cannot list projects root %s", projects_root, exc_info=True)
        return []

    dirs = []
    for entry in entries:
        try:
            if entry.is_dir():
                dirs.append(entry)
        except OSError:
            continue
    return dirs


def list_jsonl_files(directory: Path) -> list[Path]:
    """Transcript files directly inside a directory (not subdirs), sorted by name."""
    try:
        entries = sorted(directory.glob("*.jsonl"))
    except OSError:
        logger.debug("Cannot list %s", directory, exc_info=True)
        return []

    files = []
    for entry in entries:
        try:
            if entry.is_file():
                files.append(entry)
        except OSError:
            continue
    return files


class SessionManager:
    """Lists projects, sessions and messages. Every call re-reads the disk."""

    def __init__(self, claude_dir: str | Path | None = None):
        self._claude_dir = Path(claude_dir) if claude_dir else None

    @property
    def claude_dir(self) -> Path:
        if self._claude_dir is None:
            return claude_home()
        return self._claude_dir

    @property
    def projects_root(self) -> Path:
        return self.claude_dir / PROJECTS_DIRNAME

    @property
    def transcripts_root(self) -> Path:
        return self.claude_dir / TRANSCRIPTS_DIRNAME

    def list_projects(self) -> list[Project]:
        """Scan the projects root for directories holding at least one transcript.

        The legacy transcripts directory is listed as one extra project.
        """
        projects = []

        for entry in list_project_dirs(self.projects_root):
            session_count = len(list_jsonl_files(entry))
            if session_count == 0:
                continue
            projects.append(Project(
                name=decode_project_name(entry.name),
                path=str(entry),
                session_count=session_count,
            ))

        transcripts_dir = self.transcripts_root
        if transcripts_dir.is_dir():
            session_count = len(list_jsonl_files(transcripts_dir))
            if session_count > 0:
                projects.append(Project(
                    name=TRANSCRIPTS_PROJECT_NAME,
                    path=str(transcripts_dir),
                    session_count=session_count,
                ))

        projects.sort(key=lambda p: p.name)
        return projects

    def list_sessions(self, project_path: str | Path) -> list[Session]:
        """Load all sessions with at least one message, newest first."""
        project_dir = Path(project_path)
        if not project_dir.exists():
            raise ProjectNotFound()

        sessions = []
        for jsonl_file in list_jsonl_files(project_dir):
            stat = jsonl_file.stat()
            scan = scan_session(jsonl_file)
            if scan.message_count == 0:
                continue
            sessions.append(Session(
                id=jsonl_file.stem,
                path=str(jsonl_file),
                size=stat.st_size,
                modified=int(stat.st_mtime),
                input_tokens=scan.input_tokens,
                output_tokens=scan.output_tokens,
                message_count=scan.message_count,
            ))

        # Sort by modified descending
        sessions.sort(key=lambda s: s.modified, reverse=True)
        return sessions

    def list_messages(self, session_path: str | Path) -> list[Message]:
        """Every displayable message in a transcript, in file order."""
        path = Path(session_path)
        if not path.exists():
            raise SessionNotFound()
        return parse_session_file(path)
