"""Decode Claude project directory names and locate the Claude directory."""

from pathlib import Path

from claude_history_viewer.errors import HomeDirectoryNotFound

PROJECTS_DIRNAME = "projects"
TRANSCRIPTS_DIRNAME = "transcripts"


def decode_project_name(dir_name: str) -> str:
    """Decode a project directory name into a human-readable path.

    -home-wiz-AI-LLM → home/wiz/AI/LLM

    Lossy: a hyphen that was part of the original path also becomes "/".
    """
    if not dir_name:
        return ""
    return dir_name.replace("-", "/").lstrip("/")


def project_dir_from_name(project_name: str) -> str:
    """Rebuild the absolute project directory from a decoded project name.

    home/wiz/AI/LLM → /home/wiz/AI/LLM
    """
    return "/" + project_name


def claude_home(override: str = "") -> Path:
    """Return the Claude data directory (``~/.claude`` unless overridden)."""
    if override:
        return Path(override).expanduser()
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryNotFound() from e
    return home / ".claude"
