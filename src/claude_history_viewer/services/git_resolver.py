"""Git history resolver: commits inside a time window, via ``git log``."""

import logging
import subprocess
from pathlib import Path

from claude_history_viewer.types import GitCommit

logger = logging.getLogger(__name__)

GIT_LOG_FORMAT = "%H|%s|%aI"
DEFAULT_TIMEOUT = 10.0  # seconds


def fetch_commits(
    project_path: str,
    since: str,
    until: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[GitCommit]:
    """Return commits authored between since and until (inclusive) in project_path.

    Any failure (git missing, directory missing, not a repository, non-zero
    exit, timeout) yields an empty list.
    """
    if not since or not until:
        return []

    cmd = [
        "git", "log",
        f"--format={GIT_LOG_FORMAT}",
        "--name-only",
        f"--since={since}",
        f"--until={until}",
    ]
    try:
        proc = subprocess.run(
            cmd,
            cwd=Path(project_path),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.debug("git log timed out after %ss in %s", timeout, project_path)
        return []
    except (OSError, ValueError):
        logger.debug("Failed to run git log in %s", project_path, exc_info=True)
        return []

    if proc.returncode != 0:
        logger.debug("git log exited %d in %s: %s", proc.returncode, project_path, proc.stderr.strip())
        return []

    return parse_git_log(proc.stdout)


def parse_git_log(output: str) -> list[GitCommit]:
    """Parse ``git log --format=%H|%s|%aI --name-only`` output.

    A line containing "|" starts a new commit (hash|subject|date); other
    non-blank lines are paths changed by the current commit.
    """
    commits = []
    current: GitCommit | None = None

    for line in output.splitlines():
        if "|" in line:
            if current is not None:
                commits.append(current)
            parts = line.split("|", 2)
            if len(parts) == 3:
                current = GitCommit(hash=parts[0], message=parts[1], timestamp=parts[2])
            else:
                current = None
        elif line.strip() and current is not None:
            current.files.append(line.strip())

    if current is not None:
        commits.append(current)
    return commits
