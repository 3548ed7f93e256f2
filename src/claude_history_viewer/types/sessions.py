"""Session and project metadata types."""

from dataclasses import dataclass, field


@dataclass
class Project:
    name: str         # Directory name with "-" restored to "/"
    path: str         # Absolute directory
    session_count: int = 0


@dataclass
class Session:
    id: str
    path: str
    size: int
    modified: int     # Unix seconds
    input_tokens: int = 0
    output_tokens: int = 0
    message_count: int = 0


@dataclass
class SessionScan:
    input_tokens: int = 0
    output_tokens: int = 0
    message_count: int = 0


@dataclass
class FileChange:
    file_path: str
    action: str       # Tool name
    timestamp: str


@dataclass
class GitCommit:
    hash: str
    message: str
    timestamp: str
    files: list[str] = field(default_factory=list)


@dataclass
class SessionContext:
    file_changes: list[FileChange] = field(default_factory=list)
    git_commits: list[GitCommit] = field(default_factory=list)
    project_path: str = ""


@dataclass
class CodeSnippet:
    language: str
    code: str
    role: str
    timestamp: str
