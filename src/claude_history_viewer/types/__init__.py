"""Type definitions for Claude History Viewer."""

from claude_history_viewer.types.messages import (
    Blocks,
    ContentBlock,
    Message,
    MessageContent,
    MessageType,
    PlainText,
    TokenUsage,
)
from claude_history_viewer.types.sessions import (
    CodeSnippet,
    FileChange,
    GitCommit,
    Project,
    Session,
    SessionContext,
    SessionScan,
)
from claude_history_viewer.types.stats import (
    DailyStats,
    DashboardStats,
    HourlyActivity,
    ProjectStats,
)
from claude_history_viewer.types.search import SearchResult

__all__ = [
    "Blocks",
    "ContentBlock",
    "Message",
    "MessageContent",
    "MessageType",
    "PlainText",
    "TokenUsage",
    "CodeSnippet",
    "FileChange",
    "GitCommit",
    "Project",
    "Session",
    "SessionContext",
    "SessionScan",
    "DailyStats",
    "DashboardStats",
    "HourlyActivity",
    "ProjectStats",
    "SearchResult",
]
