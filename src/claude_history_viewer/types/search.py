"""Search result types."""

from dataclasses import dataclass


@dataclass
class SearchResult:
    project_name: str
    project_path: str
    session_id: str
    session_path: str
    message_uuid: str
    role: str
    content_preview: str
    timestamp: str
