"""Cross-session full-text search engine."""

import logging
import re
from pathlib import Path

from claude_history_viewer.types import SearchResult
from claude_history_viewer.types.messages import DISPLAYABLE_TYPES, content_from_raw, flatten_text
from claude_history_viewer.services.jsonl_parser import decode_line, iter_lines
from claude_history_viewer.services.session_manager import list_jsonl_files, list_project_dirs
from claude_history_viewer.utils.path_codec import decode_project_name

logger = logging.getLogger(__name__)

MAX_RESULTS = 100
CONTEXT_BEFORE = 30   # chars of context before the match
CONTEXT_AFTER = 70    # chars of context after the match
PREVIEW_LENGTH = 100  # fallback preview length


class SearchEngine:
    """Searches every transcript under the projects root for user and AI text."""

    def __init__(
        self,
        projects_root: Path | None = None,
        max_results: int = MAX_RESULTS,
        context_before: int = CONTEXT_BEFORE,
        context_after: int = CONTEXT_AFTER,
        preview_length: int = PREVIEW_LENGTH,
    ):
        self._projects_root: Path | None = projects_root
        self._max_results = max_results
        self._context_before = context_before
        self._context_after = context_after
        self._preview_length = preview_length

    def search(self, query: str) -> list[SearchResult]:
        """Case-insensitive substring search, newest matches first."""
        # A blank query is rejected rather than matching every message
        if not query or not query.strip() or not self._projects_root:
            return []

        pattern = re.compile(re.escape(query), re.IGNORECASE)
        results = []
        for project_dir in list_project_dirs(self._projects_root):
            project_name = decode_project_name(project_dir.name)
            for jsonl_file in list_jsonl_files(project_dir):
                results.extend(self._search_file(pattern, jsonl_file, project_name, project_dir))

        # ISO 8601 timestamps sort correctly as strings
        results.sort(key=lambda r: r.timestamp, reverse=True)
        return results[:self._max_results]

    def _search_file(
        self,
        pattern: re.Pattern,
        jsonl_file: Path,
        project_name: str,
        project_dir: Path,
    ) -> list[SearchResult]:
        results = []
        try:
            for _, line in iter_lines(jsonl_file):
                # Cheap pre-check before decoding
                if not pattern.search(line):
                    continue

                raw = decode_line(line)
                if raw is None:
                    continue

                msg_type = raw.get("type")
                if not isinstance(msg_type, str) or msg_type not in DISPLAYABLE_TYPES:
                    continue

                message = raw.get("message")
                if not isinstance(message, dict):
                    continue

                text = flatten_text(content_from_raw(message.get("content")))
                # The raw line can match on JSON structure alone
                if not pattern.search(text):
                    continue

                role = message.get("role")
                uuid = raw.get("uuid")
                timestamp = raw.get("timestamp")
                results.append(SearchResult(
                    project_name=project_name,
                    project_path=str(project_dir),
                    session_id=jsonl_file.stem,
                    session_path=str(jsonl_file),
                    message_uuid=uuid if isinstance(uuid, str) else "",
                    role=role if isinstance(role, str) else "",
                    content_preview=self.create_preview(text, pattern),
                    timestamp=timestamp if isinstance(timestamp, str) else "",
                ))
        except OSError:
            logger.debug("Failed to read %s during search", jsonl_file, exc_info=True)
        return results

    def create_preview(self, text: str, pattern: re.Pattern) -> str:
        """Window of text around the first match, with ellipses where truncated."""
        match = pattern.search(text)
        if match is None:
            preview = text[:self._preview_length]
            if len(text) > self._preview_length:
                preview += "..."
            return preview

        start = max(0, match.start() - self._context_before)
        end = min(len(text), match.end() + self._context_after)
        preview = text[start:end]
        if start > 0:
            preview = "..." + preview
        if end < len(text):
            preview = preview + "..."
        return preview.replace("\n", " ")
