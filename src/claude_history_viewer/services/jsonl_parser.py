"""Streaming JSONL parser for Claude Code transcript files.

Each line is decoded once and handed to an ordered list of record parsers.
The first parser that recognises the line produces the message; lines that
no parser recognises are omitted. Token usage is extracted independently,
so a line can contribute tokens without being a displayable message.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import orjson

from claude_history_viewer.types.messages import (
    DISPLAYABLE_TYPES,
    Message,
    MessageType,
    PlainText,
    TokenUsage,
    content_from_raw,
    has_text,
)
from claude_history_viewer.types.sessions import SessionScan

logger = logging.getLogger(__name__)

RecordParser = Callable[[dict], Optional[Message]]

# date T time [.fraction] (Z | +hh:mm)
RFC3339_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def iter_lines(file_path: str | Path) -> Iterator[tuple[int, str]]:
    """Yield (line number, stripped line) for every non-blank line.

    Raises OSError if the file cannot be opened.
    """
    path = Path(file_path)
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line_num, line in enumerate(f, start=1):
            line = line.strip()
            if line:
                yield line_num, line


def decode_line(line: str) -> dict | None:
    """Decode one JSONL line into a dict, or None if it isn't a JSON object."""
    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError:
        return None
    return raw if isinstance(raw, dict) else None


def iter_records(file_path: str | Path) -> Iterator[dict]:
    """Yield every decodable JSON object in a transcript, in file order."""
    path = Path(file_path)
    for line_num, line in iter_lines(path):
        raw = decode_line(line)
        if raw is None:
            logger.debug("Malformed JSON at line %d in %s", line_num, path.name)
            continue
        yield raw


def parse_primary(raw: dict) -> Message | None:
    """Current schema: type, uuid, parentUuid, timestamp, sessionId, message{role, content}.

    Only qualifying messages are returned: user/assistant with non-blank text.
    """
    msg_type = raw.get("type")
    if not isinstance(msg_type, str) or msg_type not in DISPLAYABLE_TYPES:
        return None

    message = raw.get("message")
    if not isinstance(message, dict):
        return None

    content = content_from_raw(message.get("content"))
    if not has_text(content):
        return None

    return Message(
        type=msg_type,
        uuid=_as_str(raw.get("uuid")),
        parent_uuid=_as_str(raw.get("parentUuid")),
        timestamp=_as_str(raw.get("timestamp")),
        session_id=_as_str(raw.get("sessionId")),
        role=_as_str(message.get("role")),
        content=content,
    )


def parse_legacy(raw: dict) -> Message | None:
    """Legacy transcript schema: type, timestamp, content (plain string).

    Only user lines are kept; they are normalised into a user message.
    """
    if raw.get("type") != MessageType.USER.value:
        return None

    content = raw.get("content")
    if not isinstance(content, str) or not content.strip():
        return None

    return Message(
        type=MessageType.USER.value,
        uuid=None,
        parent_uuid=None,
        timestamp=_as_str(raw.get("timestamp")),
        session_id=None,
        role=MessageType.USER.value,
        content=PlainText(content),
    )


# Tried in order; first success wins
RECORD_PARSERS: tuple[RecordParser, ...] = (parse_primary, parse_legacy)


def parse_record(raw: dict) -> Message | None:
    """Run the record parsers over a decoded line."""
    for parser in RECORD_PARSERS:
        msg = parser(raw)
        if msg is not None:
            return msg
    return None


def extract_usage(raw: dict) -> TokenUsage | None:
    """Read message.usage regardless of whether the line is a displayable message."""
    message = raw.get("message")
    if not isinstance(message, dict):
        return None
    usage = message.get("usage")
    if not isinstance(usage, dict):
        return None
    return TokenUsage(
        input_tokens=_as_count(usage.get("input_tokens")),
        output_tokens=_as_count(usage.get("output_tokens")),
    )


def parse_session_file(file_path: str | Path) -> list[Message]:
    """Parse an entire transcript into a list of messages in file order."""
    return list(stream_session_file(file_path))


def stream_session_file(file_path: str | Path) -> Iterator[Message]:
    """Stream-parse a transcript, yielding qualifying or synthesised messages.

    Unrecognised lines are skipped. Raises OSError if the file cannot be opened.
    """
    for raw in iter_records(file_path):
        msg = parse_record(raw)
        if msg is not None:
            yield msg


def scan_session(file_path: str | Path) -> SessionScan:
    """Count messages and sum token usage for one transcript.

    An unreadable file scans as empty.
    """
    scan = SessionScan()
    try:
        for raw in iter_records(file_path):
            if parse_record(raw) is not None:
                scan.message_count += 1
            usage = extract_usage(raw)
            if usage is not None:
                scan.input_tokens += usage.input_tokens
                scan.output_tokens += usage.output_tokens
    except OSError:
        logger.debug("Failed to read session %s", file_path, exc_info=True)
        return SessionScan()
    return scan


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Other ISO 8601 spellings (basic format, week dates, missing seconds) and
    values without a UTC offset are rejected.
    """
    if not isinstance(value, str):
        return None
    match = RFC3339_RE.fullmatch(value)
    if match is None:
        return None

    date, time, fraction, offset = match.groups()
    if fraction:
        # fromisoformat only takes 3 or 6 fractional digits on older Pythons
        time += "." + fraction[:6].ljust(6, "0")
    if offset in ("Z", "z"):
        offset = "+00:00"
    try:
        return datetime.fromisoformat(f"{date}T{time}{offset}")
    except ValueError:
        return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value
