"""Shared test helpers."""

import json
from pathlib import Path


def make_line(
    msg_type="user",
    content="hello",
    role=None,
    uuid="m1",
    timestamp="2026-02-13T10:00:00.000Z",
    usage=None,
    **extra,
) -> str:
    """Build one primary-schema JSONL line."""
    message = {"role": role or msg_type, "content": content}
    if usage is not None:
        message["usage"] = usage
    raw = {
        "type": msg_type,
        "uuid": uuid,
        "parentUuid": None,
        "timestamp": timestamp,
        "sessionId": "test-session",
        "message": message,
    }
    raw.update(extra)
    return json.dumps(raw)


def write_session(path: Path, lines: list[str]) -> Path:
    """Write JSONL lines to a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
    return path
